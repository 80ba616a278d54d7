"""Sequential upload of source files to the bucket."""

# ruff: noqa: T201 — print is used for user-facing status output

from __future__ import annotations

import logging

from s3backup.cloud.base import RemoteStore
from s3backup.errors import UploadError
from s3backup.models import FileEntry, UploadResult

logger = logging.getLogger(__name__)


def upload_files(store: RemoteStore, bucket: str, entries: list[FileEntry]) -> list[UploadResult]:
    """Upload each file under its base filename, one at a time.

    A failed transfer is recorded and the remaining files are still tried.
    """
    results = []
    for entry in entries:
        key = entry.name
        try:
            store.put_object(bucket, key, entry.path)
        except UploadError as e:
            logger.warning("Upload of %s to s3://%s/%s failed: %s", entry.path, bucket, key, e)
            print(f"Failed to upload: {entry.name} ({e})")
            results.append(UploadResult(entry=entry, key=key, success=False, error=str(e)))
            continue
        print(f"Uploaded: {entry.name}")
        results.append(UploadResult(entry=entry, key=key, success=True))

    ok = sum(1 for r in results if r.success)
    logger.info("Uploaded %d/%d files to %s", ok, len(results), bucket)
    return results
