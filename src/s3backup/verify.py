"""Post-upload presence checks."""

from __future__ import annotations

import logging

from s3backup.cloud.base import RemoteStore
from s3backup.models import FileEntry, LookupStatus, VerificationResult

logger = logging.getLogger(__name__)


def verify_files(
    store: RemoteStore, bucket: str, entries: list[FileEntry]
) -> list[VerificationResult]:
    """Check that every source file exists in the bucket under its filename.

    Presence only: sizes and contents are not compared.
    """
    results = []
    for entry in entries:
        lookup = store.object_exists(bucket, entry.name)
        if lookup.status == LookupStatus.FAILED:
            logger.warning("Existence check for %s failed: %s", entry.name, lookup.error)
        results.append(VerificationResult(name=entry.name, lookup=lookup))
    return results
