"""Backup pipeline — audit, validate, upload, verify, report.

The stages run strictly in order on a single thread. Each remote call
blocks until it completes; there are no retries.
"""

# ruff: noqa: T201 — print is used for user-facing status output

from __future__ import annotations

import logging
import sys

from s3backup.audit import audit_bucket, privacy_line
from s3backup.cloud.base import RemoteStore
from s3backup.config import BackupConfig
from s3backup.errors import SourceError
from s3backup.models import BackupSummary, Outcome
from s3backup.report import BackupReport
from s3backup.source import list_files, validate_source
from s3backup.uploader import upload_files
from s3backup.verify import verify_files

logger = logging.getLogger(__name__)


def run_backup(config: BackupConfig, store: RemoteStore) -> BackupSummary:
    """Run one backup against ``config.bucket`` and write the report.

    Source directory problems end the run with Outcome.SOURCE_ERROR and
    no report. Audit failures (AuditError, botocore errors from the ACL
    lookup) propagate to the caller.
    """
    bucket = config.bucket
    report = BackupReport()

    # 1. Access audit
    print("Checking if the bucket is public...")
    audit = audit_bucket(
        store, bucket, allow_unreadable_policy=config.allow_unreadable_policy
    )
    report.add_audit(audit)
    print(privacy_line(audit))

    # 2. Source validation
    try:
        validate_source(config.source_dir)
    except SourceError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(e.hint, file=sys.stderr)
        return BackupSummary(
            bucket=bucket, outcome=Outcome.SOURCE_ERROR, audit=audit, detail=str(e)
        )
    entries = list_files(config.source_dir)
    if not entries:
        logger.warning("No regular files under %s; nothing to upload", config.source_dir)

    # 3. Upload
    print("Uploading files to S3...")
    uploads = upload_files(store, bucket, entries)

    # 4. Verify and report
    print("Generating report...")
    report.add_files(entries)
    print("Verifying uploaded files...")
    verifications = verify_files(store, bucket, entries)
    report.add_verification(verifications)
    report_path = report.write(config.report_file)

    print(
        "Backup, bucket check, and verification complete. "
        f"Report saved to {report_path}."
    )
    return BackupSummary(
        bucket=bucket,
        outcome=Outcome.SUCCESS,
        audit=audit,
        uploads=uploads,
        verifications=verifications,
        report_path=report_path,
    )
