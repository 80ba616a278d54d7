"""Container-style entrypoint configured purely from the environment.

Invoked as: python -m s3backup

Environment variables:
    S3BACKUP_BUCKET       — target bucket (required)
    S3BACKUP_SOURCE_DIR   — directory to back up (default: ./files-to-backup)
    S3BACKUP_REPORT_FILE  — report path (default: ./upload_report.txt)
    S3BACKUP_ENDPOINT_URL — custom S3 endpoint (optional)
    AWS_REGION            — AWS region (default: us-east-1)
    S3BACKUP_DEBUG        — enable debug logging when set
"""

# ruff: noqa: T201 — print is the correct output mechanism for a CLI entrypoint

from __future__ import annotations

import os
import sys

from s3backup.config import BackupConfig
from s3backup.errors import ConfigError
from s3backup.run import EXIT_USAGE, configure_logging, execute


def main() -> None:
    configure_logging(bool(os.environ.get("S3BACKUP_DEBUG")))

    try:
        config = BackupConfig.from_env()
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    sys.exit(execute(config))


if __name__ == "__main__":
    main()
