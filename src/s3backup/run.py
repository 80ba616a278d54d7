"""Host-side CLI for running a backup.

Usage:
    s3backup run --bucket my-bucket
    s3backup run --config backup.yaml --source ./files-to-backup --debug

Unset flags fall back to S3BACKUP_* environment variables (a .env file in
the working directory is loaded first), then to the YAML config file, then
to the built-in defaults.
"""

# ruff: noqa: T201 — print is the correct output mechanism for a CLI

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from botocore.exceptions import BotoCoreError, ClientError

from s3backup.cloud.base import RemoteStore
from s3backup.config import BackupConfig
from s3backup.errors import AuditError, ConfigError
from s3backup.models import Outcome

EXIT_OK = 0
EXIT_USAGE = 1  # bad configuration, missing or empty source directory
EXIT_REMOTE = 2  # public-access audit could not be completed


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    # Only show detailed logs for our own code
    logging.getLogger("s3backup").setLevel(logging.DEBUG if debug else logging.INFO)


def execute(config: BackupConfig, store: RemoteStore | None = None) -> int:
    """Run the pipeline and map its result to a process exit code."""
    from s3backup.pipeline import run_backup

    if store is None:
        from s3backup.cloud.s3 import S3Store

        store = S3Store.from_config(config)

    try:
        summary = run_backup(config, store)
    except AuditError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_REMOTE
    except (ClientError, BotoCoreError) as e:
        print(f"ERROR: bucket audit failed for {config.bucket}: {e}", file=sys.stderr)
        return EXIT_REMOTE

    return EXIT_OK if summary.outcome == Outcome.SUCCESS else EXIT_USAGE


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="s3backup",
        description="Upload a directory to S3, audit bucket access and verify the upload.",
    )
    sub = parser.add_subparsers(dest="command")

    run_p = sub.add_parser("run", help="Back up the source directory")
    run_p.add_argument("--bucket", help="Target bucket (env: S3BACKUP_BUCKET)")
    run_p.add_argument(
        "--source",
        dest="source_dir",
        type=Path,
        help="Directory to back up (default: ./files-to-backup)",
    )
    run_p.add_argument(
        "--report",
        dest="report_file",
        type=Path,
        help="Report file to write (default: ./upload_report.txt)",
    )
    run_p.add_argument("--region", dest="aws_region", help="AWS region (env: AWS_REGION)")
    run_p.add_argument("--endpoint-url", help="Custom S3 endpoint URL")
    run_p.add_argument(
        "--allow-unreadable-policy",
        action="store_true",
        default=None,
        help="Treat an unreadable bucket policy as non-public instead of failing",
    )
    run_p.add_argument("--config", type=Path, help="YAML config file")
    run_p.add_argument("--debug", action="store_true", help="Enable debug logging")

    return parser


def main(argv: list[str] | None = None) -> None:
    from dotenv import load_dotenv

    load_dotenv()

    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command != "run":
        parser.print_help()
        sys.exit(EXIT_USAGE)

    configure_logging(args.debug or bool(os.environ.get("S3BACKUP_DEBUG")))

    try:
        config = BackupConfig.resolve(
            args.config,
            bucket=args.bucket,
            source_dir=args.source_dir,
            report_file=args.report_file,
            aws_region=args.aws_region,
            endpoint_url=args.endpoint_url,
            allow_unreadable_policy=args.allow_unreadable_policy,
        )
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    sys.exit(execute(config))


if __name__ == "__main__":
    main()
