"""Exception hierarchy for s3backup runs."""

from __future__ import annotations

from pathlib import Path


class BackupError(Exception):
    """Base class for errors that stop a backup run."""


class ConfigError(BackupError):
    """Required configuration is missing or invalid."""


class SourceError(BackupError):
    """The local source directory cannot be backed up.

    ``hint`` is a second line of operator guidance printed after the message.
    """

    def __init__(self, path: Path, message: str, hint: str) -> None:
        super().__init__(message)
        self.path = path
        self.hint = hint


class SourceDirectoryMissing(SourceError):
    def __init__(self, path: Path) -> None:
        super().__init__(
            path,
            f"Source directory {path} does not exist!",
            "Please create the directory and add files to backup.",
        )


class SourceDirectoryEmpty(SourceError):
    def __init__(self, path: Path) -> None:
        super().__init__(
            path,
            f"Source directory {path} is empty!",
            "Please add files to backup.",
        )


class AuditError(BackupError):
    """The bucket's public-access status could not be determined."""


class UploadError(BackupError):
    """A single file could not be transferred to the bucket."""
