"""Local source directory checks and file enumeration."""

from __future__ import annotations

import logging
from pathlib import Path

from s3backup.errors import SourceDirectoryEmpty, SourceDirectoryMissing
from s3backup.models import FileEntry

logger = logging.getLogger(__name__)


def validate_source(source_dir: Path) -> None:
    """Fail fast before any remote call if the source directory is unusable.

    The emptiness check counts every entry, hidden ones included, so a
    directory holding only subdirectories or dotfiles passes and simply
    yields no uploads.
    """
    if not source_dir.is_dir():
        raise SourceDirectoryMissing(source_dir)
    if next(source_dir.iterdir(), None) is None:
        raise SourceDirectoryEmpty(source_dir)


def _is_utf8(name: str) -> bool:
    # Undecodable bytes in a filename come through as lone surrogates
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def list_files(source_dir: Path) -> list[FileEntry]:
    """Return the regular files directly under source_dir, sorted by name.

    Dotfiles are skipped, like a shell ``*`` glob. Names that are not valid
    UTF-8 cannot be S3 keys or report lines and are skipped with a warning.
    """
    entries = []
    for path in sorted(source_dir.iterdir()):
        if path.name.startswith("."):
            logger.debug("Skipping hidden entry %s", path)
            continue
        if not _is_utf8(path.name):
            logger.warning("Skipping %r: filename is not valid UTF-8", path)
            continue
        if not path.is_file():
            logger.debug("Skipping non-regular entry %s", path)
            continue
        entries.append(FileEntry(name=path.name, path=path, size=path.stat().st_size))
    return entries
