"""Plain-text upload report.

The report is built in memory and written once, replacing any previous
report, so its sections always appear in order and repeated runs do not
accumulate.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from s3backup.audit import privacy_line
from s3backup.models import AccessAudit, FileEntry, VerificationResult

RULE = "====================="


class BackupReport:
    """Ordered report writer: privacy line, file sizes, verification results."""

    def __init__(self) -> None:
        self._lines: list[str] = []

    def add_audit(self, audit: AccessAudit) -> None:
        self._lines.append(privacy_line(audit))

    def add_files(self, entries: list[FileEntry]) -> None:
        self._lines.append("Uploaded Files Report")
        self._lines.append(RULE)
        for entry in entries:
            self._lines.append(f"File: {entry.name}, Size: {entry.size} bytes")

    def add_verification(self, results: list[VerificationResult]) -> None:
        self._lines.append("Verification Results")
        self._lines.append(RULE)
        for result in results:
            if result.exists:
                self._lines.append(f"{result.name} exists in S3.")
            else:
                self._lines.append(f"{result.name} is missing in S3!")

    def render(self) -> str:
        return "".join(line + "\n" for line in self._lines)

    def write(self, path: Path) -> Path:
        """Replace the report at ``path`` atomically.

        The content goes to a temp file in the same directory first, so a
        failed write leaves any previous report untouched.
        """
        data = self.render().encode("utf-8")
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as f:
            tmp = Path(f.name)
            try:
                f.write(data)
            except OSError:
                f.close()
                tmp.unlink(missing_ok=True)
                raise
        os.replace(tmp, path)
        return path
