"""Data models for s3backup runs."""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class Outcome(enum.StrEnum):
    """Possible outcomes of a backup run."""

    SUCCESS = "success"
    SOURCE_ERROR = "source_error"


class LookupStatus(enum.StrEnum):
    """Result of a remote lookup that is allowed to miss."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


class FileEntry(BaseModel):
    """A regular file directly under the source directory."""

    name: str  # base filename, also the remote key
    path: Path
    size: int  # bytes, read from the local file


class PolicyLookup(BaseModel):
    """Outcome of fetching a bucket's resource policy."""

    status: LookupStatus
    policy: dict[str, Any] | None = None
    error: str = ""


class ObjectLookup(BaseModel):
    """Outcome of a per-key existence check."""

    key: str
    status: LookupStatus
    error: str = ""


class AccessAudit(BaseModel):
    """Public-access classification, computed once at the start of a run."""

    bucket: str
    acl_public: bool = False
    policy_public: bool = False
    policy_status: LookupStatus = LookupStatus.NOT_FOUND

    @property
    def is_public(self) -> bool:
        return self.acl_public or self.policy_public


class UploadResult(BaseModel):
    """Result of transferring a single file."""

    entry: FileEntry
    key: str
    success: bool
    error: str = ""


class VerificationResult(BaseModel):
    """Whether a source file is present in the bucket after upload."""

    name: str
    lookup: ObjectLookup

    @property
    def exists(self) -> bool:
        # Failed lookups are reported the same as missing objects
        return self.lookup.status == LookupStatus.FOUND


class BackupSummary(BaseModel):
    """Final summary of a backup run."""

    bucket: str
    outcome: Outcome
    audit: AccessAudit | None = None
    uploads: list[UploadResult] = Field(default_factory=list)
    verifications: list[VerificationResult] = Field(default_factory=list)
    report_path: Path | None = None
    detail: str = ""
