"""Shared fixtures: an in-memory RemoteStore and a populated source directory."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from s3backup.audit import ALL_USERS_URI
from s3backup.errors import UploadError
from s3backup.models import LookupStatus, ObjectLookup, PolicyLookup


class FakeStore:
    """In-memory stand-in for S3Store."""

    def __init__(
        self,
        grants: list[dict[str, Any]] | None = None,
        policy: PolicyLookup | None = None,
    ) -> None:
        self.grants = grants or []
        self.policy = policy or PolicyLookup(status=LookupStatus.NOT_FOUND)
        self.objects: dict[str, bytes] = {}
        self.fail_uploads: set[str] = set()
        self.fail_lookups: set[str] = set()
        self.acl_error: Exception | None = None
        self.calls: list[tuple[str, str]] = []

    def get_acl_grants(self, bucket: str) -> list[dict[str, Any]]:
        self.calls.append(("get_acl_grants", bucket))
        if self.acl_error is not None:
            raise self.acl_error
        return self.grants

    def get_policy(self, bucket: str) -> PolicyLookup:
        self.calls.append(("get_policy", bucket))
        return self.policy

    def put_object(self, bucket: str, key: str, path: Path) -> None:
        self.calls.append(("put_object", key))
        if key in self.fail_uploads:
            raise UploadError(f"simulated failure for {key}")
        self.objects[key] = path.read_bytes()

    def object_exists(self, bucket: str, key: str) -> ObjectLookup:
        self.calls.append(("object_exists", key))
        if key in self.fail_lookups:
            return ObjectLookup(key=key, status=LookupStatus.FAILED, error="AccessDenied")
        status = LookupStatus.FOUND if key in self.objects else LookupStatus.NOT_FOUND
        return ObjectLookup(key=key, status=status)


ALL_USERS_GRANT = {
    "Grantee": {"Type": "Group", "URI": ALL_USERS_URI},
    "Permission": "READ",
}

OWNER_GRANT = {
    "Grantee": {"Type": "CanonicalUser", "ID": "abc123", "DisplayName": "owner"},
    "Permission": "FULL_CONTROL",
}

PUBLIC_POLICY = {
    "Version": "2012-10-17",
    "Statement": [
        {
            "Sid": "PublicRead",
            "Effect": "Allow",
            "Principal": "*",
            "Action": "s3:GetObject",
            "Resource": "arn:aws:s3:::test-bucket/*",
        }
    ],
}


@pytest.fixture
def store() -> FakeStore:
    """A private bucket with no policy."""
    return FakeStore(grants=[OWNER_GRANT])


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """files-to-backup with filetest1.txt (156 bytes) and filetest2.txt (89 bytes)."""
    src = tmp_path / "files-to-backup"
    src.mkdir()
    (src / "filetest1.txt").write_bytes(b"a" * 156)
    (src / "filetest2.txt").write_bytes(b"b" * 89)
    return src
