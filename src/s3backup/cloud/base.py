"""RemoteStore protocol — the remote operations a backup run consumes."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

from s3backup.models import ObjectLookup, PolicyLookup


class RemoteStore(Protocol):
    """Protocol for object stores that a backup run talks to."""

    def get_acl_grants(self, bucket: str) -> list[dict[str, Any]]:
        """Return the bucket's ACL grants. Errors propagate."""
        ...

    def get_policy(self, bucket: str) -> PolicyLookup:
        """Fetch the bucket's resource policy.

        A bucket without a policy is ``not_found``; any other failure is
        ``failed`` and carries the error text.
        """
        ...

    def put_object(self, bucket: str, key: str, path: Path) -> None:
        """Upload the file at ``path`` to ``key``. Raises UploadError on failure."""
        ...

    def object_exists(self, bucket: str, key: str) -> ObjectLookup:
        """Check for an object by exact key."""
        ...
