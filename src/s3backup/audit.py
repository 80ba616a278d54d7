"""Bucket public-access audit.

A bucket counts as public when its ACL grants anything to the AllUsers
group, or its policy has an Allow statement with a wildcard principal.
This is a heuristic: it does not look at conditions, distinguish read
from write access, or evaluate Block Public Access settings.
"""

from __future__ import annotations

import logging
from typing import Any

from s3backup.cloud.base import RemoteStore
from s3backup.errors import AuditError
from s3backup.models import AccessAudit, LookupStatus

logger = logging.getLogger(__name__)

ALL_USERS_URI = "http://acs.amazonaws.com/groups/global/AllUsers"


def acl_grants_all_users(grants: list[dict[str, Any]]) -> bool:
    """True if any ACL grant targets the AllUsers group."""
    for grant in grants:
        grantee = grant.get("Grantee", {})
        if grantee.get("Type") == "Group" and grantee.get("URI") == ALL_USERS_URI:
            return True
    return False


def _is_wildcard_principal(principal: Any) -> bool:
    """Match "*", {"AWS": "*"} and {"AWS": [..., "*", ...]}."""
    if principal == "*":
        return True
    if isinstance(principal, dict):
        aws = principal.get("AWS")
        if aws == "*":
            return True
        if isinstance(aws, list) and "*" in aws:
            return True
    return False


def policy_allows_public(policy: dict[str, Any] | None) -> bool:
    """True if any policy statement allows access to a wildcard principal."""
    if not policy:
        return False
    statements = policy.get("Statement", [])
    if isinstance(statements, dict):
        statements = [statements]
    return any(
        stmt.get("Effect") == "Allow" and _is_wildcard_principal(stmt.get("Principal"))
        for stmt in statements
        if isinstance(stmt, dict)
    )


def audit_bucket(
    store: RemoteStore, bucket: str, *, allow_unreadable_policy: bool = False
) -> AccessAudit:
    """Classify the bucket as public or private.

    ACL lookup errors propagate. A missing policy counts as "no public
    policy". A policy that could not be fetched raises AuditError unless the
    ACL already made the bucket public or allow_unreadable_policy is set, in
    which case the policy is treated as non-public with a warning.
    """
    acl_public = acl_grants_all_users(store.get_acl_grants(bucket))

    lookup = store.get_policy(bucket)
    if lookup.status == LookupStatus.FAILED:
        if acl_public:
            logger.warning(
                "Policy lookup for %s failed (%s); ACL is already public", bucket, lookup.error
            )
        elif allow_unreadable_policy:
            logger.warning(
                "Policy lookup for %s failed (%s); treating policy as non-public",
                bucket,
                lookup.error,
            )
        else:
            raise AuditError(
                f"Could not read the policy for bucket {bucket}: {lookup.error}"
            )

    audit = AccessAudit(
        bucket=bucket,
        acl_public=acl_public,
        policy_public=policy_allows_public(lookup.policy),
        policy_status=lookup.status,
    )
    logger.info(
        "Audit %s: acl_public=%s policy=%s policy_public=%s",
        bucket,
        audit.acl_public,
        audit.policy_status.value,
        audit.policy_public,
    )
    return audit


def privacy_line(audit: AccessAudit) -> str:
    state = "public" if audit.is_public else "private"
    return f"The bucket {audit.bucket} is {state}."
