"""Tests for the bucket public-access audit."""

import pytest
from botocore.exceptions import ClientError
from conftest import ALL_USERS_GRANT, OWNER_GRANT, PUBLIC_POLICY, FakeStore

from s3backup.audit import (
    acl_grants_all_users,
    audit_bucket,
    policy_allows_public,
    privacy_line,
)
from s3backup.errors import AuditError
from s3backup.models import AccessAudit, LookupStatus, PolicyLookup

PRIVATE_POLICY = {
    "Version": "2012-10-17",
    "Statement": [
        {
            "Effect": "Allow",
            "Principal": {"AWS": "arn:aws:iam::123456789012:root"},
            "Action": "s3:GetObject",
            "Resource": "arn:aws:s3:::test-bucket/*",
        }
    ],
}


def test_acl_all_users_group_is_public():
    """A grant to the AllUsers group makes the ACL public."""
    assert acl_grants_all_users([OWNER_GRANT, ALL_USERS_GRANT])


def test_acl_owner_only_is_private():
    """Owner-only or empty grants are private."""
    assert not acl_grants_all_users([OWNER_GRANT])
    assert not acl_grants_all_users([])


def test_acl_authenticated_users_group_is_not_all_users():
    """Only the AllUsers group counts, not AuthenticatedUsers."""
    grant = {
        "Grantee": {
            "Type": "Group",
            "URI": "http://acs.amazonaws.com/groups/global/AuthenticatedUsers",
        },
        "Permission": "READ",
    }
    assert not acl_grants_all_users([grant])


@pytest.mark.parametrize(
    "principal",
    ["*", {"AWS": "*"}, {"AWS": ["arn:aws:iam::123456789012:root", "*"]}],
)
def test_policy_wildcard_principal_forms(principal):
    """Every spelling of the wildcard principal is recognised."""
    policy = {"Statement": [{"Effect": "Allow", "Principal": principal}]}
    assert policy_allows_public(policy)


def test_policy_single_statement_object():
    """A Statement given as a single object is handled."""
    policy = {"Statement": {"Effect": "Allow", "Principal": "*"}}
    assert policy_allows_public(policy)


def test_policy_deny_wildcard_is_not_public():
    """A Deny statement with a wildcard principal is not public."""
    policy = {"Statement": [{"Effect": "Deny", "Principal": "*"}]}
    assert not policy_allows_public(policy)


def test_policy_allow_and_wildcard_must_be_same_statement():
    """Allow and the wildcard must appear in the same statement."""
    policy = {
        "Statement": [
            {"Effect": "Allow", "Principal": {"AWS": "arn:aws:iam::123456789012:root"}},
            {"Effect": "Deny", "Principal": "*"},
        ]
    }
    assert not policy_allows_public(policy)


def test_policy_specific_principal_is_private():
    """Named principals and absent policies are private."""
    assert not policy_allows_public(PRIVATE_POLICY)
    assert not policy_allows_public(None)
    assert not policy_allows_public({})


@pytest.mark.parametrize(
    ("grants", "policy", "expected"),
    [
        ([OWNER_GRANT], None, False),
        ([OWNER_GRANT, ALL_USERS_GRANT], None, True),
        ([OWNER_GRANT], PUBLIC_POLICY, True),
        ([OWNER_GRANT, ALL_USERS_GRANT], PUBLIC_POLICY, True),
        ([OWNER_GRANT], PRIVATE_POLICY, False),
    ],
)
def test_classification_is_or_of_acl_and_policy(grants, policy, expected):
    """The bucket is public iff the ACL or the policy is public."""
    lookup = (
        PolicyLookup(status=LookupStatus.FOUND, policy=policy)
        if policy
        else PolicyLookup(status=LookupStatus.NOT_FOUND)
    )
    audit = audit_bucket(FakeStore(grants=grants, policy=lookup), "test-bucket")
    assert audit.is_public is expected
    assert audit.bucket == "test-bucket"


def test_missing_policy_counts_as_private():
    """A bucket without a policy is private when its ACL is."""
    audit = audit_bucket(FakeStore(grants=[OWNER_GRANT]), "test-bucket")
    assert not audit.is_public
    assert audit.policy_status == LookupStatus.NOT_FOUND


def test_failed_policy_lookup_raises_when_acl_private():
    """An unreadable policy on a private ACL cannot be classified."""
    store = FakeStore(
        grants=[OWNER_GRANT],
        policy=PolicyLookup(status=LookupStatus.FAILED, error="AccessDenied"),
    )
    with pytest.raises(AuditError, match="AccessDenied"):
        audit_bucket(store, "test-bucket")


def test_failed_policy_lookup_allowed_when_opted_in():
    """allow_unreadable_policy treats an unreadable policy as non-public."""
    store = FakeStore(
        grants=[OWNER_GRANT],
        policy=PolicyLookup(status=LookupStatus.FAILED, error="AccessDenied"),
    )
    audit = audit_bucket(store, "test-bucket", allow_unreadable_policy=True)
    assert not audit.is_public
    assert audit.policy_status == LookupStatus.FAILED


def test_failed_policy_lookup_tolerated_when_acl_public():
    """A public ACL settles the result even if the policy is unreadable."""
    store = FakeStore(
        grants=[ALL_USERS_GRANT],
        policy=PolicyLookup(status=LookupStatus.FAILED, error="AccessDenied"),
    )
    audit = audit_bucket(store, "test-bucket")
    assert audit.is_public
    assert audit.policy_status == LookupStatus.FAILED


def test_acl_lookup_error_propagates():
    """ACL lookup failures are not swallowed."""
    store = FakeStore()
    store.acl_error = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}}, "GetBucketAcl"
    )
    with pytest.raises(ClientError):
        audit_bucket(store, "test-bucket")


def test_privacy_line():
    """The privacy line names the bucket and its classification."""
    assert privacy_line(AccessAudit(bucket="b")) == "The bucket b is private."
    assert privacy_line(AccessAudit(bucket="b", policy_public=True)) == "The bucket b is public."
