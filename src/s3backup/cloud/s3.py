"""S3 implementation of the RemoteStore protocol."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from botocore.exceptions import BotoCoreError, ClientError

from s3backup.errors import UploadError
from s3backup.models import LookupStatus, ObjectLookup, PolicyLookup

if TYPE_CHECKING:
    from s3backup.config import BackupConfig

logger = logging.getLogger(__name__)

NO_POLICY_CODES = {"NoSuchBucketPolicy"}
NO_OBJECT_CODES = {"404", "NoSuchKey", "NotFound"}


def _error_code(e: ClientError) -> str:
    return str(e.response.get("Error", {}).get("Code", ""))


class S3Store:
    """Thin wrapper around a boto3 S3 client."""

    def __init__(self, client: Any) -> None:
        self.client = client

    @classmethod
    def from_config(cls, config: BackupConfig) -> S3Store:
        import boto3

        client = boto3.client(
            "s3",
            region_name=config.aws_region,
            endpoint_url=config.endpoint_url,
        )
        return cls(client)

    def get_acl_grants(self, bucket: str) -> list[dict[str, Any]]:
        logger.debug("GetBucketAcl %s", bucket)
        response = self.client.get_bucket_acl(Bucket=bucket)
        return response.get("Grants", [])

    def get_policy(self, bucket: str) -> PolicyLookup:
        logger.debug("GetBucketPolicy %s", bucket)
        try:
            response = self.client.get_bucket_policy(Bucket=bucket)
        except ClientError as e:
            if _error_code(e) in NO_POLICY_CODES:
                return PolicyLookup(status=LookupStatus.NOT_FOUND)
            return PolicyLookup(status=LookupStatus.FAILED, error=str(e))
        except BotoCoreError as e:
            return PolicyLookup(status=LookupStatus.FAILED, error=str(e))

        try:
            policy = json.loads(response["Policy"])
        except (KeyError, json.JSONDecodeError) as e:
            return PolicyLookup(
                status=LookupStatus.FAILED, error=f"Unreadable bucket policy: {e}"
            )
        return PolicyLookup(status=LookupStatus.FOUND, policy=policy)

    def put_object(self, bucket: str, key: str, path: Path) -> None:
        from boto3.exceptions import S3UploadFailedError

        logger.debug("Upload %s -> s3://%s/%s", path, bucket, key)
        try:
            self.client.upload_file(str(path), bucket, key)
        except (
            ClientError, BotoCoreError, S3UploadFailedError, OSError, UnicodeEncodeError
        ) as e:
            raise UploadError(str(e)) from e

    def object_exists(self, bucket: str, key: str) -> ObjectLookup:
        logger.debug("HeadObject s3://%s/%s", bucket, key)
        try:
            self.client.head_object(Bucket=bucket, Key=key)
        except ClientError as e:
            if _error_code(e) in NO_OBJECT_CODES:
                return ObjectLookup(key=key, status=LookupStatus.NOT_FOUND)
            return ObjectLookup(key=key, status=LookupStatus.FAILED, error=str(e))
        except BotoCoreError as e:
            return ObjectLookup(key=key, status=LookupStatus.FAILED, error=str(e))
        return ObjectLookup(key=key, status=LookupStatus.FOUND)
