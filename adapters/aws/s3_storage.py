"""
AWS Storage Adapter: S3 and S3-compatible services.

Works against AWS S3, MinIO, Cloudflare R2, DigitalOcean Spaces, ...
MinIO needs a custom endpoint and path-style addressing:
    S3_ENDPOINT=http://localhost:9000
    S3_FORCE_PATH_STYLE=true
"""

import logging
from typing import Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from bucketorm.errors.exceptions import StorageError
from bucketorm.errors.handler import ErrorHandler
from bucketorm.interfaces.storage_adapter import StorageAdapter
from bucketorm.models.config import StoreConfig

logger = logging.getLogger("bucketorm.s3")

MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


class S3StorageAdapter(StorageAdapter):
    """boto3-backed storage adapter. One bucket, flat keys."""

    def __init__(self, config: StoreConfig, client=None):
        if not config.bucket:
            raise ValueError("S3StorageAdapter requires a bucket name")
        self.bucket = config.bucket
        self.client = client or self._build_client(config)
        self._errors = ErrorHandler()

    @staticmethod
    def _build_client(config: StoreConfig):
        boto_config = BotoConfig(
            connect_timeout=config.request_timeout_s,
            read_timeout=config.request_timeout_s,
            retries={"max_attempts": 3, "mode": "standard"},
            s3={"addressing_style": "path" if config.force_path_style else "auto"},
        )
        kwargs = {
            "region_name": config.region or "us-east-1",
            "config": boto_config,
        }
        if config.endpoint:
            kwargs["endpoint_url"] = config.endpoint
        if config.has_credentials():
            kwargs["aws_access_key_id"] = config.access_key_id
            kwargs["aws_secret_access_key"] = config.secret_access_key
        return boto3.client("s3", **kwargs)

    async def upload(self, key: str, data: bytes) -> None:
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType="application/json",
            )
        except (ClientError, BotoCoreError) as e:
            raise self._storage_error("upload", key, e) from e

    async def download(self, key: str) -> Optional[bytes]:
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            return response["Body"].read()
        except ClientError as e:
            if _error_code(e) in MISSING_KEY_CODES:
                return None
            raise self._storage_error("download", key, e) from e
        except BotoCoreError as e:
            raise self._storage_error("download", key, e) from e

    async def delete(self, key: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise self._storage_error("delete", key, e) from e

    async def list_keys(self, prefix: str = "") -> list[str]:
        keys = []
        try:
            paginator = self.client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
                for obj in page.get("Contents", []):
                    keys.append(obj["Key"])
        except (ClientError, BotoCoreError) as e:
            raise self._storage_error("list", prefix, e) from e

        logger.debug(f"Listed {len(keys)} keys under s3://{self.bucket}/{prefix}")
        return keys

    def _storage_error(self, operation: str, key: str, error: Exception) -> StorageError:
        friendly = self._errors.handle(error, context=f"s3:{operation}")
        return StorageError(
            f"S3 {operation} failed for 's3://{self.bucket}/{key}': {friendly.message}",
            cause=error,
            key=key,
            error_code=friendly.error_code,
            details=friendly.to_dict(),
        )


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))
