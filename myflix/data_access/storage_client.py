# S3 object storage access (aioboto3)
# myflix/data_access/storage_client.py

import logging
from typing import List, Optional
from urllib.parse import quote

import aioboto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from myflix.core.config import Settings
from myflix.core.exceptions import StorageError

logger = logging.getLogger(__name__)

# Error codes S3 (and S3-compatible stores) use for a missing bucket
_MISSING_BUCKET_CODES = {"404", "NoSuchBucket", "NotFound"}
_ALREADY_PRESENT_CODES = {"BucketAlreadyOwnedByYou", "BucketAlreadyExists"}


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


class ObjectStorageClient:
    """
    Bucket provisioning plus object put/list against one S3 bucket.

    A client is opened from the aioboto3 session per operation, the same way
    the session is used elsewhere (``async with session.client("s3")``), so an
    instance holds no open connections and is safe to share across requests.
    """

    def __init__(
        self,
        bucket_name: Optional[str],
        region: str = "us-east-1",
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        public_base_url: Optional[str] = None,
        connect_timeout: float = 5.0,
        read_timeout: float = 30.0,
        session: Optional[aioboto3.Session] = None,
    ):
        self.bucket_name = bucket_name
        self.region = region
        self.endpoint_url = endpoint_url
        self.public_base_url = (
            public_base_url.rstrip("/") if public_base_url
            else f"https://{bucket_name}.s3.amazonaws.com"
        )
        self.session = session or aioboto3.Session()
        self._client_kwargs = {
            "region_name": region,
            "endpoint_url": endpoint_url,
            "aws_access_key_id": access_key,
            "aws_secret_access_key": secret_key,
            "config": Config(
                connect_timeout=connect_timeout,
                read_timeout=read_timeout,
                retries={"max_attempts": 1},
                s3={"addressing_style": "path"},
            ),
        }

    @classmethod
    def from_settings(cls, settings: Settings, session: Optional[aioboto3.Session] = None) -> "ObjectStorageClient":
        return cls(
            bucket_name=settings.S3_BUCKET,
            region=settings.AWS_REGION,
            access_key=settings.AWS_ACCESS_KEY_ID.get_secret_value() if settings.AWS_ACCESS_KEY_ID else None,
            secret_key=settings.AWS_SECRET_ACCESS_KEY.get_secret_value() if settings.AWS_SECRET_ACCESS_KEY else None,
            endpoint_url=settings.STORAGE_ENDPOINT_URL,
            public_base_url=settings.public_base_url,
            connect_timeout=settings.STORAGE_CONNECT_TIMEOUT,
            read_timeout=settings.STORAGE_READ_TIMEOUT,
            session=session,
        )

    def _client(self):
        return self.session.client("s3", **self._client_kwargs)

    def _require_bucket(self) -> str:
        if not self.bucket_name:
            logger.error("S3 bucket name is not configured (S3_BUCKET).")
            raise StorageError("Object storage bucket is not configured.")
        return self.bucket_name

    def public_url(self, key: str) -> str:
        """Maps a key to its public-read URL; no request is made to the store."""
        return f"{self.public_base_url}/{quote(key, safe='/')}"

    async def ensure_bucket(self) -> bool:
        """
        Makes sure the bucket exists, creating it if it is absent.

        Idempotent: an existing bucket is left untouched. Failures are logged
        and reported through the return value, never raised, so startup can
        continue without storage.

        Returns:
            True if the bucket is present when the call returns.
        """
        if not self.bucket_name:
            logger.error("Cannot provision bucket: S3_BUCKET is not set.")
            return False
        bucket = self.bucket_name
        try:
            async with self._client() as s3:
                try:
                    await s3.head_bucket(Bucket=bucket)
                    logger.info(f'Bucket "{bucket}" already exists.')
                    return True
                except ClientError as head_err:
                    if _error_code(head_err) not in _MISSING_BUCKET_CODES:
                        logger.error(f"Error checking if bucket exists: {head_err}", exc_info=True)
                        return False

                create_kwargs = {"Bucket": bucket}
                # us-east-1 rejects an explicit LocationConstraint
                if self.region and self.region != "us-east-1":
                    create_kwargs["CreateBucketConfiguration"] = {"LocationConstraint": self.region}
                try:
                    await s3.create_bucket(**create_kwargs)
                    logger.info(f'Bucket "{bucket}" created successfully.')
                    return True
                except ClientError as create_err:
                    if _error_code(create_err) in _ALREADY_PRESENT_CODES:
                        logger.info(f'Bucket "{bucket}" was created concurrently; treating as present.')
                        return True
                    logger.error(f"Error creating bucket: {create_err}", exc_info=True)
                    return False
        except BotoCoreError as e:
            logger.error(f"Object storage unreachable while provisioning bucket {bucket}: {e}", exc_info=True)
            return False

    async def put_object(self, key: str, body: bytes, content_type: str) -> str:
        """
        Uploads ``body`` under ``key`` and returns the object's public URL.

        Raises:
            StorageError: If the store is unreachable or rejects the write.
        """
        bucket = self._require_bucket()
        try:
            async with self._client() as s3:
                await s3.put_object(Bucket=bucket, Key=key, Body=body, ContentType=content_type)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error uploading s3://{bucket}/{key}: {e}", exc_info=True)
            raise StorageError("Error uploading to object storage.", detail=str(e))
        logger.info(f"Uploaded s3://{bucket}/{key} ({len(body)} bytes, {content_type})")
        return self.public_url(key)

    async def list_objects(self, prefix: str) -> List[str]:
        """
        Returns every key under ``prefix``, following continuation pages.

        Raises:
            StorageError: If the listing fails.
        """
        bucket = self._require_bucket()
        keys: List[str] = []
        try:
            async with self._client() as s3:
                paginator = s3.get_paginator("list_objects_v2")
                async for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
                    keys.extend(item["Key"] for item in page.get("Contents", []))
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error listing s3://{bucket}/{prefix}: {e}", exc_info=True)
            raise StorageError("Error listing images from object storage.", detail=str(e))
        logger.debug(f"Listed {len(keys)} objects under s3://{bucket}/{prefix}")
        return keys
