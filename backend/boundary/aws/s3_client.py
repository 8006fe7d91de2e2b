"""
S3 client for uploaded document blobs.

Stores the original bytes of uploaded documents so they can be downloaded
later. Objects are addressed by `s3://bucket/key` URLs.

Dependencies: boto3
System role: Blob object store for the upload path
"""

import logging
import re
import uuid
from dataclasses import dataclass

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from backend.core.exceptions import BlobStorageError

logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class StoredBlob:
    """Location and size of a stored object."""

    url: str
    key: str
    size: int


class S3BlobStore:
    """Put, get and delete document blobs in one S3 bucket."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        key_prefix: str = "documents/",
        client=None,
    ) -> None:
        """
        Initialize S3 client for the document bucket.

        Args:
            bucket: S3 bucket name for document storage
            region: AWS region for S3 bucket
            key_prefix: Prefix prepended to every object key
            client: Pre-built boto3 S3 client (created if None)
        """
        self._bucket = bucket
        self._key_prefix = key_prefix
        self._s3_client = client or boto3.client("s3", region_name=region)

    def put(self, content: bytes, name: str, media_type: str) -> StoredBlob:
        """
        Upload bytes under a collision-free key derived from name.

        Raises:
            BlobStorageError: Upload failed
        """
        key = f"{self._key_prefix}{uuid.uuid4().hex}-{_UNSAFE_KEY_CHARS.sub('_', name)}"
        try:
            self._s3_client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=content,
                ContentType=media_type,
            )
        except (BotoCoreError, ClientError) as e:
            raise BlobStorageError(f"Failed to upload {name}: {e}", operation="put") from e

        logger.info(
            f"{__name__}:put - Stored blob",
            extra={"bucket": self._bucket, "key": key, "size": len(content)},
        )
        return StoredBlob(url=f"s3://{self._bucket}/{key}", key=key, size=len(content))

    def get(self, url: str) -> bytes:
        key = self._key_from_url(url)
        try:
            response = self._s3_client.get_object(Bucket=self._bucket, Key=key)
            return response["Body"].read()
        except (BotoCoreError, ClientError) as e:
            raise BlobStorageError(f"Failed to download {url}: {e}", operation="get") from e

    def delete(self, url: str) -> None:
        key = self._key_from_url(url)
        try:
            self._s3_client.delete_object(Bucket=self._bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise BlobStorageError(f"Failed to delete {url}: {e}", operation="delete") from e

    def _key_from_url(self, url: str) -> str:
        prefix = f"s3://{self._bucket}/"
        if not url.startswith(prefix):
            raise BlobStorageError(f"URL is not in bucket {self._bucket}: {url}")
        return url[len(prefix):]
