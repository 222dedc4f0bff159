"""
S3Client - Object store writes for originals and thumbnails.
"""

import logging
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from .config import S3Config
from .exceptions import StorageWriteError


class S3Client:
    """
    Wrapper for S3/R2 operations.

    The underlying boto3 client is thread-safe, so one instance can serve
    concurrent uploads.
    """

    def __init__(self, config: S3Config, logger: Optional[logging.Logger] = None):
        """
        Initialize S3 client.

        Args:
            config: S3 configuration
            logger: Optional logger instance
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)

        self._client = boto3.client(
            's3',
            endpoint_url=config.endpoint or None,
            aws_access_key_id=config.access_key or None,
            aws_secret_access_key=config.secret_key or None,
            region_name=config.region,
            config=Config(signature_version='s3v4')
        )

    @property
    def client(self):
        """Return the underlying boto3 client."""
        return self._client

    def get_public_url(self, key: str) -> str:
        """Public URL under which a stored key is served."""
        return f"{self.config.public_url}/{key}"

    def upload_object(
        self,
        key: str,
        data: bytes,
        content_type: str = 'application/octet-stream'
    ) -> str:
        """
        Upload an object and return its public URL.

        Raises:
            StorageWriteError: If the store rejects the write
        """
        try:
            self._client.put_object(
                Bucket=self.config.bucket,
                Key=key,
                Body=data,
                ContentType=content_type
            )
        except (ClientError, BotoCoreError) as e:
            self.logger.error(f"Upload failed for {key}: {e}")
            raise StorageWriteError(key, str(e)) from e

        self.logger.debug(f"Uploaded {key} ({len(data)} bytes)")
        return self.get_public_url(key)

    def delete_object(self, key: str) -> None:
        """
        Delete an object.

        Raises:
            StorageWriteError: If the store rejects the delete
        """
        try:
            self._client.delete_object(Bucket=self.config.bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            self.logger.error(f"Delete failed for {key}: {e}")
            raise StorageWriteError(key, str(e)) from e

    def check_bucket(self) -> bool:
        """Return True if the configured bucket is reachable."""
        try:
            self._client.head_bucket(Bucket=self.config.bucket)
            return True
        except (ClientError, BotoCoreError) as e:
            self.logger.warning(f"Bucket {self.config.bucket} not reachable: {e}")
            return False
