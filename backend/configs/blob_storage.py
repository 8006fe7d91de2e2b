"""
Blob storage configuration.

Settings for the S3 bucket holding uploaded document bytes.

Dependencies: pydantic_settings
System role: Blob object store configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BlobStorageSettings(BaseSettings):
    """Settings for S3 document storage."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BLOB_STORAGE_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str | None = Field(
        default=None,
        description="S3 bucket for raw documents (blob storage disabled when unset)",
    )
    region: str = Field(default="us-east-1", description="AWS region for the bucket")
    key_prefix: str = Field(default="documents/", description="Key prefix for uploaded files")

    @property
    def enabled(self) -> bool:
        """Blob storage is used only when a bucket is configured."""
        return bool(self.bucket)
