"""
Blob storage configuration.

Settings for the S3 bucket holding uploaded PDFs and presigned URL generation.

Dependencies: pydantic_settings
System role: S3 documents bucket configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BlobStorageSettings(BaseSettings):
    """Settings for S3 blob storage operations."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BLOB_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="pdfchat-documents",
        description="S3 bucket for raw PDF storage",
    )
    region: str = Field(
        default="us-east-1",
        description="AWS region for S3 bucket",
    )
    key_prefix: str = Field(
        default="pdfs/",
        description="Key prefix for uploaded PDFs",
    )
    presigned_url_expiry: int = Field(
        default=3600,
        description="Presigned URL expiry in seconds (default 1 hour)",
    )
