"""
S3 client for PDF blob storage.

Stores uploaded PDFs, reads them back for ingestion, deletes them and
issues presigned GET URLs for in-browser viewing. All methods are
blocking boto3 calls; async callers go through run_in_threadpool.

Dependencies: boto3, botocore
System role: Blob storage adapter
"""

import logging
from datetime import datetime, timedelta, timezone

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from pdfchat.core.exceptions import BlobStorageError, ErrorKind
from pdfchat.core.retry import classify_error

logger = logging.getLogger(__name__)


class S3BlobClient:
    """S3 client for the PDF bucket."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        key_prefix: str = "pdfs/",
        client=None,
    ) -> None:
        """
        Initialize S3 client for the PDF bucket.

        Args:
            bucket: S3 bucket name
            region: AWS region for the bucket
            key_prefix: Key prefix for stored PDFs
            client: Optional pre-built boto3 S3 client
        """
        self._bucket = bucket
        self._region = region
        self._key_prefix = key_prefix
        self._s3_client = client or boto3.client("s3", region_name=region)

    @property
    def bucket(self) -> str:
        return self._bucket

    def key_for(self, doc_id: str) -> str:
        """Object key for a document's PDF."""
        return f"{self._key_prefix}{doc_id}.pdf"

    def _wrap(self, message: str, key: str, exc: Exception) -> BlobStorageError:
        kind = classify_error(exc)
        code = exc.response.get("Error", {}).get("Code") if isinstance(exc, ClientError) else None
        if code in ("404", "NoSuchKey"):
            kind = ErrorKind.NOT_FOUND
        return BlobStorageError(f"{message}: {exc}", key=key, kind=kind)

    def save_pdf(self, key: str, data: bytes, content_type: str = "application/pdf") -> str:
        """
        Store PDF bytes.

        Returns:
            str: The object key

        Raises:
            BlobStorageError: When the upload fails
        """
        try:
            self._s3_client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "Failed to store PDF",
                extra={"bucket": self._bucket, "key": key, "error_msg": str(e)},
            )
            raise self._wrap("Failed to store PDF", key, e) from e

        logger.info("Stored PDF", extra={"bucket": self._bucket, "key": key, "size": len(data)})
        return key

    def read_pdf(self, key: str) -> bytes:
        """
        Read PDF bytes.

        Raises:
            BlobStorageError: When the object is missing or the read fails
        """
        try:
            response = self._s3_client.get_object(Bucket=self._bucket, Key=key)
            return response["Body"].read()
        except (ClientError, BotoCoreError) as e:
            raise self._wrap("Failed to read PDF", key, e) from e

    def delete_pdf(self, key: str) -> None:
        """
        Delete a stored PDF. Deleting a missing key succeeds.

        Raises:
            BlobStorageError: When the delete call fails
        """
        try:
            self._s3_client.delete_object(Bucket=self._bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise self._wrap("Failed to delete PDF", key, e) from e
        logger.info("Deleted PDF", extra={"bucket": self._bucket, "key": key})

    def generate_presigned_download_url(
        self,
        key: str,
        expires_in: int = 3600,
    ) -> tuple[str, datetime]:
        """
        Generate presigned URL for viewing a stored PDF.

        Args:
            key: S3 object key
            expires_in: URL expiry in seconds (default 1 hour)

        Returns:
            tuple[str, datetime]: (presigned_url, expires_at)

        Raises:
            BlobStorageError: If presigned URL generation fails
        """
        try:
            presigned_url = self._s3_client.generate_presigned_url(
                ClientMethod="get_object",
                Params={
                    "Bucket": self._bucket,
                    "Key": key,
                    "ResponseContentType": "application/pdf",
                },
                ExpiresIn=expires_in,
            )
        except (ClientError, BotoCoreError) as e:
            raise self._wrap("Failed to sign PDF URL", key, e) from e
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        return presigned_url, expires_at

    def check_connection(self) -> bool:
        """HEAD the bucket; False on any failure."""
        try:
            self._s3_client.head_bucket(Bucket=self._bucket)
            return True
        except Exception as e:
            logger.warning(
                "Blob storage connectivity check failed",
                extra={"bucket": self._bucket, "error_type": type(e).__name__, "error_msg": str(e)},
            )
            return False
