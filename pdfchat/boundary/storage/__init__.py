from pdfchat.boundary.storage.s3_blob_client import S3BlobClient

__all__ = ["S3BlobClient"]
