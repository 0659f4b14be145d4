"""
Document service orchestrator.

Coordinates PDF upload, status lookup, listing, presigned viewing URLs and
cascading deletion across blob storage, the status store and the vector
store.

Dependencies: pdfchat.boundary.db, pdfchat.boundary.storage, pdfchat.boundary.vdb
System role: Document management orchestration
"""

import logging
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from pdfchat.boundary.db.CRUD.document_crud import document_crud
from pdfchat.boundary.db.models.document_model import DocumentModel
from pdfchat.boundary.storage.s3_blob_client import S3BlobClient
from pdfchat.boundary.vdb.s3_vectors_store import S3VectorsStore
from pdfchat.core.exceptions import PdfChatException, ValidationError

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


@dataclass
class DeletionReport:
    """Outcome of each step of a cascading delete."""

    blob_deleted: bool = False
    record_deleted: bool = False
    vectors_deleted: bool = False
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.blob_deleted and self.record_deleted and self.vectors_deleted


class DocumentService:
    """
    Document service orchestrator.

    Handles document lifecycle outside ingestion: upload, lookup, listing,
    viewing and deletion.
    """

    def __init__(
        self,
        db: AsyncSession,
        blob_client: S3BlobClient,
        vector_store: S3VectorsStore | None = None,
        presigned_url_expiry: int = 3600,
    ) -> None:
        """
        Initialize document service.

        Args:
            db: AsyncSession for document records
            blob_client: PDF blob storage
            vector_store: Chunk store (needed for deletion)
            presigned_url_expiry: Lifetime of viewing URLs in seconds
        """
        self.db = db
        self._blob_client = blob_client
        self._vector_store = vector_store
        self._presigned_url_expiry = presigned_url_expiry

    async def upload_pdf(
        self,
        file_name: str,
        content_type: str | None,
        data: bytes,
    ) -> DocumentModel:
        """
        Store a PDF and create its PROCESSING record.

        Steps:
        1. Validate MIME type
        2. Save bytes to blob storage under a fresh document ID
        3. Insert the document record and commit

        Args:
            file_name: Client filename
            content_type: Declared MIME type
            data: File bytes

        Returns:
            DocumentModel: The new record (ingestion not yet started)

        Raises:
            ValidationError: MIME type is not application/pdf
            BlobStorageError: Storage write failed
        """
        if content_type != PDF_MIME_TYPE:
            raise ValidationError("Only PDF files are allowed", field="file")

        doc_id = str(uuid.uuid4())
        blob_key = self._blob_client.key_for(doc_id)
        await run_in_threadpool(self._blob_client.save_pdf, blob_key, data, PDF_MIME_TYPE)

        try:
            document = await document_crud.create_document(
                self.db,
                original_name=file_name or "document.pdf",
                file_size=len(data),
                blob_key=blob_key,
                id=doc_id,
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "PDF uploaded",
            extra={"doc_id": doc_id, "file_name": file_name, "file_size": len(data)},
        )
        return document

    async def get_document(self, doc_id: str) -> DocumentModel:
        """
        Fetch a document record.

        Raises:
            DocumentNotFoundError: Unknown id
        """
        return await document_crud.get_or_raise(self.db, doc_id)

    async def list_documents(self) -> Sequence[DocumentModel]:
        """All documents, newest first."""
        return await document_crud.list_newest_first(self.db)

    async def get_file_url(self, doc_id: str) -> str:
        """
        Presigned URL for viewing the stored PDF.

        Raises:
            DocumentNotFoundError: Unknown id
            BlobStorageError: URL signing failed
        """
        document = await self.get_document(doc_id)
        url, _ = await run_in_threadpool(
            self._blob_client.generate_presigned_download_url,
            document.blob_key,
            self._presigned_url_expiry,
        )
        return url

    async def delete_document(self, doc_id: str) -> DeletionReport:
        """
        Delete a document from blob storage, the database and the vector store.

        Every step is attempted even when an earlier one fails.

        Args:
            doc_id: Document ID

        Returns:
            DeletionReport: Per-step outcome

        Raises:
            DocumentNotFoundError: Unknown id
        """
        document = await self.get_document(doc_id)
        report = DeletionReport()

        try:
            await run_in_threadpool(self._blob_client.delete_pdf, document.blob_key)
            report.blob_deleted = True
        except PdfChatException as e:
            report.errors.append(f"blob: {e.message}")

        try:
            report.record_deleted = await document_crud.delete_by_id(self.db, doc_id)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            report.record_deleted = False
            report.errors.append(f"record: {e}")

        try:
            if self._vector_store is None:
                raise ValidationError("Vector store not configured")
            await run_in_threadpool(self._vector_store.delete_by_doc_id, doc_id)
            report.vectors_deleted = True
        except PdfChatException as e:
            report.errors.append(f"vectors: {e.message}")

        if report.success:
            logger.info("Document deleted", extra={"doc_id": doc_id})
        else:
            logger.error(
                "Document deletion incomplete",
                extra={"doc_id": doc_id, "errors": report.errors},
            )
        return report
