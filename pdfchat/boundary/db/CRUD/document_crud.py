"""
Document CRUD operations.

Provides Create, Read, Update, Delete operations for DocumentModel with
status-store semantics: status only moves processing -> ready or
processing -> error, and processed_pages never exceeds total_pages.

Dependencies: sqlalchemy, pdfchat.boundary.db.models.document_model
System role: Document persistence and status tracking
"""

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pdfchat.boundary.db.CRUD.base_crud import BaseCRUD
from pdfchat.boundary.db.models.document_model import DocumentModel, DocumentStatus
from pdfchat.core.exceptions import (
    DocumentNotFoundError,
    InvalidStatusTransitionError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with listing and guarded status updates.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def create_document(
        self,
        session: AsyncSession,
        original_name: str,
        file_size: int,
        blob_key: str,
        id: str | None = None,
    ) -> DocumentModel:
        """
        Insert a new document in PROCESSING state with zero progress.

        Args:
            session: Async database session
            original_name: Client filename
            file_size: Size in bytes
            blob_key: Object key of the stored PDF
            id: Optional pre-generated document ID

        Returns:
            DocumentModel: Created record
        """
        fields = {
            "original_name": original_name,
            "file_size": file_size,
            "blob_key": blob_key,
            "status": DocumentStatus.PROCESSING,
            "processed_pages": 0,
            "total_pages": None,
        }
        if id is not None:
            fields["id"] = id
        return await self.create(session, **fields)

    async def get_or_raise(self, session: AsyncSession, id: str) -> DocumentModel:
        """Fetch a document or raise DocumentNotFoundError."""
        document = await self.get_by_id(session, id)
        if document is None:
            raise DocumentNotFoundError(id)
        return document

    async def list_newest_first(
        self,
        session: AsyncSession,
        limit: int | None = None,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve documents ordered by upload time, newest first.

        Args:
            session: Async database session
            limit: Maximum number of documents to return

        Returns:
            Sequence of DocumentModels
        """
        stmt = select(DocumentModel).order_by(DocumentModel.uploaded_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def _transition(
        self,
        session: AsyncSession,
        id: str,
        status: DocumentStatus,
        **fields,
    ) -> DocumentModel:
        document = await self.get_or_raise(session, id)
        if document.status is not DocumentStatus.PROCESSING:
            raise InvalidStatusTransitionError(id, document.status.value, status.value)

        processed = fields.get("processed_pages", document.processed_pages)
        total = fields.get("total_pages", document.total_pages)
        if processed < 0:
            raise ValidationError("processed_pages cannot be negative", field="processed_pages")
        if total is not None and processed > total:
            raise ValidationError(
                f"processed_pages ({processed}) exceeds total_pages ({total})",
                field="processed_pages",
            )

        updated = await self.update_by_id(session, id, status=status, **fields)
        logger.debug(
            "Document status updated",
            extra={"doc_id": id, "status": status.value, "processed_pages": processed, "total_pages": total},
        )
        return updated

    async def set_processing(
        self,
        session: AsyncSession,
        id: str,
        processed_pages: int,
        total_pages: int | None,
    ) -> DocumentModel:
        """
        Record progress while the document is still processing.

        Raises:
            DocumentNotFoundError: Unknown id
            InvalidStatusTransitionError: Document already terminal
            ValidationError: processed_pages > total_pages
        """
        return await self._transition(
            session,
            id,
            DocumentStatus.PROCESSING,
            processed_pages=processed_pages,
            total_pages=total_pages,
        )

    async def mark_ready(
        self,
        session: AsyncSession,
        id: str,
        processed_pages: int,
        total_pages: int,
    ) -> DocumentModel:
        """Mark document as successfully indexed."""
        return await self._transition(
            session,
            id,
            DocumentStatus.READY,
            processed_pages=processed_pages,
            total_pages=total_pages,
            error=None,
        )

    async def mark_error(
        self,
        session: AsyncSession,
        id: str,
        message: str,
    ) -> DocumentModel:
        """Mark document as failed, keeping the last recorded progress."""
        return await self._transition(session, id, DocumentStatus.ERROR, error=message)


document_crud = DocumentCRUD()
