"""
Document status updater.

Commits each status change immediately so pollers of /doc/{id}/status see
progress while ingestion is still running:
processing(0, None) -> processing(0, N) -> ready(N, N), or error(message)

Dependencies: sqlalchemy, pdfchat.boundary.db
System role: Status persistence for the ingestion pipeline
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from pdfchat.boundary.db.CRUD.document_crud import document_crud

logger = logging.getLogger(__name__)


class DocumentStatusUpdater:
    """Update document status during ingestion."""

    def __init__(self, db_session: AsyncSession) -> None:
        self.db = db_session

    async def mark_processing(
        self,
        document_id: str,
        processed_pages: int,
        total_pages: int | None,
    ) -> None:
        """Record progress; document stays in PROCESSING."""
        try:
            await document_crud.set_processing(self.db, document_id, processed_pages, total_pages)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    async def mark_ready(self, document_id: str, total_pages: int) -> None:
        """Mark document ready with all pages processed."""
        try:
            await document_crud.mark_ready(self.db, document_id, total_pages, total_pages)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        logger.info(
            f"{__name__}:mark_ready - Document marked as READY",
            extra={"document_id": document_id, "total_pages": total_pages},
        )

    async def mark_error(self, document_id: str, message: str) -> None:
        """Mark document failed, keeping the last recorded progress."""
        try:
            await document_crud.mark_error(self.db, document_id, message)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        logger.info(
            f"{__name__}:mark_error - Document marked as ERROR",
            extra={"document_id": document_id, "error_msg": message},
        )
