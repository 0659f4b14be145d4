"""
Ingestion background task.

Runs the ingestion pipeline for one uploaded document with its own
database session. Never raises: failures are recorded on the document
by the pipeline and logged here.

Dependencies: pdfchat.core.document_processing, pdfchat.boundary.db
System role: Detached ingestion launched after upload
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pdfchat.core.document_processing.entrypoint import IngestionPipeline
from pdfchat.core.document_processing.status_updater import DocumentStatusUpdater
from pdfchat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


async def run_ingestion_background(
    pipeline: IngestionPipeline,
    session_factory: async_sessionmaker[AsyncSession],
    doc_id: str,
    blob_key: str,
) -> None:
    """
    Background task for document ingestion.

    Args:
        pipeline: Shared ingestion pipeline
        session_factory: Factory for the task's own database session
        doc_id: Document to ingest
        blob_key: Object key of the stored PDF
    """
    logger.info(
        "Starting background ingestion",
        extra={"doc_id": doc_id, "blob_key": blob_key},
    )
    try:
        async with session_factory() as db:
            result = await pipeline.run(doc_id, blob_key, DocumentStatusUpdater(db))
        logger.info(
            "Background ingestion completed",
            extra={"doc_id": doc_id, "chunk_count": result.chunk_count, "page_count": result.page_count},
        )
    except Exception as e:
        log_exception_with_context(logger, "Background ingestion failed", e, doc_id=doc_id)
