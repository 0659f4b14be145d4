"""
Document ingestion orchestrator.

Coordinates blob download, parsing, chunking, embedding and vector upsert
for one uploaded document, recording status at each step.

Dependencies: All task modules, pdfchat.boundary
System role: Pipeline orchestration (coordinates only)
"""

import logging
import time

from fastapi.concurrency import run_in_threadpool

from pdfchat.boundary.llm.embedding_client import EmbeddingClient
from pdfchat.boundary.storage.s3_blob_client import S3BlobClient
from pdfchat.boundary.vdb.s3_vectors_store import S3VectorsStore
from pdfchat.boundary.vdb.vector_schemas import VectorMetadata, VectorRecord

from .models import Chunk, PipelineResult
from .status_updater import DocumentStatusUpdater
from .tasks import ChunkingTask, ParsingTask

logger = logging.getLogger(__name__)


def build_vector_records(chunks: list[Chunk], vectors: list[list[float]]) -> list[VectorRecord]:
    """Pair chunks with their embeddings."""
    return [
        VectorRecord(
            id=chunk.id,
            vector=vector,
            metadata=VectorMetadata(
                doc_id=chunk.doc_id,
                page_start=chunk.page_start,
                page_end=chunk.page_end,
                chunk_index=chunk.chunk_index,
                text=chunk.text,
            ),
        )
        for chunk, vector in zip(chunks, vectors)
    ]


class IngestionPipeline:
    """Orchestrate ingestion: download -> parse -> chunk -> embed -> upsert."""

    def __init__(
        self,
        blob_client: S3BlobClient,
        embedding_client: EmbeddingClient,
        vector_store: S3VectorsStore,
        chunking_task: ChunkingTask | None = None,
        parsing_task: ParsingTask | None = None,
    ) -> None:
        self._blob_client = blob_client
        self._embedding_client = embedding_client
        self._vector_store = vector_store
        self._chunking_task = chunking_task or ChunkingTask()
        self._parsing_task = parsing_task or ParsingTask()

    async def run(
        self,
        document_id: str,
        blob_key: str,
        status: DocumentStatusUpdater,
    ) -> PipelineResult:
        """
        Ingest one document.

        On any failure the document is marked ERROR with the failure
        message and the exception is re-raised.

        Args:
            document_id: Document to ingest
            blob_key: Object key of the stored PDF
            status: Status updater bound to a database session

        Returns:
            PipelineResult: Page and chunk counts with timing
        """
        start_time = time.perf_counter()
        try:
            await status.mark_processing(document_id, 0, None)

            pdf_bytes = await run_in_threadpool(self._blob_client.read_pdf, blob_key)
            parsed = await run_in_threadpool(self._parsing_task.parse, pdf_bytes, document_id)
            total_pages = parsed.total_pages
            await status.mark_processing(document_id, 0, total_pages)

            chunks = self._chunking_task.chunk(document_id, parsed.pages)
            logger.info(
                f"{__name__}:run - Chunked document",
                extra={"document_id": document_id, "pages": total_pages, "chunks": len(chunks)},
            )

            vectors = await self._embedding_client.embed_batch([chunk.text for chunk in chunks])
            records = build_vector_records(chunks, vectors)
            await run_in_threadpool(self._vector_store.upsert, records)

            await status.mark_ready(document_id, total_pages)

        except Exception as e:
            logger.error(
                f"{__name__}:run - Ingestion failed: {type(e).__name__}: {e}",
                extra={"document_id": document_id},
            )
            await status.mark_error(document_id, getattr(e, "message", None) or str(e))
            raise

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{__name__}:run - Ingestion complete",
            extra={"document_id": document_id, "chunks": len(chunks), "elapsed_ms": round(elapsed_ms, 1)},
        )
        return PipelineResult(
            document_id=document_id,
            page_count=total_pages,
            chunk_count=len(chunks),
            processing_time_ms=elapsed_ms,
        )
