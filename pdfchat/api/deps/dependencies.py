"""
Dependency injection container.

Process-wide clients live in a ServiceCache built lazily on first use and
pre-warmed by the application lifespan. Factory functions below expose
them to FastAPI routes via Depends.

Dependencies: pdfchat.configs, pdfchat.application, pdfchat.boundary, pdfchat.core
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pdfchat.application.services import ChatService, DocumentService
from pdfchat.boundary.db import get_async_db, get_async_session_factory
from pdfchat.configs import Settings, get_settings
from pdfchat.core.document_processing.entrypoint import IngestionPipeline
from pdfchat.core.rag.suggestions import SuggestionService


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._blob_client = None
        self._vector_store = None
        self._embedding_client = None
        self._chat_model = None
        self._suggestion_model = None
        self._ingestion_pipeline = None
        self._answer_assembler = None
        self._suggestion_service = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def blob_client(self):
        """Get cached S3 blob client."""
        if self._blob_client is None:
            from pdfchat.boundary.storage.s3_blob_client import S3BlobClient

            config = self.settings.blob_storage
            self._blob_client = S3BlobClient(
                bucket=config.bucket,
                region=config.region,
                key_prefix=config.key_prefix,
            )
        return self._blob_client

    @property
    def vector_store(self):
        """Get cached S3 Vectors store."""
        if self._vector_store is None:
            from pdfchat.boundary.vdb.s3_vectors_store import S3VectorsStore

            config = self.settings.vector_store
            self._vector_store = S3VectorsStore(
                vectors_bucket=config.bucket,
                index_name=config.index_name,
                region=config.region,
                similarity_threshold=config.similarity_threshold,
                upsert_batch_size=config.upsert_batch_size,
                delete_batch_size=config.delete_batch_size,
                list_page_size=config.list_page_size,
            )
        return self._vector_store

    @property
    def embedding_client(self):
        """Get cached embedding client."""
        if self._embedding_client is None:
            from pdfchat.boundary.llm.embedding_client import EmbeddingClient

            config = self.settings.llm
            self._embedding_client = EmbeddingClient(
                model=config.embedding_model,
                google_api_key=config.google_api_key,
            )
        return self._embedding_client

    @property
    def chat_model(self):
        """Get cached streaming chat model."""
        if self._chat_model is None:
            from langchain_google_genai import ChatGoogleGenerativeAI

            config = self.settings.llm
            self._chat_model = ChatGoogleGenerativeAI(
                model=config.chat_model,
                temperature=config.chat_temperature,
                google_api_key=config.google_api_key,
            )
        return self._chat_model

    @property
    def suggestion_model(self):
        """Get cached suggestion model."""
        if self._suggestion_model is None:
            from langchain_google_genai import ChatGoogleGenerativeAI

            config = self.settings.llm
            self._suggestion_model = ChatGoogleGenerativeAI(
                model=config.suggestion_model,
                temperature=config.suggestion_temperature,
                max_output_tokens=config.suggestion_max_tokens,
                google_api_key=config.google_api_key,
            )
        return self._suggestion_model

    @property
    def ingestion_pipeline(self) -> IngestionPipeline:
        """Get cached ingestion pipeline."""
        if self._ingestion_pipeline is None:
            from pdfchat.core.document_processing.tasks import ChunkingTask

            config = self.settings.pipeline
            self._ingestion_pipeline = IngestionPipeline(
                blob_client=self.blob_client,
                embedding_client=self.embedding_client,
                vector_store=self.vector_store,
                chunking_task=ChunkingTask(
                    target_chars=config.chunk_target_chars,
                    overlap_chars=config.chunk_overlap_chars,
                ),
            )
        return self._ingestion_pipeline

    @property
    def answer_assembler(self):
        """Get cached answer assembler."""
        if self._answer_assembler is None:
            from pdfchat.core.rag.answer_assembler import AnswerAssembler

            self._answer_assembler = AnswerAssembler(
                embedding_client=self.embedding_client,
                vector_store=self.vector_store,
                chat_model=self.chat_model,
                top_k=self.settings.vector_store.top_k,
            )
        return self._answer_assembler

    @property
    def suggestion_service(self) -> SuggestionService:
        """Get cached suggestion service."""
        if self._suggestion_service is None:
            self._suggestion_service = SuggestionService(
                embedding_client=self.embedding_client,
                vector_store=self.vector_store,
                chat_model=self.suggestion_model,
                top_k=self.settings.vector_store.suggestion_top_k,
            )
        return self._suggestion_service

    def clear(self) -> None:
        """Clear all cached instances."""
        self._blob_client = None
        self._vector_store = None
        self._embedding_client = None
        self._chat_model = None
        self._suggestion_model = None
        self._ingestion_pipeline = None
        self._answer_assembler = None
        self._suggestion_service = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_document_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
) -> DocumentService:
    """
    Get document service instance.

    Args:
        db: Async database session (injected via Depends)
        cache: Service cache (injected via Depends)

    Returns:
        DocumentService: Document service bound to this request's session
    """
    return DocumentService(
        db=db,
        blob_client=cache.blob_client,
        vector_store=cache.vector_store,
        presigned_url_expiry=cache.settings.blob_storage.presigned_url_expiry,
    )


def get_ingestion_pipeline(cache: ServiceCache = Depends(get_service_cache)) -> IngestionPipeline:
    """Get the shared ingestion pipeline."""
    return cache.ingestion_pipeline


def get_background_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory for work that outlives the request."""
    return get_async_session_factory()


def get_chat_service(cache: ServiceCache = Depends(get_service_cache)) -> ChatService:
    """Get chat service backed by the shared answer assembler."""
    return ChatService(assembler=cache.answer_assembler)


def get_suggestion_service(cache: ServiceCache = Depends(get_service_cache)) -> SuggestionService:
    """Get the shared suggestion service."""
    return cache.suggestion_service
