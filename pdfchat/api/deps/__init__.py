from pdfchat.api.deps.dependencies import (
    ServiceCache,
    get_background_session_factory,
    get_chat_service,
    get_document_service,
    get_ingestion_pipeline,
    get_service_cache,
    get_suggestion_service,
)

__all__ = [
    "ServiceCache",
    "get_background_session_factory",
    "get_chat_service",
    "get_document_service",
    "get_ingestion_pipeline",
    "get_service_cache",
    "get_suggestion_service",
]
