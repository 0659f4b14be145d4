"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, uvicorn, python-dotenv, pdfchat.api, pdfchat.observability, pdfchat.configs
System role: Application initialization and configuration
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pdfchat.api.deps import get_service_cache
from pdfchat.api.routers import (
    chat_router,
    documents_router,
    health_router,
    pdfs_router,
    upload_router,
)
from pdfchat.boundary.db import create_tables, dispose_engine
from pdfchat.configs import get_settings
from pdfchat.observability.logger import configure_logging
from pdfchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

# boto3 reads AWS credentials from the process environment
load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup configures logging, ensures tables exist and pre-warms the
    service cache. The app still starts when a backing service is down so
    that /health can report it.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured", extra={"environment": settings.environment})

    try:
        await create_tables()
    except Exception as e:
        logger.exception("Failed to create database tables", extra={"error": str(e)})

    cache = get_service_cache()
    try:
        _ = cache.blob_client
        _ = cache.vector_store
        _ = cache.ingestion_pipeline
        _ = cache.answer_assembler
        _ = cache.suggestion_service
        logger.info("Service cache pre-warmed")
    except Exception as e:
        logger.exception("Failed to pre-warm service cache", extra={"error": str(e)})

    yield

    cache.clear()
    await dispose_engine()
    logger.info("Application shutdown")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title="PDF Chat API",
        description="Upload PDFs and ask grounded questions with page citations",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Added first = innermost; correlation ID must be bound before request logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(upload_router)
    app.include_router(documents_router)
    app.include_router(pdfs_router)
    app.include_router(chat_router)
    app.include_router(health_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "pdfchat.main:app",
        host="localhost",
        port=8082,
        reload=True,
    )
