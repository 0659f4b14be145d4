"""
Health check API endpoint.

Routes: GET /health

Always answers 200; each backing service is probed independently and
reported as a flag.

Dependencies: pdfchat.boundary, pdfchat.configs
System role: Health check HTTP API
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from pdfchat.api.deps import ServiceCache, get_service_cache
from pdfchat.boundary.db import connection

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

STARTED_AT = datetime.now(timezone.utc).isoformat()


class HealthResponse(BaseModel):
    """Health check response model."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ok: bool = True
    built_at: str
    database_connected: bool
    blob_storage_connected: bool
    vector_store_connected: bool
    google_key_loaded: bool
    vector_store: str = "s3vectors"
    storage: str = "postgres + s3"
    production_ready: bool


async def _probe_database() -> bool:
    return await connection.check_connection()


async def _probe_blob_storage(cache: ServiceCache) -> bool:
    try:
        return await run_in_threadpool(cache.blob_client.check_connection)
    except Exception as e:
        logger.warning("Blob storage probe failed", extra={"error_type": type(e).__name__, "error_msg": str(e)})
        return False


async def _probe_vector_store(cache: ServiceCache) -> bool:
    try:
        return await run_in_threadpool(cache.vector_store.check_connection)
    except Exception as e:
        logger.warning("Vector store probe failed", extra={"error_type": type(e).__name__, "error_msg": str(e)})
        return False


@router.get("", response_model=HealthResponse)
async def health_check(cache: ServiceCache = Depends(get_service_cache)) -> HealthResponse:
    """Report connectivity of the database, blob storage and vector store."""
    try:
        database_connected = await _probe_database()
    except Exception as e:
        logger.warning("Database probe failed", extra={"error_type": type(e).__name__, "error_msg": str(e)})
        database_connected = False
    blob_connected = await _probe_blob_storage(cache)
    vector_connected = await _probe_vector_store(cache)

    return HealthResponse(
        built_at=cache.settings.built_at or STARTED_AT,
        database_connected=database_connected,
        blob_storage_connected=blob_connected,
        vector_store_connected=vector_connected,
        google_key_loaded=cache.settings.llm.api_key_loaded,
        production_ready=database_connected and blob_connected and vector_connected,
    )
