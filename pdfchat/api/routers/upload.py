"""
Upload API endpoint.

Routes: POST /upload

Stores the PDF, creates its PROCESSING record and schedules ingestion as a
background task. Responds before ingestion starts.

Dependencies: pdfchat.application.services.document_service
System role: PDF upload HTTP API
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, File, Request, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pdfchat.api.deps import (
    get_background_session_factory,
    get_document_service,
    get_ingestion_pipeline,
)
from pdfchat.api.routers.router_utils import (
    error_response,
    handle_api_errors,
    run_ingestion_background,
)
from pdfchat.application.services.document_service import DocumentService
from pdfchat.core.document_processing.entrypoint import IngestionPipeline
from pdfchat.core.exceptions import ErrorKind
from pdfchat.models.document import ErrorResponse, UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["upload"])


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@handle_api_errors(error_code="SAVE_FAILED")
async def upload_pdf(
    request: Request,
    background_tasks: BackgroundTasks,
    file: UploadFile | None = File(default=None),
    document_service: DocumentService = Depends(get_document_service),
    pipeline: IngestionPipeline = Depends(get_ingestion_pipeline),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_background_session_factory),
):
    """
    Upload a PDF for ingestion.

    Flow:
    1. Require a multipart body with a "file" part of type application/pdf
    2. Store the PDF and create the document record
    3. Schedule ingestion in the background
    4. Return the new document ID

    Returns:
        UploadResponse: {"docId": ...}
    """
    content_type = request.headers.get("content-type", "")
    if "multipart/form-data" not in content_type:
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Content-Type must be multipart/form-data",
            kind=ErrorKind.VALIDATION,
        )
    if file is None:
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "No file provided",
            kind=ErrorKind.VALIDATION,
        )

    data = await file.read()
    document = await document_service.upload_pdf(
        file_name=file.filename or "document.pdf",
        content_type=file.content_type,
        data=data,
    )

    background_tasks.add_task(
        run_ingestion_background,
        pipeline,
        session_factory,
        document.id,
        document.blob_key,
    )
    logger.info("Ingestion scheduled", extra={"doc_id": document.id})
    return UploadResponse(doc_id=document.id)
