"""
Per-document API endpoints.

Routes:
- GET /doc/{doc_id}/status - Ingestion status and progress
- GET /doc/{doc_id}/file - Redirect to a presigned URL for the stored PDF
- GET /doc/{doc_id}/suggestions - Three starter questions

Dependencies: pdfchat.application.services.document_service, pdfchat.core.rag.suggestions
System role: Document status and viewing HTTP API
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from pdfchat.api.deps import get_document_service, get_suggestion_service
from pdfchat.api.routers.router_utils import handle_api_errors
from pdfchat.application.services.document_service import DocumentService
from pdfchat.core.rag.suggestions import SuggestionService
from pdfchat.models.document import (
    DocumentMeta,
    DocumentStatusResponse,
    ErrorResponse,
    Progress,
    SuggestionsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/doc", tags=["documents"])


@router.get(
    "/{doc_id}/status",
    response_model=DocumentStatusResponse,
    responses={404: {"model": ErrorResponse}},
)
@handle_api_errors(error_code="STATUS_FAILED")
async def get_document_status(
    doc_id: str,
    document_service: DocumentService = Depends(get_document_service),
):
    """Return status, page progress and upload metadata for a document."""
    document = await document_service.get_document(doc_id)
    return DocumentStatusResponse(
        status=document.status.value,
        progress=Progress(
            processed_pages=document.processed_pages,
            total_pages=document.total_pages,
        ),
        error=document.error,
        meta=DocumentMeta(
            original_name=document.original_name,
            uploaded_at=document.uploaded_at,
        ),
    )


@router.get(
    "/{doc_id}/file",
    status_code=status.HTTP_302_FOUND,
    response_class=RedirectResponse,
    responses={404: {"model": ErrorResponse}},
)
@handle_api_errors(error_code="FILE_FAILED")
async def get_document_file(
    doc_id: str,
    document_service: DocumentService = Depends(get_document_service),
):
    """Redirect to a short-lived URL for the stored PDF."""
    url = await document_service.get_file_url(doc_id)
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


@router.get(
    "/{doc_id}/suggestions",
    response_model=SuggestionsResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@handle_api_errors(error_code="SUGGESTIONS_FAILED")
async def get_document_suggestions(
    doc_id: str,
    document_service: DocumentService = Depends(get_document_service),
    suggestion_service: SuggestionService = Depends(get_suggestion_service),
):
    """Suggest three questions answerable from the document."""
    await document_service.get_document(doc_id)
    suggestions = await suggestion_service.generate(doc_id)
    return SuggestionsResponse(suggestions=suggestions)
