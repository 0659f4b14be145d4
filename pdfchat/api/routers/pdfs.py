"""
PDF collection API endpoints.

Routes:
- GET /pdfs - List uploaded PDFs, newest first
- DELETE /pdfs/{doc_id} - Delete a PDF with its record and vectors

Dependencies: pdfchat.application.services.document_service
System role: PDF library HTTP API
"""

import logging

from fastapi import APIRouter, Depends, status

from pdfchat.api.deps import get_document_service
from pdfchat.api.routers.router_utils import error_response, handle_api_errors
from pdfchat.application.services.document_service import DocumentService
from pdfchat.core.exceptions import ErrorKind
from pdfchat.models.document import (
    DeleteResponse,
    DocumentListResponse,
    DocumentSummary,
    ErrorResponse,
    Progress,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pdfs", tags=["pdfs"])


@router.get("", response_model=DocumentListResponse)
@handle_api_errors(error_code="LIST_FAILED")
async def list_pdfs(
    document_service: DocumentService = Depends(get_document_service),
):
    """List all uploaded PDFs with their ingestion progress."""
    documents = await document_service.list_documents()
    return DocumentListResponse(
        pdfs=[
            DocumentSummary(
                doc_id=document.id,
                file_name=document.original_name,
                file_size=document.file_size,
                uploaded_at=document.uploaded_at,
                status=document.status.value,
                progress=Progress(
                    processed_pages=document.processed_pages,
                    total_pages=document.total_pages,
                ),
            )
            for document in documents
        ]
    )


@router.delete(
    "/{doc_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@handle_api_errors(error_code="DELETE_FAILED")
async def delete_pdf(
    doc_id: str,
    document_service: DocumentService = Depends(get_document_service),
):
    """
    Delete a PDF from blob storage, the database and the vector store.

    Every deletion is attempted; any failure yields 500.
    """
    report = await document_service.delete_document(doc_id)
    if not report.success:
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "DELETE_FAILED",
            "; ".join(report.errors),
            ErrorKind.INTERNAL,
        )
    return DeleteResponse(success=True)
