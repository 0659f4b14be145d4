"""
Document API schemas.

Response bodies use camelCase field names.

Dependencies: pydantic
System role: Document API contracts
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serialise with camelCase aliases, accept either form on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UploadResponse(CamelModel):
    doc_id: str


class Progress(CamelModel):
    processed_pages: int = 0
    total_pages: int | None = None


class DocumentMeta(CamelModel):
    original_name: str
    uploaded_at: datetime


class DocumentStatusResponse(CamelModel):
    """Ingestion status of one document."""

    status: str = Field(description="processing, ready or error")
    progress: Progress
    error: str | None = None
    meta: DocumentMeta


class DocumentSummary(CamelModel):
    doc_id: str
    file_name: str
    file_size: int
    uploaded_at: datetime
    status: str
    progress: Progress


class DocumentListResponse(CamelModel):
    pdfs: list[DocumentSummary]


class DeleteResponse(CamelModel):
    success: bool = True


class SuggestionsResponse(CamelModel):
    suggestions: list[str]


class ErrorResponse(CamelModel):
    """Error body returned by every endpoint."""

    error: str
    message: str | None = None
    kind: str | None = None
