"""
Document ORM model.

Represents an uploaded PDF with its ingestion status and page progress.

Dependencies: sqlalchemy, pdfchat.boundary.db.base
System role: Document persistence for ingestion tracking
"""

import enum

from sqlalchemy import BigInteger, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pdfchat.boundary.db.base import Base, StringUUIDMixin, TimestampMixin


class DocumentStatus(str, enum.Enum):
    """
    Document processing lifecycle states.

    PROCESSING: Ingestion running (parse, chunk, embed, index)
    READY: Indexed in the vector store, available for chat
    ERROR: Ingestion failed; error field contains details

    READY and ERROR are terminal.
    """

    PROCESSING = "processing"
    READY = "ready"
    ERROR = "error"


class DocumentModel(Base, StringUUIDMixin, TimestampMixin):
    """
    Uploaded PDF and its ingestion progress.

    Attributes:
        id: UUID string primary key (auto-generated)
        original_name: Filename supplied by the client
        file_size: Size in bytes
        blob_key: Object key of the stored PDF
        status: PROCESSING, READY or ERROR
        error: Failure message when status is ERROR
        processed_pages: Pages indexed so far
        total_pages: Page count once parsed, None before that
    """

    __tablename__ = "pdf_documents"

    original_name: Mapped[str] = mapped_column(String(512), nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    blob_key: Mapped[str] = mapped_column(String(1024), nullable=False)

    status: Mapped[DocumentStatus] = mapped_column(
        Enum(DocumentStatus, native_enum=False),
        nullable=False,
        default=DocumentStatus.PROCESSING,
    )
    error: Mapped[str | None] = mapped_column(Text, nullable=True)

    processed_pages: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_pages: Mapped[int | None] = mapped_column(Integer, nullable=True)
