"""
Exception hierarchy for the PDF chat application.

Provides layered exception structure for domain-specific errors.
Every exception carries an ErrorKind so callers (HTTP handlers, the
chat stream) can report a stable category instead of sniffing messages.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

import enum
from typing import Any


class ErrorKind(str, enum.Enum):
    """Client-facing error categories."""

    OVERLOADED = "overloaded"
    RATE_LIMITED = "rate_limited"
    NETWORK = "network"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


class PdfChatException(Exception):
    """Base exception for all application errors."""

    default_kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        kind: ErrorKind | None = None,
    ) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
            kind: Error category (defaults to the class default)
        """
        self.message = message
        self.details = details or {}
        self.kind = kind or self.default_kind
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(PdfChatException):
    """Raised when input validation fails."""

    default_kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class DocumentNotFoundError(PdfChatException):
    """Raised when a document id has no record."""

    default_kind = ErrorKind.NOT_FOUND

    def __init__(self, doc_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["doc_id"] = doc_id
        self.doc_id = doc_id
        super().__init__(f"Document not found: {doc_id}", details)


class InvalidStatusTransitionError(PdfChatException):
    """Raised when a status update would leave a terminal state."""

    def __init__(self, doc_id: str, current: str, requested: str) -> None:
        super().__init__(
            f"Cannot move document {doc_id} from {current} to {requested}",
            {"doc_id": doc_id, "current": current, "requested": requested},
        )


class DocumentProcessingError(PdfChatException):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
        kind: ErrorKind | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            document_id: ID of the document that failed
            details: Additional context
            kind: Error category
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details, kind)


class ParsingError(DocumentProcessingError):
    """Raised when document parsing fails."""


class EmbeddingError(DocumentProcessingError):
    """Raised when embedding generation fails."""


class BlobStorageError(PdfChatException):
    """Raised when blob storage operations fail."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
        kind: ErrorKind | None = None,
    ) -> None:
        details = details or {}
        if key:
            details["key"] = key
        super().__init__(message, details, kind)


class VectorStoreError(PdfChatException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
        kind: ErrorKind | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, query, delete)
            details: Additional context
            kind: Error category
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details, kind)


class GenerationError(PdfChatException):
    """Raised when the chat model fails to produce an answer."""
