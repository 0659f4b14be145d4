"""
Core business logic module.

Contains domain business logic, exception hierarchy, retry policy and
citation parsing. All business rules and domain-specific logic reside here.
"""

from pdfchat.core.exceptions import (
    BlobStorageError,
    DocumentNotFoundError,
    DocumentProcessingError,
    EmbeddingError,
    ErrorKind,
    GenerationError,
    ParsingError,
    PdfChatException,
    ValidationError,
    VectorStoreError,
)

__all__ = [
    "BlobStorageError",
    "DocumentNotFoundError",
    "DocumentProcessingError",
    "EmbeddingError",
    "ErrorKind",
    "GenerationError",
    "ParsingError",
    "PdfChatException",
    "ValidationError",
    "VectorStoreError",
]
