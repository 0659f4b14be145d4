"""
Chunk domain model for document processing pipeline.

Represents a page-tagged window of document text with a deterministic ID.

Dependencies: pydantic
System role: Data structure for document chunks in ingestion pipeline
"""

from pydantic import BaseModel, Field


class Chunk(BaseModel):
    """Contiguous window of document text spanning one or more pages."""

    doc_id: str = Field(description="Owning document ID")
    page_start: int = Field(description="First page covered (inclusive)")
    page_end: int = Field(description="Last page covered (inclusive)")
    chunk_index: int = Field(description="Zero-based position in the document", ge=0)
    text: str = Field(description="Chunk text with [p.N] page markers")

    @property
    def id(self) -> str:
        """Deterministic identifier; re-upserting the same chunk overwrites it."""
        return f"{self.doc_id}-{self.page_start}-{self.page_end}-{self.chunk_index}"
