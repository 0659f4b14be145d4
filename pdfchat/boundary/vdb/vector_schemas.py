"""
Vector database schemas.

Pydantic models for vector records and search results.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from pydantic import BaseModel, Field


class VectorMetadata(BaseModel):
    """
    Metadata attached to each vector.

    doc_id, page_start, page_end and chunk_index are filterable on the
    index; text must be configured as non-filterable metadata.
    """

    doc_id: str = Field(description="Owning document ID (hard filter on every query)")
    page_start: int = Field(description="First page covered")
    page_end: int = Field(description="Last page covered")
    chunk_index: int = Field(description="Position within the document")
    text: str = Field(description="Chunk text payload")


class VectorRecord(BaseModel):
    """A chunk embedding ready for upsert."""

    id: str = Field(description="Deterministic chunk key")
    vector: list[float] = Field(description="Embedding vector")
    metadata: VectorMetadata


class VectorSearchResult(BaseModel):
    """Single result from vector search."""

    id: str = Field(description="Chunk key")
    metadata: VectorMetadata = Field(description="Chunk metadata")
    score: float = Field(description="Cosine similarity (1 - distance)")
