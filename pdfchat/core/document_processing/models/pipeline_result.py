"""
Pipeline result model for document processing.

Represents the outcome of ingesting a document through the pipeline.

Dependencies: pydantic
System role: Return type for IngestionPipeline.run()
"""

from pydantic import BaseModel, Field


class PipelineResult(BaseModel):
    """Result of document ingestion."""

    document_id: str = Field(description="Unique document identifier")
    page_count: int = Field(description="Number of pages with text")
    chunk_count: int = Field(description="Number of chunks indexed")
    processing_time_ms: float = Field(description="Total processing time in milliseconds")
