"""
Configuration settings for the document ingestion pipeline.

Dependencies: pydantic, pydantic_settings
System role: Chunking configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PipelineSettings(BaseSettings):
    """Settings for chunking uploaded documents."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PIPELINE_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_target_chars: int = Field(
        default=2000,
        description="Buffer length that triggers a chunk flush",
    )
    chunk_overlap_chars: int = Field(
        default=300,
        description="Trailing characters carried into the next chunk",
    )
