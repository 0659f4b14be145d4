"""
Vector store configuration settings.

Manages S3 Vectors configuration for chunk storage and retrieval.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """S3 Vectors configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(default="pdfchat-vectors", description="S3 Vectors bucket name")
    index_name: str = Field(default="pdf-chunks", description="S3 Vectors index name")
    region: str = Field(default="us-east-1", description="AWS region for S3 Vectors")

    top_k: int = Field(default=8, description="Chunks retrieved per chat question")
    suggestion_top_k: int = Field(default=10, description="Chunks retrieved for suggestions")
    similarity_threshold: float = Field(
        default=0.3,
        description="Results at or below this cosine similarity are discarded",
    )

    upsert_batch_size: int = Field(default=100, description="Vectors per put_vectors call")
    delete_batch_size: int = Field(default=500, description="Keys per delete_vectors call")
    list_page_size: int = Field(default=500, description="Vectors per list_vectors page")
