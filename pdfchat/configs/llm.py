"""
LLM configuration settings.

Google Generative AI model identifiers and generation parameters
for embeddings, chat answers and question suggestions.

Dependencies: pydantic, pydantic_settings
System role: Model configuration for embedding and generation
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Google Generative AI model settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    google_api_key: str | None = Field(
        default=None,
        validation_alias="GOOGLE_API_KEY",
        description="Google Generative AI API key",
    )

    embedding_model: str = Field(
        default="models/text-embedding-004",
        description="Embedding model ID (768 dimensions)",
    )
    embedding_dimension: int = Field(default=768, description="Embedding vector dimension")

    chat_model: str = Field(default="gemini-2.0-flash", description="Chat model ID")
    chat_temperature: float = Field(default=0.2, description="Answer temperature")

    suggestion_model: str = Field(default="gemini-2.0-flash", description="Suggestion model ID")
    suggestion_temperature: float = Field(default=0.7, description="Suggestion temperature")
    suggestion_max_tokens: int = Field(default=200, description="Suggestion output token cap")

    @property
    def api_key_loaded(self) -> bool:
        """True when an API key is configured."""
        return bool(self.google_api_key)
