"""
Embedding client over Google Generative AI embeddings.

Batches texts into one embedding call per request, preserving order,
under the embedding retry policy.

Dependencies: langchain_google_genai, pdfchat.core.retry
System role: Text -> vector conversion for ingestion and queries
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from langchain_core.embeddings import Embeddings
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from pdfchat.core.exceptions import EmbeddingError
from pdfchat.core.retry import EMBEDDING_POLICY, RetryPolicy, classify_error, with_retry

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """Order-preserving batch embedder with retry."""

    def __init__(
        self,
        embeddings: Embeddings | None = None,
        model: str = "models/text-embedding-004",
        google_api_key: str | None = None,
        policy: RetryPolicy = EMBEDDING_POLICY,
        sleep: Callable[[float], Awaitable[Any]] | None = None,
    ) -> None:
        """
        Initialize embedding client.

        Args:
            embeddings: LangChain embeddings model (built from model/key if None)
            model: Google embedding model ID
            google_api_key: API key (falls back to GOOGLE_API_KEY env var)
            policy: Retry policy for the embedding call
            sleep: Optional sleep override for retries
        """
        if embeddings is None:
            kwargs: dict[str, Any] = {"model": model}
            if google_api_key:
                kwargs["google_api_key"] = google_api_key
            embeddings = GoogleGenerativeAIEmbeddings(**kwargs)
        self._embeddings = embeddings
        self._policy = policy
        self._sleep = sleep

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """
        Embed texts, one vector per input in the same order.

        Args:
            texts: Texts to embed

        Returns:
            list[list[float]]: Vectors; empty input returns [] without a call

        Raises:
            EmbeddingError: After retries are exhausted, on a non-retryable
                provider error, or when the vector count does not match
        """
        if not texts:
            return []

        try:
            vectors = await with_retry(
                lambda: self._embeddings.aembed_documents(texts),
                policy=self._policy,
                label="embed_batch",
                sleep=self._sleep,
            )
        except Exception as e:
            logger.error(
                f"{__name__}:embed_batch - {type(e).__name__}: {e}",
                extra={"text_count": len(texts)},
            )
            raise EmbeddingError(
                f"Failed to generate embeddings: {e}",
                details={"text_count": len(texts)},
                kind=classify_error(e),
            ) from e

        if len(vectors) != len(texts):
            raise EmbeddingError(
                f"Embedding count mismatch: expected {len(texts)}, got {len(vectors)}",
                details={"text_count": len(texts), "vector_count": len(vectors)},
            )

        logger.debug("Embedded batch", extra={"text_count": len(texts)})
        return [list(vector) for vector in vectors]

    async def embed_query(self, text: str) -> list[float]:
        """Embed a single query string."""
        vectors = await self.embed_batch([text])
        return vectors[0]
