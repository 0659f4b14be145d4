"""
Starter question suggestions for a document.

Retrieves broad-coverage chunks, asks the model for a JSON array of three
questions and normalises whatever comes back into exactly three unique,
non-empty questions, padding from a fixed fallback list.

Dependencies: langchain_core, fastapi.concurrency, pdfchat.core.retry
System role: Suggestion generation for GET /doc/{id}/suggestions
"""

import json
import logging
import re
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi.concurrency import run_in_threadpool
from langchain_core.language_models import BaseChatModel

from pdfchat.boundary.llm.embedding_client import EmbeddingClient
from pdfchat.boundary.vdb.s3_vectors_store import S3VectorsStore
from pdfchat.core.rag.answer_assembler import chunk_text
from pdfchat.core.rag.prompts import SUGGESTION_PROMPT, SUGGESTION_QUERY
from pdfchat.core.retry import SUGGESTION_POLICY, RetryPolicy, with_retry

logger = logging.getLogger(__name__)

SUGGESTION_COUNT = 3
MAX_CONTEXT_CHARS = 8000

FALLBACK_SUGGESTIONS = (
    "What is the main purpose of this document?",
    "What are the key findings?",
    "What are the key recommendations?",
)

_LIST_PREFIX = re.compile(r"^[\s*\-\d\.\[\],]+")
_LIST_SUFFIX = re.compile(r"[\s\],]+$")
_QUOTED = re.compile(r'"((?:[^"\\]|\\.)*)"')


def _parse_json_array(text: str) -> list[str] | None:
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end <= start:
        return None
    try:
        parsed = json.loads(text[start:end + 1])
    except json.JSONDecodeError:
        return None
    if not isinstance(parsed, list):
        return None
    return [item for item in parsed if isinstance(item, str)]


def _parse_cut_off_array(text: str) -> list[str] | None:
    # Output truncated at the token limit: keep only the fully quoted items
    start = text.find("[")
    if start == -1 or "]" in text[start:]:
        return None
    return _QUOTED.findall(text[start:]) or None


def _parse_lines(text: str) -> list[str]:
    return [_LIST_SUFFIX.sub("", _LIST_PREFIX.sub("", line)) for line in text.splitlines()]


def normalize_suggestions(raw: str) -> list[str]:
    """
    Turn raw model output into exactly three questions.

    Strict JSON (first "[" to last "]") is tried first, then an array cut off
    before its closing bracket. Only when both fail are lines split and
    stripped of bullets, numbering and stray brackets or commas.
    """
    candidates = _parse_json_array(raw)
    if candidates is None:
        candidates = _parse_cut_off_array(raw)
    if candidates is None:
        candidates = _parse_lines(raw)

    suggestions: list[str] = []
    for candidate in candidates:
        question = candidate.strip().strip('"').strip()
        if question and question not in suggestions:
            suggestions.append(question)
        if len(suggestions) == SUGGESTION_COUNT:
            break

    for fallback in FALLBACK_SUGGESTIONS:
        if len(suggestions) == SUGGESTION_COUNT:
            break
        if fallback not in suggestions:
            suggestions.append(fallback)
    return suggestions


class SuggestionService:
    """Generate three starter questions for a document."""

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        vector_store: S3VectorsStore,
        chat_model: BaseChatModel,
        top_k: int = 10,
        policy: RetryPolicy = SUGGESTION_POLICY,
        sleep: Callable[[float], Awaitable[Any]] | None = None,
    ) -> None:
        self._embedding_client = embedding_client
        self._vector_store = vector_store
        self._model = chat_model
        self._top_k = top_k
        self._policy = policy
        self._sleep = sleep

    async def generate(self, doc_id: str) -> list[str]:
        """
        Suggest questions for a document.

        Args:
            doc_id: Document ID

        Returns:
            list[str]: Exactly three unique questions

        Raises:
            EmbeddingError, VectorStoreError: Retrieval failed
            Provider errors from the model once retries are exhausted
        """
        query_vector = await self._embedding_client.embed_query(SUGGESTION_QUERY)
        results = await run_in_threadpool(
            self._vector_store.query_top_k, doc_id, query_vector, self._top_k
        )
        context = "\n\n".join(
            f"[p.{result.metadata.page_start}] {result.metadata.text}" for result in results
        )[:MAX_CONTEXT_CHARS]

        if not context:
            logger.info("No context for suggestions, using fallbacks", extra={"doc_id": doc_id})
            return list(FALLBACK_SUGGESTIONS)

        messages = SUGGESTION_PROMPT.invoke({"context": context}).to_messages()
        response = await with_retry(
            lambda: self._model.ainvoke(messages),
            policy=self._policy,
            label="suggestions",
            sleep=self._sleep,
        )
        suggestions = normalize_suggestions(chunk_text(response.content))
        logger.info("Generated suggestions", extra={"doc_id": doc_id, "count": len(suggestions)})
        return suggestions
