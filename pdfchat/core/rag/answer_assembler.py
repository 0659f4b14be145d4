"""
Retrieval + answer assembler.

Embeds the question, retrieves the top-K chunks of one document, renders
the grounding prompt and streams the model's answer as StreamEvents,
finishing with the page citations parsed from the full answer.

Only establishing the model stream is retried; a failure after the first
token propagates to the caller.

Dependencies: langchain_core, fastapi.concurrency, pdfchat.core.retry
System role: Chat answer generation
"""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from fastapi.concurrency import run_in_threadpool
from langchain_core.language_models import BaseChatModel

from pdfchat.boundary.llm.embedding_client import EmbeddingClient
from pdfchat.boundary.vdb.s3_vectors_store import S3VectorsStore
from pdfchat.boundary.vdb.vector_schemas import VectorSearchResult
from pdfchat.core.citation_parser import parse_citations
from pdfchat.core.exceptions import GenerationError
from pdfchat.core.rag.prompts import ANSWER_PROMPT
from pdfchat.core.retry import (
    CHAT_STREAM_POLICY,
    RetryPolicy,
    classify_error,
    open_stream_with_retry,
)
from pdfchat.models.streaming import StreamEvent, StreamEventType

logger = logging.getLogger(__name__)


def build_context(results: list[VectorSearchResult]) -> str:
    """Join retrieved chunks, each preceded by its first page marker."""
    return "\n\n".join(
        f"\n[p.{result.metadata.page_start}]\n{result.metadata.text}"
        for result in results
    )


def chunk_text(content: Any) -> str:
    """Flatten model chunk content (string or list of parts) to text."""
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content) if content else ""


class AnswerAssembler:
    """Grounded, citation-bearing answers over one document."""

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        vector_store: S3VectorsStore,
        chat_model: BaseChatModel,
        top_k: int = 8,
        policy: RetryPolicy = CHAT_STREAM_POLICY,
        sleep: Callable[[float], Awaitable[Any]] | None = None,
    ) -> None:
        """
        Initialize the assembler.

        Args:
            embedding_client: Question embedder
            vector_store: Chunk store queried per document
            chat_model: Streaming chat model
            top_k: Chunks retrieved per question
            policy: Retry policy for opening the model stream
            sleep: Optional sleep override for retries
        """
        self._embedding_client = embedding_client
        self._vector_store = vector_store
        self._model = chat_model
        self._top_k = top_k
        self._policy = policy
        self._sleep = sleep

    async def retrieve(self, doc_id: str, question: str) -> list[VectorSearchResult]:
        """Embed the question and fetch the best chunks for the document."""
        query_vector = await self._embedding_client.embed_query(question)
        return await run_in_threadpool(
            self._vector_store.query_top_k, doc_id, query_vector, self._top_k
        )

    async def stream_answer(self, doc_id: str, question: str) -> AsyncIterator[StreamEvent]:
        """
        Stream an answer for one question.

        Yields CONTEXT, then TOKEN events, then CITATIONS and COMPLETE.

        Args:
            doc_id: Document to answer from
            question: Latest user question

        Raises:
            EmbeddingError, VectorStoreError: Retrieval failed
            GenerationError: The model stream failed
        """
        logger.info(
            f"{__name__}:stream_answer - START",
            extra={"doc_id": doc_id, "question_len": len(question)},
        )

        results = await self.retrieve(doc_id, question)
        yield StreamEvent(
            event=StreamEventType.CONTEXT,
            data={
                "chunks": [
                    {
                        "id": result.id,
                        "pageStart": result.metadata.page_start,
                        "pageEnd": result.metadata.page_end,
                        "score": round(result.score, 4),
                    }
                    for result in results
                ]
            },
        )

        messages = ANSWER_PROMPT.invoke({
            "context": build_context(results),
            "question": question,
        }).to_messages()

        try:
            stream, first = await open_stream_with_retry(
                lambda: self._model.astream(messages),
                policy=self._policy,
                label="chat_stream",
                sleep=self._sleep,
            )
        except Exception as e:
            raise GenerationError(
                f"Failed to start answer stream: {e}",
                details={"doc_id": doc_id},
                kind=classify_error(e),
            ) from e

        full_answer = ""
        token_index = 0
        try:
            chunk = first
            while chunk is not None:
                token = chunk_text(chunk.content)
                if token:
                    full_answer += token
                    yield StreamEvent(
                        event=StreamEventType.TOKEN,
                        data={"token": token, "index": token_index},
                    )
                    token_index += 1
                chunk = await anext(stream, None)
        except Exception as e:
            raise GenerationError(
                f"Answer stream failed after {token_index} tokens: {e}",
                details={"doc_id": doc_id},
                kind=classify_error(e),
            ) from e
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()

        parsed = parse_citations(full_answer)
        yield StreamEvent(
            event=StreamEventType.CITATIONS,
            data={
                "citations": [
                    citation.model_dump(by_alias=True, exclude_none=True)
                    for citation in parsed.citations
                ]
            },
        )
        yield StreamEvent(
            event=StreamEventType.COMPLETE,
            data={"fullAnswer": full_answer, "cleanText": parsed.clean_text},
        )
        logger.info(
            f"{__name__}:stream_answer - END",
            extra={"doc_id": doc_id, "tokens": token_index, "citations": len(parsed.citations)},
        )
