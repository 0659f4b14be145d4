"""
Chat service.

Validates chat input and delegates answer streaming to the assembler.

Dependencies: pdfchat.core.rag
System role: Chat orchestration
"""

import logging
from collections.abc import AsyncIterator

from pdfchat.core.exceptions import ValidationError
from pdfchat.core.rag.answer_assembler import AnswerAssembler
from pdfchat.models.chat import ChatRequest
from pdfchat.models.streaming import StreamEvent

logger = logging.getLogger(__name__)


class ChatService:
    """Stream grounded answers for chat requests."""

    def __init__(self, assembler: AnswerAssembler) -> None:
        self._assembler = assembler

    def validate(self, request: ChatRequest) -> tuple[str, str]:
        """
        Extract (doc_id, question) from a chat request.

        Raises:
            ValidationError: docId or the latest user text is missing
        """
        if not request.doc_id:
            raise ValidationError("Missing docId", field="docId")
        question = request.latest_user_text()
        if not question:
            raise ValidationError("Missing user text", field="messages")
        return request.doc_id, question

    def stream_chat(self, doc_id: str, question: str) -> AsyncIterator[StreamEvent]:
        """Stream answer events for one question."""
        logger.info("Chat request", extra={"doc_id": doc_id, "question_len": len(question)})
        return self._assembler.stream_answer(doc_id, question)
