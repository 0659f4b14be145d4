"""
Chat API endpoint.

Routes: POST /chat

Streams a grounded answer as Server-Sent Events:
    event: context    {"chunks": [{"id", "pageStart", "pageEnd", "score"}]}
    event: token      {"token": "...", "index": 0}
    event: citations  {"citations": [{"pageNumber", "isRange", "endPage"?}]}
    event: complete   {"fullAnswer": "...", "cleanText": "..."}
    event: error      {"code": "...", "message": "...", "kind": "..."}

Dependencies: pdfchat.application.services.chat_service
System role: Streaming chat HTTP API
"""

import logging
from collections.abc import AsyncIterator

import pydantic
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import StreamingResponse

from pdfchat.api.deps import get_chat_service
from pdfchat.api.routers.router_utils import error_response
from pdfchat.application.services.chat_service import ChatService
from pdfchat.core.exceptions import ErrorKind, PdfChatException
from pdfchat.core.retry import classify_error
from pdfchat.models.chat import ChatRequest
from pdfchat.models.document import ErrorResponse
from pdfchat.models.streaming import StreamEvent, StreamEventType

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def error_event(error: Exception) -> StreamEvent:
    """Error event for a failure inside the stream."""
    message = error.message if isinstance(error, PdfChatException) else str(error)
    return StreamEvent(
        event=StreamEventType.ERROR,
        data={
            "code": "CHAT_FAILED",
            "message": message or type(error).__name__,
            "kind": classify_error(error).value,
        },
    )


async def event_generator(
    chat_service: ChatService,
    doc_id: str,
    question: str,
) -> AsyncIterator[str]:
    """Serialise answer events as SSE frames, ending with an error frame on failure."""
    try:
        async for event in chat_service.stream_chat(doc_id, question):
            yield event.to_sse()
    except Exception as e:
        logger.error(
            "Chat stream failed",
            exc_info=e,
            extra={"doc_id": doc_id, "error_type": type(e).__name__},
        )
        yield error_event(e).to_sse()


@router.post(
    "/chat",
    response_class=StreamingResponse,
    responses={400: {"model": ErrorResponse}},
)
async def chat(
    request: Request,
    chat_service: ChatService = Depends(get_chat_service),
):
    """
    Answer the latest user message about one document.

    The body is {"messages": [...], "docId": "..."}. Validation failures
    return 400 before any streaming starts.
    """
    try:
        body = await request.json()
        chat_request = ChatRequest.model_validate(body)
        doc_id, question = chat_service.validate(chat_request)
    except PdfChatException as e:
        return error_response(status.HTTP_400_BAD_REQUEST, e.message, kind=ErrorKind.VALIDATION)
    except (ValueError, pydantic.ValidationError):
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Invalid chat request body",
            kind=ErrorKind.VALIDATION,
        )

    return StreamingResponse(
        event_generator(chat_service, doc_id, question),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
