"""
Test suite for API schemas.

Tests chat message text extraction, SSE framing and camelCase output.

System role: Verification of API contracts
"""

import json

from pdfchat.models.chat import ChatMessage, ChatRequest
from pdfchat.models.document import Progress, UploadResponse
from pdfchat.models.streaming import StreamEvent, StreamEventType


class TestChatMessage:
    """Test suite for ChatMessage.text()."""

    def test_text_should_join_text_parts(self) -> None:
        """Test only text parts contribute, joined by spaces."""
        message = ChatMessage.model_validate({
            "role": "user",
            "parts": [
                {"type": "text", "text": "Explain"},
                {"type": "file", "url": "blob:x"},
                {"type": "text", "text": "section 2"},
            ],
        })

        assert message.text() == "Explain section 2"

    def test_text_should_read_list_content(self) -> None:
        """Test content given as a list of typed items."""
        message = ChatMessage.model_validate({
            "role": "user",
            "content": [{"type": "text", "text": "Hello"}],
        })

        assert message.text() == "Hello"

    def test_latest_user_text_should_skip_assistant_messages(self) -> None:
        """Test the last user message is chosen."""
        request = ChatRequest.model_validate({
            "docId": "d",
            "messages": [
                {"role": "user", "content": "one"},
                {"role": "assistant", "content": "two"},
            ],
        })

        assert request.latest_user_text() == "one"


class TestStreamEvent:
    """Test suite for StreamEvent serialisation."""

    def test_to_sse_should_frame_event_and_data(self) -> None:
        """Test SSE frames carry the event name and JSON data."""
        event = StreamEvent(event=StreamEventType.TOKEN, data={"token": "Hi", "index": 0})

        frame = event.to_sse()

        assert frame.startswith("event: token\ndata: ")
        assert frame.endswith("\n\n")
        assert json.loads(frame.split("data: ", 1)[1]) == {"token": "Hi", "index": 0}


class TestDocumentSchemas:
    """Test suite for document response schemas."""

    def test_dump_should_use_camel_case(self) -> None:
        """Test by-alias dumps use camelCase names."""
        assert UploadResponse(doc_id="x").model_dump(by_alias=True) == {"docId": "x"}
        assert Progress(processed_pages=1, total_pages=2).model_dump(by_alias=True) == {
            "processedPages": 1,
            "totalPages": 2,
        }
