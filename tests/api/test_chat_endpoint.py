"""
Test suite for the chat API endpoint.

Tests POST /chat with FastAPI TestClient: request validation and the
Server-Sent Events stream, including in-stream errors.

System role: Verification of streaming chat HTTP API endpoint
"""

import json

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pdfchat.api.deps import get_chat_service
from pdfchat.api.routers.chat import router
from pdfchat.application.services.chat_service import ChatService
from pdfchat.core.exceptions import ErrorKind, GenerationError
from pdfchat.models.streaming import StreamEvent, StreamEventType


class FakeAssembler:
    """Answer assembler replaying fixed events, optionally failing at the end."""

    def __init__(self, events: list[StreamEvent], error: Exception | None = None) -> None:
        self.events = events
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def stream_answer(self, doc_id: str, question: str):
        self.calls.append((doc_id, question))
        for event in self.events:
            yield event
        if self.error is not None:
            raise self.error


def parse_sse(body: str) -> list[tuple[str, dict]]:
    frames = []
    for block in body.strip().split("\n\n"):
        lines = dict(line.split(": ", 1) for line in block.splitlines())
        frames.append((lines["event"], json.loads(lines["data"])))
    return frames


ANSWER_EVENTS = [
    StreamEvent(event=StreamEventType.CONTEXT, data={"chunks": [{"id": "doc-1-2-2-0", "pageStart": 2, "pageEnd": 2, "score": 0.8}]}),
    StreamEvent(event=StreamEventType.TOKEN, data={"token": "Paris [p.2]", "index": 0}),
    StreamEvent(event=StreamEventType.CITATIONS, data={"citations": [{"pageNumber": 2, "isRange": False}]}),
    StreamEvent(event=StreamEventType.COMPLETE, data={"fullAnswer": "Paris [p.2]", "cleanText": "Paris "}),
]

VALID_BODY = {
    "docId": "doc-1",
    "messages": [{"role": "user", "parts": [{"type": "text", "text": "What is the capital?"}]}],
}


@pytest.fixture
def assembler() -> FakeAssembler:
    return FakeAssembler(ANSWER_EVENTS)


@pytest.fixture
def client(assembler: FakeAssembler) -> TestClient:
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_chat_service] = lambda: ChatService(assembler=assembler)
    return TestClient(app)


class TestChatEndpointStreaming:
    """Test suite for successful chat streams."""

    def test_chat_should_stream_answer_events(self, client: TestClient, assembler: FakeAssembler) -> None:
        """Test events are framed as SSE in order."""
        response = client.post("/chat", json=VALID_BODY)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert response.headers["cache-control"] == "no-cache"
        frames = parse_sse(response.text)
        assert [name for name, _ in frames] == ["context", "token", "citations", "complete"]
        assert frames[3][1]["cleanText"] == "Paris "
        assert assembler.calls == [("doc-1", "What is the capital?")]

    def test_chat_should_accept_plain_content_messages(
        self, client: TestClient, assembler: FakeAssembler
    ) -> None:
        """Test text may come from message content instead of parts."""
        body = {"docId": "doc-1", "messages": [{"role": "user", "content": "Summarise page 3"}]}

        response = client.post("/chat", json=body)

        assert response.status_code == 200
        assert assembler.calls == [("doc-1", "Summarise page 3")]

    def test_chat_should_end_with_error_event_on_failure(self, assembler: FakeAssembler) -> None:
        """Test a failure after streaming starts becomes an error event."""
        failing = FakeAssembler(
            ANSWER_EVENTS[:2],
            error=GenerationError("Answer stream failed after 1 tokens", kind=ErrorKind.OVERLOADED),
        )
        app = FastAPI()
        app.include_router(router)
        app.dependency_overrides[get_chat_service] = lambda: ChatService(assembler=failing)

        response = TestClient(app).post("/chat", json=VALID_BODY)

        assert response.status_code == 200
        frames = parse_sse(response.text)
        assert [name for name, _ in frames] == ["context", "token", "error"]
        assert frames[-1][1] == {
            "code": "CHAT_FAILED",
            "message": "Answer stream failed after 1 tokens",
            "kind": "overloaded",
        }


class TestChatEndpointValidation:
    """Test suite for chat request validation."""

    def test_chat_should_require_doc_id(self, client: TestClient, assembler: FakeAssembler) -> None:
        """Test a missing docId returns 400 before streaming."""
        response = client.post("/chat", json={"messages": VALID_BODY["messages"]})

        assert response.status_code == 400
        assert response.json()["error"] == "Missing docId"
        assert assembler.calls == []

    def test_chat_should_require_user_text(self, client: TestClient) -> None:
        """Test a conversation without user text returns 400."""
        body = {"docId": "doc-1", "messages": [{"role": "assistant", "content": "Hi"}]}

        response = client.post("/chat", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "Missing user text"

    def test_chat_should_reject_malformed_json(self, client: TestClient) -> None:
        """Test an unparseable body returns 400."""
        response = client.post("/chat", content=b"{not json", headers={"content-type": "application/json"})

        assert response.status_code == 400
        assert response.json()["kind"] == "validation"
