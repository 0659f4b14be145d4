"""
Streaming event schemas for SSE chat.

Defines event types and payloads for real-time chat streaming.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel


class StreamEventType(str, Enum):
    """Server-to-client event types for streaming chat."""

    CONTEXT = "context"
    TOKEN = "token"
    CITATIONS = "citations"
    COMPLETE = "complete"
    ERROR = "error"


class StreamEvent(BaseModel):
    """
    Base streaming event model.

    Attributes:
        event: Event type identifier
        data: Event-specific payload
    """

    event: StreamEventType
    data: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {"event": self.event.value, "data": self.data}

    def to_sse(self) -> str:
        """Format as a Server-Sent Events frame."""
        return f"event: {self.event.value}\ndata: {json.dumps(self.data)}\n\n"
