"""
Chat request schemas.

Accepts UI-style messages whose text lives either in "content" or in a
list of typed "parts".

Dependencies: pydantic
System role: Chat API contract
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MessagePart(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str
    text: str | None = None


class ChatMessage(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: str
    content: str | list[Any] | None = None
    parts: list[MessagePart] | None = None

    def text(self) -> str:
        """Message text from parts (text parts joined by spaces) or content."""
        if self.parts:
            return " ".join(part.text or "" for part in self.parts if part.type == "text").strip()
        if isinstance(self.content, str):
            return self.content.strip()
        if isinstance(self.content, list):
            return " ".join(
                str(item.get("text", "")) for item in self.content
                if isinstance(item, dict) and item.get("type") == "text"
            ).strip()
        return ""


class ChatRequest(BaseModel):
    """Body of POST /chat."""

    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatMessage] = Field(default_factory=list)
    doc_id: str | None = Field(default=None, alias="docId")

    def latest_user_text(self) -> str:
        """Text of the most recent user message, empty if none."""
        for message in reversed(self.messages):
            if message.role == "user":
                return message.text()
        return ""
