"""
Parsed page models.

Dependencies: pydantic
System role: Output of the parsing stage, input to chunking
"""

from pydantic import BaseModel, Field


class ParsedPage(BaseModel):
    """Text extracted from one PDF page."""

    page_number: int = Field(description="1-based page number", ge=1)
    text: str = Field(description="Whitespace-normalised page text")


class ParsedDocument(BaseModel):
    """Pages with text, plus the page count of the whole PDF."""

    pages: list[ParsedPage]
    total_pages: int = Field(description="Pages in the PDF, blank ones included", ge=1)
