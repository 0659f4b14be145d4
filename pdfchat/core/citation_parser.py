"""
Page citation parser.

Extracts [p.N], [p.N-M] and grouped [p.3, 5-7, 9] citation tokens from a
generated answer, returning the answer with the tokens removed plus the
cited pages so a client can render page-jump controls.

Dependencies: re (stdlib), pydantic
System role: Post-processing of streamed answers
"""

import re

from pydantic import Field

from pdfchat.models.document import CamelModel

CITATION_PATTERN = re.compile(
    r"\[p\.\d+(?:\s*-\s*\d+)?(?:\s*,\s*(?:p\.)?\d+(?:\s*-\s*\d+)?)*\]"
)


class Citation(CamelModel):
    """A cited page, or the start of a cited page range."""

    page_number: int
    is_range: bool = False
    end_page: int | None = None


class CitationParseResult(CamelModel):
    clean_text: str
    citations: list[Citation] = Field(default_factory=list)


def _parse_token(token: str) -> list[Citation]:
    inner = token[1:-1]
    citations = []
    for part in inner.split(","):
        part = part.strip()
        if part.startswith("p."):
            part = part[2:]
        if "-" in part:
            start, end = (int(piece.strip()) for piece in part.split("-", 1))
            citations.append(Citation(page_number=start, is_range=True, end_page=end))
        else:
            citations.append(Citation(page_number=int(part)))
    return citations


def parse_citations(text: str) -> CitationParseResult:
    """
    Split an answer into clean text and unique cited pages.

    Duplicate pages keep the last occurrence; output is sorted by page.

    Args:
        text: Answer text possibly containing citation tokens

    Returns:
        CitationParseResult: Text with tokens removed and ascending citations
    """
    by_page: dict[int, Citation] = {}
    for match in CITATION_PATTERN.finditer(text):
        for citation in _parse_token(match.group(0)):
            by_page[citation.page_number] = citation

    if not by_page:
        return CitationParseResult(clean_text=text)

    clean_text = CITATION_PATTERN.sub("", text)
    return CitationParseResult(
        clean_text=clean_text,
        citations=[by_page[page] for page in sorted(by_page)],
    )


def cited_pages(text: str) -> list[int]:
    """Unique cited start pages in ascending order."""
    return [citation.page_number for citation in parse_citations(text).citations]
