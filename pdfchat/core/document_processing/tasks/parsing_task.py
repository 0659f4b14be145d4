"""
Document parsing task using LangChain PyPDFLoader.

Converts PDF bytes into per-page text. Page numbers are 1-based and page
text is whitespace-normalised. Pages without text are dropped but still
count towards the document page total.

Dependencies: langchain_community.document_loaders, pypdf
System role: Parsing stage of the ingestion pipeline
"""

import logging
import os
import re
import tempfile

from langchain_community.document_loaders import PyPDFLoader

from pdfchat.core.exceptions import ParsingError

from ..models import ParsedDocument, ParsedPage

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_page_text(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return _WHITESPACE.sub(" ", text).strip()


class ParsingTask:
    """Parse PDF bytes into a ParsedDocument."""

    def parse(self, pdf_bytes: bytes, document_id: str | None = None) -> ParsedDocument:
        """
        Parse PDF bytes into pages.

        Args:
            pdf_bytes: Raw PDF file content
            document_id: Document ID for error context

        Returns:
            ParsedDocument: Non-empty pages in ascending order and the PDF page count

        Raises:
            ParsingError: When the PDF cannot be read or has no extractable text
        """
        if not pdf_bytes:
            raise ParsingError("PDF file is empty", document_id)

        fd, temp_path = tempfile.mkstemp(prefix="pdfchat_", suffix=".pdf")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(pdf_bytes)

            try:
                documents = PyPDFLoader(temp_path).load()
            except Exception as e:
                raise ParsingError(f"Failed to parse PDF: {e}", document_id) from e
        finally:
            os.unlink(temp_path)

        pages: list[ParsedPage] = []
        for index, doc in enumerate(documents):
            text = normalize_page_text(doc.page_content or "")
            if not text:
                continue
            # PyPDFLoader reports 0-based page indices
            page_number = int(doc.metadata.get("page", index)) + 1
            pages.append(ParsedPage(page_number=page_number, text=text))

        if not pages:
            raise ParsingError("PDF document contains no extractable text", document_id)

        pages.sort(key=lambda page: page.page_number)
        total_pages = max(len(documents), pages[-1].page_number)
        logger.info(
            "Parsed PDF",
            extra={"document_id": document_id, "page_count": total_pages, "text_pages": len(pages)},
        )
        return ParsedDocument(pages=pages, total_pages=total_pages)
