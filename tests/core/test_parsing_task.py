"""
Test suite for ParsingTask.

Tests page numbering, whitespace normalisation, blank page handling and
parse failures. PyPDFLoader is patched.

System role: Verification of the parsing stage
"""

import os
from unittest.mock import patch

import pytest
from langchain_core.documents import Document

from pdfchat.core.document_processing.tasks.parsing_task import ParsingTask, normalize_page_text
from pdfchat.core.exceptions import ParsingError

LOADER_PATH = "pdfchat.core.document_processing.tasks.parsing_task.PyPDFLoader"


class TestNormalizePageText:
    """Test suite for normalize_page_text()."""

    def test_should_collapse_whitespace(self) -> None:
        """Test runs of whitespace become single spaces."""
        assert normalize_page_text("  Hello \n\n  world\t! ") == "Hello world !"


class TestParsingTaskParse:
    """Test suite for ParsingTask.parse() method."""

    def test_parse_should_reject_empty_bytes(self) -> None:
        """Test empty input raises ParsingError."""
        with pytest.raises(ParsingError):
            ParsingTask().parse(b"", "doc-1")

    def test_parse_should_number_pages_from_one_and_skip_blank(self) -> None:
        """Test 0-based loader pages become 1-based and blank pages drop out."""
        documents = [
            Document(page_content="  Hello \n world ", metadata={"page": 0}),
            Document(page_content="   ", metadata={"page": 1}),
            Document(page_content="Third page", metadata={"page": 2}),
        ]
        with patch(LOADER_PATH) as loader_cls:
            loader_cls.return_value.load.return_value = documents

            parsed = ParsingTask().parse(b"%PDF-1.4", "doc-1")

        assert [(p.page_number, p.text) for p in parsed.pages] == [(1, "Hello world"), (3, "Third page")]
        assert parsed.total_pages == 3

    def test_parse_should_remove_temp_file(self) -> None:
        """Test the temporary PDF is deleted after loading."""
        with patch(LOADER_PATH) as loader_cls:
            loader_cls.return_value.load.return_value = [
                Document(page_content="text", metadata={"page": 0})
            ]

            ParsingTask().parse(b"%PDF-1.4", "doc-1")

        temp_path = loader_cls.call_args.args[0]
        assert not os.path.exists(temp_path)

    def test_parse_should_wrap_loader_failure(self) -> None:
        """Test loader exceptions become ParsingError."""
        with patch(LOADER_PATH) as loader_cls:
            loader_cls.return_value.load.side_effect = RuntimeError("corrupt xref")

            with pytest.raises(ParsingError, match="corrupt xref"):
                ParsingTask().parse(b"%PDF-1.4", "doc-1")

    def test_parse_should_reject_pdf_without_text(self) -> None:
        """Test a PDF whose pages are all blank raises ParsingError."""
        with patch(LOADER_PATH) as loader_cls:
            loader_cls.return_value.load.return_value = [
                Document(page_content="", metadata={"page": 0})
            ]

            with pytest.raises(ParsingError, match="no extractable text"):
                ParsingTask().parse(b"%PDF-1.4", "doc-1")

    def test_parse_should_count_trailing_blank_pages(self) -> None:
        """Test blank pages after the last text page still count."""
        documents = [
            Document(page_content="Only text", metadata={"page": 0}),
            Document(page_content="", metadata={"page": 1}),
            Document(page_content="\n", metadata={"page": 2}),
        ]
        with patch(LOADER_PATH) as loader_cls:
            loader_cls.return_value.load.return_value = documents

            parsed = ParsingTask().parse(b"%PDF-1.4", "doc-1")

        assert [p.page_number for p in parsed.pages] == [1]
        assert parsed.total_pages == 3


    def test_parse_should_keep_page_count_with_blank_middle_page(self) -> None:
        """Test a 3-page PDF with a blank page 2 reports 3 pages."""
        with patch(LOADER_PATH) as loader_cls:
            loader_cls.return_value.load.return_value = [
                Document(page_content="Page one text", metadata={"page": 0}),
                Document(page_content="", metadata={"page": 1}),
                Document(page_content="Page three text", metadata={"page": 2}),
            ]

            parsed = ParsingTask().parse(b"%PDF-1.4", "doc-1")

        assert [(p.page_number, p.text) for p in parsed.pages] == [
            (1, "Page one text"),
            (3, "Page three text"),
        ]
        assert parsed.total_pages == 3
