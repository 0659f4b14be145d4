"""
Test suite for the citation parser.

Tests single, range and grouped page citations, duplicate handling and
token removal.

System role: Verification of answer post-processing
"""

from pdfchat.core.citation_parser import Citation, cited_pages, parse_citations


class TestParseCitations:
    """Test suite for parse_citations()."""

    def test_parse_should_extract_single_and_range_citations(self) -> None:
        """Test [p.N] and [p.N-M] tokens are parsed and removed."""
        result = parse_citations("A [p.3] B [p.5-7] C")

        assert result.clean_text == "A  B  C"
        assert result.citations == [
            Citation(page_number=3),
            Citation(page_number=5, is_range=True, end_page=7),
        ]

    def test_parse_should_expand_grouped_citations(self) -> None:
        """Test a grouped token yields one citation per entry."""
        result = parse_citations("Totals [p.2, 4-6, p.9].")

        assert result.clean_text == "Totals ."
        assert [c.page_number for c in result.citations] == [2, 4, 9]
        assert result.citations[1] == Citation(page_number=4, is_range=True, end_page=6)

    def test_parse_should_keep_last_citation_for_duplicate_page(self) -> None:
        """Test the last occurrence of a page wins."""
        result = parse_citations("x [p.4] y [p.4-5]")

        assert result.citations == [Citation(page_number=4, is_range=True, end_page=5)]

    def test_parse_should_sort_by_page(self) -> None:
        """Test citations come back in ascending page order."""
        result = parse_citations("late [p.9] early [p.1] middle [p.4]")

        assert [c.page_number for c in result.citations] == [1, 4, 9]

    def test_parse_should_return_text_unchanged_without_citations(self) -> None:
        """Test text without tokens is untouched."""
        text = "No citations here [p.abc] or [page 3]."

        result = parse_citations(text)

        assert result.clean_text == text
        assert result.citations == []

    def test_parse_should_tolerate_spaces_inside_ranges(self) -> None:
        """Test whitespace around range dashes and commas."""
        result = parse_citations("see [p.10 - 12 , 14]")

        assert result.citations == [
            Citation(page_number=10, is_range=True, end_page=12),
            Citation(page_number=14),
        ]

    def test_parse_should_accept_leading_range_in_group(self) -> None:
        """Test a group that starts with a range is one token."""
        result = parse_citations("see [p.3-5, 7]")

        assert result.clean_text == "see "
        assert result.citations == [
            Citation(page_number=3, is_range=True, end_page=5),
            Citation(page_number=7),
        ]

    def test_parse_should_ignore_parts_with_two_hyphens(self) -> None:
        """Test [p.3, 5-7-9] is left in the text untouched."""
        text = "see [p.3, 5-7-9]"

        result = parse_citations(text)

        assert result.clean_text == text
        assert result.citations == []


class TestCitationSerialisation:
    """Test suite for camelCase citation dumps."""

    def test_dump_should_omit_end_page_for_single_page(self) -> None:
        """Test single-page citations have no endPage."""
        citation = Citation(page_number=3)

        assert citation.model_dump(by_alias=True, exclude_none=True) == {"pageNumber": 3, "isRange": False}

    def test_dump_should_include_end_page_for_range(self) -> None:
        """Test range citations carry endPage."""
        citation = Citation(page_number=5, is_range=True, end_page=7)

        assert citation.model_dump(by_alias=True, exclude_none=True) == {
            "pageNumber": 5,
            "isRange": True,
            "endPage": 7,
        }


class TestCitedPages:
    """Test suite for cited_pages()."""

    def test_cited_pages_should_return_unique_sorted_pages(self) -> None:
        """Test helper returns start pages only once."""
        assert cited_pages("[p.7] and [p.2] then [p.7]") == [2, 7]
