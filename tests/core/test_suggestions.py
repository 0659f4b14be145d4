"""
Test suite for question suggestions.

Tests output normalisation and the SuggestionService retrieval, fallback
and retry paths.

System role: Verification of suggestion generation
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from pdfchat.core.rag.suggestions import (
    FALLBACK_SUGGESTIONS,
    SuggestionService,
    normalize_suggestions,
)
from pdfchat.core.retry import RetryPolicy


class TestNormalizeSuggestions:
    """Test suite for normalize_suggestions()."""

    def test_should_take_first_three_from_json_array(self) -> None:
        """Test a JSON array is truncated to three questions."""
        raw = '["What is A?", "What is B?", "What is C?", "What is D?"]'

        assert normalize_suggestions(raw) == ["What is A?", "What is B?", "What is C?"]

    def test_should_find_array_inside_code_fence(self) -> None:
        """Test JSON wrapped in prose or fences is still parsed."""
        raw = 'Here you go:\n```json\n["What is A?", "What is B?", "What is C?"]\n```'

        assert normalize_suggestions(raw) == ["What is A?", "What is B?", "What is C?"]

    def test_should_deduplicate_and_pad_with_fallbacks(self) -> None:
        """Test duplicates are dropped and the list is padded to three."""
        raw = '["What is A?", "What is A?", "  "]'

        assert normalize_suggestions(raw) == ["What is A?", FALLBACK_SUGGESTIONS[0], FALLBACK_SUGGESTIONS[1]]

    def test_should_strip_list_prefixes_from_lines(self) -> None:
        """Test bullets and numbering are removed when JSON parsing fails."""
        raw = "1. What is X?\n- What is Y?\n* What is Z?"

        assert normalize_suggestions(raw) == ["What is X?", "What is Y?", "What is Z?"]

    def test_should_drop_unfinished_item_of_cut_off_array(self) -> None:
        """Test output truncated mid-array keeps only complete questions."""
        raw = '["What is X?", "How'

        suggestions = normalize_suggestions(raw)

        assert suggestions == ["What is X?", FALLBACK_SUGGESTIONS[0], FALLBACK_SUGGESTIONS[1]]
        assert not any(s.startswith("[") for s in suggestions)

    def test_should_drop_unfinished_item_of_multiline_cut_off_array(self) -> None:
        """Test a pretty-printed array cut off before its last item closes."""
        raw = '[\n  "What is X?",\n  "What is Y?",\n  "What ab'

        assert normalize_suggestions(raw) == ["What is X?", "What is Y?", FALLBACK_SUGGESTIONS[0]]

    def test_should_strip_brackets_and_commas_from_lines(self) -> None:
        """Test stray array punctuation is removed in the line fallback."""
        raw = "[What is X?,\nWhat is Y?]"

        assert normalize_suggestions(raw)[:2] == ["What is X?", "What is Y?"]

    def test_should_return_fallbacks_for_empty_output(self) -> None:
        """Test empty output yields the fallback questions."""
        assert normalize_suggestions("") == list(FALLBACK_SUGGESTIONS)

    @pytest.mark.parametrize(
        "raw",
        ['["a", "b"]', "only one line", "[not json", '["x", "x", "x", "x"]', "\n\n"],
    )
    def test_should_always_return_three_unique_questions(self, raw: str) -> None:
        """Test any output normalises to exactly three unique non-empty strings."""
        suggestions = normalize_suggestions(raw)

        assert len(suggestions) == 3
        assert len(set(suggestions)) == 3
        assert all(s.strip() for s in suggestions)


class TestSuggestionService:
    """Test suite for SuggestionService.generate() method."""

    @pytest.fixture
    def embedding_client(self) -> AsyncMock:
        client = AsyncMock()
        client.embed_query = AsyncMock(return_value=[0.4, 0.5])
        return client

    @pytest.fixture
    def vector_store(self, make_search_result) -> MagicMock:
        store = MagicMock()
        store.query_top_k.return_value = [
            make_search_result(page_start=1, text="Scope of the audit"),
            make_search_result(page_start=4, chunk_index=1, text="Findings"),
        ]
        return store

    async def test_generate_should_return_model_questions(
        self, embedding_client, vector_store, no_sleep
    ) -> None:
        """Test model output is normalised into three questions."""
        model = MagicMock()
        model.ainvoke = AsyncMock(
            return_value=SimpleNamespace(content='["What was audited?", "What was found?", "Who signed it?"]')
        )
        service = SuggestionService(embedding_client, vector_store, model, top_k=10, sleep=no_sleep)

        suggestions = await service.generate("doc-1")

        assert suggestions == ["What was audited?", "What was found?", "Who signed it?"]
        vector_store.query_top_k.assert_called_once_with("doc-1", [0.4, 0.5], 10)
        prompt = model.ainvoke.await_args.args[0][-1].content
        assert "[p.1] Scope of the audit" in prompt
        assert "[p.4] Findings" in prompt

    async def test_generate_should_use_fallbacks_without_context(
        self, embedding_client, vector_store, no_sleep
    ) -> None:
        """Test a document without retrievable chunks skips the model."""
        vector_store.query_top_k.return_value = []
        model = MagicMock()
        model.ainvoke = AsyncMock()
        service = SuggestionService(embedding_client, vector_store, model, sleep=no_sleep)

        suggestions = await service.generate("doc-1")

        assert suggestions == list(FALLBACK_SUGGESTIONS)
        model.ainvoke.assert_not_awaited()

    async def test_generate_should_retry_rate_limited_model(
        self, embedding_client, vector_store, no_sleep
    ) -> None:
        """Test a rate-limited model call is retried."""
        rate_limited = Exception("too many requests")
        rate_limited.status_code = 429
        model = MagicMock()
        model.ainvoke = AsyncMock(
            side_effect=[rate_limited, SimpleNamespace(content="1. Q one?\n2. Q two?\n3. Q three?")]
        )
        service = SuggestionService(
            embedding_client,
            vector_store,
            model,
            policy=RetryPolicy(max_attempts=3, initial_delay_ms=10, max_delay_ms=20),
            sleep=no_sleep,
        )

        suggestions = await service.generate("doc-1")

        assert suggestions == ["Q one?", "Q two?", "Q three?"]
        assert model.ainvoke.await_count == 2
