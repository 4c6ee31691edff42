"""Tests for token counting."""

from __future__ import annotations

from unittest.mock import patch

import pytest
import tiktoken

from chain_summarize.models import TokenInfo, UnknownModelError
from chain_summarize.tokens import TokenCounter


class TestTokenInfo:
    """Tests for the TokenInfo invariant."""

    def test_count_matches_tokens(self) -> None:
        """Test that count is derived from the token sequence."""
        info = TokenInfo.from_tokens([5, 6, 7])
        assert info.tokens == (5, 6, 7)
        assert info.count == 3

    def test_empty(self) -> None:
        """Test an empty token sequence."""
        assert TokenInfo.from_tokens([]).count == 0


class TestTokenCounter:
    """Tests for TokenCounter."""

    def test_empty_string(self) -> None:
        """Test counting tokens in empty string."""
        assert TokenCounter().count("", "gpt-4o-mini") == 0

    def test_simple_sentence(self) -> None:
        """Test counting tokens in a simple sentence."""
        info = TokenCounter().tokenize("Hello world", "gpt-4o-mini")
        assert 0 < info.count < 10
        assert info.count == len(info.tokens)

    def test_deterministic(self) -> None:
        """Test that the same text and model always give the same tokens."""
        counter = TokenCounter()
        text = "The quick brown fox jumps over the lazy dog."
        assert counter.tokenize(text, "gpt-4o-mini") == counter.tokenize(text, "gpt-4o-mini")
        assert TokenCounter().tokenize(text, "gpt-4o-mini") == counter.tokenize(text, "gpt-4o-mini")

    def test_special_tokens_counted_as_text(self) -> None:
        """Test that special-token markers in text don't raise."""
        assert TokenCounter().count("before <|endoftext|> after", "gpt-4o-mini") > 3

    def test_encoding_cached_per_model(self) -> None:
        """Test that the tokenizer is built once per model."""
        counter = TokenCounter()
        with patch(
            "chain_summarize.tokens.tiktoken.encoding_for_model",
            wraps=tiktoken.encoding_for_model,
        ) as mock_encoding_for_model:
            counter.count("one", "gpt-4o-mini")
            counter.count("two", "gpt-4o-mini")
            counter.count("three", "gpt-4o-mini")
        mock_encoding_for_model.assert_called_once_with("gpt-4o-mini")
        assert counter.cached_models == ["gpt-4o-mini"]

    def test_caches_are_per_instance(self) -> None:
        """Test that separate counters don't share state."""
        first = TokenCounter()
        first.count("hello", "gpt-4o-mini")
        assert TokenCounter().cached_models == []

    def test_unknown_model_raises(self) -> None:
        """Test that a model without a tokenizer is an error, not a fallback."""
        with pytest.raises(UnknownModelError, match="unknown-model-xyz"):
            TokenCounter().count("Hello world", "unknown-model-xyz")
