"""Tests for the model context window registry."""

from __future__ import annotations

import pytest

from chain_summarize.limits import MODEL_MAX_TOKENS, get_model_max_tokens, known_models
from chain_summarize.models import SummarizationError, UnknownModelError


def test_default_model_limit() -> None:
    """Test the limit of the default model."""
    assert get_model_max_tokens("gpt-4o-mini") == 128_000


def test_unknown_model_raises() -> None:
    """Test that unknown models fail instead of using a guessed limit."""
    with pytest.raises(UnknownModelError, match="Unknown model llama3"):
        get_model_max_tokens("llama3")


def test_unknown_model_is_a_summarization_error() -> None:
    """Test that the CLI can catch the error with the base class."""
    with pytest.raises(SummarizationError):
        get_model_max_tokens("")


def test_known_models_lists_registry() -> None:
    """Test that known_models mirrors the registry."""
    assert dict(known_models()) == MODEL_MAX_TOKENS
    assert all(limit > 0 for _, limit in known_models())
