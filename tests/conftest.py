"""Shared test fixtures and configuration."""

from __future__ import annotations

import contextlib
import io
from typing import Self

import pytest
from rich.console import Console

from chain_summarize.models import CompletionError, TokenInfo


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Set default timeout for all tests."""
    for item in items:
        with contextlib.suppress(AttributeError):
            item.add_marker(pytest.mark.timeout(10))


class WordCounter:
    """Counts one token per whitespace-separated word, for exact budgets in tests."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def tokenize(self, text: str, model: str) -> TokenInfo:
        self.calls.append((text, model))
        return TokenInfo.from_tokens(range(len(text.split())))

    def count(self, text: str, model: str) -> int:
        return self.tokenize(text, model).count


class FakeCompletionService:
    """Records prompts and answers with canned summaries."""

    def __init__(self, replies: list[str] | None = None, fail_on_call: int | None = None) -> None:
        self.replies = replies
        self.fail_on_call = fail_on_call
        self.prompts: list[str] = []
        self.closed = False

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *_args: object) -> None:
        self.closed = True

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        call = len(self.prompts)
        if call == self.fail_on_call:
            msg = f"OpenAI API call failed: boom on call {call}"
            raise CompletionError(msg)
        if self.replies is not None:
            return self.replies[call - 1]
        return f"summary {call}"


def words(n: int) -> str:
    """A line of ``n`` single-token words under WordCounter."""
    return " ".join(["w"] * n)


@pytest.fixture
def word_counter() -> WordCounter:
    """Provide a tokenizer stand-in with predictable counts."""
    return WordCounter()


@pytest.fixture
def completion_service() -> FakeCompletionService:
    """Provide a completion service that never touches the network."""
    return FakeCompletionService()


@pytest.fixture
def mock_console() -> Console:
    """Provide a console that writes to a StringIO for testing."""
    return Console(file=io.StringIO(), width=80, force_terminal=True)
