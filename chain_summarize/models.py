"""Data models and errors for chained summarization."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from chain_summarize.constants import PLACEHOLDER_CONTENT, PLACEHOLDER_TOKEN_COUNT

if TYPE_CHECKING:
    from collections.abc import Sequence


class SummarizationError(Exception):
    """Base class for every failure that aborts a summarization run."""


class InputError(SummarizationError):
    """Raised when content or credentials can't be resolved."""


class UnknownModelError(SummarizationError):
    """Raised when a model has no known context length or tokenizer."""


class ContentTooLongError(SummarizationError):
    """Raised when an assembled prompt exceeds the model's context window."""


class CompletionError(SummarizationError):
    """Raised when the completion service fails or answers malformed."""


@dataclass(frozen=True)
class TokenInfo:
    """Token ids of a piece of text and their count."""

    tokens: tuple[int, ...]
    count: int

    @classmethod
    def from_tokens(cls, tokens: Sequence[int]) -> TokenInfo:
        """Build from a token sequence, keeping ``count == len(tokens)``."""
        token_tuple = tuple(tokens)
        return cls(tokens=token_tuple, count=len(token_tuple))


@dataclass(frozen=True)
class LineRecord:
    """One input line together with its token measurement."""

    content: str
    tokens: tuple[int, ...]
    count: int


@dataclass(frozen=True)
class Chunk:
    """A run of whole lines (or a placeholder) sent as one summarization unit.

    Attributes:
        content: The lines rejoined with the original delimiter.
        token_count: Sum of the lines' token counts, or the fixed placeholder
            count for an elided line.
        is_placeholder: Set only on chunks standing in for an elided line.

    """

    content: str
    token_count: int
    is_placeholder: bool = False

    @classmethod
    def placeholder(cls) -> Chunk:
        """Chunk standing in for a line too long to send."""
        return cls(
            content=PLACEHOLDER_CONTENT,
            token_count=PLACEHOLDER_TOKEN_COUNT,
            is_placeholder=True,
        )


class SummaryResult(BaseModel):
    """Result of a chained summarization run."""

    summary: str = Field(..., description="All chunk summaries joined by blank lines")
    chunk_summaries: list[str] = Field(
        default_factory=list,
        description="Per-chunk summaries in chunk order",
    )
    chunk_count: int = Field(..., ge=0, description="Number of chunks sent for summarization")
    input_tokens: int = Field(..., ge=0, description="Sum of the input lines' token counts")
    model: str = Field(..., description="Model used for tokenization and completion")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Timestamp when the summary was created",
    )
