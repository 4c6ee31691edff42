"""Sequential summarization of chunks with the previous summary as context.

Algorithm:
1. Plan chunks of whole lines within the token budget
2. Summarize the chunks in order; each prompt carries the summary of the
   chunk before it (only the latest one, so prompts stay bounded)
3. Join all chunk summaries with blank lines

Every call depends on the previous call's output, so calls never overlap.
With ``carry_context=False`` the chunks are independent and are summarized
concurrently instead, still returned in chunk order.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from chain_summarize.chunker import measure_lines, pack_lines
from chain_summarize.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_DELIMITER,
    DEFAULT_MAX_CONCURRENT,
    SUMMARY_SEPARATOR,
)
from chain_summarize.limits import get_model_max_tokens
from chain_summarize.models import Chunk, LineRecord, SummaryResult
from chain_summarize.prompts import build_prompt
from chain_summarize.tokens import TokenCounter

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chain_summarize.completion import CompletionService

logger = logging.getLogger(__name__)


class ProgressReporter(Protocol):
    """Receives progress events of a summarization run."""

    def planned(self, lines: Sequence[LineRecord], chunks: Sequence[Chunk]) -> None: ...

    def chunk_started(self, index: int, total: int, chunk: Chunk) -> None: ...

    def chunk_summarized(self, index: int, total: int, summary: str) -> None: ...


@dataclass
class _FoldState:
    """State carried from one chunk to the next."""

    previous_summary: str = ""
    summaries: list[str] = field(default_factory=list)


async def _fold_chunk(
    state: _FoldState,
    index: int,
    chunks: Sequence[Chunk],
    client: CompletionService,
    reporter: ProgressReporter | None,
) -> _FoldState:
    chunk = chunks[index]
    total = len(chunks)
    if reporter:
        reporter.chunk_started(index, total, chunk)
    logger.info("Summarizing chunk %d/%d (%d tokens)", index + 1, total, chunk.token_count)

    summary = await client.complete(build_prompt(chunk.content, state.previous_summary))

    if reporter:
        reporter.chunk_summarized(index, total, summary)
    return _FoldState(previous_summary=summary, summaries=[*state.summaries, summary])


async def summarize_chunks(
    chunks: Sequence[Chunk],
    client: CompletionService,
    *,
    reporter: ProgressReporter | None = None,
) -> list[str]:
    """Summarize chunks one after another, threading the latest summary forward.

    Returns:
        One summary per chunk, in chunk order.

    Raises:
        SummarizationError: On the first failed call. Summaries of earlier
            chunks are discarded.

    """
    state = _FoldState()
    for index in range(len(chunks)):
        state = await _fold_chunk(state, index, chunks, client, reporter)
    return state.summaries


async def summarize_chunks_independently(
    chunks: Sequence[Chunk],
    client: CompletionService,
    *,
    max_concurrent: int = DEFAULT_MAX_CONCURRENT,
    reporter: ProgressReporter | None = None,
) -> list[str]:
    """Summarize chunks without context from each other, in parallel.

    Results keep chunk order regardless of completion order.
    """
    semaphore = asyncio.Semaphore(max_concurrent)
    total = len(chunks)

    async def summarize_chunk(index: int, chunk: Chunk) -> str:
        async with semaphore:
            if reporter:
                reporter.chunk_started(index, total, chunk)
            summary = await client.complete(build_prompt(chunk.content))
            if reporter:
                reporter.chunk_summarized(index, total, summary)
            return summary

    tasks = [summarize_chunk(i, chunk) for i, chunk in enumerate(chunks)]
    return list(await asyncio.gather(*tasks))


def join_summaries(summaries: Sequence[str]) -> str:
    """Join chunk summaries into the final text."""
    return SUMMARY_SEPARATOR.join(summaries)


async def summarize(
    content: str,
    client: CompletionService,
    *,
    model: str,
    delimiter: str = DEFAULT_DELIMITER,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    counter: TokenCounter | None = None,
    carry_context: bool = True,
    max_concurrent: int = DEFAULT_MAX_CONCURRENT,
    reporter: ProgressReporter | None = None,
) -> SummaryResult:
    """Summarize arbitrarily long content chunk by chunk.

    Args:
        content: The text to summarize.
        client: Completion capability, called once per chunk.
        model: Model used to measure lines and to look up the context window.
        delimiter: Splits the content into lines.
        chunk_size: Token budget per chunk.
        counter: Tokenizer cache to share with the client.
        carry_context: Thread each summary into the next chunk's prompt.
            When disabled, chunks are summarized concurrently.
        max_concurrent: Concurrency limit when ``carry_context`` is disabled.
        reporter: Optional receiver of progress events.

    Returns:
        SummaryResult with the joined summary and per-chunk summaries.

    Example:
        counter = TokenCounter()
        async with CompletionClient(api_key, "gpt-4o-mini", counter=counter) as client:
            result = await summarize(text, client, model="gpt-4o-mini", counter=counter)
        print(result.summary)

    """
    max_tokens = get_model_max_tokens(model)
    counter = counter or TokenCounter()

    lines = measure_lines(content, delimiter=delimiter, model=model, counter=counter)
    chunks = pack_lines(lines, max_tokens=max_tokens, delimiter=delimiter, chunk_size=chunk_size)
    if reporter:
        reporter.planned(lines, chunks)

    if carry_context:
        summaries = await summarize_chunks(chunks, client, reporter=reporter)
    else:
        summaries = await summarize_chunks_independently(
            chunks,
            client,
            max_concurrent=max_concurrent,
            reporter=reporter,
        )

    return SummaryResult(
        summary=join_summaries(summaries),
        chunk_summaries=summaries,
        chunk_count=len(chunks),
        input_tokens=sum(line.count for line in lines),
        model=model,
    )
