"""Split text into token-bounded chunks of whole lines.

Lines are measured one by one and packed greedily, in order, into chunks that
stay within a caller-supplied token budget. A line that alone comes within
``LINE_SAFETY_MARGIN`` tokens of the model's context window is never sent; a
placeholder chunk takes its place.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chain_summarize.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_DELIMITER,
    DEFAULT_MODEL,
    LINE_SAFETY_MARGIN,
)
from chain_summarize.limits import get_model_max_tokens
from chain_summarize.models import Chunk, LineRecord
from chain_summarize.tokens import TokenCounter

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


def measure_lines(
    content: str,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    model: str = DEFAULT_MODEL,
    counter: TokenCounter | None = None,
) -> list[LineRecord]:
    """Split ``content`` on ``delimiter`` and tokenize every line.

    Empty content has no lines. Tokenizer errors propagate.
    """
    if not content:
        return []
    counter = counter or TokenCounter()
    delimiter = delimiter or DEFAULT_DELIMITER

    records = []
    for line in content.split(delimiter):
        info = counter.tokenize(line, model)
        records.append(LineRecord(content=line, tokens=info.tokens, count=info.count))

    logger.info(
        "Parsed %d lines with delimiter %r, total tokens: %d",
        len(records),
        delimiter,
        sum(r.count for r in records),
    )
    return records


def pack_lines(
    lines: Sequence[LineRecord],
    *,
    max_tokens: int,
    delimiter: str = DEFAULT_DELIMITER,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> list[Chunk]:
    """Greedily pack measured lines into chunks.

    Args:
        lines: Measured lines in their original order.
        max_tokens: Context window of the model the chunks are meant for.
        delimiter: Joins the lines of a chunk back together.
        chunk_size: Token budget per chunk. A chunk is closed before a line
            that would push it over the budget; a lone line larger than the
            budget still forms its own chunk.

    Returns:
        Chunks in source order.

    """
    delimiter = delimiter or DEFAULT_DELIMITER
    line_limit = max_tokens - LINE_SAFETY_MARGIN

    chunks: list[Chunk] = []
    current_chunk: list[str] = []
    current_tokens = 0

    def flush() -> None:
        nonlocal current_chunk, current_tokens
        if current_chunk:
            chunks.append(Chunk(content=delimiter.join(current_chunk), token_count=current_tokens))
            current_chunk = []
            current_tokens = 0

    for line in lines:
        # Too long to ever share a request with a prompt: elide it
        if line.count > line_limit:
            logger.warning(
                "Line of %d tokens exceeds the %d token line limit, replacing it with a placeholder",
                line.count,
                line_limit,
            )
            flush()
            chunks.append(Chunk.placeholder())
            continue

        if current_tokens + line.count > chunk_size and current_chunk:
            flush()

        current_chunk.append(line.content)
        current_tokens += line.count

    flush()
    return chunks


def plan_chunks(
    content: str,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    model: str = DEFAULT_MODEL,
    counter: TokenCounter | None = None,
) -> list[Chunk]:
    """Split ``content`` into ordered chunks for summarization.

    The model's context window is resolved before anything is tokenized, so
    an unknown model fails fast. With the default budget, ``"line1\\nline2"``
    comes back as a single chunk with the same content.
    """
    max_tokens = get_model_max_tokens(model)
    lines = measure_lines(content, delimiter=delimiter, model=model, counter=counter)
    chunks = pack_lines(lines, max_tokens=max_tokens, delimiter=delimiter, chunk_size=chunk_size)
    logger.info("Planned %d chunks from %d lines", len(chunks), len(lines))
    return chunks
