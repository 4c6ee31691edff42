"""Chained summarization of arbitrarily long text.

Text is split on a delimiter into lines, lines are packed into chunks that
fit a token budget, and each chunk is summarized with the summary of the
chunk before it as context:

1. Measure every line with the model's tokenizer
2. Pack whole lines greedily into chunks; elide lines too long for the model
3. Summarize chunks in order, threading the latest summary forward
4. Join the chunk summaries with blank lines

Example:
    from chain_summarize import CompletionClient, TokenCounter, summarize

    counter = TokenCounter()
    async with CompletionClient(api_key, "gpt-4o-mini", counter=counter) as client:
        result = await summarize(long_document, client, model="gpt-4o-mini", counter=counter)
    print(result.summary)

"""

from chain_summarize.chunker import plan_chunks
from chain_summarize.completion import CompletionClient
from chain_summarize.limits import get_model_max_tokens
from chain_summarize.models import (
    Chunk,
    CompletionError,
    ContentTooLongError,
    InputError,
    SummarizationError,
    SummaryResult,
    TokenInfo,
    UnknownModelError,
)
from chain_summarize.summarizer import summarize, summarize_chunks
from chain_summarize.tokens import TokenCounter

__all__ = [
    "Chunk",
    "CompletionClient",
    "CompletionError",
    "ContentTooLongError",
    "InputError",
    "SummarizationError",
    "SummaryResult",
    "TokenCounter",
    "TokenInfo",
    "UnknownModelError",
    "get_model_max_tokens",
    "plan_chunks",
    "summarize",
    "summarize_chunks",
]
