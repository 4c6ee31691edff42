"""Prompt templates for chained chunk summarization."""

from __future__ import annotations

# First chunk, or any chunk when summarizing without context
FIRST_CHUNK_PROMPT = "Please summarize the following content:\n\n"

# Later chunks carry only the most recent summary forward
CONTINUATION_PROMPT = (
    "Previous summary:\n{previous_summary}\n\n"
    "Please continue summarizing the following content, "
    "taking the previous summary into account:\n\n"
)


def build_prompt(content: str, previous_summary: str | None = None) -> str:
    """Assemble the prompt for one chunk."""
    if previous_summary:
        preamble = CONTINUATION_PROMPT.format(previous_summary=previous_summary)
    else:
        preamble = FIRST_CHUNK_PROMPT
    return f"{preamble}\n\n{content}"
