"""Default settings for the chain-summarize package."""

from __future__ import annotations

# --- Model Defaults ---
DEFAULT_MODEL = "gpt-4o-mini"

# --- Chunking ---
DEFAULT_CHUNK_SIZE = 100_000  # tokens per chunk
DEFAULT_DELIMITER = "\n"

# A line this close to the model's context window can't share a request with
# a prompt preamble, so it is replaced by a placeholder chunk.
LINE_SAFETY_MARGIN = 1000
# Slack between our token count of the assembled prompt and the service's own.
PROMPT_SAFETY_MARGIN = 10

PLACEHOLDER_CONTENT = "..."
PLACEHOLDER_TOKEN_COUNT = 3  # "..." is typically 3 tokens

SUMMARY_SEPARATOR = "\n\n"

# --- Input Sources ---
FILE_REFERENCE_PREFIX = "@"
STDIN_REFERENCE = "stdin"
DEFAULT_API_KEY_SOURCE = "@/etc/chatgpt.key"
DEFAULT_CONTENT_SOURCE = "@stdin"

# --- Parallel (context-free) Mode ---
DEFAULT_MAX_CONCURRENT = 5
