"""Shared CLI options for chain-summarize commands."""

from __future__ import annotations

import typer

from chain_summarize.config import set_config_defaults
from chain_summarize.constants import (
    DEFAULT_API_KEY_SOURCE,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CONTENT_SOURCE,
    DEFAULT_MAX_CONCURRENT,
    DEFAULT_MODEL,
)

# --- Input Options ---
CONTENT = typer.Option(
    DEFAULT_CONTENT_SOURCE,
    "--content",
    "-c",
    help="Content to summarize, or @path to read a file, or @stdin.",
    rich_help_panel="Input Options",
)
API_KEY = typer.Option(
    DEFAULT_API_KEY_SOURCE,
    "--api-key",
    "-k",
    envvar="OPENAI_API_KEY",
    help="OpenAI API key, or @path to a file containing it.",
    rich_help_panel="Input Options",
)

# --- LLM Options ---
MODEL = typer.Option(
    DEFAULT_MODEL,
    "--model",
    "-m",
    help="Model used for tokenization and summarization.",
    rich_help_panel="LLM Options",
)
BASE_URL = typer.Option(
    None,
    "--base-url",
    envvar="OPENAI_BASE_URL",
    help="Custom base URL for an OpenAI-compatible API.",
    rich_help_panel="LLM Options",
)

# --- Chunking Options ---
CHUNK_SIZE = typer.Option(
    DEFAULT_CHUNK_SIZE,
    "--chunk-size",
    "-s",
    min=1,
    help="Maximum tokens per chunk.",
    rich_help_panel="Chunking Options",
)
DELIMITER = typer.Option(
    "\\n",
    "--delimiter",
    "-d",
    help="Delimiter that splits content into lines. Escapes like \\n and \\t are decoded.",
    rich_help_panel="Chunking Options",
)
NO_CONTEXT = typer.Option(
    False,  # noqa: FBT003
    "--no-context",
    help="Summarize chunks independently and in parallel, without the previous summary.",
    rich_help_panel="Chunking Options",
)
MAX_CONCURRENT = typer.Option(
    DEFAULT_MAX_CONCURRENT,
    "--max-concurrent",
    min=1,
    help="Maximum number of chunks summarized at once with --no-context.",
    rich_help_panel="Chunking Options",
)

# --- General Options ---
VERBOSE = typer.Option(
    False,  # noqa: FBT003
    "--verbose",
    "-v",
    help="Print split statistics and intermediate summaries to stderr.",
    rich_help_panel="General Options",
)
LOG_LEVEL = typer.Option(
    "WARNING",
    "--log-level",
    help="Set the log level (e.g., DEBUG, INFO, WARNING).",
    rich_help_panel="General Options",
)
LOG_FILE = typer.Option(
    None,
    "--log-file",
    help="Path to a file to write logs to.",
    rich_help_panel="General Options",
)
CONFIG_FILE = typer.Option(
    None,
    "--config-file",
    help="Path to a custom config file.",
    is_eager=True,
    callback=set_config_defaults,
    rich_help_panel="General Options",
)
