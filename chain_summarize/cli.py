"""Command line interface for chained summarization.

Usage:
    chain-summarize summarize [OPTIONS]

Examples:
    # Summarize a file
    chain-summarize summarize -c @book.txt

    # Pipe content from stdin and show intermediate summaries
    cat transcript.txt | chain-summarize summarize -v

    # Split on paragraphs instead of lines
    chain-summarize summarize -c @notes.md -d '\\n\\n'

"""

from __future__ import annotations

import asyncio
import json
import logging
from enum import Enum
from typing import TYPE_CHECKING

import typer
from rich.table import Table

from chain_summarize import config, opts
from chain_summarize.chunker import measure_lines, pack_lines
from chain_summarize.completion import CompletionClient
from chain_summarize.inputs import decode_delimiter, read_file_or_value
from chain_summarize.limits import get_model_max_tokens, known_models
from chain_summarize.models import SummarizationError, SummaryResult
from chain_summarize.summarizer import summarize
from chain_summarize.tokens import TokenCounter
from chain_summarize.utils import (
    console,
    err_console,
    print_error_message,
    print_with_style,
    setup_logging,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chain_summarize.models import Chunk, LineRecord

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="chain-summarize",
    help="Summarize long text chunk by chunk, carrying each summary into the next.",
    add_completion=True,
)


class OutputFormat(str, Enum):
    """Output format for the summarization result."""

    text = "text"
    json = "json"


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Summarize arbitrarily long text with an OpenAI chat model."""
    if ctx.invoked_subcommand is None:
        err_console.print("[bold red]No command specified.[/bold red]")
        err_console.print("[bold yellow]Running --help for your convenience.[/bold yellow]")
        console.print(ctx.get_help())
        raise typer.Exit
    import dotenv  # noqa: PLC0415

    dotenv.load_dotenv()


class VerboseReporter:
    """Writes progress of a summarization run to stderr."""

    def planned(self, lines: Sequence[LineRecord], chunks: Sequence[Chunk]) -> None:
        total_tokens = sum(line.count for line in lines)
        print_with_style(f"Split into {len(lines)} lines, total tokens: {total_tokens}")
        print_with_style(f"Assembled {len(chunks)} chunks")

    def chunk_started(self, index: int, total: int, chunk: Chunk) -> None:
        print_with_style(
            f"--- Chunk {index + 1}/{total} ({chunk.token_count} tokens)",
            style="bold yellow",
        )

    def chunk_summarized(self, index: int, total: int, summary: str) -> None:
        print_with_style(f"--- Chunk {index + 1}/{total} Summary ---", style="bold cyan")
        err_console.print(summary, markup=False, highlight=False)


def _display_result(result: SummaryResult, output_format: OutputFormat) -> None:
    if output_format == OutputFormat.json:
        print(json.dumps(result.model_dump(mode="json"), indent=2))
        return
    print(result.summary)


async def _async_summarize(
    content: str,
    *,
    llm_cfg: config.OpenAILLM,
    chunking_cfg: config.Chunking,
    general_cfg: config.General,
) -> SummaryResult:
    """Asynchronous summarization entry point."""
    counter = TokenCounter()
    if general_cfg.verbose:
        print_with_style(f"Splitting content into lines with delimiter {chunking_cfg.delimiter!r}")

    async with CompletionClient(
        llm_cfg.api_key or "",
        llm_cfg.model,
        base_url=llm_cfg.base_url,
        counter=counter,
    ) as client:
        return await summarize(
            content,
            client,
            model=llm_cfg.model,
            delimiter=chunking_cfg.delimiter,
            chunk_size=chunking_cfg.chunk_size,
            counter=counter,
            carry_context=chunking_cfg.carry_context,
            max_concurrent=chunking_cfg.max_concurrent,
            reporter=VerboseReporter() if general_cfg.verbose else None,
        )


def _fail(e: Exception, suggestion: str) -> typer.Exit:
    logger.error("Summarization failed", exc_info=e)
    print_error_message(str(e), suggestion)
    return typer.Exit(1)


@app.command("summarize")
def summarize_command(
    *,
    content: str = opts.CONTENT,
    api_key: str = opts.API_KEY,
    model: str = opts.MODEL,
    base_url: str | None = opts.BASE_URL,
    chunk_size: int = opts.CHUNK_SIZE,
    delimiter: str = opts.DELIMITER,
    no_context: bool = opts.NO_CONTEXT,
    max_concurrent: int = opts.MAX_CONCURRENT,
    output_format: OutputFormat = typer.Option(  # noqa: B008
        OutputFormat.text,
        "--output",
        "-o",
        help="Output format: 'text' (joined summary) or 'json' (summary with metadata).",
        rich_help_panel="General Options",
    ),
    verbose: bool = opts.VERBOSE,
    log_level: str = opts.LOG_LEVEL,
    log_file: str | None = opts.LOG_FILE,
    config_file: str | None = opts.CONFIG_FILE,  # noqa: ARG001
) -> None:
    """Summarize content chunk by chunk, threading each summary into the next prompt.

    The content is split on the delimiter into lines, lines are packed into
    chunks of at most --chunk-size tokens, and every chunk is summarized with
    the previous chunk's summary as context. The chunk summaries are printed
    joined by blank lines.
    """
    setup_logging(log_level, log_file)
    general_cfg = config.General(log_level=log_level, log_file=log_file, verbose=verbose)

    try:
        chunking_cfg = config.Chunking(
            chunk_size=chunk_size,
            delimiter=decode_delimiter(delimiter),
            carry_context=not no_context,
            max_concurrent=max_concurrent,
        )
        # Unknown models fail before any input is read
        get_model_max_tokens(model)
        llm_cfg = config.OpenAILLM(
            model=model,
            api_key=read_file_or_value(api_key),
            base_url=base_url,
        )
        text = read_file_or_value(content)
        result = asyncio.run(
            _async_summarize(
                text,
                llm_cfg=llm_cfg,
                chunking_cfg=chunking_cfg,
                general_cfg=general_cfg,
            ),
        )
    except SummarizationError as e:
        raise _fail(e, "No summary was produced.") from e
    except Exception as e:
        raise _fail(e, "An unexpected error occurred during summarization.") from e

    _display_result(result, output_format)


@app.command("tokens")
def tokens_command(
    *,
    content: str = opts.CONTENT,
    model: str = opts.MODEL,
    chunk_size: int = opts.CHUNK_SIZE,
    delimiter: str = opts.DELIMITER,
    log_level: str = opts.LOG_LEVEL,
    log_file: str | None = opts.LOG_FILE,
    config_file: str | None = opts.CONFIG_FILE,  # noqa: ARG001
) -> None:
    """Show the token count and chunk plan of content without calling the API."""
    setup_logging(log_level, log_file)

    try:
        delimiter = decode_delimiter(delimiter)
        max_tokens = get_model_max_tokens(model)
        lines = measure_lines(
            read_file_or_value(content),
            delimiter=delimiter,
            model=model,
            counter=TokenCounter(),
        )
    except SummarizationError as e:
        raise _fail(e, "Check the model name, the delimiter and the content source.") from e

    chunks = pack_lines(lines, max_tokens=max_tokens, delimiter=delimiter, chunk_size=chunk_size)

    table = Table()
    table.add_column("Chunk", justify="right")
    table.add_column("Tokens", justify="right")
    table.add_column("Note")
    for i, chunk in enumerate(chunks, 1):
        table.add_row(str(i), f"{chunk.token_count:,}", "elided line" if chunk.is_placeholder else "")
    console.print(table)
    console.print(f"Model: {model} (context window {max_tokens:,} tokens)")
    console.print(
        f"Lines: {len(lines):,}  Chunks: {len(chunks):,}  "
        f"Total tokens: {sum(line.count for line in lines):,}",
    )


@app.command("models")
def models_command() -> None:
    """List the models with a known context window."""
    table = Table(title="Known models")
    table.add_column("Model")
    table.add_column("Max tokens", justify="right")
    for name, max_tokens in known_models():
        table.add_row(name, f"{max_tokens:,}")
    console.print(table)
