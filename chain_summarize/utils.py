"""Console output and logging helpers."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

# Results go to stdout; everything diagnostic goes to stderr
console = Console()
err_console = Console(stderr=True)


def print_error_message(message: str, suggestion: str | None = None) -> None:
    """Print an error panel on stderr."""
    error_text = f"[bold red]{message}[/bold red]"
    if suggestion:
        error_text += f"\n\n[yellow]{suggestion}[/yellow]"
    err_console.print(Panel(error_text, title="Error", border_style="bold red"))


def print_with_style(message: str, style: str = "bold green") -> None:
    """Print a styled diagnostic line on stderr."""
    err_console.print(message, style=style, markup=False, highlight=False)


def setup_logging(log_level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure the root logger to write through Rich on stderr.

    Args:
        log_level: Logging level name (debug, info, warning, error).
        log_file: Optional file that receives the same records, unformatted by Rich.

    """
    level = getattr(logging, log_level.upper(), logging.WARNING)

    handler = RichHandler(
        console=err_console,
        show_time=True,
        show_level=True,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    handlers: list[logging.Handler] = [handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        )
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
