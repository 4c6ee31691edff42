"""Pydantic models for run configuration and config file loading."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

import typer
from pydantic import BaseModel, Field, field_validator

from chain_summarize.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_DELIMITER,
    DEFAULT_MAX_CONCURRENT,
    DEFAULT_MODEL,
)
from chain_summarize.utils import err_console

# --- Config File Loading ---

CONFIG_PATH = Path.home() / ".config" / "chain-summarize" / "config.toml"
CONFIG_PATH_2 = Path("chain-summarize-config.toml")


def _underscore_keys(table: dict[str, Any]) -> dict[str, Any]:
    """Spell TOML keys the way click names parameters (``chunk-size`` -> ``chunk_size``)."""
    return {
        key.replace("-", "_"): _underscore_keys(value) if isinstance(value, dict) else value
        for key, value in table.items()
    }


def _default_config_path() -> Path | None:
    for candidate in (CONFIG_PATH, CONFIG_PATH_2):
        if candidate.exists():
            return candidate
    return None


def load_config(config_path_str: str | None = None) -> dict[str, Any]:
    """Load the TOML configuration file with dashed keys normalized.

    An explicit path that doesn't exist and a file that isn't valid TOML are
    reported on stderr and give an empty config. Without an explicit path the
    first existing default location is used, silently falling back to ``{}``.
    """
    if config_path_str:
        config_path = Path(config_path_str).expanduser()
        if not config_path.exists():
            err_console.print(f"[bold red]Config file not found at {config_path}[/bold red]")
            return {}
    else:
        config_path = _default_config_path()
        if config_path is None:
            return {}

    try:
        with config_path.open("rb") as f:
            return _underscore_keys(tomllib.load(f))
    except tomllib.TOMLDecodeError as e:
        err_console.print(f"[bold red]Error parsing config file {config_path}: {e}[/bold red]")
        return {}


# --- Pydantic Models for Configuration ---


class OpenAILLM(BaseModel):
    """Configuration for the OpenAI completion service."""

    model: str = DEFAULT_MODEL
    api_key: str | None = None
    base_url: str | None = None

    @field_validator("base_url", mode="before")
    @classmethod
    def _normalize_base_url(cls, v: str | None) -> str | None:
        if v:
            return v.rstrip("/")
        return None


class Chunking(BaseModel):
    """Configuration for splitting content into chunks."""

    chunk_size: int = Field(DEFAULT_CHUNK_SIZE, gt=0)
    delimiter: str = DEFAULT_DELIMITER
    carry_context: bool = True
    max_concurrent: int = Field(DEFAULT_MAX_CONCURRENT, gt=0)

    @field_validator("delimiter")
    @classmethod
    def _default_delimiter(cls, v: str) -> str:
        return v or DEFAULT_DELIMITER


class General(BaseModel):
    """General configuration parameters for logging and output."""

    log_level: str = "WARNING"
    log_file: Path | None = None
    verbose: bool = False

    @field_validator("log_file", mode="before")
    @classmethod
    def _expand_user_path(cls, v: str | None) -> Path | None:
        if v:
            return Path(v).expanduser()
        return None


def set_config_defaults(ctx: typer.Context, config_file: str | None) -> str | None:
    """Use config file values as defaults for the invoked command's options.

    ``[defaults]`` applies to every command, a section named after the
    command overrides it.
    """
    config = load_config(config_file)
    wildcard_config = config.get("defaults", {})
    subcommand = ctx.command.name

    if not subcommand:
        ctx.default_map = wildcard_config
        return config_file

    command_config = config.get(subcommand, {})
    ctx.default_map = {**(ctx.default_map or {}), **wildcard_config, **command_config}
    return config_file
