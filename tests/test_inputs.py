"""Tests for resolving inline and referenced values."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

import pytest

from chain_summarize.inputs import decode_delimiter, read_file_or_value
from chain_summarize.models import InputError

if TYPE_CHECKING:
    from pathlib import Path


def test_inline_value_returned_as_is() -> None:
    """Test that a value without @ is not touched."""
    assert read_file_or_value("  some text  ") == "  some text  "


def test_file_reference(tmp_path: Path) -> None:
    """Test that @path reads and strips the file."""
    path = tmp_path / "key.txt"
    path.write_text("sk-secret\n", encoding="utf-8")
    assert read_file_or_value(f"@{path}") == "sk-secret"


def test_empty_file_raises(tmp_path: Path) -> None:
    """Test that an empty referenced file is an error."""
    path = tmp_path / "empty.txt"
    path.write_text("   \n", encoding="utf-8")
    with pytest.raises(InputError, match="is empty"):
        read_file_or_value(f"@{path}")


def test_missing_file_raises(tmp_path: Path) -> None:
    """Test that a missing file is an error."""
    with pytest.raises(InputError, match="Cannot read file"):
        read_file_or_value(f"@{tmp_path / 'nope.txt'}")


def test_stdin_reference(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that @stdin reads standard input."""
    monkeypatch.setattr("sys.stdin", io.StringIO("\nline one\nline two\n\n"))
    assert read_file_or_value("@stdin") == "line one\nline two"


def test_empty_stdin_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that empty standard input is an error."""
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    with pytest.raises(InputError, match="stdin"):
        read_file_or_value("@stdin")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("\\n", "\n"),
        ("\\n\\n", "\n\n"),
        ("\\t", "\t"),
        ("---", "---"),
        ("\n", "\n"),
        ("§", "§"),
        ("\\\\", "\\"),
        ("C:\\\\", "C:\\"),
    ],
)
def test_decode_delimiter(raw: str, expected: str) -> None:
    """Test decoding of delimiters typed on the command line."""
    assert decode_delimiter(raw) == expected


@pytest.mark.parametrize("raw", ["\\", "C:\\", "\\x4"])
def test_decode_delimiter_incomplete_escape(raw: str) -> None:
    """Test that an incomplete escape is an input error."""
    with pytest.raises(InputError, match="Invalid delimiter escape"):
        decode_delimiter(raw)
