"""Resolve option values given inline or by reference to a file or stdin."""

from __future__ import annotations

import sys
from pathlib import Path

from chain_summarize.constants import FILE_REFERENCE_PREFIX, STDIN_REFERENCE
from chain_summarize.models import InputError


def read_file_or_value(value: str) -> str:
    """Return ``value`` itself, or the content it refers to.

    ``@stdin`` reads standard input and ``@path`` reads a file. Referenced
    content is stripped of surrounding whitespace.

    Raises:
        InputError: If the referenced file is missing or the content is empty.

    """
    if not value.startswith(FILE_REFERENCE_PREFIX):
        return value

    source = value.removeprefix(FILE_REFERENCE_PREFIX)
    if source == STDIN_REFERENCE:
        content = sys.stdin.read().strip()
        if not content:
            msg = "No input received on stdin"
            raise InputError(msg)
        return content

    path = Path(source).expanduser()
    try:
        content = path.read_text(encoding="utf-8").strip()
    except OSError as e:
        msg = f"Cannot read file {source}: {e.strerror or e}"
        raise InputError(msg) from e
    if not content:
        msg = f"File {source} is empty"
        raise InputError(msg)
    return content


def decode_delimiter(delimiter: str) -> str:
    r"""Turn escape sequences typed on the command line (``\n``, ``\t``) into characters.

    A literal backslash is written as ``\\``.

    Raises:
        InputError: If the delimiter ends in or holds an incomplete escape.

    """
    if "\\" not in delimiter:
        return delimiter
    try:
        return delimiter.encode("latin-1", "backslashreplace").decode("unicode_escape")
    except UnicodeDecodeError as e:
        msg = f"Invalid delimiter escape {delimiter!r} (write a literal backslash as '\\\\')"
        raise InputError(msg) from e
