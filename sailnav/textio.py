"""Reading and appending plain-text lines, and simple line parsing."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable

log = logging.getLogger(__name__)


def read_lines(path: str | os.PathLike[str]) -> list[str]:
    """Return the lines of a text file without their newline characters.

    Only ``\\n`` separates lines; a final newline does not start an empty line.
    Raises ``OSError`` if the file cannot be opened.
    """
    with open(path, encoding="utf-8", newline="") as handle:
        text = handle.read()
    log.debug("opened file %s", path)
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def append_line(data: str, path: str | os.PathLike[str]) -> None:
    """Append ``data`` and a newline to the file at ``path``, creating it if needed."""
    with open(path, "a", encoding="utf-8", newline="") as handle:
        handle.write(f"{data}\n")


def remove_comments(lines: Iterable[str]) -> list[str]:
    """Drop the lines that start with ``#``; empty lines are kept."""
    return [line for line in lines if not line.startswith("#")]


def split_string(line: str, delimiter: str) -> list[str]:
    """Split on ``delimiter``; a trailing delimiter yields no empty last token."""
    tokens = line.split(delimiter)
    if tokens[-1] == "":
        tokens.pop()
    return tokens