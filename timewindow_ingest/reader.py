"""
Input reading and tokenizing for timewindow-ingest.

Provides the text-level plumbing in front of layout detection:

- ``clean_lines()``: split raw text into trimmed rows, dropping blank lines
  and ``#`` comment lines.
- ``read_lines()``: the same, for a file on disk.
- ``split_row()``: comma tokenizer that honours ``"``-quoted fields.

Numbering: row numbers reported by the rest of the library are 1-based
positions in the *cleaned* list, i.e. comments and blank lines are not
counted.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

_COMMENT_PREFIX = "#"
_QUOTE = '"'
_SEPARATOR = ","


def clean_lines(content: str) -> list[str]:
    """Split text into trimmed, non-empty, non-comment rows."""
    return [
        line
        for line in (raw.strip() for raw in content.splitlines())
        if line and not line.startswith(_COMMENT_PREFIX)
    ]


def read_lines(path: str | Path) -> list[str]:
    """Read a file and return its cleaned rows.

    The file is decoded as UTF-8; a leading byte-order mark is ignored.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8-sig") as f:
        lines = clean_lines(f.read())
    logger.debug("Read %d data rows from %s", len(lines), path)
    return lines


def split_row(row: str) -> list[str]:
    """Split one row into trimmed fields.

    Rules:
    - ``,`` separates fields unless inside a quoted section.
    - ``"`` toggles quoting; inside quotes, ``""`` is a literal quote.
    - Each field is stripped of surrounding whitespace.
    - An empty row yields a single empty field.
    - An unterminated quote runs to the end of the row, so the rest of the
      row becomes one field.

    Examples::

        split_row('2025-07-26T00:49:16Z, 5')      -> ['2025-07-26T00:49:16Z', '5']
        split_row('"2025-07-26 00:49:16","5"')    -> ['2025-07-26 00:49:16', '5']
        split_row('"a,b","say ""hi"" now"')       -> ['a,b', 'say "hi" now']
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(row)

    while i < n:
        char = row[i]
        if char == _QUOTE:
            if in_quotes and i + 1 < n and row[i + 1] == _QUOTE:
                current.append(_QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == _SEPARATOR and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current).strip())
    return fields

