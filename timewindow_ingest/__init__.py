"""
timewindow-ingest: timestamp normalization and time-window derivation.

Public API surface:

- ``parse_time(text)`` -- one textual timestamp -> ``ParsedTime`` (integer
  epoch seconds + the format that matched).

- ``centered_window(center, window_seconds)`` / ``explicit_range(start, end,
  bounds)`` -- turn one or two instants into a validated ``TimeRange``.

- ``ingest_text(content, config)`` / ``ingest_file(path, config)`` --
  **recommended entry points** for multi-row input. Cleans the rows, detects
  the layout from a leading sample, parses every row, and returns a
  ``BatchResult``.

- ``detect_layout(lines)`` / ``layout_guide()`` -- layout classification and
  the human-readable guide to the supported layouts.

Everything is synchronous and side-effect free apart from logging;
configuration is always passed in explicitly.
"""

from __future__ import annotations

import logging
from pathlib import Path

from timewindow_ingest._pipeline import parse_rows
from timewindow_ingest.batch import BatchResult, BatchSummary, RowEntry, RowError, TabularRow
from timewindow_ingest.config import IngestConfig, RangeBounds, load_config, save_config
from timewindow_ingest.detect import detect_layout
from timewindow_ingest.exceptions import NoValidRowsError, UnknownLayoutError
from timewindow_ingest.layout_registry import LayoutTag, layout_guide
from timewindow_ingest.reader import clean_lines, read_lines
from timewindow_ingest.time_parser import FormatTag, ParsedTime, parse_time
from timewindow_ingest.time_range import TimeRange, centered_window, explicit_range

__all__ = [
    "BatchResult",
    "BatchSummary",
    "FormatTag",
    "IngestConfig",
    "LayoutTag",
    "ParsedTime",
    "RangeBounds",
    "RowEntry",
    "RowError",
    "TabularRow",
    "TimeRange",
    "centered_window",
    "detect_layout",
    "explicit_range",
    "ingest_file",
    "ingest_lines",
    "ingest_text",
    "layout_guide",
    "load_config",
    "parse_rows",
    "parse_time",
    "save_config",
]

logger = logging.getLogger(__name__)


def ingest_lines(lines: list[str], config: IngestConfig | None = None) -> BatchResult:
    """Detect the layout of cleaned rows and parse all of them.

    Orchestration:
      1. ``detect_layout()`` on the first ``config.sample_size`` rows.
      2. ``parse_rows()`` -- raises for MIXED/UNKNOWN layouts and a missing
         uniform window, collects per-row errors otherwise.
      3. Fail the batch if no row succeeded.

    Args:
        lines: Trimmed rows with blanks and ``#`` comments already removed.
        config: Batch policy. Defaults to ``IngestConfig()`` (no uniform
            window, 1..3600 second ranges).

    Returns:
        ``BatchResult`` with at least one entry.

    Raises:
        UnknownLayoutError: If there are no rows or the layout is unknown.
        MixedLayoutError: If the sampled rows disagree on layout.
        MissingWindowError: If single-column input has no ``window_seconds``.
        NoValidRowsError: If every row failed; the result is attached.
    """
    if config is None:
        config = IngestConfig()

    if not lines:
        raise UnknownLayoutError("No data rows found (input is empty or only comments)")

    layout = detect_layout(lines, sample_size=config.sample_size)
    result = parse_rows(lines, layout, config)

    if not result.ok:
        raise NoValidRowsError(
            f"No valid timestamp entries found ({result.summary.error_count} row error(s))",
            result,
        )
    return result


def ingest_text(content: str, config: IngestConfig | None = None) -> BatchResult:
    """Clean raw multi-row text and run ``ingest_lines()`` on it."""
    return ingest_lines(clean_lines(content), config)


def ingest_file(path: str | Path, config: IngestConfig | None = None) -> BatchResult:
    """Read a timestamp file and run ``ingest_lines()`` on its rows.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        (plus everything ``ingest_lines()`` raises)
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    logger.info("ingest_file() -- path=%s", path)
    return ingest_lines(read_lines(path), config)
