"""
Internal row-parsing orchestration for timewindow-ingest.

Extracted from ``__init__.py`` so that ``ingest_text()`` / ``ingest_file()``
and callers that already hold cleaned rows and a layout tag can reuse the
same per-row loop.

Failure policy:
- Layout problems (MIXED / UNKNOWN) and a missing uniform window are fatal
  and raised before any row is parsed.
- Everything that goes wrong inside one row is recorded as a ``RowError``
  and the loop continues with the next row.
- Whether zero successes is fatal is the caller's decision (the public
  ``ingest_*`` functions raise ``NoValidRowsError``).

This module is **not** part of the public API.
"""

from __future__ import annotations

import logging

from timewindow_ingest.batch import BatchResult, BatchSummary, RowError, TabularRow
from timewindow_ingest.config import IngestConfig
from timewindow_ingest.detect import require_known_layout
from timewindow_ingest.exceptions import TimeWindowError
from timewindow_ingest.layout_registry import LayoutTag
from timewindow_ingest.parsers import get_row_parser

logger = logging.getLogger(__name__)


def number_rows(lines: list[str]) -> list[TabularRow]:
    """Pair cleaned rows with their 1-based row numbers."""
    return [TabularRow(row_number=i, raw_text=line) for i, line in enumerate(lines, start=1)]


def parse_rows(
    lines: list[str],
    layout: LayoutTag,
    config: IngestConfig,
) -> BatchResult:
    """Parse every row under ``layout`` and collect entries and row errors.

    Args:
        lines: Cleaned rows (no blanks or comments).
        layout: The detected batch layout.
        config: Window, bounds and display policy.

    Returns:
        ``BatchResult`` with one entry or one error per row.

    Raises:
        MixedLayoutError: If ``layout`` is MIXED.
        UnknownLayoutError: If ``layout`` is UNKNOWN.
        MissingWindowError: If single-column input has no ``window_seconds``.
    """
    require_known_layout(layout)
    parser = get_row_parser(layout, config)

    result = BatchResult(
        layout=layout,
        summary=BatchSummary(
            total_rows=len(lines),
            window_seconds=(
                config.window_seconds if layout is LayoutTag.SINGLE_COLUMN_UNIFORM else None
            ),
        ),
    )

    for row in number_rows(lines):
        try:
            entry = parser.parse_row(row)
        except TimeWindowError as e:
            logger.debug("Row %d rejected: %s", row.row_number, e)
            result.errors.append(RowError(row=row, error=e))
            continue
        result.entries.append(entry)

    result.summary.valid_entries = len(result.entries)
    result.summary.error_count = len(result.errors)

    logger.info(
        "Parsed %d row(s) as '%s': %d valid, %d error(s)",
        result.summary.total_rows,
        layout.value,
        result.summary.valid_entries,
        result.summary.error_count,
    )
    if result.errors:
        for message in result.error_report(config.max_errors_shown):
            logger.warning("  %s", message)

    return result
