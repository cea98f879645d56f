"""
Batch result containers for timewindow-ingest.

A ``BatchResult`` is what ``parse_rows()`` / ``ingest_text()`` return for a
multi-row input. It keeps successful rows and failed rows side by side,
both keyed by their 1-based row number, plus aggregate counts.

Read-side helpers:
- ``time_ranges()``: the bare ``TimeRange`` list for downstream queries.
- ``error_report(max_shown)``: first N row errors verbatim, remainder
  summarised by count -- what a rendering layer prints.
- ``to_frame()``: one ``pandas.DataFrame`` row per input row, ordered by row
  number, for callers that want to filter/join/export outcomes.

Rows may be parsed out of order (e.g. by a parallel scheduler); the helpers
always present results sorted by row number.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import pandas as pd

from timewindow_ingest.exceptions import TimeWindowError
from timewindow_ingest.layout_registry import LayoutTag
from timewindow_ingest.time_range import TimeRange

FRAME_COLUMNS = [
    "row_number",
    "raw_text",
    "status",
    "start_epoch_seconds",
    "end_epoch_seconds",
    "duration_seconds",
    "description",
    "error",
]
_INT_COLUMNS = ["start_epoch_seconds", "end_epoch_seconds", "duration_seconds"]
_OPTIONAL_TEXT_COLUMNS = ["description", "error"]


@dataclass(frozen=True)
class TabularRow:
    """One cleaned input row and its 1-based position."""

    row_number: int
    raw_text: str


@dataclass(frozen=True)
class RowEntry:
    """A row that produced a ``TimeRange``."""

    row: TabularRow
    time_range: TimeRange
    layout: LayoutTag
    description: str


@dataclass(frozen=True)
class RowError:
    """A row that failed, with the typed error that stopped it."""

    row: TabularRow
    error: TimeWindowError

    @property
    def message(self) -> str:
        return f"Row {self.row.row_number}: {self.error}"


@dataclass
class BatchSummary:
    """Aggregate counts for a batch.

    Attributes:
        total_rows: Rows considered (after blank/comment removal).
        valid_entries: Rows that produced a ``TimeRange``.
        error_count: Rows that failed.
        window_seconds: The uniform window, for single-column batches only.
    """

    total_rows: int = 0
    valid_entries: int = 0
    error_count: int = 0
    window_seconds: int | None = None


@dataclass
class BatchResult:
    """Outcome of parsing a tabular batch under one detected layout."""

    layout: LayoutTag
    entries: list[RowEntry] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)
    summary: BatchSummary = field(default_factory=BatchSummary)

    @property
    def ok(self) -> bool:
        """True if at least one row succeeded."""
        return bool(self.entries)

    def time_ranges(self) -> list[TimeRange]:
        """Successful ranges in row order."""
        return [e.time_range for e in sorted(self.entries, key=lambda e: e.row.row_number)]

    def error_messages(self) -> list[str]:
        """All row error messages in row order."""
        return [e.message for e in sorted(self.errors, key=lambda e: e.row.row_number)]

    def error_report(self, max_shown: int = 3) -> list[str]:
        """First ``max_shown`` error messages, then a count of the rest.

        Example::

            ["Row 2: Unable to parse time format: foo. ...",
             "Row 5: Maximum time span is 1 hour (3600 seconds) (got 7200s)",
             "Row 9: Expected 2 columns for Start and End Times, got 3",
             "... and 4 more errors"]
        """
        messages = self.error_messages()
        report = messages[:max_shown]
        hidden = len(messages) - len(report)
        if hidden > 0:
            report.append(f"... and {hidden} more error{'s' if hidden != 1 else ''}")
        return report

    def to_frame(self) -> pd.DataFrame:
        """Per-row outcomes as a DataFrame (columns: ``FRAME_COLUMNS``).

        Epoch/duration columns use the nullable ``Int64`` dtype so error rows
        hold ``<NA>`` without turning the column into floats. ``description`` and
        ``error`` are ``object`` columns holding ``None`` where a value is absent.
        """
        records: list[dict[str, object]] = []
        for entry in self.entries:
            records.append({
                "row_number": entry.row.row_number,
                "raw_text": entry.row.raw_text,
                "status": "ok",
                "start_epoch_seconds": entry.time_range.start_epoch_seconds,
                "end_epoch_seconds": entry.time_range.end_epoch_seconds,
                "duration_seconds": entry.time_range.duration_seconds,
                "description": entry.description,
                "error": None,
            })
        for err in self.errors:
            records.append({
                "row_number": err.row.row_number,
                "raw_text": err.row.raw_text,
                "status": "error",
                "start_epoch_seconds": None,
                "end_epoch_seconds": None,
                "duration_seconds": None,
                "description": None,
                "error": str(err.error),
            })

        df = pd.DataFrame.from_records(records, columns=FRAME_COLUMNS)
        df = df.astype({col: "Int64" for col in _INT_COLUMNS})
        # Newer pandas stores missing text as NaN; keep None
        for col in _OPTIONAL_TEXT_COLUMNS:
            df[col] = pd.Series(
                [value if isinstance(value, str) else None for value in df[col]],
                index=df.index,
                dtype=object,
            )
        return df.sort_values("row_number", kind="stable").reset_index(drop=True)
