"""
Base row parser for timewindow-ingest.

All layout-specific row parsers implement this interface. The contract is:
1. A parser is built once per batch from the ``IngestConfig``; batch-level
   preconditions (e.g. a required uniform window) are checked in
   ``__init__`` so they fail before any row is attempted.
2. ``parse_row()`` tokenizes one ``TabularRow``, enforces the layout's
   column count, and returns a ``RowEntry`` or raises a ``TimeWindowError``
   subclass describing why the row failed.

Why an ABC:
- The column-count check and the ``RowEntry`` assembly are shared; each
  layout only implements ``_build()`` from already-split columns.
- Parsers hold nothing but immutable config, so one instance can be used
  from several threads at once.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from timewindow_ingest.batch import RowEntry, TabularRow
from timewindow_ingest.config import IngestConfig
from timewindow_ingest.exceptions import ColumnCountMismatchError
from timewindow_ingest.layout_registry import LayoutSpec, LayoutTag, get_layout
from timewindow_ingest.reader import split_row
from timewindow_ingest.time_range import TimeRange


class BaseRowParser(ABC):
    """Abstract base class for per-layout row parsers.

    Subclasses set ``layout`` and implement ``_build()``.
    """

    layout: ClassVar[LayoutTag]

    def __init__(self, config: IngestConfig) -> None:
        self.config = config
        self.spec: LayoutSpec = get_layout(self.layout)

    def parse_row(self, row: TabularRow) -> RowEntry:
        """Parse one row into a ``RowEntry``.

        Raises:
            ColumnCountMismatchError: If the row's column count differs from
                the layout's.
            TimeWindowError: Any parse/range error from ``_build()``.
        """
        columns = split_row(row.raw_text)
        if len(columns) != self.spec.columns:
            raise ColumnCountMismatchError(self.spec.columns, len(columns), self.spec.title)
        time_range, description = self._build(columns)
        return RowEntry(
            row=row,
            time_range=time_range,
            layout=self.layout,
            description=description,
        )

    @abstractmethod
    def _build(self, columns: list[str]) -> tuple[TimeRange, str]:
        """Turn the row's columns into a range and a short description."""
