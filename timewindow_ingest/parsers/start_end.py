"""
Start/end row parser.

Each row is ``start,end``; both columns go through ``parse_time()`` and the
pair through ``explicit_range()`` with the config's ``range_bounds``
(1..3600 seconds unless the caller says otherwise).

Input structure:
  2025-07-26T00:49:16Z,2025-07-26T00:49:21Z
  1753490956,1753490966
"""

from __future__ import annotations

from timewindow_ingest.layout_registry import LayoutTag
from timewindow_ingest.parsers.base import BaseRowParser
from timewindow_ingest.time_parser import parse_time
from timewindow_ingest.time_range import TimeRange, explicit_range


class StartEndParser(BaseRowParser):
    """Parser for ``start,end`` rows."""

    layout = LayoutTag.START_AND_END

    def _build(self, columns: list[str]) -> tuple[TimeRange, str]:
        start = parse_time(columns[0])
        end = parse_time(columns[1])
        time_range = explicit_range(start, end, self.config.range_bounds)
        description = (
            f"{start.original_input} → {end.original_input} "
            f"({time_range.duration_seconds}s)"
        )
        return time_range, description
