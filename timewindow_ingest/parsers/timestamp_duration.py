"""
Timestamp + duration row parser.

Each row is ``timestamp,seconds``; the row becomes a window of ``seconds``
centred on the timestamp.

Input structure:
  2025-07-26T00:49:16Z,5
  2025-07-26 00:50:30,10
  1753491136,15

The duration must be a plain numeral in ``(0, 3600]``. Fractional values are
rounded up to whole seconds (``5.5`` -> 6) so the window never covers less
than what the row asked for.
"""

from __future__ import annotations

from decimal import ROUND_CEILING

from timewindow_ingest.config import MAX_ROW_WINDOW_SECONDS
from timewindow_ingest.detect import duration_value
from timewindow_ingest.exceptions import DurationOutOfBoundsError
from timewindow_ingest.layout_registry import LayoutTag
from timewindow_ingest.parsers.base import BaseRowParser
from timewindow_ingest.time_parser import parse_time
from timewindow_ingest.time_range import TimeRange, centered_window


class TimestampDurationParser(BaseRowParser):
    """Parser for ``timestamp,duration_seconds`` rows."""

    layout = LayoutTag.TIMESTAMP_PLUS_DURATION

    def _build(self, columns: list[str]) -> tuple[TimeRange, str]:
        parsed = parse_time(columns[0])

        value = duration_value(columns[1])
        if value is None:
            raise DurationOutOfBoundsError(
                f"Invalid duration '{columns[1]}'. Duration must be a number "
                f"greater than 0 and at most {MAX_ROW_WINDOW_SECONDS} seconds."
            )
        window_seconds = int(value.to_integral_value(rounding=ROUND_CEILING))

        time_range = centered_window(parsed, window_seconds)
        return time_range, f"{parsed.original_input} ±{window_seconds // 2}s"
