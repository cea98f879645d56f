"""
Single-column row parser.

Each row is one timestamp; every row gets the same ``window_seconds``
from the config, centred on the timestamp.

Input structure:
  2025-07-26T00:49:16Z
  1753490956
  07/26/2025 00:49:16
"""

from __future__ import annotations

from timewindow_ingest.config import IngestConfig
from timewindow_ingest.exceptions import MissingWindowError
from timewindow_ingest.layout_registry import LayoutTag
from timewindow_ingest.parsers.base import BaseRowParser
from timewindow_ingest.time_parser import parse_time
from timewindow_ingest.time_range import TimeRange, centered_window


class SingleColumnParser(BaseRowParser):
    """Parser for one-timestamp-per-row input with a uniform window."""

    layout = LayoutTag.SINGLE_COLUMN_UNIFORM

    def __init__(self, config: IngestConfig) -> None:
        if config.window_seconds is None:
            raise MissingWindowError(
                "window_seconds is required for single-column input"
            )
        super().__init__(config)
        self.window_seconds: int = config.window_seconds

    def _build(self, columns: list[str]) -> tuple[TimeRange, str]:
        parsed = parse_time(columns[0])
        time_range = centered_window(parsed, self.window_seconds)
        return time_range, f"{parsed.original_input} ±{self.window_seconds // 2}s"
