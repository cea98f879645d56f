"""
Row parsers sub-package for timewindow-ingest.

Contains one parser per concrete row layout. Each converts a single
``TabularRow`` into a ``RowEntry`` (row + ``TimeRange`` + description).

Design: Strategy Pattern
- base.py defines the BaseRowParser ABC (shared column-count check).
- single_column.py implements SingleColumnParser (uniform window).
- timestamp_duration.py implements TimestampDurationParser (per-row window).
- start_end.py implements StartEndParser (explicit start and end).

The layout detector (detect.py) picks the ``LayoutTag``; ``get_row_parser()``
maps it to the parser class at runtime.
"""

from __future__ import annotations

from timewindow_ingest.config import IngestConfig
from timewindow_ingest.exceptions import UnknownLayoutError
from timewindow_ingest.layout_registry import LayoutTag
from timewindow_ingest.parsers.base import BaseRowParser
from timewindow_ingest.parsers.single_column import SingleColumnParser
from timewindow_ingest.parsers.start_end import StartEndParser
from timewindow_ingest.parsers.timestamp_duration import TimestampDurationParser

__all__ = [
    "BaseRowParser",
    "SingleColumnParser",
    "StartEndParser",
    "TimestampDurationParser",
    "get_row_parser",
]

_PARSER_MAP: dict[LayoutTag, type[BaseRowParser]] = {
    LayoutTag.SINGLE_COLUMN_UNIFORM: SingleColumnParser,
    LayoutTag.TIMESTAMP_PLUS_DURATION: TimestampDurationParser,
    LayoutTag.START_AND_END: StartEndParser,
}


def get_row_parser(layout: LayoutTag, config: IngestConfig) -> BaseRowParser:
    """Instantiate the row parser for a concrete layout.

    Raises:
        UnknownLayoutError: If ``layout`` has no parser (MIXED / UNKNOWN).
        MissingWindowError: If the layout needs ``window_seconds`` and the
            config has none.
    """
    parser_cls = _PARSER_MAP.get(layout)
    if parser_cls is None:
        raise UnknownLayoutError(f"No row parser for layout '{layout.value}'")
    return parser_cls(config)
