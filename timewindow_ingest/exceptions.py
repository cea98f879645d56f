"""
Custom exception hierarchy for timewindow-ingest.

Why a custom hierarchy:
- Callers can catch specific exceptions (e.g., SemanticMismatchError vs
  UnrecognizedFormatError) without relying on generic ValueError/RuntimeError.
- Row-level failures are recorded as exception *instances* on the batch
  result, so the same types serve both the single-value API (where they
  propagate) and the tabular API (where they are collected per row).

Layout:
  TimeWindowError
  ├── TimeParseError        (EmptyInputError, UnrecognizedFormatError, SemanticMismatchError)
  ├── TimeRangeError        (RangeTooShortError, RangeTooLongError)
  ├── RowFormatError        (ColumnCountMismatchError, DurationOutOfBoundsError)
  ├── LayoutError           (UnknownLayoutError, MixedLayoutError)
  ├── MissingWindowError
  ├── NoValidRowsError
  └── ConfigValidationError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from timewindow_ingest.batch import BatchResult


class TimeWindowError(Exception):
    """Base exception for all timewindow-ingest errors."""


# ---------------------------------------------------------------------------
# Single timestamp parsing
# ---------------------------------------------------------------------------

class TimeParseError(TimeWindowError):
    """Base for failures of ``parse_time()``."""


class EmptyInputError(TimeParseError):
    """Raised when the timestamp text is empty after trimming."""


class UnrecognizedFormatError(TimeParseError):
    """Raised when no stage of the parse cascade matches the input.

    The message lists the supported formats so the user can correct
    the input without consulting documentation.
    """


class SemanticMismatchError(TimeParseError):
    """Raised when the input matches a format syntactically but names a
    calendar value that does not exist.

    For example ``2025-02-30 12:00:00`` or ``2025-04-31 00:00``: a permissive
    calendar constructor would roll these over into March/May, which would
    silently shift the analysed window.
    """


# ---------------------------------------------------------------------------
# Range construction
# ---------------------------------------------------------------------------

class TimeRangeError(TimeWindowError):
    """Base for failures of ``explicit_range()``."""


class RangeTooShortError(TimeRangeError):
    """Raised when ``end - start`` is below the caller's minimum.

    A reversed or zero-length range (end <= start) always lands here.
    """


class RangeTooLongError(TimeRangeError):
    """Raised when ``end - start`` exceeds the caller's maximum."""


# ---------------------------------------------------------------------------
# Tabular rows
# ---------------------------------------------------------------------------

class RowFormatError(TimeWindowError):
    """Base for row-shape failures detected by the row parsers."""


class ColumnCountMismatchError(RowFormatError):
    """Raised when a row does not have the column count its layout requires."""

    def __init__(self, expected: int, actual: int, layout_title: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected {expected} column{'s' if expected != 1 else ''} "
            f"for {layout_title}, got {actual}"
        )


class DurationOutOfBoundsError(RowFormatError):
    """Raised when a duration column is not a numeral in ``(0, 3600]``."""


# ---------------------------------------------------------------------------
# Batch-level failures
# ---------------------------------------------------------------------------

class LayoutError(TimeWindowError):
    """Base for layout detection failures. Always fatal for the batch."""


class UnknownLayoutError(LayoutError):
    """Raised when sampled rows have an unsupported column count."""


class MixedLayoutError(LayoutError):
    """Raised when sampled rows are individually valid but disagree on layout."""


class MissingWindowError(TimeWindowError):
    """Raised when single-column input is parsed without a uniform window.

    This is a pre-batch failure: no row is attempted.
    """


class NoValidRowsError(TimeWindowError):
    """Raised when a batch finishes with zero successfully parsed rows.

    The partial ``BatchResult`` (all errors) is attached as ``result`` so
    callers can still report what went wrong per row.
    """

    def __init__(self, message: str, result: BatchResult) -> None:
        super().__init__(message)
        self.result = result


class ConfigValidationError(TimeWindowError):
    """Raised when a config file is empty or cannot be interpreted.

    Schema-level problems (wrong types, out-of-range values) surface as
    ``pydantic.ValidationError`` from the model itself.
    """
