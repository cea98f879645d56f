"""
Time range construction for timewindow-ingest.

Two ways to get a ``TimeRange``:

- ``centered_window(center, window_seconds)`` -- a window of exactly
  ``window_seconds`` around one instant. The backward half is
  ``floor(w / 2)``; an odd window gives the extra second to the forward side.
- ``explicit_range(start, end, bounds)`` -- a range between two instants,
  validated against caller-supplied ``RangeBounds``.

The builders carry no default policy. General analysis typically passes
1..3600 seconds while a targeted single-address search may pass a much
larger or unbounded ceiling; the policy lives in ``IngestConfig``.
"""

from __future__ import annotations

from dataclasses import dataclass

from timewindow_ingest.config import RangeBounds
from timewindow_ingest.exceptions import RangeTooLongError, RangeTooShortError
from timewindow_ingest.time_parser import ParsedTime


@dataclass(frozen=True)
class TimeRange:
    """A half-open span ``[start, end)`` in integer epoch seconds."""

    start_epoch_seconds: int
    end_epoch_seconds: int
    duration_seconds: int

    def __post_init__(self) -> None:
        if self.end_epoch_seconds - self.start_epoch_seconds != self.duration_seconds:
            raise ValueError(
                f"Inconsistent TimeRange: {self.end_epoch_seconds} - "
                f"{self.start_epoch_seconds} != {self.duration_seconds}"
            )
        if self.duration_seconds <= 0:
            raise ValueError(f"TimeRange duration must be positive, got {self.duration_seconds}")


def centered_window(center: ParsedTime, window_seconds: int) -> TimeRange:
    """Build a window of exactly ``window_seconds`` around ``center``.

    Raises:
        ValueError: If ``window_seconds`` is not an integer >= 1.
    """
    if isinstance(window_seconds, bool) or not isinstance(window_seconds, int):
        raise ValueError(f"window_seconds must be an integer, got {window_seconds!r}")
    if window_seconds < 1:
        raise ValueError(f"window_seconds must be >= 1, got {window_seconds}")

    half = window_seconds // 2
    return TimeRange(
        start_epoch_seconds=center.epoch_seconds - half,
        end_epoch_seconds=center.epoch_seconds + (window_seconds - half),
        duration_seconds=window_seconds,
    )


def explicit_range(start: ParsedTime, end: ParsedTime, bounds: RangeBounds) -> TimeRange:
    """Build the range ``[start, end)`` and check it against ``bounds``.

    Raises:
        RangeTooShortError: If ``end - start < bounds.min_seconds`` (this
            includes equal and reversed endpoints).
        RangeTooLongError: If ``bounds.max_seconds`` is set and
            ``end - start`` exceeds it.
    """
    duration = end.epoch_seconds - start.epoch_seconds

    if duration < bounds.min_seconds:
        unit = "second" if bounds.min_seconds == 1 else "seconds"
        raise RangeTooShortError(
            f"Minimum time span is {bounds.min_seconds} {unit} (got {duration}s)"
        )
    if bounds.max_seconds is not None and duration > bounds.max_seconds:
        raise RangeTooLongError(
            f"Maximum time span is {_describe_seconds(bounds.max_seconds)} (got {duration}s)"
        )

    return TimeRange(
        start_epoch_seconds=start.epoch_seconds,
        end_epoch_seconds=end.epoch_seconds,
        duration_seconds=duration,
    )


def _describe_seconds(seconds: int) -> str:
    if seconds % 3600 == 0:
        hours = seconds // 3600
        return f"{hours} hour{'s' if hours != 1 else ''} ({seconds} seconds)"
    return f"{seconds} seconds"
