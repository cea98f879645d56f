"""
Timestamp parsing for timewindow-ingest.

Converts one textual timestamp into a ``ParsedTime``: the verbatim input,
the instant as integer epoch seconds (always the floor of the instant),
and a ``FormatTag`` naming the format that matched.

Supported formats, tried strictly in this order:

1. ISO 8601          ``2025-07-26T00:49:16[.fraction][Z|+HH:MM|-HH:MM]``
2. Unix seconds      ``1753490956`` / ``1753490956.123`` (year 2000-2100 only)
3. Unix millis       ``1753490956000`` (year 2000-2100 only)
4. Simple date-time  ``YYYY-MM-DD HH:MM:SS[.f]``, ``YYYY/MM/DD ...``, ``MM/DD/YYYY ...``
5. Date + HH:MM      same three date forms, seconds default to 0

Design: closed stage table
- ``_STAGES`` is a fixed tuple of ``(tag, pattern, build)`` records. Each stage
  is matched independently against the trimmed input and either yields a
  ``ParsedTime`` or ``None``; there is no chaining between stages.
- Every pattern is anchored (``fullmatch``) and only uses fixed-width fields or
  single-class runs separated by literal delimiters, so matching cost is
  linear in the input length whatever the input looks like.

Calendar validation:
  Day overflow is detected by an explicit round trip. The date is built by
  adding ``day - 1`` days to the first of the month, which rolls over the way
  a permissive constructor would (``April 31`` -> ``May 1``). The resulting
  fields are then compared with the input fields; any difference raises
  ``SemanticMismatchError`` instead of accepting the rolled-over date.

Time zones:
  Only ``Z`` and fixed ``+HH:MM``/``-HH:MM`` offsets are understood. Inputs
  without an offset are interpreted as UTC, never as the host's local time,
  so results do not depend on the machine running the parser.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable

from timewindow_ingest.exceptions import (
    EmptyInputError,
    SemanticMismatchError,
    UnrecognizedFormatError,
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_SECOND = timedelta(seconds=1)

# Plausibility windows for bare numerals: 2000-01-01 .. 2100-01-01 (exclusive)
UNIX_SECONDS_RANGE = (946_684_800, 4_102_444_800)
UNIX_MILLIS_RANGE = (946_684_800_000, 4_102_444_800_000)

# Longest integer part that can fall inside either epoch window
_MAX_NUMERAL_DIGITS = len(str(UNIX_MILLIS_RANGE[1]))

SUPPORTED_FORMATS = (
    "ISO 8601 (2025-07-26T00:49:16Z)",
    "Unix timestamp in seconds or milliseconds",
    "YYYY-MM-DD HH:MM[:SS]",
    "YYYY/MM/DD HH:MM[:SS]",
    "MM/DD/YYYY HH:MM[:SS]",
)


class FormatTag(str, Enum):
    """Which cascade stage produced a ``ParsedTime``."""

    ISO8601 = "ISO 8601"
    UNIX_SECONDS = "Unix timestamp (seconds)"
    UNIX_MILLISECONDS = "Unix timestamp (milliseconds)"
    SIMPLE_DATETIME = "Simple date time"
    YMD_HOUR_MINUTE = "Year-month-day-hour-minute"


@dataclass(frozen=True)
class ParsedTime:
    """A successfully parsed timestamp.

    Attributes:
        original_input: The caller's text, verbatim (untrimmed).
        epoch_seconds: Floor of the instant in seconds since the Unix epoch.
            Fractional input never changes this value.
        format_tag: The format that matched.
        moment: The instant as an aware ``datetime`` (UTC or the input's fixed
            offset), with fractional seconds truncated to microseconds.
            Informational only; ``epoch_seconds`` is authoritative.
    """

    original_input: str
    epoch_seconds: int
    format_tag: FormatTag
    moment: datetime


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_YMD_DASH = r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
_YMD_SLASH = r"(?P<year>[0-9]{4})/(?P<month>[0-9]{2})/(?P<day>[0-9]{2})"
_MDY_SLASH = r"(?P<month>[0-9]{2})/(?P<day>[0-9]{2})/(?P<year>[0-9]{4})"
_HM = r"(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2})"
_HMS = _HM + r":(?P<second>[0-9]{2})(?:\.(?P<fraction>[0-9]+))?"
_OFFSET = r"(?P<offset>Z|[+-][0-9]{2}:[0-9]{2})?"

_ISO_RE = re.compile(_YMD_DASH + "T" + _HMS + _OFFSET)
_NUMERAL_RE = re.compile(r"(?P<whole>[0-9]+)(?:\.(?P<fraction>[0-9]+))?")


def _date_time_re(date_part: str, time_part: str) -> re.Pattern[str]:
    return re.compile(date_part + r"\s+" + time_part)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def _micros(fraction: str | None) -> int:
    """Fractional digits -> microseconds, truncating (never rounding)."""
    if not fraction:
        return 0
    return int(fraction[:6].ljust(6, "0"))


def _offset_tz(offset: str | None) -> timezone:
    if offset is None or offset == "Z":
        return timezone.utc
    hours, minutes = int(offset[1:3]), int(offset[4:6])
    if hours > 23 or minutes > 59:
        raise SemanticMismatchError(f"Invalid UTC offset '{offset}'")
    delta = timedelta(hours=hours, minutes=minutes)
    return timezone(-delta if offset[0] == "-" else delta)


def _calendar_value(
    year: int, month: int, day: int, hour: int, minute: int, second: int, tz: timezone
) -> datetime:
    """Build a datetime from calendar fields, rejecting rolled-over dates.

    Raises:
        SemanticMismatchError: If a field is out of range or the constructed
            value does not round-trip to the same fields.
    """
    fields = (year, month, day, hour, minute, second)
    if not (
        1 <= year <= 9999
        and 1 <= month <= 12
        and 1 <= day <= 31
        and 0 <= hour <= 23
        and 0 <= minute <= 59
        and 0 <= second <= 59
    ):
        raise SemanticMismatchError(
            "Date/time field out of range: %04d-%02d-%02d %02d:%02d:%02d" % fields
        )

    try:
        value = datetime(year, month, 1, tzinfo=tz) + timedelta(
            days=day - 1, hours=hour, minutes=minute, seconds=second
        )
    except OverflowError:
        value = None

    if value is None or (
        value.year, value.month, value.day, value.hour, value.minute, value.second
    ) != fields:
        raise SemanticMismatchError(
            "Date does not exist in the calendar: %04d-%02d-%02d" % fields[:3]
        )
    return value


def _build_calendar(text: str, match: re.Match[str], tag: FormatTag) -> ParsedTime:
    groups = match.groupdict()
    tz = _offset_tz(groups.get("offset"))
    value = _calendar_value(
        int(groups["year"]),
        int(groups["month"]),
        int(groups["day"]),
        int(groups["hour"]),
        int(groups["minute"]),
        int(groups.get("second") or 0),
        tz,
    )
    # Whole-second value first so the fraction can never move epoch_seconds
    epoch_seconds = (value - _EPOCH) // _ONE_SECOND
    moment = value + timedelta(microseconds=_micros(groups.get("fraction")))
    return ParsedTime(text, epoch_seconds, tag, moment)


def _build_numeral(
    text: str, match: re.Match[str], tag: FormatTag
) -> ParsedTime | None:
    whole = match.group("whole")
    if len(whole) > _MAX_NUMERAL_DIGITS:
        return None
    value = int(whole)
    # The fraction is non-negative and below 1, so comparing the integer part
    # against integer bounds is exact for a half-open range.
    if tag is FormatTag.UNIX_SECONDS:
        low, high = UNIX_SECONDS_RANGE
        if not low <= value < high:
            return None
        epoch_seconds = value
        micros = _micros(match.group("fraction"))
    else:
        low, high = UNIX_MILLIS_RANGE
        if not low <= value < high:
            return None
        epoch_seconds, millis = divmod(value, 1000)
        micros = millis * 1000 + _micros(match.group("fraction")) // 1000
    moment = _EPOCH + timedelta(seconds=epoch_seconds, microseconds=micros)
    return ParsedTime(text, epoch_seconds, tag, moment)


# ---------------------------------------------------------------------------
# Cascade
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class _Stage:
    tag: FormatTag
    pattern: re.Pattern[str]
    build: Callable[[str, re.Match[str], FormatTag], ParsedTime | None]


_STAGES: tuple[_Stage, ...] = (
    _Stage(FormatTag.ISO8601, _ISO_RE, _build_calendar),
    _Stage(FormatTag.UNIX_SECONDS, _NUMERAL_RE, _build_numeral),
    _Stage(FormatTag.UNIX_MILLISECONDS, _NUMERAL_RE, _build_numeral),
    _Stage(FormatTag.SIMPLE_DATETIME, _date_time_re(_YMD_DASH, _HMS), _build_calendar),
    _Stage(FormatTag.SIMPLE_DATETIME, _date_time_re(_YMD_SLASH, _HMS), _build_calendar),
    _Stage(FormatTag.SIMPLE_DATETIME, _date_time_re(_MDY_SLASH, _HMS), _build_calendar),
    _Stage(FormatTag.YMD_HOUR_MINUTE, _date_time_re(_YMD_DASH, _HM), _build_calendar),
    _Stage(FormatTag.YMD_HOUR_MINUTE, _date_time_re(_YMD_SLASH, _HM), _build_calendar),
    _Stage(FormatTag.YMD_HOUR_MINUTE, _date_time_re(_MDY_SLASH, _HM), _build_calendar),
)


def _preview(text: str, limit: int = 80) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def parse_time(text: str) -> ParsedTime:
    """Parse one textual timestamp into a ``ParsedTime``.

    Args:
        text: The timestamp. Leading/trailing whitespace is ignored for
            matching; ``ParsedTime.original_input`` keeps the text verbatim.

    Returns:
        ``ParsedTime`` from the first stage that accepts the input.

    Raises:
        EmptyInputError: If ``text`` is empty or whitespace only.
        SemanticMismatchError: If a stage matched syntactically but the
            calendar fields name a non-existent date/time.
        UnrecognizedFormatError: If no stage matched at all.
    """
    trimmed = text.strip()
    if not trimmed:
        raise EmptyInputError("Time input cannot be empty")

    mismatch: SemanticMismatchError | None = None
    for stage in _STAGES:
        match = stage.pattern.fullmatch(trimmed)
        if match is None:
            continue
        try:
            parsed = stage.build(text, match, stage.tag)
        except SemanticMismatchError as e:
            mismatch = mismatch or e
            continue
        if parsed is not None:
            return parsed

    if mismatch is not None:
        raise SemanticMismatchError(f"{mismatch} (input: {_preview(trimmed)})")
    raise UnrecognizedFormatError(
        f"Unable to parse time format: {_preview(trimmed)}. "
        f"Supported formats: {', '.join(SUPPORTED_FORMATS)}"
    )
