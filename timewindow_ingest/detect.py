"""
Layout detection for tabular timestamp input.

Classifies a whole batch from a small leading sample of rows (default 3).
Each sampled row gets a candidate tag from its column count:

- 1 column  -> SINGLE_COLUMN_UNIFORM
- 2 columns -> TIMESTAMP_PLUS_DURATION if column 2 is a plain non-negative
               numeral in (0, 3600]; otherwise START_AND_END
- otherwise -> UNKNOWN

Aggregation:
1. All candidates equal        -> that tag.
2. Disagreement, no UNKNOWN    -> MIXED.
3. Disagreement with UNKNOWN   -> UNKNOWN.

Column 2 of a START_AND_END candidate is *not* parsed here; whether it is
a real timestamp is decided per row by the row parser. Likewise the
sample is not reconciled with the remaining rows here: every row is checked
against the detected layout's column count when it is parsed, so rows that
disagree with the sample surface as row errors instead of being silently
reinterpreted.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal

from timewindow_ingest.config import MAX_ROW_WINDOW_SECONDS
from timewindow_ingest.exceptions import MixedLayoutError, UnknownLayoutError
from timewindow_ingest.layout_registry import LayoutTag, layout_guide
from timewindow_ingest.reader import split_row

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 3

# Plain non-negative ASCII numeral: digits with an optional decimal part
DURATION_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]+)?")


def duration_value(text: str) -> Decimal | None:
    """Return ``text`` as a Decimal if it is a plain numeral in ``(0, 3600]``."""
    if not DURATION_PATTERN.fullmatch(text):
        return None
    # Long digit runs cannot be in range; skip Decimal for them
    if len(text.split(".")[0].lstrip("0")) > len(str(MAX_ROW_WINDOW_SECONDS)):
        return None
    value = Decimal(text)
    if 0 < value <= MAX_ROW_WINDOW_SECONDS:
        return value
    return None


def classify_row(line: str) -> LayoutTag:
    """Candidate layout for a single row."""
    columns = split_row(line)
    if len(columns) == 1:
        return LayoutTag.SINGLE_COLUMN_UNIFORM
    if len(columns) == 2:
        if duration_value(columns[1]) is not None:
            return LayoutTag.TIMESTAMP_PLUS_DURATION
        return LayoutTag.START_AND_END
    return LayoutTag.UNKNOWN


def detect_layout(lines: list[str], sample_size: int = DEFAULT_SAMPLE_SIZE) -> LayoutTag:
    """Classify a batch of cleaned rows from its first ``sample_size`` rows.

    Args:
        lines: Trimmed, non-empty, non-comment rows.
        sample_size: How many leading rows to sample (>= 1).

    Returns:
        The batch ``LayoutTag``. Empty input is UNKNOWN.
    """
    if sample_size < 1:
        raise ValueError(f"sample_size must be >= 1, got {sample_size}")

    sample = lines[:sample_size]
    if not sample:
        logger.info("No rows to sample; layout is unknown")
        return LayoutTag.UNKNOWN

    candidates = [classify_row(line) for line in sample]
    logger.debug("Sampled layout candidates: %s", [c.value for c in candidates])

    unique = set(candidates)
    if len(unique) == 1:
        layout = candidates[0]
    elif LayoutTag.UNKNOWN in unique:
        layout = LayoutTag.UNKNOWN
    else:
        layout = LayoutTag.MIXED

    logger.info("Detected layout '%s' from %d sampled row(s)", layout.value, len(sample))
    return layout


def require_known_layout(layout: LayoutTag) -> LayoutTag:
    """Pass concrete layouts through; raise for MIXED / UNKNOWN.

    Raises:
        MixedLayoutError: For MIXED. The message includes the layout guide.
        UnknownLayoutError: For UNKNOWN. The message includes the layout guide.
    """
    if layout is LayoutTag.MIXED:
        raise MixedLayoutError(
            "Mixed or unsupported tabular format detected: the first rows "
            "disagree on layout.\n\n" + layout_guide()
        )
    if layout is LayoutTag.UNKNOWN:
        raise UnknownLayoutError(
            "Unable to detect tabular format.\n\n" + layout_guide()
        )
    return layout
