"""
Unit tests for per-row parsing (timewindow_ingest._pipeline and the
row parsers in timewindow_ingest.parsers).

Feeds cleaned row lists with an explicit layout tag, so detection is not
involved here.
"""

from __future__ import annotations

import pytest

from timewindow_ingest._pipeline import number_rows, parse_rows
from timewindow_ingest.config import IngestConfig, RangeBounds
from timewindow_ingest.exceptions import (
    ColumnCountMismatchError,
    DurationOutOfBoundsError,
    MissingWindowError,
    MixedLayoutError,
    RangeTooLongError,
    RangeTooShortError,
    SemanticMismatchError,
    UnknownLayoutError,
    UnrecognizedFormatError,
)
from timewindow_ingest.layout_registry import LayoutTag
from timewindow_ingest.parsers import (
    SingleColumnParser,
    StartEndParser,
    TimestampDurationParser,
    get_row_parser,
)
from timewindow_ingest.reader import clean_lines
from tests.conftest import START_END_SAMPLE, TIMESTAMP_DURATION_SAMPLE

BASE = 1753490956  # 2025-07-26T00:49:16Z


class TestNumberRows:
    def test_one_based(self):
        rows = number_rows(["a", "b"])
        assert [(r.row_number, r.raw_text) for r in rows] == [(1, "a"), (2, "b")]


class TestGetRowParser:
    """Tests for the layout -> parser mapping."""

    @pytest.mark.parametrize(
        "layout, parser_cls",
        [
            (LayoutTag.TIMESTAMP_PLUS_DURATION, TimestampDurationParser),
            (LayoutTag.START_AND_END, StartEndParser),
        ],
    )
    def test_mapping(self, layout, parser_cls, analysis_config):
        assert isinstance(get_row_parser(layout, analysis_config), parser_cls)

    def test_single_column_needs_window(self, analysis_config, windowed_config):
        assert isinstance(
            get_row_parser(LayoutTag.SINGLE_COLUMN_UNIFORM, windowed_config), SingleColumnParser
        )
        with pytest.raises(MissingWindowError, match="window_seconds is required"):
            get_row_parser(LayoutTag.SINGLE_COLUMN_UNIFORM, analysis_config)

    @pytest.mark.parametrize("layout", [LayoutTag.MIXED, LayoutTag.UNKNOWN])
    def test_no_parser_for_non_concrete(self, layout, analysis_config):
        with pytest.raises(UnknownLayoutError):
            get_row_parser(layout, analysis_config)


class TestSingleColumn:
    """SINGLE_COLUMN_UNIFORM rows."""

    def test_all_rows_use_uniform_window(self, windowed_config):
        lines = ["2025-07-26T00:49:16Z", "2025-07-26T00:49:16.2146161Z", "1753490956"]
        result = parse_rows(lines, LayoutTag.SINGLE_COLUMN_UNIFORM, windowed_config)
        assert result.summary.valid_entries == 3
        assert result.summary.window_seconds == 5
        for tr in result.time_ranges():
            assert (tr.start_epoch_seconds, tr.end_epoch_seconds) == (BASE - 2, BASE + 3)

    def test_description(self, windowed_config):
        result = parse_rows(["1753490956"], LayoutTag.SINGLE_COLUMN_UNIFORM, windowed_config)
        assert result.entries[0].description == "1753490956 ±2s"

    def test_missing_window_is_batch_failure(self, analysis_config):
        with pytest.raises(MissingWindowError):
            parse_rows(["1753490956"], LayoutTag.SINGLE_COLUMN_UNIFORM, analysis_config)

    def test_extra_column_is_row_error(self, windowed_config):
        lines = ["1753490956", "1753490956,5"]
        result = parse_rows(lines, LayoutTag.SINGLE_COLUMN_UNIFORM, windowed_config)
        assert result.summary.valid_entries == 1
        assert isinstance(result.errors[0].error, ColumnCountMismatchError)
        assert result.errors[0].message == (
            "Row 2: Expected 1 column for Single Column with Uniform Time Span, got 2"
        )


class TestTimestampPlusDuration:
    """TIMESTAMP_PLUS_DURATION rows."""

    def test_sample(self, analysis_config):
        lines = clean_lines(TIMESTAMP_DURATION_SAMPLE)
        result = parse_rows(lines, LayoutTag.TIMESTAMP_PLUS_DURATION, analysis_config)
        assert result.summary.valid_entries == 4
        assert [tr.duration_seconds for tr in result.time_ranges()] == [5, 10, 15, 3]
        assert result.summary.window_seconds is None

    def test_centering(self, analysis_config):
        lines = ["2025-07-26T00:49:16Z,5", "2025-07-26T00:50:16Z,10"]
        ranges = parse_rows(lines, LayoutTag.TIMESTAMP_PLUS_DURATION, analysis_config).time_ranges()
        assert ranges[0].start_epoch_seconds == BASE - 2
        assert ranges[1].start_epoch_seconds == BASE + 60 - 5

    def test_fractional_duration_rounds_up(self, analysis_config):
        lines = ["2025-07-26T00:49:16Z,5.5", "2025-07-26T00:50:16Z,10.75", "2025-07-26T00:50:16Z,0.2"]
        ranges = parse_rows(lines, LayoutTag.TIMESTAMP_PLUS_DURATION, analysis_config).time_ranges()
        assert [tr.duration_seconds for tr in ranges] == [6, 11, 1]

    @pytest.mark.parametrize("duration", ["0", "3601", "abc", "-1"])
    def test_duration_out_of_bounds(self, duration, analysis_config):
        lines = ["2025-07-26T00:49:16Z,5", f"2025-07-26T00:49:16Z,{duration}"]
        result = parse_rows(lines, LayoutTag.TIMESTAMP_PLUS_DURATION, analysis_config)
        assert result.summary.valid_entries == 1
        assert isinstance(result.errors[0].error, DurationOutOfBoundsError)
        assert result.errors[0].row.row_number == 2

    def test_bad_timestamp_is_row_error(self, analysis_config):
        lines = ["nope,5", "2025-02-30 12:00:00,5", "2025-07-26T00:49:16Z,5"]
        result = parse_rows(lines, LayoutTag.TIMESTAMP_PLUS_DURATION, analysis_config)
        assert [type(e.error) for e in result.errors] == [
            UnrecognizedFormatError,
            SemanticMismatchError,
        ]
        assert result.entries[0].row.row_number == 3

    def test_rows_after_sample_checked_against_layout(self, analysis_config):
        lines = ["2025-07-26T00:49:16Z,5"] * 3 + ["2025-07-26T00:49:16Z,5,extra"]
        result = parse_rows(lines, LayoutTag.TIMESTAMP_PLUS_DURATION, analysis_config)
        assert result.summary.valid_entries == 3
        assert isinstance(result.errors[0].error, ColumnCountMismatchError)
        assert result.errors[0].row.row_number == 4


class TestStartAndEnd:
    """START_AND_END rows."""

    def test_sample(self, analysis_config):
        lines = clean_lines(START_END_SAMPLE)
        result = parse_rows(lines, LayoutTag.START_AND_END, analysis_config)
        assert [tr.duration_seconds for tr in result.time_ranges()] == [5, 15, 3]

    def test_description(self, analysis_config):
        result = parse_rows(["1753490956,1753490966"], LayoutTag.START_AND_END, analysis_config)
        assert result.entries[0].description == "1753490956 → 1753490966 (10s)"

    def test_range_violations_are_row_errors(self, analysis_config):
        lines = [
            "2025-07-26T00:49:16Z,2025-07-26T00:49:16Z",
            "2025-07-26T00:49:16Z,2025-07-26T02:49:17Z",
            "2025-07-26T00:49:26Z,2025-07-26T00:49:16Z",
        ]
        result = parse_rows(lines, LayoutTag.START_AND_END, analysis_config)
        assert result.summary.error_count == 3
        assert [type(e.error) for e in result.errors] == [
            RangeTooShortError,
            RangeTooLongError,
            RangeTooShortError,
        ]
        assert not result.ok

    def test_caller_bounds_respected(self):
        config = IngestConfig(range_bounds=RangeBounds(min_seconds=1, max_seconds=None))
        lines = ["2025-07-26T00:49:16Z,2025-07-26T02:49:16Z"]
        result = parse_rows(lines, LayoutTag.START_AND_END, config)
        assert result.time_ranges()[0].duration_seconds == 7200

    def test_mixed_timestamp_formats(self, analysis_config):
        lines = [
            "2025-07-26T00:49:16.2146161Z,2025-07-26T00:49:21.2146161Z",
            "2025-07-26 00:49:16,2025-07-26 00:49:26",
            "1753490956000,1753490959",
            '"07/26/2025 00:49:16","07/26/2025 00:49:19"',
        ]
        result = parse_rows(lines, LayoutTag.START_AND_END, analysis_config)
        assert [tr.duration_seconds for tr in result.time_ranges()] == [5, 10, 3, 3]


class TestBatchFailures:
    """Layout-level failures raise before any row is parsed."""

    def test_mixed(self, analysis_config):
        with pytest.raises(MixedLayoutError):
            parse_rows(["a,5", "b,c"], LayoutTag.MIXED, analysis_config)

    def test_unknown(self, analysis_config):
        with pytest.raises(UnknownLayoutError):
            parse_rows(["a,b,c"], LayoutTag.UNKNOWN, analysis_config)

    def test_zero_successes_not_raised_here(self, analysis_config):
        result = parse_rows(["x,5", "y,5"], LayoutTag.TIMESTAMP_PLUS_DURATION, analysis_config)
        assert not result.ok
        assert result.summary.total_rows == 2
        assert result.summary.error_count == 2
