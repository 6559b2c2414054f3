"""Tests for fieldfmt.format.temporal: interval patterns, rendering and parsing."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from fieldfmt.config import reset_settings
from fieldfmt.exceptions import DateParseError
from fieldfmt.format.spec import TimeFrame
from fieldfmt.format.temporal import (
    format_date,
    format_timestamp,
    get_date_format,
    get_timestamp_format,
    is_date_input,
    parse_date,
    parse_timestamp,
)

INSTANT = datetime(2023, 5, 1, 13, 45, 30, 123000, tzinfo=timezone.utc)


@pytest.fixture
def tokyo(monkeypatch):
    monkeypatch.setenv("FIELDFMT_TIMEZONE", "Asia/Tokyo")
    reset_settings()


# ── Patterns ──


class TestPatterns:
    @pytest.mark.parametrize(
        ("interval", "pattern"),
        [
            (TimeFrame.YEAR, "YYYY"),
            (TimeFrame.QUARTER, "YYYY-[Q]Q"),
            (TimeFrame.MONTH, "YYYY-MM"),
            (TimeFrame.DAY, "YYYY-MM-DD"),
            (TimeFrame.WEEK, "YYYY-MM-DD"),
            (TimeFrame.RAW, "YYYY-MM-DD"),
            (None, "YYYY-MM-DD"),
        ],
    )
    def test_date_format(self, interval, pattern):
        assert get_date_format(interval) == pattern

    @pytest.mark.parametrize(
        ("interval", "time"),
        [
            (TimeFrame.HOUR, "HH"),
            (TimeFrame.MINUTE, "HH:mm"),
            (TimeFrame.SECOND, "HH:mm:ss"),
            (TimeFrame.MILLISECOND, "HH:mm:ss.SSS"),
            (TimeFrame.DAY, "HH:mm:ss.SSS"),
            (None, "HH:mm:ss.SSS"),
        ],
    )
    def test_timestamp_format(self, interval, time):
        assert get_timestamp_format(interval) == f"YYYY-MM-DD, {time} (Z)"

    def test_interval_names_case_insensitive(self):
        assert get_date_format("month") == "YYYY-MM"

    def test_unknown_interval_uses_day(self):
        assert get_date_format("fortnight") == "YYYY-MM-DD"


# ── Rendering ──


class TestFormatDate:
    @pytest.mark.parametrize(
        ("interval", "expected"),
        [
            (TimeFrame.YEAR, "2023"),
            (TimeFrame.QUARTER, "2023-Q2"),
            (TimeFrame.MONTH, "2023-05"),
            (TimeFrame.DAY, "2023-05-01"),
        ],
    )
    def test_intervals(self, interval, expected):
        assert format_date("2023-05-01", interval) == expected

    def test_date_object(self):
        assert format_date(date(2023, 11, 30), TimeFrame.QUARTER) == "2023-Q4"

    def test_datetime_object(self):
        assert format_date(INSTANT, TimeFrame.MONTH) == "2023-05"

    def test_epoch_millis(self):
        assert format_date(0) == "1970-01-01"

    def test_unparseable_raises(self):
        with pytest.raises(DateParseError):
            format_date("not a date")

    def test_utc_conversion_shifts_day(self, tokyo):
        # Tokyo midnight is the previous day in UTC
        assert format_date(date(2023, 5, 1)) == "2023-05-01"
        assert format_date(date(2023, 5, 1), convert_to_utc=True) == "2023-04-30"


class TestFormatTimestamp:
    def test_milliseconds(self):
        assert format_timestamp(INSTANT) == "2023-05-01, 13:45:30.123 (+00:00)"

    @pytest.mark.parametrize(
        ("interval", "expected"),
        [
            (TimeFrame.HOUR, "2023-05-01, 13 (+00:00)"),
            (TimeFrame.MINUTE, "2023-05-01, 13:45 (+00:00)"),
            (TimeFrame.SECOND, "2023-05-01, 13:45:30 (+00:00)"),
        ],
    )
    def test_intervals(self, interval, expected):
        assert format_timestamp(INSTANT, interval) == expected

    def test_iso_string_with_z(self):
        assert format_timestamp("2023-05-01T13:45:30.123Z") == "2023-05-01, 13:45:30.123 (+00:00)"

    def test_epoch_zero(self):
        assert format_timestamp(0) == "1970-01-01, 00:00:00.000 (+00:00)"

    def test_ambient_zone(self, tokyo):
        assert format_timestamp("2023-05-01T00:00:00Z") == "2023-05-01, 09:00:00.000 (+09:00)"

    def test_convert_to_utc(self, tokyo):
        result = format_timestamp("2023-05-01T00:00:00Z", convert_to_utc=True)
        assert result == "2023-05-01, 00:00:00.000 (+00:00)"

    def test_naive_is_ambient_wall_clock(self, tokyo):
        assert format_timestamp("2023-05-01T10:00:00", TimeFrame.MINUTE) == "2023-05-01, 10:00 (+09:00)"
        assert format_timestamp("2023-05-01T10:00:00", TimeFrame.MINUTE, convert_to_utc=True) == (
            "2023-05-01, 01:00 (+00:00)"
        )


class TestIsDateInput:
    @pytest.mark.parametrize("value", ["2023-05-01", "2023-05-01T10:00:00Z", 0, 1.7e12, date(2023, 1, 1)])
    def test_accepted(self, value):
        assert is_date_input(value)

    @pytest.mark.parametrize("value", ["yesterday", "", True, None, [2023]])
    def test_rejected(self, value):
        assert not is_date_input(value)


# ── Parsing ──


class TestParseDate:
    def test_quarter(self):
        assert parse_date("2023-Q2", TimeFrame.QUARTER) == datetime(2023, 4, 1)

    def test_month(self):
        assert parse_date("2023-05", TimeFrame.MONTH) == datetime(2023, 5, 1)

    def test_year(self):
        assert parse_date("2023", TimeFrame.YEAR) == datetime(2023, 1, 1)

    @pytest.mark.parametrize(
        ("text", "interval"),
        [
            ("2023", TimeFrame.YEAR),
            ("2023-Q3", TimeFrame.QUARTER),
            ("2023-07", TimeFrame.MONTH),
            ("2023-07-14", TimeFrame.DAY),
        ],
    )
    def test_round_trip(self, text, interval):
        assert format_date(parse_date(text, interval), interval) == text

    def test_wrong_shape(self):
        with pytest.raises(DateParseError) as exc_info:
            parse_date("May 2023", TimeFrame.MONTH)
        assert exc_info.value.text == "May 2023"
        assert exc_info.value.pattern == "YYYY-MM"

    def test_out_of_range_month(self):
        with pytest.raises(DateParseError):
            parse_date("2023-13", TimeFrame.MONTH)


class TestParseTimestamp:
    def test_offset_applied(self):
        parsed = parse_timestamp("2023-05-01, 13:45:30.123 (+02:00)")
        assert parsed == datetime(2023, 5, 1, 11, 45, 30, 123000, tzinfo=timezone.utc)

    def test_expressed_in_ambient_zone(self, tokyo):
        parsed = parse_timestamp("2023-05-01, 00:00:00.000 (+00:00)")
        assert parsed.hour == 9

    @pytest.mark.parametrize(
        ("text", "interval"),
        [
            ("2023-05-01, 13 (+00:00)", TimeFrame.HOUR),
            ("2023-05-01, 13:45 (+00:00)", TimeFrame.MINUTE),
            ("2023-05-01, 13:45:30 (+00:00)", TimeFrame.SECOND),
            ("2023-05-01, 13:45:30.123 (+00:00)", TimeFrame.MILLISECOND),
        ],
    )
    def test_round_trip(self, text, interval):
        assert format_timestamp(parse_timestamp(text, interval), interval) == text

    def test_missing_offset(self):
        with pytest.raises(DateParseError):
            parse_timestamp("2023-05-01, 13:45:30.123")
