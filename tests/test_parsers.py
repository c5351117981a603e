from __future__ import annotations

import datetime as dt

import pytest

from climacell_weather.parsers import (
    ZERO_TIME,
    format_coordinate,
    format_timestamp,
    is_zero_time,
    parse_date,
    parse_time_or_date,
    parse_timestamp,
)

UTC = dt.timezone.utc


class TestParseTimestamp:
    def test_utc_designator(self):
        assert parse_timestamp("2020-05-01T00:00:00Z") == dt.datetime(2020, 5, 1, tzinfo=UTC)

    def test_milliseconds(self):
        result = parse_timestamp("2020-04-12T10:13:22.789Z")
        assert result == dt.datetime(2020, 4, 12, 10, 13, 22, 789000, tzinfo=UTC)

    def test_nanoseconds_truncated(self):
        result = parse_timestamp("2020-04-12T10:13:22.123456789Z")
        assert result.microsecond == 123456

    def test_numeric_offset(self):
        result = parse_timestamp("2020-05-01T02:00:00+02:00")

        assert result.utcoffset() == dt.timedelta(hours=2)
        assert result == dt.datetime(2020, 5, 1, tzinfo=UTC)

    @pytest.mark.parametrize(
        "value",
        [
            "2020-05-01",
            "2020-05-01T00:00:00",
            "2020-05-01 00:00:00Z",
            "2020-13-01T00:00:00Z",
            "",
            "not a time",
        ],
    )
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_timestamp(value)


class TestParseTimeOrDate:
    def test_timestamp_first(self):
        result = parse_time_or_date("2020-04-12T12:00:00.000Z")
        assert result == dt.datetime(2020, 4, 12, 12, tzinfo=UTC)

    def test_bare_date_is_midnight_utc(self):
        result = parse_time_or_date("2020-05-01")

        assert result == dt.datetime(2020, 5, 1, tzinfo=UTC)
        assert result.tzinfo is not None

    @pytest.mark.parametrize("value", ["2020-5-1", "2020-02-30", "yesterday", "2020-05-01T00:00"])
    def test_invalid(self, value):
        with pytest.raises(ValueError, match="Invalid observation time"):
            parse_time_or_date(value)

    def test_parse_date_rejects_timestamp(self):
        with pytest.raises(ValueError):
            parse_date("2020-05-01T00:00:00Z")


class TestIsZeroTime:
    def test_none(self):
        assert is_zero_time(None)

    def test_zero_instant(self):
        assert is_zero_time(ZERO_TIME)

    def test_naive_zero_instant(self):
        assert is_zero_time(dt.datetime(1, 1, 1))

    def test_real_time(self):
        assert not is_zero_time(dt.datetime(2020, 5, 1, tzinfo=UTC))


class TestFormatTimestamp:
    def test_utc_uses_z(self):
        assert format_timestamp(dt.datetime(2024, 1, 1, tzinfo=UTC)) == "2024-01-01T00:00:00Z"

    def test_naive_is_utc(self):
        assert format_timestamp(dt.datetime(2024, 1, 1, 6, 30)) == "2024-01-01T06:30:00Z"

    def test_offset_kept(self):
        tz = dt.timezone(dt.timedelta(hours=-5))
        assert format_timestamp(dt.datetime(2024, 1, 1, 8, tzinfo=tz)) == "2024-01-01T08:00:00-05:00"

    def test_microseconds_dropped(self):
        value = dt.datetime(2024, 1, 1, 0, 0, 1, 999999, tzinfo=UTC)
        assert format_timestamp(value) == "2024-01-01T00:00:01Z"


class TestFormatCoordinate:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (11.3, "11.3"),
            (52.4, "52.4"),
            (52.0, "52"),
            (100.0, "100"),
            (-71.146, "-71.146"),
            (42.38261234567891, "42.38261234567891"),
            (1e-07, "0.0000001"),
            (0.1 + 0.2, "0.30000000000000004"),
            (91, "91"),
        ],
    )
    def test_shortest_plain_form(self, value, expected):
        assert format_coordinate(value) == expected
