"""Tests for src.filters.dates."""

from __future__ import annotations

from datetime import UTC, date, datetime

import pytest

from src.filters.dates import day_string, epoch, format_day, parse_bound, parse_timestamp, to_iso_utc


class TestParse:
    def test_date_only_is_midnight_utc(self):
        assert parse_timestamp("2023-12-01") == datetime(2023, 12, 1, tzinfo=UTC)

    def test_zulu_suffix(self):
        assert parse_timestamp("2023-12-01T10:00:00Z") == datetime(2023, 12, 1, 10, tzinfo=UTC)

    def test_naive_is_utc(self):
        assert parse_timestamp("2023-12-01T10:00:00").tzinfo is UTC

    @pytest.mark.parametrize("value", [None, "", "garbage", "2023-02-30", "12/01/2023"])
    def test_invalid_is_none(self, value):
        assert parse_timestamp(value) is None

    def test_end_of_day_for_date_only(self):
        end = parse_bound("2023-12-01", end_of_day=True)
        assert to_iso_utc(end) == "2023-12-01T23:59:59.999Z"

    def test_end_of_day_keeps_explicit_time(self):
        end = parse_bound("2023-12-01T06:00:00Z", end_of_day=True)
        assert to_iso_utc(end) == "2023-12-01T06:00:00.000Z"


class TestFormat:
    def test_day(self):
        assert format_day("2023-12-01T23:00:00Z") == "01/12/2023"
        assert format_day("nope") is None

    def test_day_string(self):
        assert day_string(date(2024, 1, 5)) == "2024-01-05"
        assert day_string(None) is None

    def test_epoch_default(self):
        assert epoch("bad", -1.0) == -1.0
        assert epoch("1970-01-01T00:01:00Z", 0.0) == 60.0
