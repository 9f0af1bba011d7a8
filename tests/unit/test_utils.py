"""
Unit tests for input validation and date helpers.
"""

import datetime as dt

import pytest

from syncboard.utils.dates import (
    parse_calendar_date,
    parse_instant,
    to_comparable_instant,
)
from syncboard.utils.validation import (
    InputValidationError,
    validate_limit,
    validate_record_id,
    validate_slot_name,
)

UTC = dt.timezone.utc


class TestValidateRecordId:
    """Tests for validate_record_id"""

    @pytest.mark.parametrize("value", ["abc123", "3f2a-9c_0d", "1700000000000.42"])
    def test_valid_ids(self, value):
        assert validate_record_id(value) == value

    def test_strips_whitespace(self):
        assert validate_record_id("  abc  ") == "abc"

    @pytest.mark.parametrize("value", ["", "   ", "a b", "../x", "a/b", "x" * 256])
    def test_invalid_ids(self, value):
        with pytest.raises(InputValidationError):
            validate_record_id(value)


class TestValidateSlotName:
    """Tests for validate_slot_name"""

    def test_valid(self):
        assert validate_slot_name("last_sync") == "last_sync"

    @pytest.mark.parametrize("value", ["", "../etc", "1records", "a.b", "x" * 65])
    def test_invalid(self, value):
        with pytest.raises(InputValidationError):
            validate_slot_name(value)


class TestValidateLimit:
    """Tests for validate_limit"""

    def test_valid(self):
        assert validate_limit(30) == 30

    @pytest.mark.parametrize("value", [0, -1, 10001, True, "30", 2.5])
    def test_invalid(self, value):
        with pytest.raises(InputValidationError):
            validate_limit(value)


class TestDates:
    """Tests for date and instant parsing"""

    @pytest.mark.parametrize("value", [
        "2024-01-31",
        " 2024-01-31 ",
        "2024-01-31T10:00:00Z",
        "2024-01-31T10:00:00.000Z",
        dt.datetime(2024, 1, 31, 10),
        dt.date(2024, 1, 31),
    ])
    def test_parse_calendar_date(self, value):
        assert parse_calendar_date(value) == dt.date(2024, 1, 31)

    def test_parse_calendar_date_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_calendar_date("Jan 31")

    def test_parse_instant_normalizes_to_utc(self):
        assert parse_instant("2024-01-31T12:00:00+02:00") == dt.datetime(2024, 1, 31, 10, tzinfo=UTC)
        assert parse_instant("2024-01-31T12:00:00Z") == dt.datetime(2024, 1, 31, 12, tzinfo=UTC)

    def test_naive_instant_is_utc(self):
        assert parse_instant(dt.datetime(2024, 1, 31, 12)).tzinfo == UTC

    def test_comparable_instant_mixes_dates_and_timestamps(self):
        day = to_comparable_instant(dt.date(2024, 1, 31))
        later_same_day = to_comparable_instant("2024-01-31T09:00:00Z")

        assert day < later_same_day
        assert to_comparable_instant("2024-01-31") == day

    def test_comparable_instant_rejects_other_types(self):
        with pytest.raises(TypeError):
            to_comparable_instant(42)
