"""Tests for input validation."""

from datetime import date, datetime, timezone

import pytest

from datepicker import CalendarDate, ConfigurationError, DatepickerError
from datepicker.validation import (
    parse_date,
    parse_disabled_days,
    validate_drag_ratio,
    validate_first_day_of_week,
)


class TestParseDate:
    """Test parse_date function."""

    def test_iso_date(self):
        assert parse_date("2024-01-05") == CalendarDate(2024, 0, 5)

    def test_json_timestamp(self):
        """Timestamps as produced by Date.prototype.toJSON are accepted."""
        assert parse_date("2024-01-05T00:00:00.000Z") == CalendarDate(2024, 0, 5)

    def test_offset_timestamp_converted_to_utc(self):
        assert parse_date("2024-01-05T23:30:00-05:00") == CalendarDate(2024, 0, 6)

    def test_date_and_datetime_objects(self):
        assert parse_date(date(2024, 2, 29)) == CalendarDate(2024, 1, 29)
        assert parse_date(datetime(2024, 2, 29, 12, 0)) == CalendarDate(2024, 1, 29)
        aware = datetime(2024, 3, 1, 1, 0, tzinfo=timezone.utc)
        assert parse_date(aware) == CalendarDate(2024, 2, 1)

    def test_calendar_date_passes_through(self):
        d = CalendarDate(2024, 0, 1)
        assert parse_date(d) is d

    @pytest.mark.parametrize("value", [None, "", "   ", "not-a-date", "2024-02-30", "2024-13-01", 20240105, [2024, 1, 5]])
    def test_malformed_returns_none(self, value):
        assert parse_date(value) is None

    @pytest.mark.parametrize(
        "value",
        ["0001-01-01", "0001-12-31", "9999-01-01", "9999-12-31T00:00:00Z", CalendarDate(9999, 11, 31)],
    )
    def test_first_and_last_datetime_years_are_rejected(self, value):
        assert parse_date(value) is None

    def test_supported_bounds_are_accepted(self):
        assert parse_date("0002-01-01") == CalendarDate(2, 0, 1)
        assert parse_date("9998-12-31") == CalendarDate(9998, 11, 31)


class TestParseDisabledDays:
    """Test parse_disabled_days function."""

    def test_comma_separated_string(self):
        assert parse_disabled_days("0,6") == frozenset({0, 6})

    def test_invalid_entries_are_dropped_individually(self):
        assert parse_disabled_days("0, x, 9, 3") == frozenset({0, 3})

    def test_iterable_of_ints(self):
        assert parse_disabled_days([1, "2", 7, -1, True, None]) == frozenset({1, 2})

    def test_none_and_empty(self):
        assert parse_disabled_days(None) == frozenset()
        assert parse_disabled_days("") == frozenset()

    @pytest.mark.parametrize("value", [3, 2.5, object()])
    def test_non_iterable_raises(self, value):
        with pytest.raises(ConfigurationError, match="disabled_days"):
            parse_disabled_days(value)


class TestConfigurationValidators:
    """Test constructor-time validators."""

    def test_first_day_of_week(self):
        assert validate_first_day_of_week(1) == 1
        assert validate_first_day_of_week("6") == 6
        with pytest.raises(ConfigurationError, match="first_day_of_week"):
            validate_first_day_of_week(7)

    def test_drag_ratio(self):
        assert validate_drag_ratio(0.5) == 0.5
        assert validate_drag_ratio("0.25") == 0.25
        with pytest.raises(ConfigurationError):
            validate_drag_ratio(0)
        with pytest.raises(ConfigurationError):
            validate_drag_ratio(1.5)
        with pytest.raises(ConfigurationError, match="number"):
            validate_drag_ratio("abc")

    def test_configuration_error_hierarchy(self):
        """ConfigurationError is both a DatepickerError and a ValueError."""
        assert issubclass(ConfigurationError, DatepickerError)
        assert issubclass(ConfigurationError, ValueError)
