"""Input validation for datepicker configuration and property assignment."""

from collections.abc import Iterable
from datetime import date, datetime, timezone
from typing import Any

from datepicker.dates import CalendarDate, is_supported
from datepicker.logging import get_logger

_log = get_logger(__name__)


class DatepickerError(Exception):
    """Base class for datepicker errors."""
    pass


class ConfigurationError(DatepickerError, ValueError):
    """Raised when a datepicker is constructed with an invalid configuration."""
    pass


def parse_date(value: Any) -> CalendarDate | None:
    """Parse a date-like value into a CalendarDate.

    Accepts CalendarDate, date/datetime objects and ISO 8601 strings
    (``2024-01-05`` or ``2024-01-05T00:00:00.000Z``). Aware datetimes are
    converted to UTC before the calendar day is taken.

    Returns:
        The parsed date, or None when the value is malformed or lies outside
        years 2-9998.
    """
    parsed = _parse(value)
    if parsed is None or not is_supported(parsed):
        return None
    return parsed


def _parse(value: Any) -> CalendarDate | None:
    if isinstance(value, CalendarDate):
        return value
    if isinstance(value, datetime):
        return _from_datetime(value)
    if isinstance(value, date):
        return CalendarDate.from_date(value)
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        if len(text) == 10:
            return CalendarDate.from_date(date.fromisoformat(text))
        return _from_datetime(datetime.fromisoformat(text))
    except (ValueError, OverflowError):
        return None


def _from_datetime(value: datetime) -> CalendarDate:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return CalendarDate.from_date(value.date())


def parse_disabled_days(value: Any) -> frozenset[int]:
    """Parse a list of disabled weekdays.

    Accepts a comma separated string (``"0,6"``) or an iterable of ints.
    Entries that are not weekday indices (0-6) are dropped one by one;
    valid entries still apply.

    Raises:
        ConfigurationError: If ``value`` is neither a string nor iterable.
    """
    if value is None:
        return frozenset()
    if isinstance(value, str):
        entries: Iterable[Any] = [part.strip() for part in value.split(",") if part.strip()]
    elif isinstance(value, Iterable):
        entries = value
    else:
        raise ConfigurationError(f"disabled_days must be a string or a list, got {value!r}")

    days = set()
    for entry in entries:
        day = _to_weekday(entry)
        if day is None:
            _log.debug("disabled_day_ignored", entry=repr(entry))
            continue
        days.add(day)
    return frozenset(days)


def _to_weekday(entry: Any) -> int | None:
    if isinstance(entry, bool):
        return None
    if isinstance(entry, int):
        day = entry
    elif isinstance(entry, str) and entry.isdigit():
        day = int(entry)
    else:
        return None
    return day if 0 <= day <= 6 else None


def validate_first_day_of_week(value: Any) -> int:
    """Return the weekday index or raise ConfigurationError."""
    day = _to_weekday(value)
    if day is None:
        raise ConfigurationError(f"first_day_of_week must be 0-6, got {value!r}")
    return day


def validate_drag_ratio(value: Any) -> float:
    """Return the drag ratio as a float in (0, 1] or raise ConfigurationError."""
    try:
        ratio = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"drag_ratio must be a number, got {value!r}") from None
    if not 0 < ratio <= 1:
        raise ConfigurationError(f"drag_ratio must be in (0, 1], got {ratio}")
    return ratio
