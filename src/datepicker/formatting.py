"""Locale-aware date label formatting."""

from datetime import datetime, timezone
from functools import lru_cache
from typing import Literal, Protocol

from babel.core import Locale, UnknownLocaleError, default_locale
from babel.dates import format_skeleton, get_day_names, get_month_names

from datepicker.dates import CalendarDate
from datepicker.label_cache import LabelCache, LabelKey, get_label_cache

WeekdayStyle = Literal["narrow", "short", "long"]
MonthStyle = Literal["numeric", "short", "long"]
NumericStyle = Literal["numeric"]

_WEEKDAY_WIDTHS = {"narrow": "narrow", "short": "abbreviated", "long": "wide"}
_MONTH_WIDTHS = {"narrow": "narrow", "short": "abbreviated", "long": "wide"}
_WEEKDAY_SKELETON = {"narrow": "EEEEE", "short": "E", "long": "EEEE"}
_MONTH_SKELETON = {"numeric": "M", "short": "MMM", "long": "MMMM"}


class DateFormatter(Protocol):
    """Formats a calendar date for display in a locale."""

    def format(
        self,
        value: CalendarDate,
        locale: str,
        *,
        weekday: WeekdayStyle | None = None,
        month: MonthStyle | None = None,
        day: NumericStyle | None = None,
        year: NumericStyle | None = None,
    ) -> str:
        ...


@lru_cache(maxsize=64)
def parse_locale(tag: str) -> Locale:
    """Parse a BCP 47 (``en-US``) or POSIX (``en_US``) locale tag."""
    return Locale.parse(tag.replace("-", "_"))


def is_known_locale(tag: str) -> bool:
    try:
        parse_locale(tag)
    except (UnknownLocaleError, ValueError, TypeError):
        return False
    return True


def resolve_default_locale() -> str:
    """Resolve the host environment's locale, falling back to ``en-US``."""
    tag = default_locale()
    if tag and is_known_locale(tag):
        return str(parse_locale(tag)).replace("_", "-")
    return "en-US"


class BabelDateFormatter:
    """DateFormatter backed by Babel's CLDR data."""

    def format(
        self,
        value: CalendarDate,
        locale: str,
        *,
        weekday: WeekdayStyle | None = None,
        month: MonthStyle | None = None,
        day: NumericStyle | None = None,
        year: NumericStyle | None = None,
    ) -> str:
        loc = parse_locale(locale)

        # Single names come straight from the CLDR name tables.
        if weekday and not (month or day or year):
            # Babel indexes weekdays from Monday.
            names = get_day_names(_WEEKDAY_WIDTHS[weekday], context="format", locale=loc)
            return names[(value.weekday + 6) % 7]
        if month and month != "numeric" and not (weekday or day or year):
            names = get_month_names(_MONTH_WIDTHS[month], context="stand-alone", locale=loc)
            return names[value.month + 1]

        skeleton = ""
        if year:
            skeleton += "y"
        if month:
            skeleton += _MONTH_SKELETON[month]
        if weekday:
            skeleton += _WEEKDAY_SKELETON[weekday]
        if day:
            skeleton += "d"
        if not skeleton:
            raise ValueError("At least one of weekday, month, day or year is required")

        instant = datetime(value.year, value.month + 1, value.day, tzinfo=timezone.utc)
        return format_skeleton(skeleton, instant, tzinfo=timezone.utc, locale=loc)


class MemoizedFormatter:
    """Wraps a DateFormatter so each distinct label is formatted once."""

    def __init__(self, formatter: DateFormatter | None = None, cache: LabelCache | None = None):
        self._formatter = formatter or BabelDateFormatter()
        self._cache = cache

    @property
    def cache(self) -> LabelCache:
        return self._cache or get_label_cache()

    def format(
        self,
        value: CalendarDate,
        locale: str,
        *,
        weekday: WeekdayStyle | None = None,
        month: MonthStyle | None = None,
        day: NumericStyle | None = None,
        year: NumericStyle | None = None,
    ) -> str:
        options = {"weekday": weekday, "month": month, "day": day, "year": year}
        key = LabelKey.make(locale, options, value.year, value.month, value.day, value.weekday)
        return self.cache.get_or_format(
            key,
            lambda: self._formatter.format(
                value, locale, weekday=weekday, month=month, day=day, year=year
            ),
        )
