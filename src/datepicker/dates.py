"""Calendar date primitive anchored to UTC calendar days."""

from calendar import monthrange
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta, timezone


@dataclass(frozen=True, order=True)
class CalendarDate:
    """A (year, month, day) value with no time-of-day component.

    ``month`` is zero-based (0 = January .. 11 = December). Field order makes
    the dataclass ordering chronological.
    """

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        # Validates the fields; raises ValueError on impossible dates.
        date(self.year, self.month + 1, self.day)

    @classmethod
    def utc(cls, year: int, month: int, day: int) -> "CalendarDate":
        """Build a date, normalizing month and day overflow.

        Day 0 is the last day of the previous month, month 12 is January of
        the next year, and so on.
        """
        carry, month = divmod(month, 12)
        first = date(year + carry, month + 1, 1)
        return cls.from_date(first + timedelta(days=day - 1))

    @classmethod
    def from_date(cls, value: date) -> "CalendarDate":
        return cls(value.year, value.month - 1, value.day)

    def to_date(self) -> date:
        return date(self.year, self.month + 1, self.day)

    @property
    def weekday(self) -> int:
        """Weekday index with 0 = Sunday .. 6 = Saturday."""
        return (self.to_date().weekday() + 1) % 7

    @property
    def ordinal(self) -> int:
        return self.to_date().toordinal()

    @property
    def days_in_month(self) -> int:
        return monthrange(self.year, self.month + 1)[1]

    def same_month(self, other: "CalendarDate") -> bool:
        return self.year == other.year and self.month == other.month

    def first_of_month(self) -> "CalendarDate":
        return CalendarDate(self.year, self.month, 1)

    def last_of_month(self) -> "CalendarDate":
        return CalendarDate(self.year, self.month, self.days_in_month)

    def add_days(self, days: int) -> "CalendarDate":
        return CalendarDate.from_date(self.to_date() + timedelta(days=days))

    def add_months(self, months: int) -> "CalendarDate":
        """Shift by N months, clamping the day to the target month's length."""
        target = CalendarDate.utc(self.year, self.month + months, 1)
        return CalendarDate(target.year, target.month, min(self.day, target.days_in_month))

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month + 1:02d}-{self.day:02d}"

    def __str__(self) -> str:
        return self.isoformat()


def today_utc() -> CalendarDate:
    """Return today's calendar date in UTC."""
    return CalendarDate.from_date(datetime.now(timezone.utc).date())


# Dates accepted as navigation bounds: one year inside datetime's limits, so
# neighbouring months, year moves and spillover weeks stay representable.
MIN_SUPPORTED_DATE = CalendarDate(MINYEAR + 1, 0, 1)
MAX_SUPPORTED_DATE = CalendarDate(MAXYEAR - 1, 11, 31)


def is_supported(value: CalendarDate) -> bool:
    return MIN_SUPPORTED_DATE <= value <= MAX_SUPPORTED_DATE
