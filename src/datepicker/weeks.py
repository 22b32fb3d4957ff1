"""Week numbering rules for calendar grids."""

from abc import ABC, abstractmethod
from math import ceil

from datepicker.dates import CalendarDate
from datepicker.validation import ConfigurationError


class WeekNumbering(ABC):
    """Abstract base class for week numbering rules.

    A rule maps the first date of a displayed week (whatever weekday the
    grid starts on) to that week's number.
    """

    name: str

    @abstractmethod
    def anchor(self, week_start: CalendarDate) -> CalendarDate:
        """Return the date that decides which year (or month) the week belongs to."""
        pass

    def week_number(self, week_start: CalendarDate, month: CalendarDate | None = None) -> int:
        """Number the week starting at ``week_start``.

        ``month`` is the month the row is displayed in; only week-of-month
        numbering uses it.
        """
        anchor = self.anchor(week_start)
        day_of_year = anchor.ordinal - CalendarDate(anchor.year, 0, 1).ordinal + 1
        return ceil(day_of_year / 7)


class FirstFourDayWeek(WeekNumbering):
    """Week 1 is the first week with four or more days in the new year.

    With Monday-started weeks this is ISO 8601 numbering.
    """

    name = "first-4-day-week"

    def anchor(self, week_start: CalendarDate) -> CalendarDate:
        return week_start.add_days(3)


class FirstFullWeek(WeekNumbering):
    """Week 1 is the first week lying entirely inside the new year."""

    name = "first-full-week"

    def anchor(self, week_start: CalendarDate) -> CalendarDate:
        return week_start


class FirstDayOfYear(WeekNumbering):
    """Week 1 is the week containing January 1."""

    name = "first-day-of-year"

    def anchor(self, week_start: CalendarDate) -> CalendarDate:
        return week_start.add_days(6)


class FirstDayOfMonth(WeekNumbering):
    """Week-of-month numbering: week 1 contains the 1st of the month.

    Rows are counted within the displayed month, so a trailing row that
    spills into the next month keeps counting (5 or 6). Without a month the
    week is numbered within the month of its last day.
    """

    name = "first-day-of-month"

    def anchor(self, week_start: CalendarDate) -> CalendarDate:
        return week_start.add_days(6)

    def week_number(self, week_start: CalendarDate, month: CalendarDate | None = None) -> int:
        first = (month or self.anchor(week_start)).first_of_month()
        lead = (first.weekday - week_start.weekday) % 7
        return (week_start.ordinal - first.ordinal + lead) // 7 + 1


_RULES: dict[str, WeekNumbering] = {
    rule.name: rule
    for rule in (FirstFourDayWeek(), FirstFullWeek(), FirstDayOfYear(), FirstDayOfMonth())
}

WEEK_NUMBERING_RULES = tuple(_RULES)


def get_week_numbering(rule: "str | WeekNumbering") -> WeekNumbering:
    """Look up a week numbering rule by name."""
    if isinstance(rule, WeekNumbering):
        return rule
    try:
        return _RULES[rule]
    except KeyError:
        raise ConfigurationError(
            f"Unknown week numbering rule: {rule!r} (expected one of {WEEK_NUMBERING_RULES})"
        ) from None
