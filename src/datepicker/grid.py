"""Calendar grid construction for one month or a three-month strip."""

from dataclasses import dataclass
from math import ceil
from typing import Iterator, NamedTuple

from datepicker.dates import CalendarDate
from datepicker.formatting import DateFormatter, MemoizedFormatter
from datepicker.policy import NavigationRange
from datepicker.weeks import WeekNumbering, get_week_numbering


class DayCell(NamedTuple):
    """One grid cell.

    ``date`` is None for padding cells and for the week-number column; a
    week-number cell carries ``week_number`` instead.
    """

    date: CalendarDate | None
    label: str | None
    aria_label: str | None = None
    week_number: int | None = None

    @property
    def is_padding(self) -> bool:
        return self.date is None and self.week_number is None


PADDING = DayCell(date=None, label=None)


class WeekRow(NamedTuple):
    """A displayed week: optional week-number cell followed by 7 day cells."""

    start: CalendarDate  # Date in the first day column, possibly spillover
    cells: tuple[DayCell, ...]

    @property
    def days(self) -> tuple[DayCell, ...]:
        return self.cells[-7:]

    @property
    def week_number(self) -> int | None:
        return self.cells[0].week_number if len(self.cells) == 8 else None

    def dates(self) -> list[CalendarDate]:
        """All 7 dates of the week, including those of adjacent months."""
        return [self.start.add_days(i) for i in range(7)]


class WeekdayHeader(NamedTuple):
    label: str  # Long name, for assistive labels
    value: str  # Narrow name, as displayed


@dataclass(frozen=True)
class MonthGrid:
    month: CalendarDate  # First day of the month
    label: str
    rows: tuple[WeekRow, ...]

    def day_cells(self) -> Iterator[DayCell]:
        """Yield cells that carry a date, in display order."""
        for row in self.rows:
            for cell in row.days:
                if cell.date is not None:
                    yield cell

    def dates(self) -> list[CalendarDate]:
        return [cell.date for cell in self.day_cells()]


@dataclass(frozen=True)
class TripleMonthView:
    """Previous, current and next month around a pivot date.

    A slot is None when its whole month lies outside the navigation range.
    """

    pivot: CalendarDate
    previous: MonthGrid | None
    current: MonthGrid | None
    next: MonthGrid | None

    def __iter__(self) -> Iterator[MonthGrid | None]:
        return iter((self.previous, self.current, self.next))

    def __len__(self) -> int:
        return 3

    @property
    def has_previous(self) -> bool:
        return self.previous is not None

    @property
    def has_next(self) -> bool:
        return self.next is not None


def _month_start(year: int, month: int) -> CalendarDate | None:
    try:
        return CalendarDate.utc(year, month, 1)
    except ValueError:
        # Past year 1 or 9999.
        return None


def three_months_around(
    pivot: CalendarDate,
) -> tuple[CalendarDate | None, CalendarDate, CalendarDate | None]:
    """Return the first days of the months before, of, and after ``pivot``.

    A neighbour that ``datetime`` cannot represent is None.
    """
    first = pivot.first_of_month()
    return (
        _month_start(first.year, first.month - 1),
        first,
        _month_start(first.year, first.month + 1),
    )


def build_weekday_headers(
    first_day_of_week: int = 0,
    show_week_number: bool = False,
    formatter: DateFormatter | None = None,
    locale: str = "en-US",
) -> list[WeekdayHeader]:
    formatter = formatter or MemoizedFormatter()
    # 2017-01-01 is a Sunday, so day N of that week has weekday N.
    headers = [
        WeekdayHeader(
            label=formatter.format(sample, locale, weekday="long"),
            value=formatter.format(sample, locale, weekday="narrow"),
        )
        for sample in (
            CalendarDate(2017, 0, 1 + (first_day_of_week + i) % 7) for i in range(7)
        )
    ]
    if show_week_number:
        headers.insert(0, WeekdayHeader(label="Week", value="Wk"))
    return headers


def build_month_grid(
    month: CalendarDate,
    first_day_of_week: int = 0,
    show_week_number: bool = False,
    week_numbering: "str | WeekNumbering" = "first-4-day-week",
    formatter: DateFormatter | None = None,
    locale: str = "en-US",
) -> MonthGrid:
    """Build the week rows for ``month``'s month.

    Leading and trailing positions that belong to adjacent months are padding
    cells, so every row holds exactly 7 day cells.
    """
    formatter = formatter or MemoizedFormatter()
    numbering = get_week_numbering(week_numbering)
    first = month.first_of_month()
    lead = (first.weekday - first_day_of_week) % 7
    start = first.add_days(-lead)
    row_count = ceil((lead + first.days_in_month) / 7)

    rows = []
    for r in range(row_count):
        row_start = start.add_days(r * 7)
        cells = []
        if show_week_number:
            wk = numbering.week_number(row_start, month=first)
            cells.append(DayCell(date=None, label=str(wk), aria_label=f"Week {wk}", week_number=wk))
        for i in range(7):
            day = row_start.add_days(i)
            if not day.same_month(first):
                cells.append(PADDING)
                continue
            cells.append(
                DayCell(
                    date=day,
                    label=formatter.format(day, locale, day="numeric"),
                    aria_label=formatter.format(
                        day, locale, year="numeric", month="short", day="numeric"
                    ),
                )
            )
        rows.append(WeekRow(start=row_start, cells=tuple(cells)))

    label = formatter.format(first, locale, year="numeric", month="long")
    return MonthGrid(month=first, label=label, rows=tuple(rows))


def build_triple_month_view(
    pivot: CalendarDate,
    date_range: NavigationRange,
    first_day_of_week: int = 0,
    show_week_number: bool = False,
    week_numbering: "str | WeekNumbering" = "first-4-day-week",
    formatter: DateFormatter | None = None,
    locale: str = "en-US",
) -> TripleMonthView:
    """Build the previous, pivot and next month grids.

    Months entirely before ``date_range.min`` or after ``date_range.max`` are
    left as None and not built.
    """
    formatter = formatter or MemoizedFormatter()
    numbering = get_week_numbering(week_numbering)
    slots = [
        build_month_grid(
            month,
            first_day_of_week=first_day_of_week,
            show_week_number=show_week_number,
            week_numbering=numbering,
            formatter=formatter,
            locale=locale,
        )
        if month is not None and date_range.overlaps_month(month)
        else None
        for month in three_months_around(pivot)
    ]
    return TripleMonthView(pivot, *slots)
