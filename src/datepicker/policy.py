"""Range and disabled-weekday policy."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from datepicker.dates import MAX_SUPPORTED_DATE, MIN_SUPPORTED_DATE, CalendarDate, is_supported
from datepicker.validation import ConfigurationError

if TYPE_CHECKING:
    from datepicker.grid import MonthGrid, TripleMonthView

WEEKENDS = frozenset({0, 6})


@dataclass(frozen=True)
class NavigationRange:
    """Inclusive [min, max] range of selectable dates.

    Both bounds must lie within years 2-9998.
    """

    min: CalendarDate
    max: CalendarDate

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ConfigurationError(f"min ({self.min}) must not be after max ({self.max})")
        if not (is_supported(self.min) and is_supported(self.max)):
            raise ConfigurationError(
                f"range {self.min}..{self.max} must lie within "
                f"{MIN_SUPPORTED_DATE}..{MAX_SUPPORTED_DATE}"
            )

    def contains(self, value: CalendarDate) -> bool:
        return self.min <= value <= self.max

    def clamp(self, value: CalendarDate) -> CalendarDate:
        if value < self.min:
            return self.min
        if value > self.max:
            return self.max
        return value

    def overlaps_month(self, value: CalendarDate) -> bool:
        """True if any day of ``value``'s month lies inside the range."""
        return not (value.last_of_month() < self.min or value.first_of_month() > self.max)


def is_date_disabled(
    value: CalendarDate,
    date_range: NavigationRange,
    disabled_days: Iterable[int] = WEEKENDS,
) -> bool:
    """Return True when ``value`` cannot be selected.

    A date is disabled when it falls outside ``date_range`` or its weekday
    (0 = Sunday) is one of ``disabled_days``.
    """
    if not date_range.contains(value):
        return True
    return value.weekday in disabled_days


def disabled_dates(
    grids: "TripleMonthView | MonthGrid | None",
    date_range: NavigationRange,
    disabled_days: Iterable[int] = WEEKENDS,
) -> frozenset[CalendarDate]:
    """Evaluate the policy over already built grids.

    Padding cells have no date and are never reported.
    """
    from datepicker.grid import MonthGrid

    if grids is None:
        return frozenset()
    months = [grids] if isinstance(grids, MonthGrid) else [m for m in grids if m is not None]
    disabled_days = frozenset(disabled_days)
    return frozenset(
        cell.date
        for month in months
        for cell in month.day_cells()
        if is_date_disabled(cell.date, date_range, disabled_days)
    )
