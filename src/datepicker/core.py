"""Datepicker state holder wiring the grid, policy, keyboard and drag engines."""

from dataclasses import dataclass, replace
from typing import Any, Callable, Literal, Protocol

from datepicker.config import get_datepicker_config
from datepicker.dates import CalendarDate, today_utc
from datepicker.drag import (
    DragEvent,
    DragResult,
    DragState,
    MonthStep,
    Pointer,
    PointerDown,
    PointerMove,
    PointerUp,
    SettleAnimation,
    SettleFinished,
    track_drag,
)
from datepicker.formatting import (
    DateFormatter,
    MemoizedFormatter,
    is_known_locale,
    resolve_default_locale,
)
from datepicker.grid import TripleMonthView, WeekdayHeader, build_triple_month_view, build_weekday_headers
from datepicker.keyboard import NavigationState, View, is_navigation_key, navigate_with_keyboard
from datepicker.logging import get_logger, timed_block
from datepicker.policy import NavigationRange, disabled_dates, is_date_disabled
from datepicker.validation import (
    ConfigurationError,
    parse_date,
    parse_disabled_days,
    validate_drag_ratio,
    validate_first_day_of_week,
)
from datepicker.weeks import get_week_numbering

VIEWS = ("calendar", "year")


class AnimationScheduler(Protocol):
    """Runs ``callback`` once the visual transition for ``animation`` completes."""

    def schedule(self, animation: SettleAnimation, callback: Callable[[], None]) -> None:
        ...


@dataclass(frozen=True)
class CalendarViewModel:
    """Everything needed to draw the calendar view."""

    weekdays: tuple[WeekdayHeader, ...]
    months: TripleMonthView
    disabled: frozenset[CalendarDate]
    selected_date: CalendarDate
    focused_date: CalendarDate
    today: CalendarDate
    header_year: int
    header_label: str

    @property
    def has_previous(self) -> bool:
        return self.months.has_previous

    @property
    def has_next(self) -> bool:
        return self.months.has_next

    def is_disabled(self, value: CalendarDate) -> bool:
        return value in self.disabled


@dataclass(frozen=True)
class YearListViewModel:
    """Everything needed to draw the year list view."""

    years: tuple[int, ...]
    selected_year: int
    header_year: int
    header_label: str


class Datepicker:
    """Canonical datepicker state and its transitions.

    Holds the selected and focused dates, the active view, the navigation
    range and the drag state. Rendering layers read ``render()`` and feed
    keyboard, click and pointer input back through the methods below.
    """

    def __init__(
        self,
        min: CalendarDate | str | None = None,
        max: CalendarDate | str | None = None,
        first_day_of_week: int | None = None,
        show_week_number: bool | None = None,
        week_numbering: str | None = None,
        disabled_days: str | list[int] | None = None,
        locale: str | None = None,
        drag_ratio: float | None = None,
        start_view: View = "calendar",
        value: str | None = None,
        today: CalendarDate | None = None,
        formatter: DateFormatter | None = None,
        scheduler: AnimationScheduler | None = None,
    ) -> None:
        """Initialize a Datepicker.

        Args:
            min: Earliest selectable date. Defaults to today.
            max: Latest selectable date. Defaults to the configured max
                (2100-12-31).
            first_day_of_week: Weekday index (0 = Sunday) of the first column.
            show_week_number: Prepend a week-number column to each row.
            week_numbering: Week numbering rule name, e.g. "first-4-day-week".
            disabled_days: Weekday indices that cannot be selected, as a list
                or a comma separated string. Defaults to weekends.
            locale: Locale tag for labels. Defaults to the host locale.
            drag_ratio: Fraction of a panel width a drag must cover to
                change month.
            start_view: "calendar" or "year".
            value: Initial focused/selected date as ``YYYY-MM-DD``.
            today: Today's date. Defaults to the current UTC date.
            formatter: Date label formatter. Defaults to Babel, memoized.
            scheduler: Notified when a settle animation starts; expected to
                call back when it finishes. Without one, call
                ``settle_finished()`` yourself.

        Raises:
            ConfigurationError: If any argument is invalid or min > max.
        """
        config = get_datepicker_config()
        self._today = today or today_utc()

        parsed_min = self._require_date(min, "min") if min is not None else self._today
        parsed_max = self._require_date(max, "max") if max is not None else config.max
        self._range = NavigationRange(parsed_min, parsed_max)

        self._first_day_of_week = validate_first_day_of_week(
            config.first_day_of_week if first_day_of_week is None else first_day_of_week
        )
        self._show_week_number = bool(
            config.show_week_number if show_week_number is None else show_week_number
        )
        self._week_numbering = get_week_numbering(week_numbering or config.week_numbering).name
        self._disabled_days = (
            config.disabled_days if disabled_days is None else parse_disabled_days(disabled_days)
        )
        self._drag_ratio = validate_drag_ratio(
            config.drag_ratio if drag_ratio is None else drag_ratio
        )
        self._animation_duration_ms = config.animation_duration_ms

        resolved_locale = locale or config.locale or resolve_default_locale()
        if not is_known_locale(resolved_locale):
            raise ConfigurationError(f"Unknown locale: {resolved_locale!r}")
        self._locale = resolved_locale

        self._formatter = formatter or MemoizedFormatter()
        self._scheduler = scheduler

        initial = self._range.clamp(self._today)
        self._nav = NavigationState(selected_date=initial, focused_date=initial)
        self._start_view: View = "calendar"
        self._drag = DragState.idle()
        self._step_pending = False

        self._log = get_logger(__name__).bind(locale=self._locale)

        self.start_view = start_view
        if value is not None:
            self.value = value

        self._log.debug(
            "datepicker_created",
            min=str(self._range.min),
            max=str(self._range.max),
            first_day_of_week=self._first_day_of_week,
            week_numbering=self._week_numbering,
        )

    @staticmethod
    def _require_date(value: Any, name: str) -> CalendarDate:
        parsed = parse_date(value)
        if parsed is None:
            raise ConfigurationError(f"Invalid {name} date: {value!r}")
        return parsed

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def value(self) -> str:
        """Focused date as ``YYYY-MM-DD``.

        Assigning a malformed or out-of-range date is silently ignored.
        """
        return self._nav.focused_date.isoformat()

    @value.setter
    def value(self, val: Any) -> None:
        new_date = parse_date(val)
        if new_date is None or not self._range.contains(new_date):
            self._log.debug("value_rejected", value=repr(val))
            return
        self._nav = replace(self._nav, selected_date=new_date, focused_date=new_date)

    @property
    def start_view(self) -> View:
        return self._start_view

    @start_view.setter
    def start_view(self, val: Any) -> None:
        if val not in VIEWS:
            self._log.debug("start_view_rejected", value=repr(val))
            return
        self._start_view = val
        self._nav = replace(self._nav, selected_view=val)

    @property
    def min(self) -> CalendarDate:
        return self._range.min

    @min.setter
    def min(self, val: Any) -> None:
        self._set_range(parse_date(val), self._range.max, "min", val)

    @property
    def max(self) -> CalendarDate:
        return self._range.max

    @max.setter
    def max(self, val: Any) -> None:
        self._set_range(self._range.min, parse_date(val), "max", val)

    def _set_range(
        self,
        new_min: CalendarDate | None,
        new_max: CalendarDate | None,
        name: str,
        raw: Any,
    ) -> None:
        if new_min is None or new_max is None or new_min > new_max:
            self._log.debug("range_rejected", field=name, value=repr(raw))
            return
        self._range = NavigationRange(new_min, new_max)
        self._nav = replace(
            self._nav,
            selected_date=self._range.clamp(self._nav.selected_date),
            focused_date=self._range.clamp(self._nav.focused_date),
        )

    @property
    def date_range(self) -> NavigationRange:
        return self._range

    @property
    def disabled_days(self) -> frozenset[int]:
        return self._disabled_days

    @disabled_days.setter
    def disabled_days(self, val: Any) -> None:
        try:
            self._disabled_days = parse_disabled_days(val)
        except ConfigurationError:
            self._log.debug("disabled_days_rejected", value=repr(val))

    @property
    def locale(self) -> str:
        return self._locale

    @locale.setter
    def locale(self, val: Any) -> None:
        if not isinstance(val, str) or not is_known_locale(val):
            self._log.debug("locale_rejected", value=repr(val))
            return
        self._locale = val
        self._log = get_logger(__name__).bind(locale=val)

    @property
    def first_day_of_week(self) -> int:
        return self._first_day_of_week

    @first_day_of_week.setter
    def first_day_of_week(self, val: Any) -> None:
        try:
            self._first_day_of_week = validate_first_day_of_week(val)
        except ConfigurationError:
            self._log.debug("first_day_of_week_rejected", value=repr(val))

    @property
    def show_week_number(self) -> bool:
        return self._show_week_number

    @show_week_number.setter
    def show_week_number(self, val: Any) -> None:
        self._show_week_number = bool(val)

    @property
    def week_numbering(self) -> str:
        return self._week_numbering

    @week_numbering.setter
    def week_numbering(self, val: Any) -> None:
        try:
            self._week_numbering = get_week_numbering(val).name
        except ConfigurationError:
            self._log.debug("week_numbering_rejected", value=repr(val))

    @property
    def drag_ratio(self) -> float:
        return self._drag_ratio

    @property
    def today(self) -> CalendarDate:
        return self._today

    @property
    def selected_date(self) -> CalendarDate:
        return self._nav.selected_date

    @property
    def focused_date(self) -> CalendarDate:
        return self._nav.focused_date

    @property
    def selected_view(self) -> View:
        return self._nav.selected_view

    @property
    def navigation_state(self) -> NavigationState:
        return self._nav

    @property
    def drag_state(self) -> DragState:
        return self._drag

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def header_label(self) -> str:
        """Focused date as shown in the header, e.g. ``Fri, Jan 5``."""
        return self._formatter.format(
            self._nav.focused_date, self._locale, weekday="short", month="short", day="numeric"
        )

    def year_list(self) -> tuple[int, ...]:
        """Years offered by the year view: min's year through max's year."""
        return tuple(range(self._range.min.year, self._range.max.year + 1))

    def render(self) -> CalendarViewModel | YearListViewModel:
        """Build the view model for the active view."""
        nav = self._nav
        if nav.selected_view == "year":
            return YearListViewModel(
                years=self.year_list(),
                selected_year=nav.selected_date.year,
                header_year=nav.selected_date.year,
                header_label=self.header_label(),
            )

        with timed_block(self._log, "calendar_rendered", pivot=str(nav.selected_date)):
            weekdays = build_weekday_headers(
                self._first_day_of_week, self._show_week_number, self._formatter, self._locale
            )
            months = build_triple_month_view(
                nav.selected_date,
                self._range,
                first_day_of_week=self._first_day_of_week,
                show_week_number=self._show_week_number,
                week_numbering=self._week_numbering,
                formatter=self._formatter,
                locale=self._locale,
            )
            disabled = disabled_dates(months, self._range, self._disabled_days)

        return CalendarViewModel(
            weekdays=tuple(weekdays),
            months=months,
            disabled=disabled,
            selected_date=nav.selected_date,
            focused_date=nav.focused_date,
            today=self._today,
            header_year=nav.selected_date.year,
            header_label=self.header_label(),
        )

    # ------------------------------------------------------------------
    # View, year and day selection
    # ------------------------------------------------------------------

    def select_view(self, view: Any) -> None:
        if view not in VIEWS:
            return
        self._nav = replace(self._nav, selected_view=view)

    def select_year(self, year: int) -> None:
        """Pick a year from the year list and return to the calendar view.

        The selected month and day are kept (the day is clamped to the
        month's length), then clamped into range. Focus is left alone; the
        next key press moves it into the new month.
        """
        if year not in self.year_list():
            return
        current = self._nav.selected_date
        target = CalendarDate.utc(year, current.month, 1)
        target = CalendarDate(target.year, target.month, min(current.day, target.days_in_month))
        self._nav = replace(
            self._nav,
            selected_date=self._range.clamp(target),
            selected_view="calendar",
        )
        self._log.debug("year_selected", year=year)

    def focus_date(self, value: CalendarDate | None) -> bool:
        """Focus a clicked day cell.

        Padding cells (None), disabled days, the already focused day and days
        outside the selected month are ignored.

        Returns:
            True if the focused date changed.
        """
        nav = self._nav
        if (
            value is None
            or value == nav.focused_date
            or not value.same_month(nav.selected_date)
            or is_date_disabled(value, self._range, self._disabled_days)
        ):
            return False
        self._nav = replace(nav, focused_date=value)
        return True

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------

    def handle_key(self, key: str, alt_key: bool = False) -> bool:
        """Apply a key press in the calendar view.

        Returns:
            True if the key is a navigation key (the event is consumed),
            False for keys the calendar does not handle.
        """
        if self._nav.selected_view != "calendar" or not is_navigation_key(key):
            return False
        new_nav = navigate_with_keyboard(self._nav, key, self._range, alt_key=alt_key)
        if new_nav is not self._nav:
            self._log.debug(
                "key_navigated",
                key=key,
                alt_key=alt_key,
                focused=str(new_nav.focused_date),
                selected=str(new_nav.selected_date),
            )
            self._nav = new_nav
        return True

    # ------------------------------------------------------------------
    # Dragging and month stepping
    # ------------------------------------------------------------------

    def _neighbours(self) -> tuple[bool, bool]:
        selected = self._nav.selected_date
        return (
            self._range.overlaps_month(selected.add_months(-1)),
            self._range.overlaps_month(selected.add_months(1)),
        )

    def _dispatch(self, event: DragEvent) -> DragResult:
        has_previous, has_next = self._neighbours()
        result = track_drag(
            self._drag,
            event,
            has_previous=has_previous,
            has_next=has_next,
            drag_ratio=self._drag_ratio,
            duration_ms=self._animation_duration_ms,
        )
        self._drag = result.state
        if result.commit_month_delta:
            self._commit_month(result.commit_month_delta)
        if result.animation is not None and self._scheduler is not None:
            self._scheduler.schedule(result.animation, self.settle_finished)
        return result

    def pointer_down(self, x: float, y: float = 0.0, *, panel_width: float) -> DragResult:
        return self._dispatch(PointerDown(Pointer(x, y), panel_width))

    def pointer_move(self, current: Pointer, previous: Pointer) -> DragResult:
        return self._dispatch(PointerMove(Pointer(*current), Pointer(*previous)))

    def pointer_up(self, current: Pointer, previous: Pointer) -> DragResult:
        result = self._dispatch(PointerUp(Pointer(*current), Pointer(*previous)))
        if result.animation is not None:
            self._log.debug(
                "drag_released",
                dx=result.state.dx,
                month_delta=result.state.pending_month_delta,
            )
        return result

    def step_month(self, direction: Literal["previous", "next"], *, panel_width: float) -> DragResult:
        """Animate to the previous or next month, as the month buttons do."""
        delta = -1 if direction == "previous" else 1
        step_was_pending = self._step_pending
        self._step_pending = True
        result = self._dispatch(MonthStep(delta, panel_width))
        if result.animation is None:
            # Ignored: a drag or step is in flight, or no month that way.
            self._step_pending = step_was_pending
        return result

    def settle_finished(self) -> DragResult:
        """Signal that the settle animation has completed."""
        return self._dispatch(SettleFinished())

    def _commit_month(self, delta: int) -> None:
        selected = self._nav.selected_date
        source = "step" if self._step_pending else "drag"
        if self._step_pending:
            target = CalendarDate.utc(selected.year, selected.month + delta, 1)
        else:
            target = selected.add_months(delta)
        self._step_pending = False
        self._nav = replace(self._nav, selected_date=self._range.clamp(target))
        self._log.debug(
            "drag_committed",
            delta=delta,
            source=source,
            selected=str(self._nav.selected_date),
        )
