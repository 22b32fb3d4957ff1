"""Keyboard navigation over the calendar grid.

Key bindings:

- ArrowLeft / ArrowRight: previous / next day, crossing month boundaries.
- ArrowUp / ArrowDown: same weekday of the previous / next week.
- Home / End: first / last day of the focused month.
- PageUp / PageDown: same day of the previous / next month. If that day does
  not exist, the last day of the target month is used.
- Alt+PageUp / Alt+PageDown: same day of the previous / next year, with the
  same last-day rule (Feb 29 -> Feb 28).
- Enter / Space: commit the focused date as the selected date.

Moves that would leave [min, max] land on min or max.
"""

from dataclasses import dataclass, replace
from typing import Callable, Literal

from datepicker.dates import CalendarDate
from datepicker.policy import NavigationRange

View = Literal["calendar", "year"]
NavigationKey = Literal[
    "ArrowUp",
    "ArrowDown",
    "ArrowLeft",
    "ArrowRight",
    "Home",
    "End",
    "PageUp",
    "PageDown",
    "Enter",
    "Space",
]

COMMIT_KEYS = frozenset({"Enter", "Space", " "})


@dataclass(frozen=True)
class NavigationState:
    """Selected date, focused date and active view of a datepicker."""

    selected_date: CalendarDate
    focused_date: CalendarDate
    selected_view: View = "calendar"

    @property
    def in_sync(self) -> bool:
        """True when the focused date lies in the selected date's month."""
        return self.focused_date.same_month(self.selected_date)


_MOVES: dict[str, Callable[[CalendarDate, bool], CalendarDate]] = {
    "ArrowLeft": lambda d, alt: d.add_days(-1),
    "ArrowRight": lambda d, alt: d.add_days(1),
    "ArrowUp": lambda d, alt: d.add_days(-7),
    "ArrowDown": lambda d, alt: d.add_days(7),
    "Home": lambda d, alt: d.first_of_month(),
    "End": lambda d, alt: d.last_of_month(),
    "PageUp": lambda d, alt: d.add_months(-12 if alt else -1),
    "PageDown": lambda d, alt: d.add_months(12 if alt else 1),
}

NAVIGATION_KEYS = frozenset(_MOVES) | COMMIT_KEYS
_FORWARD_KEYS = frozenset({"ArrowRight", "ArrowDown", "PageDown"})


def is_navigation_key(key: str) -> bool:
    return key in NAVIGATION_KEYS


def navigate_with_keyboard(
    state: NavigationState,
    key: str,
    date_range: NavigationRange,
    *,
    alt_key: bool = False,
) -> NavigationState:
    """Compute the navigation state after a key press.

    Returns ``state`` itself when nothing changes (unrecognized key, or a
    move that lands on the already focused date), so callers can skip
    re-rendering on identity.

    If the focused date is not in the selected date's month (for example
    after a year was picked from the year list), the key is ignored and focus
    moves to the first day of the selected month instead.
    """
    if key not in NAVIGATION_KEYS:
        return state

    selected = state.selected_date
    focused = state.focused_date

    if not state.in_sync:
        resynced = date_range.clamp(selected.first_of_month())
        if not resynced.same_month(selected):
            # Selected month lies outside the range; move both into it.
            return replace(state, selected_date=resynced, focused_date=resynced)
        return replace(state, focused_date=resynced)

    if key in COMMIT_KEYS:
        if selected == focused:
            return state
        return replace(state, selected_date=focused)

    try:
        candidate = date_range.clamp(_MOVES[key](focused, alt_key))
    except (ValueError, OverflowError):
        # Past year 1 or 9999.
        candidate = date_range.max if key in _FORWARD_KEYS else date_range.min
    if candidate == focused:
        return state

    if not candidate.same_month(selected):
        return replace(state, selected_date=candidate, focused_date=candidate)
    return replace(state, focused_date=candidate)
