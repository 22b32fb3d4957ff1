"""Module-level configuration for datepicker defaults."""

import threading
from dataclasses import dataclass, field

from datepicker.dates import CalendarDate
from datepicker.drag import DEFAULT_ANIMATION_DURATION_MS, DEFAULT_DRAG_RATIO
from datepicker.policy import WEEKENDS
from datepicker.validation import (
    ConfigurationError,
    parse_date,
    parse_disabled_days,
    validate_drag_ratio,
    validate_first_day_of_week,
)
from datepicker.weeks import get_week_numbering

DEFAULT_MAX = CalendarDate(2100, 11, 31)


@dataclass
class DatepickerConfig:
    """Defaults applied to new Datepicker instances."""

    max: CalendarDate = DEFAULT_MAX
    first_day_of_week: int = 0
    show_week_number: bool = False
    week_numbering: str = "first-4-day-week"
    disabled_days: frozenset[int] = field(default_factory=lambda: WEEKENDS)
    locale: str | None = None  # None = resolve from the host environment
    drag_ratio: float = DEFAULT_DRAG_RATIO
    animation_duration_ms: float = DEFAULT_ANIMATION_DURATION_MS


# Module-level singleton
_datepicker_config: DatepickerConfig | None = None
_config_lock = threading.Lock()


def get_datepicker_config() -> DatepickerConfig:
    """Get the global datepicker configuration singleton."""
    global _datepicker_config
    if _datepicker_config is None:
        with _config_lock:
            if _datepicker_config is None:
                _datepicker_config = DatepickerConfig()
    return _datepicker_config


def configure_datepicker(
    max: CalendarDate | str | None = None,
    first_day_of_week: int | None = None,
    show_week_number: bool | None = None,
    week_numbering: str | None = None,
    disabled_days: str | list[int] | None = None,
    locale: str | None = None,
    drag_ratio: float | None = None,
    animation_duration_ms: float | None = None,
) -> None:
    """Configure default datepicker settings.

    Values are validated eagerly, so a bad default fails here rather than
    in every Datepicker constructed afterwards.

    Example:
        from datepicker import Datepicker, configure_datepicker

        configure_datepicker(first_day_of_week=1, week_numbering="first-4-day-week")

        picker = Datepicker()  # Weeks start on Monday
    """
    config = get_datepicker_config()
    updates: dict = {}
    if max is not None:
        parsed = parse_date(max)
        if parsed is None:
            raise ConfigurationError(f"Invalid max date: {max!r}")
        updates["max"] = parsed
    if first_day_of_week is not None:
        updates["first_day_of_week"] = validate_first_day_of_week(first_day_of_week)
    if show_week_number is not None:
        updates["show_week_number"] = bool(show_week_number)
    if week_numbering is not None:
        updates["week_numbering"] = get_week_numbering(week_numbering).name
    if disabled_days is not None:
        updates["disabled_days"] = parse_disabled_days(disabled_days)
    if locale is not None:
        updates["locale"] = locale
    if drag_ratio is not None:
        updates["drag_ratio"] = validate_drag_ratio(drag_ratio)
    if animation_duration_ms is not None:
        updates["animation_duration_ms"] = float(animation_duration_ms)

    with _config_lock:
        for key, value in updates.items():
            setattr(config, key, value)


def reset_datepicker_config() -> None:
    """Reset configuration to defaults. Useful for testing."""
    global _datepicker_config
    with _config_lock:
        _datepicker_config = DatepickerConfig()
