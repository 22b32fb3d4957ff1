"""Datepicker - calendar grid, keyboard navigation and drag tracking engines."""

from datepicker.config import (
    DatepickerConfig,
    configure_datepicker,
    get_datepicker_config,
    reset_datepicker_config,
)
from datepicker.core import AnimationScheduler, CalendarViewModel, Datepicker, YearListViewModel
from datepicker.dates import CalendarDate, today_utc
from datepicker.drag import (
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
from datepicker.formatting import BabelDateFormatter, DateFormatter, MemoizedFormatter
from datepicker.grid import (
    DayCell,
    MonthGrid,
    TripleMonthView,
    WeekdayHeader,
    WeekRow,
    build_month_grid,
    build_triple_month_view,
    build_weekday_headers,
)
from datepicker.keyboard import NavigationState, navigate_with_keyboard
from datepicker.label_cache import (
    CacheConfig,
    CacheStats,
    clear_label_cache,
    configure_label_cache,
    get_label_cache_stats,
)
from datepicker.logging import configure_logging, get_logger
from datepicker.policy import NavigationRange, disabled_dates, is_date_disabled
from datepicker.validation import ConfigurationError, DatepickerError
from datepicker.weeks import (
    FirstDayOfMonth,
    FirstDayOfYear,
    FirstFourDayWeek,
    FirstFullWeek,
    WeekNumbering,
    get_week_numbering,
)

__all__ = [
    # Widget state
    "Datepicker",
    "CalendarViewModel",
    "YearListViewModel",
    "AnimationScheduler",
    # Dates
    "CalendarDate",
    "today_utc",
    # Grid
    "DayCell",
    "WeekRow",
    "WeekdayHeader",
    "MonthGrid",
    "TripleMonthView",
    "build_month_grid",
    "build_triple_month_view",
    "build_weekday_headers",
    # Policy
    "NavigationRange",
    "disabled_dates",
    "is_date_disabled",
    # Keyboard
    "NavigationState",
    "navigate_with_keyboard",
    # Drag
    "DragResult",
    "DragState",
    "MonthStep",
    "Pointer",
    "PointerDown",
    "PointerMove",
    "PointerUp",
    "SettleAnimation",
    "SettleFinished",
    "track_drag",
    # Week numbering
    "WeekNumbering",
    "FirstFourDayWeek",
    "FirstFullWeek",
    "FirstDayOfYear",
    "FirstDayOfMonth",
    "get_week_numbering",
    # Formatting
    "DateFormatter",
    "BabelDateFormatter",
    "MemoizedFormatter",
    # Label cache
    "CacheConfig",
    "CacheStats",
    "clear_label_cache",
    "configure_label_cache",
    "get_label_cache_stats",
    # Config
    "DatepickerConfig",
    "configure_datepicker",
    "get_datepicker_config",
    "reset_datepicker_config",
    # Logging
    "configure_logging",
    "get_logger",
    # Errors
    "DatepickerError",
    "ConfigurationError",
]
__version__ = "0.1.0"
