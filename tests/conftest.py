"""Pytest configuration and shared fixtures."""

import pytest
import structlog

from datepicker.config import reset_datepicker_config
from datepicker.dates import CalendarDate
from datepicker.label_cache import reset_label_cache
from datepicker.policy import NavigationRange


@pytest.fixture(autouse=True)
def reset_module_state():
    """Reset module-level singletons before and after each test for isolation.

    The label cache, the datepicker defaults and the structlog configuration
    are process-wide and would otherwise leak between tests.
    """
    reset_label_cache()
    reset_datepicker_config()
    yield
    reset_label_cache()
    reset_datepicker_config()
    structlog.reset_defaults()


@pytest.fixture
def wide_range():
    """A range that never clamps ordinary test dates."""
    return NavigationRange(CalendarDate(2000, 0, 1), CalendarDate(2100, 11, 31))


class StubFormatter:
    """Formatter recording every call and returning a predictable label."""

    def __init__(self):
        self.calls = []

    def format(self, value, locale, *, weekday=None, month=None, day=None, year=None):
        self.calls.append((value, locale, weekday, month, day, year))
        parts = [f"{k}={v}" for k, v in
                 (("weekday", weekday), ("month", month), ("day", day), ("year", year)) if v]
        return f"{value.isoformat()}[{','.join(parts)}]"


@pytest.fixture
def stub_formatter():
    return StubFormatter()


class ManualScheduler:
    """Animation scheduler whose animations finish only when told to."""

    def __init__(self):
        self.pending = []

    def schedule(self, animation, callback):
        self.pending.append((animation, callback))

    def finish_all(self):
        pending, self.pending = self.pending, []
        for _, callback in pending:
            callback()


class ImmediateScheduler:
    """Animation scheduler that finishes every animation at once."""

    def __init__(self):
        self.animations = []

    def schedule(self, animation, callback):
        self.animations.append(animation)
        callback()


@pytest.fixture
def manual_scheduler():
    return ManualScheduler()


@pytest.fixture
def immediate_scheduler():
    return ImmediateScheduler()
