"""Logging configuration for the datepicker library."""

import logging
import time
from contextlib import contextmanager
from typing import Any, Generator

import structlog

from datepicker.dates import CalendarDate


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structlog logger."""
    return structlog.get_logger(name)


def render_calendar_dates(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Render CalendarDate values in the event as ``YYYY-MM-DD`` strings."""
    for key, value in event_dict.items():
        if isinstance(value, CalendarDate):
            event_dict[key] = value.isoformat()
    return event_dict


def configure_logging(
    level: str = "WARNING",
    json_output: bool = False,
) -> None:
    """Configure datepicker logging.

    Engine transitions (key navigation, drag commits, rejected assignments)
    are logged at DEBUG, so pass ``level="DEBUG"`` to trace a widget session.
    Events are printed to stdout; the stdlib root logger is left alone.

    Args:
        level: Log level ("DEBUG", "INFO", "WARNING", "ERROR")
        json_output: True for one JSON object per line, False for console

    Raises:
        ValueError: If ``level`` is not a stdlib level name.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            render_calendar_dates,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


@contextmanager
def timed_block(
    logger: structlog.BoundLogger,
    event: str,
    level: str = "debug",
    **context: Any,
) -> Generator[None, None, None]:
    """Log ``event`` with the elapsed milliseconds of the wrapped block.

    The event is logged even when the block raises.
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        getattr(logger, level)(event, elapsed_ms=round(elapsed_ms, 3), **context)
