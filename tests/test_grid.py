"""Tests for calendar grid construction."""

import pytest

from datepicker import (
    CalendarDate,
    NavigationRange,
    build_month_grid,
    build_triple_month_view,
    build_weekday_headers,
)
from datepicker.dates import MAX_SUPPORTED_DATE, MIN_SUPPORTED_DATE
from datepicker.formatting import MemoizedFormatter
from datepicker.label_cache import LabelCache


class TestBuildMonthGrid:
    """Test build_month_grid function."""

    def test_january_2024_sunday_start(self, stub_formatter):
        """Jan 1 2024 is a Monday, so one leading padding cell."""
        grid = build_month_grid(CalendarDate(2024, 0, 17), formatter=stub_formatter)

        assert grid.month == CalendarDate(2024, 0, 1)
        assert len(grid.rows) == 5
        first_row = grid.rows[0]
        assert first_row.cells[0].is_padding
        assert first_row.cells[1].date == CalendarDate(2024, 0, 1)

    def test_leading_spillover_date_is_kept_on_row(self, stub_formatter):
        """The padding cell's date is recoverable from the row start."""
        grid = build_month_grid(CalendarDate(2024, 0, 1), formatter=stub_formatter)
        first_row = grid.rows[0]
        assert first_row.start == CalendarDate(2023, 11, 31)
        assert first_row.dates()[0] == CalendarDate(2023, 11, 31)
        assert first_row.cells[0].date is None

    def test_monday_start_has_no_leading_padding(self, stub_formatter):
        grid = build_month_grid(CalendarDate(2024, 0, 1), first_day_of_week=1, formatter=stub_formatter)
        assert grid.rows[0].cells[0].date == CalendarDate(2024, 0, 1)

    def test_four_row_month(self, stub_formatter):
        """Feb 2015 starts on Sunday and has 28 days."""
        grid = build_month_grid(CalendarDate(2015, 1, 1), formatter=stub_formatter)
        assert len(grid.rows) == 4
        assert not any(cell.is_padding for row in grid.rows for cell in row.cells)

    @pytest.mark.parametrize("first_day_of_week", range(7))
    def test_rows_hold_exactly_the_days_of_the_month(self, stub_formatter, first_day_of_week):
        for month in range(12):
            grid = build_month_grid(
                CalendarDate(2024, month, 1),
                first_day_of_week=first_day_of_week,
                formatter=stub_formatter,
            )
            n_days = CalendarDate(2024, month, 1).days_in_month
            assert all(len(row.cells) == 7 for row in grid.rows)
            assert grid.dates() == [CalendarDate(2024, month, d) for d in range(1, n_days + 1)]
            assert all(row.start.weekday == first_day_of_week for row in grid.rows)

    def test_week_number_column(self, stub_formatter):
        grid = build_month_grid(
            CalendarDate(2024, 11, 1),
            first_day_of_week=1,
            show_week_number=True,
            formatter=stub_formatter,
        )
        assert all(len(row.cells) == 8 for row in grid.rows)
        assert [row.week_number for row in grid.rows] == [48, 49, 50, 51, 52, 1]
        week_cell = grid.rows[-1].cells[0]
        assert week_cell.date is None
        assert not week_cell.is_padding
        assert week_cell.label == "1"
        assert week_cell.aria_label == "Week 1"

    def test_week_numbering_rule_is_applied(self, stub_formatter):
        grid = build_month_grid(
            CalendarDate(2024, 0, 1),
            show_week_number=True,
            week_numbering="first-day-of-year",
            formatter=stub_formatter,
        )
        assert [row.week_number for row in grid.rows] == [1, 2, 3, 4, 5]

    def test_week_of_month_counts_rows_of_the_displayed_month(self, stub_formatter):
        """The last January 2024 row spills into February but stays week 5."""
        grid = build_month_grid(
            CalendarDate(2024, 0, 1),
            show_week_number=True,
            week_numbering="first-day-of-month",
            formatter=stub_formatter,
        )
        assert [row.week_number for row in grid.rows] == [1, 2, 3, 4, 5]

    def test_labels(self):
        grid = build_month_grid(CalendarDate(2024, 0, 1), locale="en-US")
        cell = grid.rows[0].cells[1]
        assert grid.label == "January 2024"
        assert cell.label == "1"
        assert cell.aria_label == "Jan 1, 2024"


class TestBuildTripleMonthView:
    """Test build_triple_month_view function."""

    def test_three_slots_around_pivot(self, wide_range, stub_formatter):
        view = build_triple_month_view(CalendarDate(2024, 11, 25), wide_range, formatter=stub_formatter)
        assert len(view) == 3
        assert [m.month for m in view] == [
            CalendarDate(2024, 10, 1),
            CalendarDate(2024, 11, 1),
            CalendarDate(2025, 0, 1),
        ]
        assert view.has_previous and view.has_next

    def test_month_before_min_is_none(self, stub_formatter):
        """All of December 2023 precedes a Jan 10 2024 min."""
        date_range = NavigationRange(CalendarDate(2024, 0, 10), CalendarDate(2100, 11, 31))
        view = build_triple_month_view(CalendarDate(2024, 0, 15), date_range, formatter=stub_formatter)
        assert view.previous is None
        assert not view.has_previous
        assert view.current is not None
        assert view.next is not None

    def test_month_after_max_is_none(self, stub_formatter):
        date_range = NavigationRange(CalendarDate(2024, 0, 1), CalendarDate(2024, 1, 1))
        view = build_triple_month_view(CalendarDate(2024, 0, 15), date_range, formatter=stub_formatter)
        assert view.previous is None
        # A single in-range day keeps February rendered
        assert view.next is not None

        view = build_triple_month_view(CalendarDate(2024, 1, 1), date_range, formatter=stub_formatter)
        assert view.next is None

    def test_null_slots_are_not_built(self, stub_formatter):
        date_range = NavigationRange(CalendarDate(2024, 5, 1), CalendarDate(2024, 5, 30))
        view = build_triple_month_view(CalendarDate(2024, 0, 15), date_range, formatter=stub_formatter)
        assert list(view) == [None, None, None]
        assert stub_formatter.calls == []

    def test_labels_are_formatted_once(self, wide_range, stub_formatter):
        """Day-number labels are shared across months; rebuilding hits the cache."""
        formatter = MemoizedFormatter(stub_formatter, cache=LabelCache())
        build_triple_month_view(CalendarDate(2024, 0, 15), wide_range, formatter=formatter)

        day_only = [c for c in stub_formatter.calls if c[4] and not (c[2] or c[3] or c[5])]
        assert len(day_only) == 31
        first_pass = len(stub_formatter.calls)

        build_triple_month_view(CalendarDate(2024, 0, 15), wide_range, formatter=formatter)
        assert len(stub_formatter.calls) == first_pass

    def test_last_supported_month(self, stub_formatter):
        date_range = NavigationRange(CalendarDate(9998, 0, 1), MAX_SUPPORTED_DATE)
        view = build_triple_month_view(MAX_SUPPORTED_DATE, date_range, formatter=stub_formatter)
        assert view.previous.month == CalendarDate(9998, 10, 1)
        assert view.current.month == CalendarDate(9998, 11, 1)
        assert view.next is None

    def test_first_supported_month(self, stub_formatter):
        date_range = NavigationRange(MIN_SUPPORTED_DATE, CalendarDate(2, 11, 31))
        view = build_triple_month_view(MIN_SUPPORTED_DATE, date_range, formatter=stub_formatter)
        assert view.previous is None
        assert view.current.month == CalendarDate(2, 0, 1)
        assert view.next.month == CalendarDate(2, 1, 1)

    @pytest.mark.parametrize("pivot", [CalendarDate(9999, 11, 15), CalendarDate(1, 0, 15)])
    def test_pivot_at_datetime_limits_keeps_three_slots(self, wide_range, stub_formatter, pivot):
        view = build_triple_month_view(pivot, wide_range, formatter=stub_formatter)
        assert len(view) == 3
        assert list(view) == [None, None, None]


class TestBuildWeekdayHeaders:
    """Test build_weekday_headers function."""

    def test_sunday_first(self):
        headers = build_weekday_headers(0, locale="en-US")
        assert [h.value for h in headers] == ["S", "M", "T", "W", "T", "F", "S"]
        assert headers[0].label == "Sunday"
        assert headers[6].label == "Saturday"

    def test_rotation(self):
        headers = build_weekday_headers(1, locale="en-US")
        assert headers[0].label == "Monday"
        assert headers[-1].label == "Sunday"

    def test_week_number_header(self, stub_formatter):
        headers = build_weekday_headers(0, show_week_number=True, formatter=stub_formatter)
        assert len(headers) == 8
        assert headers[0] == ("Week", "Wk")
