"""
Tests for the month window planner.
"""
import pytest
from calendar import monthrange
from datetime import date

from src.leadsync.models.session import DateWindow
from src.leadsync.planning.windows import DEFAULT_MONTH_COUNT, month_window, plan_windows


class TestPlanWindows:
    """Tests for plan_windows."""

    def test_default_count_is_six(self):
        windows = plan_windows(date(2024, 8, 20))

        assert len(windows) == DEFAULT_MONTH_COUNT == 6

    def test_most_recent_first_with_leap_february(self):
        windows = plan_windows(date(2024, 3, 15), month_count=6)

        assert [(w.start, w.end) for w in windows] == [
            (date(2024, 3, 1), date(2024, 3, 31)),
            (date(2024, 2, 1), date(2024, 2, 29)),
            (date(2024, 1, 1), date(2024, 1, 31)),
            (date(2023, 12, 1), date(2023, 12, 31)),
            (date(2023, 11, 1), date(2023, 11, 30)),
            (date(2023, 10, 1), date(2023, 10, 31)),
        ]

    def test_non_leap_february(self):
        windows = plan_windows(date(2023, 3, 1), month_count=2)

        assert windows[1] == DateWindow(start=date(2023, 2, 1), end=date(2023, 2, 28))

    def test_year_rollover(self):
        windows = plan_windows(date(2025, 1, 31), month_count=3)

        assert windows[0] == DateWindow(start=date(2025, 1, 1), end=date(2025, 1, 31))
        assert windows[1] == DateWindow(start=date(2024, 12, 1), end=date(2024, 12, 31))
        assert windows[2] == DateWindow(start=date(2024, 11, 1), end=date(2024, 11, 30))

    def test_windows_are_whole_non_overlapping_months(self):
        windows = plan_windows(date(2024, 5, 9), month_count=14)

        assert len(windows) == 14
        for window in windows:
            assert window.start.day == 1
            assert window.end.day == monthrange(window.end.year, window.end.month)[1]
            assert (window.start.year, window.start.month) == (window.end.year, window.end.month)
        for newer, older in zip(windows, windows[1:]):
            assert older.end < newer.start

    def test_single_month(self):
        assert plan_windows(date(2024, 6, 30), month_count=1) == [month_window(2024, 6)]

    def test_rejects_zero_months(self):
        with pytest.raises(ValueError):
            plan_windows(date(2024, 6, 30), month_count=0)


class TestDateWindow:
    """Tests for DateWindow formatting."""

    def test_filter_string_format(self):
        window = month_window(2024, 3)

        assert window.to_filter_string() == "03/01/2024 - 03/31/2024"
        assert str(window) == "03/01/2024 - 03/31/2024"
