"""
Window Planner

Builds the calendar-month date ranges queried on every run.
"""
from calendar import monthrange
from datetime import date
from typing import List

from src.leadsync.models.session import DateWindow

DEFAULT_MONTH_COUNT = 6


def month_window(year: int, month: int) -> DateWindow:
    """Window spanning the 1st to the last day of ``year``/``month``."""
    last_day = monthrange(year, month)[1]
    return DateWindow(start=date(year, month, 1), end=date(year, month, last_day))


def plan_windows(today: date, month_count: int = DEFAULT_MONTH_COUNT) -> List[DateWindow]:
    """
    Consecutive calendar months ending with the current one, most recent first.

    Args:
        today: Current date
        month_count: Number of months to cover

    Returns:
        ``month_count`` non-overlapping month windows
    """
    if month_count < 1:
        raise ValueError(f"month_count must be at least 1, got {month_count}")

    windows = []
    year, month = today.year, today.month
    for _ in range(month_count):
        windows.append(month_window(year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return windows
