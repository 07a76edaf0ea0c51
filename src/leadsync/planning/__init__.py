"""
Planning Package

Date window planning for lead list queries.
"""

from .windows import DEFAULT_MONTH_COUNT, month_window, plan_windows

__all__ = [
    "DEFAULT_MONTH_COUNT",
    "month_window",
    "plan_windows",
]
