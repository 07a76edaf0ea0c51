"""
Utilities Package

Structured logging and bounded polling helpers.
"""

from .logger import get_logger, setup_logging
from .polling import PollingTimeoutError, await_condition

__all__ = [
    "get_logger",
    "setup_logging",
    "PollingTimeoutError",
    "await_condition",
]
