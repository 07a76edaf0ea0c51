"""
State Package

Watermark persistence between sync runs.
"""

from .cursor_store import CursorStore, next_watermark

__all__ = [
    "CursorStore",
    "next_watermark",
]
