"""
Portal Lead Sync - Core Package

Incremental synchronization of lead records from the sales portal to a
downstream webhook: session login, month-window extraction, watermark
filtering and at-least-once delivery.
"""

__version__ = "0.1.0"
