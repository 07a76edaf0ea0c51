"""
Portal Lead Sync

Top-level source package; the sync engine lives in ``src.leadsync``.
"""

__version__ = "0.1.0"
