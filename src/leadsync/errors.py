"""
Sync Errors

Every error is fatal to the run. Nothing is retried in-process; the next
scheduled run starts again from the un-advanced watermark.
"""


class LeadSyncError(Exception):
    """Base class for all lead sync failures."""


class ConfigurationError(LeadSyncError):
    """Required configuration (credentials, webhook URL) is missing."""


class CursorStateError(LeadSyncError):
    """Persisted cursor file exists but cannot be read or parsed."""


class AuthenticationError(LeadSyncError):
    """Login form or session cookie did not appear in time."""


class ExtractionError(LeadSyncError):
    """A lead list page request failed or returned an unexpected shape."""


class DeliveryError(LeadSyncError):
    """Webhook endpoint was unreachable or returned an error status."""
