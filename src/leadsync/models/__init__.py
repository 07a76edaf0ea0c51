"""
Data Models

Pydantic models for portal lead records and run-scoped sync state.
"""

from .lead import (
    EPOCH_WATERMARK,
    TIMESTAMP_FORMAT,
    BatchMeta,
    LeadListPage,
    NormalizedRecord,
    RawLeadRecord,
    SyncBatch,
    is_sortable_timestamp,
)
from .session import (
    AuthSession,
    Backfill,
    DateWindow,
    Incremental,
    PortalCredentials,
    SyncContext,
    SyncMode,
    mode_for_watermark,
)

__all__ = [
    "EPOCH_WATERMARK",
    "TIMESTAMP_FORMAT",
    "BatchMeta",
    "LeadListPage",
    "NormalizedRecord",
    "RawLeadRecord",
    "SyncBatch",
    "is_sortable_timestamp",
    "AuthSession",
    "Backfill",
    "DateWindow",
    "Incremental",
    "PortalCredentials",
    "SyncContext",
    "SyncMode",
    "mode_for_watermark",
]
