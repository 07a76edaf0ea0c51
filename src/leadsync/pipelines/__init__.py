"""
Pipelines Package

End-to-end sync run orchestration.
"""

from .incremental_sync import LeadSyncPipeline, SyncResult, build_pipeline, require_sync_settings

__all__ = [
    "LeadSyncPipeline",
    "SyncResult",
    "build_pipeline",
    "require_sync_settings",
]
