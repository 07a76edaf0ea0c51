"""
Airflow DAG Utilities

Helper functions for DAGs including notifications.
"""
from dags.utils.notifications import (
    send_slack_notification,
    format_sync_summary,
    format_sync_failure_message,
)

__all__ = [
    "send_slack_notification",
    "format_sync_summary",
    "format_sync_failure_message",
]
