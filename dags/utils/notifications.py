"""
Notification Utilities

Utilities for sending sync alerts to Slack.
"""
from typing import Any, Dict, Optional
import requests

from config.settings import settings
from src.leadsync.utils.logger import get_logger

logger = get_logger(__name__)


def send_slack_notification(message: str, webhook_url: Optional[str] = None) -> bool:
    """
    Send notification to Slack via webhook.

    Alerts are best effort; a failed alert never fails the sync.

    Args:
        message: Message to send
        webhook_url: Slack webhook URL (defaults to settings.alert_slack_webhook)

    Returns:
        True if successful, False otherwise
    """
    if not settings.alert_enable_slack:
        logger.info("slack_notifications_disabled")
        return False

    webhook_url = webhook_url or settings.alert_slack_webhook
    if not webhook_url:
        logger.warning("slack_webhook_url_not_configured")
        return False

    try:
        payload = {"text": message}
        response = requests.post(webhook_url, json=payload, timeout=10)

        if response.status_code == 200:
            logger.info("slack_notification_sent")
            return True
        else:
            logger.error("slack_notification_failed",
                         status_code=response.status_code,
                         response=response.text)
            return False

    except requests.RequestException as e:
        logger.error("slack_notification_error", error=str(e))
        return False


def format_sync_summary(stats: Dict[str, Any]) -> str:
    """
    Format a sync run summary into a notification message.

    Args:
        stats: SyncResult dictionary

    Returns:
        Formatted message string
    """
    message_lines = [
        "*Portal Lead Sync*",
        "",
        f"Mode: {stats.get('mode', 'unknown')}",
        f"Records Fetched: {stats.get('records_fetched', 0):,}",
        f"Records Delivered: {stats.get('records_delivered', 0):,}",
        f"Cursor: {stats.get('previous_watermark', '-')} -> {stats.get('new_watermark', '-')}",
    ]

    return "\n".join(message_lines)


def format_sync_failure_message(dag_id: str, task_id: str, error: Any = None) -> str:
    """
    Format a failed sync run into a notification message.

    Args:
        dag_id: Failing DAG
        task_id: Failing task
        error: Exception raised by the task, if known

    Returns:
        Formatted message string
    """
    message_lines = [
        "*Portal Lead Sync FAILED*",
        "",
        f"DAG: {dag_id}",
        f"Task: {task_id}",
    ]

    if error is not None:
        message_lines.append(f"Error: {type(error).__name__}: {error}")

    message_lines.append("Cursor was not advanced; the next run retries from the same watermark.")

    return "\n".join(message_lines)
