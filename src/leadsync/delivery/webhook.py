"""
Webhook Delivery

Sends a sync batch to the downstream webhook in a single request.
"""
from typing import Optional

import requests

from config.settings import settings
from src.leadsync.errors import DeliveryError
from src.leadsync.models.lead import SyncBatch
from src.leadsync.utils.logger import get_logger

logger = get_logger(__name__)


class WebhookDispatcher:
    """Posts ``{meta, records}`` to the configured webhook. No retries."""

    def __init__(
        self,
        webhook_url: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        self.webhook_url = webhook_url or settings.viasocket_webhook
        if not self.webhook_url:
            raise ValueError("Webhook URL is required")
        self.timeout = timeout or settings.http_timeout_seconds
        self.session = session or requests.Session()

    def deliver(self, batch: SyncBatch) -> bool:
        """
        Deliver ``batch``.

        Returns:
            True if a request was sent, False if the batch was empty

        Raises:
            DeliveryError: If the endpoint is unreachable or answers with an
                error status
        """
        if batch.is_empty():
            logger.info("delivery_skipped_empty_batch", mode=batch.meta.mode)
            return False

        try:
            response = self.session.post(
                self.webhook_url,
                json=batch.to_payload(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("webhook_request_failed", error=str(e), error_type=type(e).__name__)
            raise DeliveryError(f"Webhook unreachable: {e}") from e

        if response.status_code >= 400:
            logger.error(
                "webhook_delivery_failed",
                status_code=response.status_code,
                response=response.text[:500],
            )
            raise DeliveryError(f"Webhook returned HTTP {response.status_code}")

        logger.info(
            "batch_delivered",
            status_code=response.status_code,
            total_records=batch.meta.total_records,
            mode=batch.meta.mode,
        )
        return True
