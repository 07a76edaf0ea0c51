"""
Delivery Package

Webhook delivery of sync batches.
"""

from .webhook import WebhookDispatcher

__all__ = [
    "WebhookDispatcher",
]
