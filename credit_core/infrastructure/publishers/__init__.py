"""Event publisher implementations."""

from .webhook_publisher import HttpWebhookEventPublisher

__all__ = [
    "HttpWebhookEventPublisher",
]
