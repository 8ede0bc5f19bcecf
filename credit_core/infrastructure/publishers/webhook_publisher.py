"""HTTP webhook implementation of EventPublisher."""

import asyncio

import httpx
import structlog

from credit_core.core.config import settings
from credit_core.core.metrics import (
    record_event_failed,
    record_event_published,
    record_event_retry,
    track_event_publish_latency,
)
from credit_core.domain.entities import CreditEvent
from credit_core.domain.interfaces import EventPublisher

logger = structlog.get_logger(__name__)


class HttpWebhookEventPublisher(EventPublisher):
    """
    Posts credit events as JSON to a webhook.

    Retries with exponential backoff and reports failure through the
    return value; delivery problems never propagate to the caller.
    """

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_base: float = 0.1,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._url = url or settings.event_webhook_url
        self._timeout = timeout or settings.event_webhook_timeout
        self._max_retries = max_retries or settings.event_webhook_max_retries
        self._backoff_base = backoff_base
        self._transport = transport

    async def publish(self, event: CreditEvent) -> bool:
        """
        Deliver an event to the webhook.

        Uses exponential backoff: 0.1s, 0.2s, 0.4s, 0.8s, ...
        """
        event_type = event.event_type.value
        payload = event.to_dict()
        log = logger.bind(event_type=event_type, event_id=str(event.id))

        for attempt in range(self._max_retries):
            try:
                with track_event_publish_latency():
                    async with httpx.AsyncClient(
                        timeout=self._timeout,
                        transport=self._transport,
                    ) as client:
                        response = await client.post(
                            self._url,
                            json=payload,
                            headers={"Content-Type": "application/json"},
                        )

                if response.status_code < 400:
                    log.info("event_published", status_code=response.status_code)
                    record_event_published(event_type)
                    return True

                log.warning(
                    "event_publish_rejected",
                    status_code=response.status_code,
                    attempt=attempt + 1,
                    response=response.text[:200],
                )

            except httpx.TimeoutException:
                log.warning("event_publish_timeout", attempt=attempt + 1)
            except httpx.HTTPError as e:
                log.error("event_publish_error", attempt=attempt + 1, error=str(e))

            if attempt < self._max_retries - 1:
                record_event_retry()
                await asyncio.sleep(2 ** attempt * self._backoff_base)

        log.error("event_publish_failed", max_retries=self._max_retries)
        record_event_failed(event_type)
        return False
