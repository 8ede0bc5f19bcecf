"""
Integration tests for webhook event delivery.

These tests verify:
1. Successful deliveries post the serialized event
2. Temporary failures are retried with backoff
3. Exhausted retries report failure instead of raising
"""

import json

import httpx
import pytest

from credit_core.core.metrics import REGISTRY
from credit_core.domain.entities import CreditEvent, CreditEventType
from credit_core.infrastructure.publishers import HttpWebhookEventPublisher

WEBHOOK_URL = "http://events.test/credit-events"


def make_event() -> CreditEvent:
    return CreditEvent(
        event_type=CreditEventType.APPLICATION_APPROVED,
        payload={"application_id": "a-1", "customer_number": "C-1001"},
    )


def sample(name: str, **labels) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


class TestHttpWebhookEventPublisher:
    """Tests for HttpWebhookEventPublisher.publish()."""

    @pytest.mark.asyncio
    async def test_successful_delivery(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(202)

        publisher = HttpWebhookEventPublisher(
            url=WEBHOOK_URL,
            max_retries=3,
            backoff_base=0,
            transport=httpx.MockTransport(handler),
        )
        event = make_event()
        before = sample(
            "credit_event_publish_total", event_type="application_approved", status="sent"
        )

        delivered = await publisher.publish(event)

        assert delivered is True
        assert len(requests) == 1
        assert str(requests[0].url) == WEBHOOK_URL
        body = json.loads(requests[0].content)
        assert body["event"] == "application_approved"
        assert body["event_id"] == str(event.id)
        assert body["payload"]["customer_number"] == "C-1001"
        assert sample(
            "credit_event_publish_total", event_type="application_approved", status="sent"
        ) == before + 1

    @pytest.mark.asyncio
    async def test_retries_until_success(self):
        attempts = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            attempts["count"] += 1
            if attempts["count"] < 3:
                return httpx.Response(503)
            return httpx.Response(200)

        publisher = HttpWebhookEventPublisher(
            url=WEBHOOK_URL,
            max_retries=5,
            backoff_base=0,
            transport=httpx.MockTransport(handler),
        )
        retries_before = sample("credit_event_publish_retry_total")

        assert await publisher.publish(make_event()) is True
        assert attempts["count"] == 3
        assert sample("credit_event_publish_retry_total") == retries_before + 2

    @pytest.mark.asyncio
    async def test_connection_errors_exhaust_retries(self):
        attempts = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            attempts["count"] += 1
            raise httpx.ConnectError("connection refused", request=request)

        publisher = HttpWebhookEventPublisher(
            url=WEBHOOK_URL,
            max_retries=3,
            backoff_base=0,
            transport=httpx.MockTransport(handler),
        )
        failed_before = sample(
            "credit_event_publish_total", event_type="application_approved", status="failed"
        )

        delivered = await publisher.publish(make_event())

        assert delivered is False
        assert attempts["count"] == 3
        assert sample(
            "credit_event_publish_total", event_type="application_approved", status="failed"
        ) == failed_before + 1

    @pytest.mark.asyncio
    async def test_timeouts_reported_as_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        publisher = HttpWebhookEventPublisher(
            url=WEBHOOK_URL,
            max_retries=2,
            backoff_base=0,
            transport=httpx.MockTransport(handler),
        )

        assert await publisher.publish(make_event()) is False
