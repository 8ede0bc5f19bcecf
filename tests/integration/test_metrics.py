"""
Integration tests for metrics tracking.

These tests verify:
1. Business metrics (decisions, scores, transitions, refinances) are incremented
2. Exposition output is valid Prometheus text
"""

from decimal import Decimal

import pytest

from credit_core.core.metrics import (
    REGISTRY,
    get_metrics,
    get_metrics_content_type,
    record_credit_score,
)
from credit_core.domain.entities import ApplicationStatus


def sample(name: str, **labels) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


# =============================================================================
# Exposition Tests
# =============================================================================

class TestMetricsExposition:
    """Tests for get_metrics()."""

    def test_prometheus_text_format(self):
        content = get_metrics().decode("utf-8")

        assert "# HELP" in content
        assert "# TYPE" in content
        assert "text/plain" in get_metrics_content_type()

    def test_credit_metrics_registered(self):
        content = get_metrics().decode("utf-8")

        assert "credit_decision_total" in content
        assert "credit_event_publish_retry_total" in content
        assert "credit_portfolio_analysis_latency_seconds" in content


# =============================================================================
# Business Metrics Tests
# =============================================================================

class TestBusinessMetrics:
    """Business metrics move with the use cases that produce them."""

    @pytest.mark.parametrize(
        "score,bucket",
        [(300, "300-499"), (550, "500-599"), (649, "600-649"), (650, "650-749"), (900, "750-900")],
    )
    def test_score_buckets(self, score, bucket):
        before = sample("credit_score_bucket_total", bucket=bucket)

        record_credit_score(score)

        assert sample("credit_score_bucket_total", bucket=bucket) == before + 1

    @pytest.mark.asyncio
    async def test_decision_recorded(self, decision_service, customer, submission, vip_signals):
        before = sample("credit_decision_total", category="VIP", outcome="APPROVED")

        application = await decision_service.submit_application(submission)
        await decision_service.process_application(application.id, customer, vip_signals)

        assert sample("credit_decision_total", category="VIP", outcome="APPROVED") == before + 1

    @pytest.mark.asyncio
    async def test_transitions_recorded(self, decision_service, tracking_service, submission):
        submitted_before = sample(
            "credit_status_transition_total", from_status="none", to_status="PENDING"
        )
        review_before = sample(
            "credit_status_transition_total", from_status="PENDING", to_status="IN_REVIEW"
        )

        application = await decision_service.submit_application(submission)
        await tracking_service.update_status(application.id, ApplicationStatus.IN_REVIEW)

        assert sample(
            "credit_status_transition_total", from_status="none", to_status="PENDING"
        ) == submitted_before + 1
        assert sample(
            "credit_status_transition_total", from_status="PENDING", to_status="IN_REVIEW"
        ) == review_before + 1

    @pytest.mark.asyncio
    async def test_refinance_recorded(
        self,
        refinance_service,
        application_repository,
        make_application,
        customer,
    ):
        original = make_application(customer.customer_number, ApplicationStatus.APPROVED)
        await application_repository.save(original)
        before = sample("credit_refinance_total", category="RISKY")

        await refinance_service.refinance_credit(original.id, customer, "RISKY", Decimal("9.00"))

        assert sample("credit_refinance_total", category="RISKY") == before + 1

    @pytest.mark.asyncio
    async def test_portfolio_latency_observed(self, portfolio_service):
        before = sample("credit_portfolio_analysis_latency_seconds_count")

        await portfolio_service.analyze_bank_credit_risk()

        assert sample("credit_portfolio_analysis_latency_seconds_count") == before + 1

    @pytest.mark.asyncio
    async def test_unknown_refinance_category_label_bounded(
        self,
        refinance_service,
        application_repository,
        make_application,
        customer,
    ):
        original = make_application(customer.customer_number, ApplicationStatus.APPROVED)
        await application_repository.save(original)
        before = sample("credit_refinance_total", category="UNKNOWN")

        await refinance_service.refinance_credit(original.id, customer, "GOLD", Decimal("9.00"))

        assert sample("credit_refinance_total", category="UNKNOWN") == before + 1
        assert REGISTRY.get_sample_value("credit_refinance_total", {"category": "GOLD"}) is None
