"""Prometheus metrics for the credit decisioning core.

Business Metrics (for Credit Risk/Product):
- credit_decision_total: Automated decisions by category and outcome
- credit_score_bucket_total: Calculated credit scores by bucket
- credit_status_transition_total: Application status transitions
- credit_refinance_total: Refinances by customer category
- credit_fraud_rule_evaluation_total: Fraud rule evaluations by level

Technical Metrics (for Engineering/SRE):
- credit_event_publish_total: Event deliveries by type and status
- credit_event_publish_retry_total: Event delivery retries
- credit_event_publish_latency_seconds: Event delivery latency
- credit_portfolio_analysis_latency_seconds: Portfolio scan latency
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics
# =============================================================================

decision_total = Counter(
    "credit_decision_total",
    "Total number of automated credit decisions",
    ["category", "outcome"],
)

score_bucket_total = Counter(
    "credit_score_bucket_total",
    "Calculated credit scores by bucket",
    ["bucket"],
)

status_transition_total = Counter(
    "credit_status_transition_total",
    "Credit application status transitions",
    ["from_status", "to_status"],
)

refinance_total = Counter(
    "credit_refinance_total",
    "Total number of refinanced credit applications",
    ["category"],
)

fraud_rule_evaluation_total = Counter(
    "credit_fraud_rule_evaluation_total",
    "Fraud rule evaluations by rule and resulting risk level",
    ["rule", "risk_level"],
)


# =============================================================================
# Technical Metrics
# =============================================================================

event_publish_total = Counter(
    "credit_event_publish_total",
    "Credit event deliveries by event type and status",
    ["event_type", "status"],  # sent, failed
)

event_publish_retries = Counter(
    "credit_event_publish_retry_total",
    "Total number of credit event delivery retries",
)

event_publish_latency = Histogram(
    "credit_event_publish_latency_seconds",
    "Credit event delivery latency in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

portfolio_analysis_latency = Histogram(
    "credit_portfolio_analysis_latency_seconds",
    "Portfolio risk analysis latency in seconds",
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_decision(category: str, outcome: str) -> None:
    """Record an automated credit decision."""
    decision_total.labels(category=category, outcome=outcome).inc()


def record_credit_score(score: int) -> None:
    """Record a calculated credit score in its bucket."""
    score_bucket_total.labels(bucket=_get_score_bucket(score)).inc()


def _get_score_bucket(score: int) -> str:
    """Map a credit score to a bucket label."""
    if score < 500:
        return "300-499"
    elif score < 600:
        return "500-599"
    elif score < 650:
        return "600-649"
    elif score < 750:
        return "650-749"
    else:
        return "750-900"


def record_status_transition(from_status: str | None, to_status: str) -> None:
    """Record an application status transition."""
    status_transition_total.labels(
        from_status=from_status or "none",
        to_status=to_status,
    ).inc()


def record_refinance(category: str) -> None:
    """Record a completed refinance."""
    refinance_total.labels(category=category).inc()


def record_fraud_rule_evaluation(rule: str, risk_level: str) -> None:
    """Record a fraud rule evaluation."""
    fraud_rule_evaluation_total.labels(rule=rule, risk_level=risk_level).inc()


def record_event_published(event_type: str) -> None:
    """Record a successful event delivery."""
    event_publish_total.labels(event_type=event_type, status="sent").inc()


def record_event_failed(event_type: str) -> None:
    """Record a failed event delivery (after all retries)."""
    event_publish_total.labels(event_type=event_type, status="failed").inc()


def record_event_retry() -> None:
    """Record an event delivery retry attempt."""
    event_publish_retries.inc()


@contextmanager
def track_event_publish_latency() -> Generator[None, None, None]:
    """Context manager to track event delivery latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        event_publish_latency.observe(time.perf_counter() - start)


@contextmanager
def track_portfolio_analysis_latency() -> Generator[None, None, None]:
    """Context manager to track portfolio analysis latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        portfolio_analysis_latency.observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics exposition."""
    return CONTENT_TYPE_LATEST
