"""Wiring of services around a database session."""

from functools import lru_cache
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from credit_core.application.services import (
    ApplicationTrackingService,
    CreditDecisionService,
    PortfolioRiskService,
    RefinanceService,
)
from credit_core.infrastructure.caches import InMemorySeenIpStore
from credit_core.infrastructure.publishers import HttpWebhookEventPublisher
from credit_core.infrastructure.repositories import (
    SqlAlchemyApplicationRepository,
    SqlAlchemyStatusTransitionRepository,
)
from credit_core.service.fraud import FraudDetectionRule, build_default_rules


# Process-wide collaborators
@lru_cache
def get_event_publisher() -> HttpWebhookEventPublisher:
    """Get the shared webhook event publisher."""
    return HttpWebhookEventPublisher()


@lru_cache
def get_seen_ip_store() -> InMemorySeenIpStore:
    """Get the shared seen-IP store."""
    return InMemorySeenIpStore()


def get_fraud_rules() -> List[FraudDetectionRule]:
    """Get a fresh rule set around the shared seen-IP store."""
    return build_default_rules(get_seen_ip_store())


# Repository dependencies
def get_application_repository(session: AsyncSession) -> SqlAlchemyApplicationRepository:
    return SqlAlchemyApplicationRepository(session)


def get_transition_repository(session: AsyncSession) -> SqlAlchemyStatusTransitionRepository:
    return SqlAlchemyStatusTransitionRepository(session)


# Service dependencies
def get_credit_decision_service(session: AsyncSession) -> CreditDecisionService:
    """Get a CreditDecisionService bound to a session."""
    return CreditDecisionService(
        application_repository=get_application_repository(session),
        transition_repository=get_transition_repository(session),
        event_publisher=get_event_publisher(),
    )


def get_tracking_service(session: AsyncSession) -> ApplicationTrackingService:
    """Get an ApplicationTrackingService bound to a session."""
    return ApplicationTrackingService(
        application_repository=get_application_repository(session),
        transition_repository=get_transition_repository(session),
        event_publisher=get_event_publisher(),
    )


def get_refinance_service(session: AsyncSession) -> RefinanceService:
    """Get a RefinanceService bound to a session."""
    return RefinanceService(
        application_repository=get_application_repository(session),
        transition_repository=get_transition_repository(session),
        event_publisher=get_event_publisher(),
    )


def get_portfolio_risk_service(session: AsyncSession) -> PortfolioRiskService:
    """Get a PortfolioRiskService bound to a session."""
    return PortfolioRiskService(application_repository=get_application_repository(session))
