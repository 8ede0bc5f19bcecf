"""
Fixtures for integration tests.

Provides:
- In-memory SQLite database (aiosqlite) with the ORM schema
- SQLAlchemy repositories bound to a test session
- A recording event publisher
- Services wired to the above
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import AsyncGenerator, List

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from credit_core.application.dto import ApplicationSubmission
from credit_core.application.services import (
    ApplicationTrackingService,
    CreditDecisionService,
    PortfolioRiskService,
    RefinanceService,
)
from credit_core.domain.entities import (
    ApplicationStatus,
    CreditApplication,
    CreditEvent,
    CreditEventType,
    CreditType,
    Customer,
)
from credit_core.domain.interfaces import EventPublisher
from credit_core.infrastructure.database import Base
from credit_core.infrastructure.repositories import (
    SqlAlchemyApplicationRepository,
    SqlAlchemyStatusTransitionRepository,
)


# =============================================================================
# Mock Publisher
# =============================================================================

class MockEventPublisher(EventPublisher):
    """Event publisher that records events and optionally fails."""

    def __init__(self, fail_mode: bool = False):
        self.fail_mode = fail_mode
        self.call_count = 0
        self.events: List[CreditEvent] = []

    async def publish(self, event: CreditEvent) -> bool:
        self.call_count += 1

        if self.fail_mode:
            return False

        self.events.append(event)
        return True

    def of_type(self, event_type: CreditEventType) -> List[CreditEvent]:
        return [e for e in self.events if e.event_type == event_type]


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def application_repository(test_session) -> SqlAlchemyApplicationRepository:
    return SqlAlchemyApplicationRepository(test_session)


@pytest.fixture
def transition_repository(test_session) -> SqlAlchemyStatusTransitionRepository:
    return SqlAlchemyStatusTransitionRepository(test_session)


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def event_publisher() -> MockEventPublisher:
    return MockEventPublisher()


@pytest.fixture
def decision_service(application_repository, transition_repository, event_publisher) -> CreditDecisionService:
    return CreditDecisionService(application_repository, transition_repository, event_publisher)


@pytest.fixture
def tracking_service(application_repository, transition_repository, event_publisher) -> ApplicationTrackingService:
    return ApplicationTrackingService(application_repository, transition_repository, event_publisher)


@pytest.fixture
def refinance_service(application_repository, transition_repository, event_publisher) -> RefinanceService:
    return RefinanceService(application_repository, transition_repository, event_publisher)


@pytest.fixture
def portfolio_service(application_repository) -> PortfolioRiskService:
    return PortfolioRiskService(application_repository)


# =============================================================================
# Test Data
# =============================================================================

@pytest.fixture
def customer() -> Customer:
    return Customer(customer_number="C-1001", first_name="Ayse", last_name="Demir")


@pytest.fixture
def other_customer() -> Customer:
    return Customer(customer_number="C-2002", first_name="Mehmet", last_name="Kaya")


@pytest.fixture
def submission(customer) -> ApplicationSubmission:
    return ApplicationSubmission(
        customer_number=customer.customer_number,
        credit_type=CreditType.AUTO_LOAN,
        amount=Decimal("250000"),
        term_months=48,
        monthly_income=Decimal("20000"),
        notes="First car",
    )


@pytest.fixture
def vip_signals() -> dict:
    """Signals scoring 900 (clamped)."""
    return {
        "monthly_expenses": "4000",
        "on_time_payments": 30,
        "late_payments": 0,
        "account_age_months": 120,
        "average_balance": "25000",
    }


@pytest.fixture
def risky_signals() -> dict:
    """Signals scoring 300 (clamped)."""
    return {
        "monthly_expenses": "19000",
        "late_payments": 15,
    }


def _make_stored_application(
    customer_number: str,
    status: ApplicationStatus = ApplicationStatus.PENDING,
    amount: str = "100000",
    credit_type: CreditType = CreditType.PERSONAL_FINANCE,
    updated_days_ago: int = 0,
    term_months: int = 24,
) -> CreditApplication:
    """Build an application with timestamps in the past, ready to save."""
    now = datetime.utcnow()
    created = now - timedelta(days=updated_days_ago + 1)
    updated = now - timedelta(days=updated_days_ago)
    application = CreditApplication(
        customer_number=customer_number,
        credit_type=credit_type,
        amount=Decimal(amount),
        term_months=term_months,
        monthly_income=Decimal("15000"),
        status=status,
        created_at=created,
        updated_at=updated,
    )
    if status == ApplicationStatus.APPROVED:
        application.approved_at = updated
    elif status == ApplicationStatus.REJECTED:
        application.rejected_at = updated
    return application


@pytest.fixture
def make_application():
    """Factory for applications with timestamps in the past."""
    return _make_stored_application
