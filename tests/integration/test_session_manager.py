"""
Integration tests for session management and service wiring.

These tests verify:
1. A session commits everything written through it on success
2. A failing unit of work is rolled back
3. The wiring helpers build services around one session
"""

import pytest
import pytest_asyncio
from sqlalchemy.pool import StaticPool

from credit_core.application.services import (
    ApplicationTrackingService,
    CreditDecisionService,
    PortfolioRiskService,
    RefinanceService,
)
from credit_core.core import dependencies
from credit_core.infrastructure.caches import InMemorySeenIpStore
from credit_core.infrastructure.database import (
    DatabaseSessionManager,
    db_manager,
    get_db_session,
)
from credit_core.infrastructure.publishers import HttpWebhookEventPublisher


@pytest_asyncio.fixture
async def manager():
    manager = DatabaseSessionManager()
    manager.init("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    await manager.create_all()
    yield manager
    await manager.close()


class TestDatabaseSessionManager:
    """Tests for DatabaseSessionManager.session()."""

    @pytest.mark.asyncio
    async def test_uninitialized_manager_refuses_sessions(self):
        with pytest.raises(RuntimeError):
            async with DatabaseSessionManager().session():
                pass

    @pytest.mark.asyncio
    async def test_unit_of_work_commits(self, manager, submission):
        async with manager.session() as session:
            application = await dependencies.get_credit_decision_service(session).submit_application(
                submission
            )

        async with manager.session() as session:
            stored = await dependencies.get_application_repository(session).get_by_id(application.id)
            transitions = await dependencies.get_transition_repository(session).get_by_application_id(
                application.id
            )

        assert stored is not None
        assert len(transitions) == 1

    @pytest.mark.asyncio
    async def test_failed_unit_of_work_rolls_back(self, manager, submission):
        class Boom(Exception):
            pass

        application_id = None
        with pytest.raises(Boom):
            async with manager.session() as session:
                application = await dependencies.get_credit_decision_service(
                    session
                ).submit_application(submission)
                application_id = application.id
                raise Boom()

        async with manager.session() as session:
            stored = await dependencies.get_application_repository(session).get_by_id(application_id)

        assert stored is None

    @pytest.mark.asyncio
    async def test_shared_manager_session_dependency(self, submission):
        db_manager.init("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
        try:
            await db_manager.create_all()

            async for session in get_db_session():
                application = await dependencies.get_credit_decision_service(
                    session
                ).submit_application(submission)

            async for session in get_db_session():
                stored = await dependencies.get_application_repository(session).get_by_id(
                    application.id
                )
        finally:
            await db_manager.close()

        assert stored is not None


class TestDependencies:
    """Tests for the wiring helpers."""

    def test_shared_collaborators_are_cached(self):
        assert dependencies.get_event_publisher() is dependencies.get_event_publisher()
        assert dependencies.get_seen_ip_store() is dependencies.get_seen_ip_store()
        assert isinstance(dependencies.get_event_publisher(), HttpWebhookEventPublisher)
        assert isinstance(dependencies.get_seen_ip_store(), InMemorySeenIpStore)

    def test_fraud_rules_share_the_store(self):
        first = dependencies.get_fraud_rules()
        second = dependencies.get_fraud_rules()

        assert [rule.name for rule in first] == ["unusual_location", "unfamiliar_ip", "high_amount"]
        assert first[1]._store is second[1]._store

    @pytest.mark.asyncio
    async def test_services_built_around_session(self, test_session):
        assert isinstance(dependencies.get_credit_decision_service(test_session), CreditDecisionService)
        assert isinstance(dependencies.get_tracking_service(test_session), ApplicationTrackingService)
        assert isinstance(dependencies.get_refinance_service(test_session), RefinanceService)
        assert isinstance(dependencies.get_portfolio_risk_service(test_session), PortfolioRiskService)
