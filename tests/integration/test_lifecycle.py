"""
Integration tests for application lifecycle tracking.

These tests verify:
1. Status updates stamp decisions, append notes and log transitions
2. Terminal applications cannot move again
3. Stage history comes from the transition log, with a fallback
4. Staleness, processing time and grouping queries
"""

from datetime import timedelta
from uuid import uuid4

import pytest

from credit_core.application.dto import APPLICATION_RECEIVED
from credit_core.domain.entities import ApplicationStatus, CreditEventType
from credit_core.domain.exceptions import (
    ApplicationNotFoundException,
    InvalidArgumentException,
    InvalidStatusTransitionException,
)


# =============================================================================
# Status Update Tests
# =============================================================================

class TestUpdateStatus:
    """Tests for ApplicationTrackingService.update_status()."""

    @pytest.mark.asyncio
    async def test_approval_stamps_timestamp_and_notes(
        self,
        decision_service,
        tracking_service,
        application_repository,
        submission,
    ):
        application = await decision_service.submit_application(submission)

        updated = await tracking_service.update_status(
            application.id, ApplicationStatus.APPROVED, notes="Manual approval", actor="officer-7"
        )

        stored = await application_repository.get_by_id(application.id)
        assert updated.status == ApplicationStatus.APPROVED
        assert stored.approved_at is not None
        assert stored.rejected_at is None
        assert stored.notes == "First car\nManual approval"

    @pytest.mark.asyncio
    async def test_rejection_stamps_timestamp(self, decision_service, tracking_service, submission):
        application = await decision_service.submit_application(submission)

        updated = await tracking_service.update_status(application.id, "REJECTED")

        assert updated.status == ApplicationStatus.REJECTED
        assert updated.rejected_at is not None
        assert updated.approved_at is None
        assert updated.notes == "First car"

    @pytest.mark.asyncio
    async def test_cancel_soft_deletes(
        self,
        decision_service,
        tracking_service,
        application_repository,
        customer,
        submission,
    ):
        application = await decision_service.submit_application(submission)

        await tracking_service.update_status(application.id, ApplicationStatus.CANCELLED)

        stored = await application_repository.get_by_id(application.id)
        assert stored.status == ApplicationStatus.CANCELLED
        assert stored.deleted_at is not None
        assert await application_repository.get_by_customer(customer.customer_number) == []

    @pytest.mark.asyncio
    async def test_terminal_status_is_final(self, decision_service, tracking_service, submission):
        application = await decision_service.submit_application(submission)
        await tracking_service.update_status(application.id, ApplicationStatus.REJECTED)

        with pytest.raises(InvalidStatusTransitionException):
            await tracking_service.update_status(application.id, ApplicationStatus.APPROVED)

    @pytest.mark.asyncio
    async def test_unknown_status(self, decision_service, tracking_service, submission):
        application = await decision_service.submit_application(submission)

        with pytest.raises(InvalidArgumentException) as exc_info:
            await tracking_service.update_status(application.id, "ARCHIVED")

        assert exc_info.value.code == "UNKNOWN_APPLICATION_STATUS"

    @pytest.mark.asyncio
    async def test_unknown_application(self, tracking_service):
        with pytest.raises(ApplicationNotFoundException):
            await tracking_service.update_status(uuid4(), ApplicationStatus.IN_REVIEW)

    @pytest.mark.asyncio
    async def test_status_change_published(
        self,
        decision_service,
        tracking_service,
        event_publisher,
        submission,
    ):
        application = await decision_service.submit_application(submission)

        await tracking_service.update_status(application.id, ApplicationStatus.IN_REVIEW)

        changed = event_publisher.of_type(CreditEventType.STATUS_CHANGED)
        assert len(changed) == 1
        assert changed[0].payload["from_status"] == "PENDING"
        assert changed[0].payload["to_status"] == "IN_REVIEW"


# =============================================================================
# Stage History Tests
# =============================================================================

class TestStageHistory:
    """Tests for ApplicationTrackingService.get_stage_history()."""

    @pytest.mark.asyncio
    async def test_history_from_transition_log(
        self,
        decision_service,
        tracking_service,
        submission,
    ):
        application = await decision_service.submit_application(submission)
        await tracking_service.update_status(application.id, ApplicationStatus.IN_REVIEW)
        await tracking_service.update_status(
            application.id, ApplicationStatus.APPROVED, notes="Looks good", actor="officer-7"
        )

        history = await tracking_service.get_stage_history(application.id)

        assert [entry.stage for entry in history] == [
            APPLICATION_RECEIVED,
            "IN_REVIEW",
            "APPROVED",
        ]
        assert history[0].actor == submission.customer_number
        assert history[0].description == "Credit application received"
        assert history[2].actor == "officer-7"
        assert history[2].notes == "Looks good"
        assert history[0].occurred_at <= history[1].occurred_at <= history[2].occurred_at

    @pytest.mark.asyncio
    async def test_history_reconstructed_without_log(
        self,
        tracking_service,
        application_repository,
        make_application,
        customer,
    ):
        application = make_application(customer.customer_number, ApplicationStatus.APPROVED)
        await application_repository.save(application)

        history = await tracking_service.get_stage_history(application.id)

        assert [entry.stage for entry in history] == [
            APPLICATION_RECEIVED,
            "IN_REVIEW",
            "PENDING_APPROVAL",
            "APPROVED",
        ]
        assert history[1].occurred_at == application.created_at + timedelta(days=1)
        assert history[2].occurred_at == application.created_at + timedelta(days=2)
        assert history[3].occurred_at == application.approved_at

    @pytest.mark.asyncio
    async def test_pending_application_reconstructed_as_received_only(
        self,
        tracking_service,
        application_repository,
        make_application,
        customer,
    ):
        application = make_application(customer.customer_number)
        await application_repository.save(application)

        history = await tracking_service.get_stage_history(application.id)

        assert [entry.stage for entry in history] == [APPLICATION_RECEIVED]

    @pytest.mark.asyncio
    async def test_unknown_application(self, tracking_service):
        with pytest.raises(ApplicationNotFoundException):
            await tracking_service.get_stage_history(uuid4())


# =============================================================================
# Query Tests
# =============================================================================

class TestLifecycleQueries:
    """Tests for staleness, processing time and grouping."""

    @pytest.mark.asyncio
    async def test_stale_applications(
        self,
        tracking_service,
        application_repository,
        make_application,
        customer,
    ):
        stale_review = make_application(
            customer.customer_number, ApplicationStatus.IN_REVIEW, updated_days_ago=60
        )
        stale_pending = make_application(customer.customer_number, updated_days_ago=40)
        recent = make_application(customer.customer_number, updated_days_ago=5)
        decided = make_application(
            customer.customer_number, ApplicationStatus.APPROVED, updated_days_ago=90
        )
        for application in (stale_review, stale_pending, recent, decided):
            await application_repository.save(application)

        stale = await tracking_service.get_stale_applications(threshold_days=30)

        assert [a.id for a in stale] == [stale_review.id, stale_pending.id]

    @pytest.mark.asyncio
    async def test_stale_uses_configured_default(
        self,
        tracking_service,
        application_repository,
        make_application,
        customer,
    ):
        await application_repository.save(make_application(customer.customer_number, updated_days_ago=45))

        stale = await tracking_service.get_stale_applications()

        assert len(stale) == 1

    @pytest.mark.asyncio
    async def test_processing_time_of_decided_application(
        self,
        tracking_service,
        application_repository,
        make_application,
        customer,
    ):
        application = make_application(
            customer.customer_number, ApplicationStatus.APPROVED, updated_days_ago=3
        )
        application.created_at = application.approved_at - timedelta(days=7)
        await application_repository.save(application)

        assert await tracking_service.calculate_processing_time(application.id) == 7

    @pytest.mark.asyncio
    async def test_processing_time_of_open_application(
        self,
        tracking_service,
        application_repository,
        make_application,
        customer,
    ):
        application = make_application(customer.customer_number, updated_days_ago=9)
        await application_repository.save(application)

        assert await tracking_service.calculate_processing_time(application.id) == 10

    @pytest.mark.asyncio
    async def test_applications_grouped_by_status(
        self,
        tracking_service,
        application_repository,
        make_application,
        customer,
        other_customer,
    ):
        for status in (
            ApplicationStatus.PENDING,
            ApplicationStatus.PENDING,
            ApplicationStatus.APPROVED,
            ApplicationStatus.CANCELLED,
        ):
            application = make_application(customer.customer_number, status)
            if status == ApplicationStatus.CANCELLED:
                application.deleted_at = application.updated_at
            await application_repository.save(application)
        await application_repository.save(make_application(other_customer.customer_number))

        grouped = await tracking_service.get_applications_by_status(customer.customer_number)

        assert set(grouped) == {ApplicationStatus.PENDING, ApplicationStatus.APPROVED}
        assert len(grouped[ApplicationStatus.PENDING]) == 2
        assert len(grouped[ApplicationStatus.APPROVED]) == 1

    @pytest.mark.asyncio
    async def test_applications_with_status(
        self,
        tracking_service,
        application_repository,
        make_application,
        customer,
        other_customer,
    ):
        await application_repository.save(make_application(customer.customer_number, ApplicationStatus.IN_REVIEW))
        await application_repository.save(make_application(other_customer.customer_number, ApplicationStatus.IN_REVIEW))
        await application_repository.save(make_application(customer.customer_number))

        in_review = await tracking_service.get_applications_with_status("IN_REVIEW")

        assert len(in_review) == 2
        assert all(a.status == ApplicationStatus.IN_REVIEW for a in in_review)
