"""Application tracking service - lifecycle, timeline and staleness queries."""

from collections import defaultdict
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Union
from uuid import UUID

import structlog

from credit_core.application.dto import APPLICATION_RECEIVED, StageHistoryEntry
from credit_core.core.config import settings
from credit_core.domain.entities import (
    ApplicationStatus,
    CreditApplication,
    StatusTransition,
)
from credit_core.domain.exceptions import (
    ApplicationNotFoundException,
    InvalidArgumentException,
    InvalidStatusTransitionException,
)
from credit_core.domain.interfaces import (
    ApplicationRepository,
    EventPublisher,
    StatusTransitionRepository,
)

from .transitions import TransitionRecorder

logger = structlog.get_logger(__name__)

STAGE_DESCRIPTIONS = {
    APPLICATION_RECEIVED: "Credit application received",
    ApplicationStatus.PENDING.value: "Credit application pending",
    ApplicationStatus.IN_REVIEW.value: "Credit application under review",
    ApplicationStatus.PENDING_APPROVAL.value: "Credit application awaiting approval",
    ApplicationStatus.APPROVED.value: "Credit application approved",
    ApplicationStatus.REJECTED.value: "Credit application rejected",
    ApplicationStatus.CANCELLED.value: "Credit application cancelled",
}

# Statuses that imply the application passed through review / approval
_REVIEWED = frozenset({
    ApplicationStatus.IN_REVIEW,
    ApplicationStatus.PENDING_APPROVAL,
    ApplicationStatus.APPROVED,
    ApplicationStatus.REJECTED,
})
_AWAITED_APPROVAL = frozenset({
    ApplicationStatus.PENDING_APPROVAL,
    ApplicationStatus.APPROVED,
    ApplicationStatus.REJECTED,
})


def _coerce_status(status: Union[ApplicationStatus, str]) -> ApplicationStatus:
    if isinstance(status, ApplicationStatus):
        return status
    try:
        return ApplicationStatus(status)
    except ValueError:
        raise InvalidArgumentException(
            message=f"Unknown application status: {status}",
            code="UNKNOWN_APPLICATION_STATUS",
        )


def _stage(stage: str, occurred_at: datetime, actor: str = "system", notes: str = "") -> StageHistoryEntry:
    return StageHistoryEntry(
        stage=stage,
        description=STAGE_DESCRIPTIONS[stage],
        occurred_at=occurred_at,
        actor=actor,
        notes=notes,
    )


class ApplicationTrackingService:
    """
    Application service for the credit application lifecycle.
    """

    def __init__(
        self,
        application_repository: ApplicationRepository,
        transition_repository: StatusTransitionRepository,
        event_publisher: Optional[EventPublisher] = None,
    ):
        self._application_repo = application_repository
        self._transition_repo = transition_repository
        self._transitions = TransitionRecorder(transition_repository, event_publisher)

    async def update_status(
        self,
        application_id: UUID,
        new_status: Union[ApplicationStatus, str],
        notes: Optional[str] = None,
        actor: str = "system",
    ) -> CreditApplication:
        """
        Move an application to a new status.

        Stamps the approval/rejection timestamp, appends notes and
        records the transition. Cancelling also soft-deletes.

        Args:
            application_id: The application to update
            new_status: Target status
            notes: Optional free text appended to the application notes
            actor: Who made the change

        Returns:
            The updated application

        Raises:
            ApplicationNotFoundException: If the application does not exist
            InvalidStatusTransitionException: If the application is in a terminal status
            InvalidArgumentException: If the status is unknown
        """
        new_status = _coerce_status(new_status)

        application = await self._application_repo.get_by_id(application_id)
        if application is None:
            raise ApplicationNotFoundException(str(application_id))

        old_status = application.status
        if old_status.is_terminal:
            raise InvalidStatusTransitionException(
                str(application_id), old_status.value, new_status.value
            )

        now = datetime.utcnow()
        application.move_to(new_status, now)
        application.append_notes(notes)
        application.updated_at = now

        await self._application_repo.save(application)
        await self._transitions.record(
            application,
            from_status=old_status,
            occurred_at=now,
            actor=actor,
            notes=notes or "",
        )

        logger.info(
            "application_status_updated",
            application_id=str(application_id),
            old_status=old_status.value,
            new_status=new_status.value,
            actor=actor,
        )

        return application

    async def get_stage_history(self, application_id: UUID) -> List[StageHistoryEntry]:
        """
        Timeline of an application's stages, oldest first.

        Built from the transition log. Applications without a log get
        a reconstruction from their own timestamps.

        Raises:
            ApplicationNotFoundException: If the application does not exist
        """
        application = await self._application_repo.get_by_id(application_id)
        if application is None:
            raise ApplicationNotFoundException(str(application_id))

        transitions = await self._transition_repo.get_by_application_id(application_id)
        if transitions:
            return self._history_from_log(transitions)

        logger.debug("stage_history_reconstructed", application_id=str(application_id))
        return self._reconstruct_history(application)

    async def get_stale_applications(
        self,
        threshold_days: Optional[int] = None,
    ) -> List[CreditApplication]:
        """
        Open applications that have not been updated for threshold_days.

        Args:
            threshold_days: Days without progress; defaults to the configured value

        Returns:
            Non-deleted PENDING / IN_REVIEW / PENDING_APPROVAL applications,
            least recently updated first
        """
        if threshold_days is None:
            threshold_days = settings.stale_application_days

        threshold = datetime.utcnow() - timedelta(days=threshold_days)
        stale = await self._application_repo.get_open_updated_before(threshold)

        logger.info("stale_applications_found", threshold_days=threshold_days, count=len(stale))
        return stale

    async def calculate_processing_time(self, application_id: UUID) -> int:
        """
        Whole days from creation to decision, cancellation or now.

        Raises:
            ApplicationNotFoundException: If the application does not exist
        """
        application = await self._application_repo.get_by_id(application_id)
        if application is None:
            raise ApplicationNotFoundException(str(application_id))

        if application.status == ApplicationStatus.APPROVED:
            end = application.approved_at
        elif application.status == ApplicationStatus.REJECTED:
            end = application.rejected_at
        elif application.status == ApplicationStatus.CANCELLED:
            end = application.updated_at
        else:
            end = datetime.utcnow()

        end = end or application.updated_at
        return (end - application.created_at).days

    async def get_applications_by_status(
        self,
        customer_number: str,
    ) -> Dict[ApplicationStatus, List[CreditApplication]]:
        """Group a customer's non-deleted applications by status."""
        grouped: Dict[ApplicationStatus, List[CreditApplication]] = defaultdict(list)
        for application in await self._application_repo.get_by_customer(customer_number):
            grouped[application.status].append(application)
        return dict(grouped)

    async def get_applications_with_status(
        self,
        status: Union[ApplicationStatus, str],
    ) -> List[CreditApplication]:
        """Non-deleted applications currently in a status."""
        return await self._application_repo.get_by_status(_coerce_status(status))

    def _history_from_log(self, transitions: List[StatusTransition]) -> List[StageHistoryEntry]:
        history = []
        for index, transition in enumerate(transitions):
            stage = APPLICATION_RECEIVED if index == 0 else transition.to_status.value
            history.append(
                _stage(stage, transition.occurred_at, transition.actor, transition.notes)
            )
        return history

    def _reconstruct_history(self, application: CreditApplication) -> List[StageHistoryEntry]:
        created = application.created_at
        status = application.status
        history = [_stage(APPLICATION_RECEIVED, created)]

        if status in _REVIEWED:
            history.append(_stage(ApplicationStatus.IN_REVIEW.value, created + timedelta(days=1)))

        if status in _AWAITED_APPROVAL:
            history.append(
                _stage(ApplicationStatus.PENDING_APPROVAL.value, created + timedelta(days=2))
            )

        if status == ApplicationStatus.APPROVED:
            history.append(_stage(
                ApplicationStatus.APPROVED.value,
                application.approved_at or created + timedelta(days=3),
            ))
        elif status == ApplicationStatus.REJECTED:
            history.append(_stage(
                ApplicationStatus.REJECTED.value,
                application.rejected_at or created + timedelta(days=3),
            ))
        elif status == ApplicationStatus.CANCELLED:
            history.append(_stage(
                ApplicationStatus.CANCELLED.value,
                application.updated_at or created + timedelta(days=1),
            ))

        return history
