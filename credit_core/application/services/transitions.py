"""Records status changes: transition log, metrics and outgoing events."""

from datetime import datetime
from typing import Any, Dict, Optional

import structlog

from credit_core.core.metrics import record_status_transition
from credit_core.domain.entities import (
    ApplicationStatus,
    CreditApplication,
    CreditEvent,
    CreditEventType,
    StatusTransition,
)
from credit_core.domain.interfaces import EventPublisher, StatusTransitionRepository

logger = structlog.get_logger(__name__)

_OUTCOME_EVENTS = {
    ApplicationStatus.APPROVED: CreditEventType.APPLICATION_APPROVED,
    ApplicationStatus.REJECTED: CreditEventType.APPLICATION_REJECTED,
}


class TransitionRecorder:
    """
    Writes one transition per status change and announces it.

    The initial submission is logged but not announced.
    """

    def __init__(
        self,
        transition_repository: StatusTransitionRepository,
        event_publisher: Optional[EventPublisher] = None,
    ):
        self._transition_repo = transition_repository
        self._publisher = event_publisher

    async def record(
        self,
        application: CreditApplication,
        from_status: Optional[ApplicationStatus],
        occurred_at: datetime,
        actor: str = "system",
        notes: str = "",
        extra: Optional[Dict[str, Any]] = None,
    ) -> StatusTransition:
        transition = StatusTransition(
            application_id=application.id,
            from_status=from_status,
            to_status=application.status,
            actor=actor,
            notes=notes or "",
            occurred_at=occurred_at,
        )
        await self._transition_repo.append(transition)

        record_status_transition(
            from_status.value if from_status else None,
            application.status.value,
        )

        if from_status is not None:
            event_type = _OUTCOME_EVENTS.get(application.status, CreditEventType.STATUS_CHANGED)
            payload = {
                "application_id": str(application.id),
                "customer_number": application.customer_number,
                "from_status": from_status.value,
                "to_status": application.status.value,
                "amount": str(application.amount),
                "credit_type": application.credit_type.value,
            }
            if extra:
                payload.update(extra)
            await self.publish(CreditEvent(event_type=event_type, payload=payload))

        return transition

    async def publish(self, event: CreditEvent) -> bool:
        if self._publisher is None:
            return False

        delivered = await self._publisher.publish(event)
        if not delivered:
            logger.warning(
                "credit_event_not_delivered",
                event_type=event.event_type.value,
                event_id=str(event.id),
            )
        return delivered
