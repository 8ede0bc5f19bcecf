"""Credit decision service - orchestrates submission and automated decisioning."""

from datetime import datetime
from typing import Any, Mapping, Optional, Union
from uuid import UUID

import structlog

from credit_core.application.dto import ApplicationSubmission, DecisionResult
from credit_core.core.metrics import record_credit_score, record_decision
from credit_core.domain.entities import CreditApplication, Customer, FinancialSignals
from credit_core.domain.exceptions import (
    ApplicationNotFoundException,
    ApplicationOwnershipException,
    InvalidApplicationException,
    InvalidStatusTransitionException,
)
from credit_core.domain.interfaces import (
    ApplicationRepository,
    EventPublisher,
    StatusTransitionRepository,
)
from credit_core.service.scoring import (
    calculate_credit_score,
    determine_customer_category,
    evaluate_application,
)

from .transitions import TransitionRecorder

logger = structlog.get_logger(__name__)


class CreditDecisionService:
    """
    Application service for submitting and deciding credit applications.
    """

    def __init__(
        self,
        application_repository: ApplicationRepository,
        transition_repository: StatusTransitionRepository,
        event_publisher: Optional[EventPublisher] = None,
    ):
        self._application_repo = application_repository
        self._transitions = TransitionRecorder(transition_repository, event_publisher)

    async def submit_application(self, submission: ApplicationSubmission) -> CreditApplication:
        """
        Persist a new PENDING application.

        Args:
            submission: The applicant's request

        Returns:
            The stored application

        Raises:
            InvalidApplicationException: If the submission is invalid
        """
        errors = submission.validate()
        if errors:
            raise InvalidApplicationException("; ".join(errors))

        application = submission.to_entity()
        await self._application_repo.save(application)
        await self._transitions.record(
            application,
            from_status=None,
            occurred_at=application.created_at,
            actor=application.customer_number,
            notes=application.notes,
        )

        logger.info(
            "application_submitted",
            application_id=str(application.id),
            customer_number=application.customer_number,
            credit_type=application.credit_type.value,
            amount=str(application.amount),
            term_months=application.term_months,
        )

        return application

    async def process_application(
        self,
        application_id: UUID,
        customer: Customer,
        financial_signals: Union[FinancialSignals, Mapping[str, Any], None] = None,
    ) -> DecisionResult:
        """
        Score, categorize and decide an application.

        Args:
            application_id: The application to decide
            customer: The owning customer
            financial_signals: Caller-supplied signals; missing values count as zero

        Returns:
            DecisionResult with the updated application, score and category

        Raises:
            ApplicationNotFoundException: If the application does not exist
            ApplicationOwnershipException: If it belongs to another customer
            InvalidStatusTransitionException: If it was already decided or cancelled
        """
        application = await self._application_repo.get_by_id(application_id)
        if application is None or application.is_deleted:
            raise ApplicationNotFoundException(str(application_id))

        if application.customer_number != customer.customer_number:
            raise ApplicationOwnershipException(str(application_id), customer.customer_number)

        if application.status.is_terminal:
            raise InvalidStatusTransitionException(
                str(application_id),
                application.status.value,
                "decision",
            )

        log = logger.bind(
            application_id=str(application.id),
            customer_number=customer.customer_number,
        )

        score = calculate_credit_score(customer, application, financial_signals)
        category = determine_customer_category(score)
        record_credit_score(score)

        previous_status = application.status
        now = datetime.utcnow()
        evaluate_application(application, category, score, now=now)
        application.updated_at = now

        await self._application_repo.save(application)
        record_decision(category.value, application.status.value)

        if application.status != previous_status:
            await self._transitions.record(
                application,
                from_status=previous_status,
                occurred_at=now,
                notes=f"Automated decision: score {score}, category {category.value}",
                extra={"credit_score": score, "category": category.value},
            )

        log.info(
            "application_decided",
            credit_score=score,
            category=category.value,
            status=application.status.value,
        )

        return DecisionResult(application=application, credit_score=score, category=category)

    async def get_application(self, application_id: UUID) -> CreditApplication:
        """
        Get an application by ID, including cancelled ones.

        Raises:
            ApplicationNotFoundException: If the application does not exist
        """
        application = await self._application_repo.get_by_id(application_id)
        if application is None:
            raise ApplicationNotFoundException(str(application_id))
        return application
