"""Refinance service - replaces approved credit with a repriced application."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union
from uuid import UUID

import structlog

from credit_core.core.metrics import record_refinance
from credit_core.domain.entities import (
    ApplicationStatus,
    CreditApplication,
    CreditEvent,
    CreditEventType,
    Customer,
    CustomerCategory,
)
from credit_core.domain.exceptions import (
    ApplicationNotFoundException,
    ApplicationNotRefinanceableException,
    ApplicationOwnershipException,
)
from credit_core.domain.interfaces import (
    ApplicationRepository,
    EventPublisher,
    StatusTransitionRepository,
)
from credit_core.service.lending import (
    RefinanceQuote,
    build_refinance_quote,
    calculate_refinance_rate,
    refinance_initial_status,
)

from .transitions import TransitionRecorder

logger = structlog.get_logger(__name__)

Category = Union[CustomerCategory, str, None]


class RefinanceService:
    """
    Application service for refinancing approved credit.

    refinance_credit writes two applications through the same
    repository; the caller commits them as one unit of work.
    """

    def __init__(
        self,
        application_repository: ApplicationRepository,
        transition_repository: StatusTransitionRepository,
        event_publisher: Optional[EventPublisher] = None,
    ):
        self._application_repo = application_repository
        self._transitions = TransitionRecorder(transition_repository, event_publisher)

    async def refinance_credit(
        self,
        existing_application_id: UUID,
        customer: Customer,
        category: Category,
        market_rate: Decimal,
        extend_term_months: Optional[int] = None,
    ) -> CreditApplication:
        """
        Refinance an approved application.

        The new application copies credit type, amount and income, gets
        the discounted rate and a status from the category shortcut.
        The old application is cancelled and soft-deleted.

        Args:
            existing_application_id: The approved application to replace
            customer: The requesting customer
            category: The customer's current category
            market_rate: Current market rate (annual, percent)
            extend_term_months: Months added to the term when positive

        Returns:
            The new application

        Raises:
            ApplicationNotFoundException: If the application does not exist
            ApplicationNotRefinanceableException: If it is not APPROVED
            ApplicationOwnershipException: If it belongs to another customer
        """
        existing = await self._application_repo.get_by_id(existing_application_id)
        if existing is None:
            raise ApplicationNotFoundException(str(existing_application_id))

        if existing.status != ApplicationStatus.APPROVED:
            raise ApplicationNotRefinanceableException(
                str(existing_application_id), existing.status.value
            )

        if existing.customer_number != customer.customer_number:
            raise ApplicationOwnershipException(
                str(existing_application_id), customer.customer_number
            )

        log = logger.bind(
            existing_application_id=str(existing.id),
            customer_number=customer.customer_number,
        )

        category_label = _category_label(category)
        now = datetime.utcnow()
        term_months = existing.term_months
        if extend_term_months is not None and extend_term_months > 0:
            term_months += extend_term_months

        refinanced = CreditApplication(
            customer_number=customer.customer_number,
            credit_type=existing.credit_type,
            amount=existing.amount,
            term_months=term_months,
            monthly_income=existing.monthly_income,
            notes=f"Refinanced from application {existing.id}",
            interest_rate=calculate_refinance_rate(market_rate, category),
            created_at=now,
            updated_at=now,
        )

        await self._application_repo.save(refinanced)
        await self._transitions.record(
            refinanced,
            from_status=None,
            occurred_at=now,
            actor=customer.customer_number,
            notes=refinanced.notes,
        )

        # Received as PENDING, then moved by the category shortcut
        initial_status = refinance_initial_status(category)
        if initial_status != refinanced.status:
            received_status = refinanced.status
            refinanced.move_to(initial_status, now)
            await self._application_repo.save(refinanced)
            await self._transitions.record(
                refinanced,
                from_status=received_status,
                occurred_at=now,
                notes=f"Refinance shortcut for category {category_label}",
            )

        cancel_note = f"Refinanced to application {refinanced.id}"
        existing.move_to(ApplicationStatus.CANCELLED, now)
        existing.append_notes(cancel_note)
        existing.updated_at = now

        await self._application_repo.save(existing)
        await self._transitions.record(
            existing,
            from_status=ApplicationStatus.APPROVED,
            occurred_at=now,
            actor=customer.customer_number,
            notes=cancel_note,
        )

        record_refinance(category_label)
        await self._transitions.publish(CreditEvent(
            event_type=CreditEventType.CREDIT_REFINANCED,
            payload={
                "previous_application_id": str(existing.id),
                "application_id": str(refinanced.id),
                "customer_number": customer.customer_number,
                "category": category_label,
                "interest_rate": str(refinanced.interest_rate),
                "term_months": refinanced.term_months,
                "status": refinanced.status.value,
            },
        ))

        log.info(
            "credit_refinanced",
            new_application_id=str(refinanced.id),
            category=category_label,
            interest_rate=str(refinanced.interest_rate),
            term_months=refinanced.term_months,
            status=refinanced.status.value,
        )

        return refinanced

    async def find_refinance_eligible_credits(self, customer_number: str) -> List[CreditApplication]:
        """A customer's non-deleted APPROVED applications."""
        return await self._application_repo.get_by_customer_and_status(
            customer_number, ApplicationStatus.APPROVED
        )

    def calculate_refinance_offer(
        self,
        application: CreditApplication,
        market_rate: Decimal,
        category: Category,
    ) -> Decimal:
        """Discounted rate: market_rate * (1 - discount), 2 decimals half-up."""
        return calculate_refinance_rate(market_rate, category)

    def build_refinance_quote(
        self,
        application: CreditApplication,
        market_rate: Decimal,
        category: Category,
    ) -> RefinanceQuote:
        """Discounted rate plus the monthly payment over the application's term."""
        return build_refinance_quote(application, market_rate, category)


def _category_label(category: Category) -> str:
    try:
        return CustomerCategory(category).value
    except ValueError:
        return "UNKNOWN"
