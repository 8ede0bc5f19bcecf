"""
Approval Decision Engine for the credit decisioning core.

Each customer category has its own policy:

    VIP:      amount above the VIP review limit -> PENDING_APPROVAL,
              otherwise APPROVED
    STANDARD: amount above the STANDARD review limit or a borderline
              score -> PENDING_APPROVAL, otherwise APPROVED
    RISKY:    amount above the RISKY limit or a very low score ->
              REJECTED, otherwise PENDING_APPROVAL

The engine only sets status and the matching timestamp on the
application. Persisting it is the caller's job.
"""

from datetime import datetime
from typing import Callable, Dict, Optional, Union

import structlog

from credit_core.domain.entities import (
    ApplicationStatus,
    CreditApplication,
    CustomerCategory,
)
from credit_core.domain.exceptions import UnknownCustomerCategoryException

from .settings import ApprovalSettings, approval_settings

logger = structlog.get_logger(__name__)


def _apply_vip_policy(
    application: CreditApplication,
    credit_score: int,
    now: datetime,
    settings: ApprovalSettings,
) -> str:
    if application.amount > settings.vip_manual_review_amount:
        application.status = ApplicationStatus.PENDING_APPROVAL
        return "vip_amount_requires_manual_review"

    application.approve(now)
    return "vip_auto_approved"


def _apply_standard_policy(
    application: CreditApplication,
    credit_score: int,
    now: datetime,
    settings: ApprovalSettings,
) -> str:
    if application.amount > settings.standard_manual_review_amount:
        application.status = ApplicationStatus.PENDING_APPROVAL
        return "standard_amount_requires_manual_review"

    if credit_score < settings.standard_auto_approve_min_score:
        application.status = ApplicationStatus.PENDING_APPROVAL
        return "standard_borderline_score"

    application.approve(now)
    return "standard_auto_approved"


def _apply_risky_policy(
    application: CreditApplication,
    credit_score: int,
    now: datetime,
    settings: ApprovalSettings,
) -> str:
    if application.amount > settings.risky_rejection_amount:
        application.reject(now)
        return "risky_amount_rejected"

    if credit_score < settings.risky_min_score:
        application.reject(now)
        return "risky_score_rejected"

    application.status = ApplicationStatus.PENDING_APPROVAL
    return "risky_requires_manual_review"


_POLICIES: Dict[CustomerCategory, Callable[..., str]] = {
    CustomerCategory.VIP: _apply_vip_policy,
    CustomerCategory.STANDARD: _apply_standard_policy,
    CustomerCategory.RISKY: _apply_risky_policy,
}


def resolve_category(category: Union[CustomerCategory, str]) -> CustomerCategory:
    """
    Coerce a category value, refusing anything outside the known tiers.

    Raises:
        UnknownCustomerCategoryException: For any unknown value
    """
    if isinstance(category, CustomerCategory):
        return category
    try:
        return CustomerCategory(category)
    except ValueError:
        raise UnknownCustomerCategoryException(category)


def evaluate_application(
    application: CreditApplication,
    customer_category: Union[CustomerCategory, str],
    credit_score: int,
    now: Optional[datetime] = None,
    settings: ApprovalSettings = approval_settings,
) -> CreditApplication:
    """
    Decide an application according to its customer's category.

    Args:
        application: The application to decide (mutated in place)
        customer_category: The category derived from the current score
        credit_score: The current credit score
        now: Decision time, defaults to the current UTC time
        settings: Approval settings (uses defaults if not provided)

    Returns:
        The same application with status and decision timestamp set

    Raises:
        UnknownCustomerCategoryException: If the category has no policy
    """
    category = resolve_category(customer_category)
    policy = _POLICIES.get(category)
    if policy is None:
        raise UnknownCustomerCategoryException(category)

    reason = policy(application, credit_score, now or datetime.utcnow(), settings)

    logger.info(
        "application_evaluated",
        application_id=str(application.id),
        category=category.value,
        credit_score=credit_score,
        amount=str(application.amount),
        status=application.status.value,
        reason=reason,
    )

    return application
