"""Credit application entity and its status lifecycle."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from uuid import UUID, uuid4


class CreditType(str, Enum):
    """Loan products offered by the bank."""

    MORTGAGE = "MORTGAGE"
    AUTO_LOAN = "AUTO_LOAN"
    PERSONAL_FINANCE = "PERSONAL_FINANCE"
    BUSINESS_LOAN = "BUSINESS_LOAN"
    EDUCATION_LOAN = "EDUCATION_LOAN"
    COMMERCIAL_MORTGAGE = "COMMERCIAL_MORTGAGE"
    EQUIPMENT_FINANCING = "EQUIPMENT_FINANCING"
    WORKING_CAPITAL = "WORKING_CAPITAL"


class ApplicationStatus(str, Enum):
    """
    Status of a credit application.

    PENDING -> IN_REVIEW -> PENDING_APPROVAL -> APPROVED | REJECTED.
    CANCELLED is reachable from any non-terminal state.
    """

    PENDING = "PENDING"
    IN_REVIEW = "IN_REVIEW"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset(
    {ApplicationStatus.APPROVED, ApplicationStatus.REJECTED, ApplicationStatus.CANCELLED}
)

OPEN_STATUSES = frozenset(
    {ApplicationStatus.PENDING, ApplicationStatus.IN_REVIEW, ApplicationStatus.PENDING_APPROVAL}
)


@dataclass
class CreditApplication:
    """
    A single request for credit.

    Only one of approved_at / rejected_at is ever set, and it always
    matches the status (APPROVED or REJECTED). Applications are never
    hard-deleted; deleted_at marks cancelled or superseded ones.
    """

    customer_number: str
    credit_type: CreditType
    amount: Decimal
    term_months: int
    monthly_income: Decimal
    notes: str = ""
    status: ApplicationStatus = ApplicationStatus.PENDING
    interest_rate: Optional[Decimal] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    approved_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_active(self) -> bool:
        """Approved and not soft-deleted: counts towards the live portfolio."""
        return self.status == ApplicationStatus.APPROVED and not self.is_deleted

    def validate(self) -> List[str]:
        errors = []

        if self.amount is None or self.amount <= 0:
            errors.append("amount must be positive")

        if self.term_months is None or self.term_months < 1:
            errors.append("term_months must be at least 1")

        if self.monthly_income is None or self.monthly_income <= 0:
            errors.append("monthly_income must be positive")

        if not self.customer_number or not self.customer_number.strip():
            errors.append("customer_number is required")

        if self.approved_at is not None and self.rejected_at is not None:
            errors.append("an application cannot be both approved and rejected")

        return errors

    def approve(self, at: datetime) -> None:
        self.status = ApplicationStatus.APPROVED
        self.approved_at = at
        self.rejected_at = None

    def reject(self, at: datetime) -> None:
        self.status = ApplicationStatus.REJECTED
        self.rejected_at = at
        self.approved_at = None

    def move_to(self, status: ApplicationStatus, at: datetime) -> None:
        """Set a new status, stamping the decision timestamp where one applies."""
        if status == ApplicationStatus.APPROVED:
            self.approve(at)
        elif status == ApplicationStatus.REJECTED:
            self.reject(at)
        else:
            self.status = status

        if status == ApplicationStatus.CANCELLED:
            self.deleted_at = at

    def append_notes(self, notes: Optional[str]) -> None:
        if not notes:
            return
        self.notes = f"{self.notes}\n{notes}" if self.notes else notes

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "application_id": str(self.id),
            "customer_number": self.customer_number,
            "credit_type": self.credit_type.value,
            "amount": str(self.amount),
            "term_months": self.term_months,
            "monthly_income": str(self.monthly_income),
            "interest_rate": str(self.interest_rate) if self.interest_rate is not None else None,
            "status": self.status.value,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() + "Z",
            "updated_at": self.updated_at.isoformat() + "Z",
            "approved_at": self.approved_at.isoformat() + "Z" if self.approved_at else None,
            "rejected_at": self.rejected_at.isoformat() + "Z" if self.rejected_at else None,
        }


@dataclass(frozen=True)
class StatusTransition:
    """
    One entry in the append-only status log of an application.

    from_status is None for the initial submission.
    """

    application_id: UUID
    to_status: ApplicationStatus
    from_status: Optional[ApplicationStatus] = None
    actor: str = "system"
    notes: str = ""
    id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=datetime.utcnow)
