"""Data transfer objects for submitting credit applications."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Union

from credit_core.domain.entities import CreditApplication, CreditType


def _as_decimal(value: Any) -> Optional[Decimal]:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None


def _as_credit_type(value: Any) -> Optional[CreditType]:
    if isinstance(value, CreditType):
        return value
    try:
        return CreditType(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class ApplicationSubmission:
    """Input data for submitting a credit application."""
    customer_number: str
    credit_type: Union[CreditType, str]
    amount: Union[Decimal, str, int]
    term_months: int
    monthly_income: Union[Decimal, str, int]
    notes: str = ""

    def validate(self) -> List[str]:
        errors = []

        if not self.customer_number or not str(self.customer_number).strip():
            errors.append("customer_number is required")

        if _as_credit_type(self.credit_type) is None:
            allowed = ", ".join(t.value for t in CreditType)
            errors.append(f"credit_type must be one of: {allowed}")

        amount = _as_decimal(self.amount)
        if amount is None or not amount.is_finite() or amount <= 0:
            errors.append("amount must be positive")

        if not isinstance(self.term_months, int) or self.term_months < 1:
            errors.append("term_months must be at least 1")

        income = _as_decimal(self.monthly_income)
        if income is None or not income.is_finite() or income <= 0:
            errors.append("monthly_income must be positive")

        return errors

    def to_entity(self) -> CreditApplication:
        """Build a PENDING application. Call validate() first."""
        return CreditApplication(
            customer_number=str(self.customer_number).strip(),
            credit_type=_as_credit_type(self.credit_type),
            amount=_as_decimal(self.amount),
            term_months=self.term_months,
            monthly_income=_as_decimal(self.monthly_income),
            notes=self.notes or "",
        )
