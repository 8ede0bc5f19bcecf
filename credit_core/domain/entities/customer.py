"""Customer and financial signal entities."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Mapping, Optional


class CustomerCategory(str, Enum):
    """
    Policy tier derived from the credit score.

    Never stored on the customer: recomputed for every decision.
    """

    VIP = "VIP"
    STANDARD = "STANDARD"
    RISKY = "RISKY"

    @property
    def rank(self) -> int:
        return _CATEGORY_RANK[self]


_CATEGORY_RANK = {
    CustomerCategory.RISKY: 0,
    CustomerCategory.STANDARD: 1,
    CustomerCategory.VIP: 2,
}


@dataclass(frozen=True)
class Customer:
    """A bank customer, identified by a stable customer number."""

    customer_number: str
    first_name: str = ""
    last_name: str = ""
    email: Optional[str] = None


@dataclass(frozen=True)
class FinancialSignals:
    """
    Financial signals supplied by the caller for scoring.

    Attributes:
        monthly_expenses: Average monthly expenses
        late_payments: Number of late payments in the credit history
        on_time_payments: Number of on-time payments in the credit history
        account_age_months: Age of the oldest bank account in months
        average_balance: Average account balance
    """

    monthly_expenses: Decimal = Decimal("0")
    late_payments: int = 0
    on_time_payments: int = 0
    account_age_months: int = 0
    average_balance: Decimal = Decimal("0")

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "FinancialSignals":
        """
        Build signals from a loosely-typed mapping.

        Missing, None or unparseable values default to zero so scoring
        stays total.
        """
        data = data or {}
        return cls(
            monthly_expenses=_to_decimal(data.get("monthly_expenses")),
            late_payments=_to_int(data.get("late_payments")),
            on_time_payments=_to_int(data.get("on_time_payments")),
            account_age_months=_to_int(data.get("account_age_months")),
            average_balance=_to_decimal(data.get("average_balance")),
        )


def _to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not result.is_finite():
        return Decimal("0")
    return result


def _to_int(value: Any) -> int:
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0
