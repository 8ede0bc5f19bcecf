"""
Data models for portfolio risk analysis.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict
from uuid import UUID

from credit_core.domain.entities import CreditType


@dataclass
class BankRiskReport:
    """
    Bank-wide credit risk snapshot.

    Attributes:
        total_active_credit: Sum of amounts of active approved credit
        active_credit_count: Number of active approved applications
        average_credit_amount: Mean active credit amount (0 if none)
        credit_type_distribution: Active credit amount per credit type
        window_days: Look-back window for the application counts
        applications_in_window: Applications created inside the window
        approvals_in_window: Applications approved inside the window
        approval_rate: approvals / applications * 100, 2 decimals
        risk_score: Composite 0-100 score (higher = riskier portfolio)
        generated_at: When the snapshot was taken
    """
    total_active_credit: Decimal
    active_credit_count: int
    average_credit_amount: Decimal
    credit_type_distribution: Dict[CreditType, Decimal]
    window_days: int
    applications_in_window: int
    approvals_in_window: int
    approval_rate: Decimal
    risk_score: int
    generated_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "total_active_credit": str(self.total_active_credit),
            "active_credit_count": self.active_credit_count,
            "average_credit_amount": str(self.average_credit_amount),
            "credit_type_distribution": {
                credit_type.value: str(amount)
                for credit_type, amount in self.credit_type_distribution.items()
            },
            "window_days": self.window_days,
            "applications_in_window": self.applications_in_window,
            "approvals_in_window": self.approvals_in_window,
            "approval_rate": str(self.approval_rate),
            "risk_score": self.risk_score,
            "generated_at": self.generated_at.isoformat(),
        }


@dataclass
class ApplicationRiskReport:
    """
    Risk breakdown of a single application against the active portfolio.

    Attributes:
        application_id: The analysed application
        amount_to_average_ratio: amount / portfolio average, 2 decimals
        credit_type_risk_factor: Lookup factor for the credit type
        term_risk_factor: Lookup factor for the term length
        income_to_credit_ratio: monthly_income * term / amount, 2 decimals
        risk_score: Composite 0-100 score (higher = riskier)
    """
    application_id: UUID
    amount_to_average_ratio: Decimal
    credit_type_risk_factor: float
    term_risk_factor: float
    income_to_credit_ratio: Decimal
    risk_score: int

    def to_dict(self) -> dict:
        return {
            "application_id": str(self.application_id),
            "amount_to_average_ratio": str(self.amount_to_average_ratio),
            "credit_type_risk_factor": self.credit_type_risk_factor,
            "term_risk_factor": self.term_risk_factor,
            "income_to_credit_ratio": str(self.income_to_credit_ratio),
            "risk_score": self.risk_score,
        }
