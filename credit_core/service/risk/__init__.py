"""Portfolio risk analysis."""

from .models import ApplicationRiskReport, BankRiskReport
from .portfolio import (
    CREDIT_TYPE_RISK_FACTORS,
    active_credits,
    approved_since,
    average_amount,
    build_application_risk_report,
    build_bank_risk_report,
    calculate_amount_to_average_ratio,
    calculate_application_risk_score,
    calculate_approval_rate,
    calculate_bank_risk_score,
    calculate_income_to_credit_ratio,
    created_since,
    credit_type_distribution,
    credit_type_risk_factor,
    term_risk_factor,
)

__all__ = [
    # Models
    "ApplicationRiskReport",
    "BankRiskReport",
    # Factors
    "CREDIT_TYPE_RISK_FACTORS",
    "credit_type_risk_factor",
    "term_risk_factor",
    # Portfolio filters
    "active_credits",
    "approved_since",
    "average_amount",
    "created_since",
    "credit_type_distribution",
    # Scores
    "calculate_amount_to_average_ratio",
    "calculate_application_risk_score",
    "calculate_approval_rate",
    "calculate_bank_risk_score",
    "calculate_income_to_credit_ratio",
    # Reports
    "build_application_risk_report",
    "build_bank_risk_report",
]
