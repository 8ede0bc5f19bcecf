"""
Credit Scoring Module: score, category tier and approval policy.
"""

from .settings import (
    ApprovalSettings,
    ScoringSettings,
    approval_settings,
    scoring_settings,
)
from .credit_score import (
    calculate_base_score,
    calculate_credit_score,
    calculate_expense_ratio,
    score_bank_activity,
    score_credit_history,
    score_income_expense,
)
from .category import determine_customer_category
from .approval import evaluate_application, resolve_category

__all__ = [
    # Settings
    "ApprovalSettings",
    "ScoringSettings",
    "approval_settings",
    "scoring_settings",
    # Scoring
    "calculate_base_score",
    "calculate_credit_score",
    "calculate_expense_ratio",
    "score_bank_activity",
    "score_credit_history",
    "score_income_expense",
    # Category
    "determine_customer_category",
    # Approval
    "evaluate_application",
    "resolve_category",
]
