"""
Credit Score Calculation for the credit decisioning core.

The score is the sum of four sub-scores clamped to [300, 900]:
a base score, an income/expense ratio score, a credit history score
and a bank activity score.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Mapping, Optional, Union

import structlog

from credit_core.domain.entities import CreditApplication, Customer, FinancialSignals

from .settings import ScoringSettings, scoring_settings

logger = structlog.get_logger(__name__)

TWO_PLACES = Decimal("0.01")


def calculate_base_score(
    customer: Customer,
    settings: ScoringSettings = scoring_settings,
) -> int:
    """
    Starting score for a customer.

    Demographic factors are not scored yet, every customer starts
    from the same base.
    """
    return settings.base_score


def calculate_expense_ratio(monthly_expenses: Decimal, monthly_income: Decimal) -> Decimal:
    """
    Expense-to-income ratio rounded to 2 decimals, half-up.

    Args:
        monthly_expenses: Monthly expenses
        monthly_income: Monthly income, must be positive

    Returns:
        The rounded ratio
    """
    return (Decimal(monthly_expenses) / Decimal(monthly_income)).quantize(
        TWO_PLACES, rounding=ROUND_HALF_UP
    )


def score_income_expense(
    monthly_income: Optional[Decimal],
    monthly_expenses: Decimal,
    settings: ScoringSettings = scoring_settings,
) -> int:
    """
    Score the expense/income ratio.

    Args:
        monthly_income: Declared monthly income (None treated as zero)
        monthly_expenses: Monthly expenses
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        Points between the poor-ratio penalty and the excellent bonus,
        or the missing-income penalty
    """
    if monthly_income is None or monthly_income <= 0:
        return settings.missing_income_penalty

    ratio = calculate_expense_ratio(monthly_expenses, monthly_income)

    if ratio < settings.ratio_excellent_threshold:
        return settings.ratio_excellent_points
    elif ratio < settings.ratio_good_threshold:
        return settings.ratio_good_points
    elif ratio < settings.ratio_fair_threshold:
        return settings.ratio_fair_points
    else:
        return settings.ratio_poor_points


def score_credit_history(
    on_time_payments: int,
    late_payments: int,
    settings: ScoringSettings = scoring_settings,
) -> int:
    """
    Score the payment history.

    Unbounded here; only the final clamp limits its effect.
    """
    return (
        on_time_payments * settings.on_time_payment_points
        + late_payments * settings.late_payment_points
    )


def score_bank_activity(
    account_age_months: int,
    average_balance: Decimal,
    settings: ScoringSettings = scoring_settings,
) -> int:
    """
    Score account age and average balance.

    Args:
        account_age_months: Account age in months
        average_balance: Average account balance
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        Account age points (capped) plus balance points
    """
    account_age_score = min(
        settings.account_age_max_points,
        (max(account_age_months, 0) // 12) * settings.account_age_points_per_year,
    )

    if average_balance > settings.balance_high_threshold:
        balance_score = settings.balance_high_points
    elif average_balance > settings.balance_medium_threshold:
        balance_score = settings.balance_medium_points
    elif average_balance > settings.balance_low_threshold:
        balance_score = settings.balance_low_points
    else:
        balance_score = 0

    return account_age_score + balance_score


def calculate_credit_score(
    customer: Customer,
    application: CreditApplication,
    financial_signals: Union[FinancialSignals, Mapping[str, Any], None] = None,
    settings: ScoringSettings = scoring_settings,
) -> int:
    """
    Calculate the credit score for a customer's application.

    Args:
        customer: The applying customer
        application: The application being scored
        financial_signals: Signals from the caller; a plain mapping is
            accepted and missing values default to zero
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        Credit score between settings.min_score and settings.max_score
    """
    if not isinstance(financial_signals, FinancialSignals):
        financial_signals = FinancialSignals.from_mapping(financial_signals)

    base = calculate_base_score(customer, settings)
    income_expense = score_income_expense(
        application.monthly_income,
        financial_signals.monthly_expenses,
        settings,
    )
    history = score_credit_history(
        financial_signals.on_time_payments,
        financial_signals.late_payments,
        settings,
    )
    activity = score_bank_activity(
        financial_signals.account_age_months,
        financial_signals.average_balance,
        settings,
    )

    total = base + income_expense + history + activity
    score = max(settings.min_score, min(settings.max_score, total))

    logger.info(
        "credit_score_calculated",
        customer_number=customer.customer_number,
        application_id=str(application.id),
        base=base,
        income_expense=income_expense,
        credit_history=history,
        bank_activity=activity,
        score=score,
    )

    return score
