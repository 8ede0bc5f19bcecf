"""
Portfolio Risk Analysis for the bank's credit book.

Two views are produced from the application store:

1. Bank-wide risk: exposure, recent approval rate and credit-type mix
   combined into a 0-100 score.
2. Per-application risk: size relative to the portfolio average, credit
   type, term and income coverage combined into a 0-100 score.

Only active credit (APPROVED and not soft-deleted) counts as exposure.
"""

from collections import defaultdict
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional

from credit_core.domain.entities import (
    ApplicationStatus,
    CreditApplication,
    CreditType,
)

from .models import ApplicationRiskReport, BankRiskReport

TWO_PLACES = Decimal("0.01")

EXPOSURE_CAP = Decimal("10000000")

# Bank risk weights
EXPOSURE_WEIGHT = 40
APPROVAL_RATE_WEIGHT = 30
CREDIT_MIX_WEIGHT = 30

# Application risk weights
AMOUNT_WEIGHT = 30
CREDIT_TYPE_WEIGHT = 25
TERM_WEIGHT = 20
INCOME_COVERAGE_WEIGHT = 25
MAX_AMOUNT_RATIO = Decimal("3")

DEFAULT_CREDIT_TYPE_FACTOR = 0.7

CREDIT_TYPE_RISK_FACTORS: Dict[CreditType, float] = {
    CreditType.MORTGAGE: 0.3,
    CreditType.COMMERCIAL_MORTGAGE: 0.3,
    CreditType.AUTO_LOAN: 0.5,
    CreditType.EQUIPMENT_FINANCING: 0.5,
    CreditType.BUSINESS_LOAN: 0.6,
    CreditType.WORKING_CAPITAL: 0.7,
    CreditType.PERSONAL_FINANCE: 0.8,
    CreditType.EDUCATION_LOAN: 0.4,
}

# (max term in months, factor); anything longer is 1.0
TERM_RISK_BANDS = (
    (12, 0.2),
    (36, 0.4),
    (60, 0.6),
    (120, 0.8),
)


def credit_type_risk_factor(credit_type: Optional[CreditType]) -> float:
    return CREDIT_TYPE_RISK_FACTORS.get(credit_type, DEFAULT_CREDIT_TYPE_FACTOR)


def term_risk_factor(term_months: int) -> float:
    for max_term, factor in TERM_RISK_BANDS:
        if term_months <= max_term:
            return factor
    return 1.0


def active_credits(applications: Iterable[CreditApplication]) -> List[CreditApplication]:
    """Approved, non-deleted applications."""
    return [app for app in applications if app.is_active]


def created_since(
    applications: Iterable[CreditApplication],
    since: datetime,
) -> List[CreditApplication]:
    return [
        app for app in applications
        if not app.is_deleted and app.created_at >= since
    ]


def approved_since(
    applications: Iterable[CreditApplication],
    since: datetime,
) -> List[CreditApplication]:
    return [
        app for app in applications
        if app.is_active
        and app.approved_at is not None
        and app.approved_at >= since
    ]


def calculate_approval_rate(approved_count: int, application_count: int) -> Decimal:
    """
    Approval rate as a percentage, 2 decimals half-up.

    Returns exactly Decimal("0") when there were no applications.
    """
    if application_count == 0:
        return Decimal("0")
    rate = Decimal(approved_count) * 100 / Decimal(application_count)
    return rate.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def credit_type_distribution(
    active: Iterable[CreditApplication],
) -> Dict[CreditType, Decimal]:
    distribution: Dict[CreditType, Decimal] = defaultdict(Decimal)
    for app in active:
        distribution[app.credit_type] += app.amount
    return dict(distribution)


def average_amount(active: List[CreditApplication]) -> Decimal:
    if not active:
        return Decimal("0")
    total = sum((app.amount for app in active), Decimal("0"))
    return (total / len(active)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def calculate_bank_risk_score(
    total_active_credit: Decimal,
    approval_rate: Decimal,
    distribution: Dict[CreditType, Decimal],
) -> int:
    """
    Composite bank risk score from 0-100.

    Components:
        - Exposure (40): total active credit against a 10M cap
        - Approval rate (30): share of recent applications approved
        - Credit mix (30): amount-weighted credit type risk factor

    Args:
        total_active_credit: Sum of active credit amounts
        approval_rate: Recent approval rate in percent
        distribution: Active credit amount per credit type

    Returns:
        Integer score from 0-100
    """
    exposure = min(float(total_active_credit) / float(EXPOSURE_CAP), 1.0)

    credit_mix = 0.0
    if total_active_credit > 0:
        for credit_type, amount in distribution.items():
            share = float(amount) / float(total_active_credit)
            credit_mix += credit_type_risk_factor(credit_type) * share

    score = (
        EXPOSURE_WEIGHT * exposure
        + APPROVAL_RATE_WEIGHT * (float(approval_rate) / 100)
        + CREDIT_MIX_WEIGHT * credit_mix
    )
    return int(min(100.0, score))


def calculate_income_to_credit_ratio(application: CreditApplication) -> Decimal:
    """monthly_income * term_months / amount, 2 decimals half-up."""
    ratio = application.monthly_income * application.term_months / application.amount
    return ratio.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def calculate_amount_to_average_ratio(
    application: CreditApplication,
    portfolio_average: Decimal,
) -> Decimal:
    """
    amount / portfolio average, 2 decimals half-up.

    An empty portfolio (average 0) treats the application as average-sized.
    """
    if portfolio_average <= 0:
        return Decimal("1.00")
    ratio = application.amount / portfolio_average
    return ratio.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def calculate_application_risk_score(
    application: CreditApplication,
    portfolio_average: Decimal,
) -> int:
    """
    Composite application risk score from 0-100.

    Components:
        - Amount (30): amount relative to the portfolio average, capped at 3x
        - Credit type (25): credit type risk factor
        - Term (20): term length risk factor
        - Income coverage (25): how far total income over the term falls
          short of the amount

    Scored from the rounded ratios the report shows, in Decimal.
    """
    amount_ratio = calculate_amount_to_average_ratio(application, portfolio_average)
    income_ratio = calculate_income_to_credit_ratio(application)

    score = (
        AMOUNT_WEIGHT * min(amount_ratio, MAX_AMOUNT_RATIO) / MAX_AMOUNT_RATIO
        + CREDIT_TYPE_WEIGHT * Decimal(str(credit_type_risk_factor(application.credit_type)))
        + TERM_WEIGHT * Decimal(str(term_risk_factor(application.term_months)))
        + INCOME_COVERAGE_WEIGHT * max(Decimal("0"), 1 - income_ratio)
    )
    return int(min(Decimal("100"), score))


def build_bank_risk_report(
    applications: Iterable[CreditApplication],
    window_days: int,
    now: Optional[datetime] = None,
) -> BankRiskReport:
    """
    Analyse the whole application book.

    Args:
        applications: Every stored application, deleted ones included
        window_days: Look-back window for the approval rate
        now: Reference time, defaults to the current UTC time

    Returns:
        BankRiskReport snapshot
    """
    now = now or datetime.utcnow()
    applications = list(applications)
    since = now - timedelta(days=window_days)

    active = active_credits(applications)
    total = sum((app.amount for app in active), Decimal("0"))
    distribution = credit_type_distribution(active)

    recent = created_since(applications, since)
    approved = approved_since(applications, since)
    approval_rate = calculate_approval_rate(len(approved), len(recent))

    return BankRiskReport(
        total_active_credit=total,
        active_credit_count=len(active),
        average_credit_amount=average_amount(active),
        credit_type_distribution=distribution,
        window_days=window_days,
        applications_in_window=len(recent),
        approvals_in_window=len(approved),
        approval_rate=approval_rate,
        risk_score=calculate_bank_risk_score(total, approval_rate, distribution),
        generated_at=now,
    )


def build_application_risk_report(
    application: CreditApplication,
    applications: Iterable[CreditApplication],
) -> ApplicationRiskReport:
    """
    Analyse one application against the active portfolio.

    Args:
        application: The application to analyse
        applications: Every stored application, used for the portfolio average

    Returns:
        ApplicationRiskReport with the individual factors and the score
    """
    portfolio_average = average_amount(active_credits(applications))

    return ApplicationRiskReport(
        application_id=application.id,
        amount_to_average_ratio=calculate_amount_to_average_ratio(application, portfolio_average),
        credit_type_risk_factor=credit_type_risk_factor(application.credit_type),
        term_risk_factor=term_risk_factor(application.term_months),
        income_to_credit_ratio=calculate_income_to_credit_ratio(application),
        risk_score=calculate_application_risk_score(application, portfolio_average),
    )
