"""
Refinance pricing and approval shortcut.

Refinanced credit is priced off the current market rate with a
category-based discount, and re-enters the lifecycle at a status that
depends on the customer's category.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from credit_core.domain.entities import (
    ApplicationStatus,
    CreditApplication,
    CustomerCategory,
)

TWO_PLACES = Decimal("0.01")

REFINANCE_DISCOUNTS = {
    CustomerCategory.VIP: Decimal("0.20"),
    CustomerCategory.STANDARD: Decimal("0.10"),
    CustomerCategory.RISKY: Decimal("0.05"),
}

REFINANCE_INITIAL_STATUS = {
    CustomerCategory.VIP: ApplicationStatus.APPROVED,
    CustomerCategory.STANDARD: ApplicationStatus.PENDING_APPROVAL,
    CustomerCategory.RISKY: ApplicationStatus.IN_REVIEW,
}


@dataclass(frozen=True)
class RefinanceQuote:
    """
    Pricing of a refinance offer.

    Attributes:
        market_rate: Current market rate (annual, percent)
        discount: Fraction taken off the market rate
        refinance_rate: Discounted annual rate, percent, 2 decimals
        term_months: Term the payment is spread over
        monthly_payment: Annuity payment at the refinance rate
    """

    market_rate: Decimal
    discount: Decimal
    refinance_rate: Decimal
    term_months: int
    monthly_payment: Decimal

    def to_dict(self) -> dict:
        return {
            "market_rate": str(self.market_rate),
            "discount": str(self.discount),
            "refinance_rate": str(self.refinance_rate),
            "term_months": self.term_months,
            "monthly_payment": str(self.monthly_payment),
        }


def _known_category(
    category: Union[CustomerCategory, str, None],
) -> Optional[CustomerCategory]:
    if isinstance(category, CustomerCategory):
        return category
    try:
        return CustomerCategory(category)
    except ValueError:
        return None


def refinance_discount(category: Union[CustomerCategory, str, None]) -> Decimal:
    """Discount fraction for a category; zero for unknown categories."""
    return REFINANCE_DISCOUNTS.get(_known_category(category), Decimal("0"))


def calculate_refinance_rate(
    market_rate: Decimal,
    category: Union[CustomerCategory, str, None],
) -> Decimal:
    """
    Discounted refinance rate.

    Args:
        market_rate: Current market rate
        category: The customer's current category

    Returns:
        market_rate * (1 - discount), rounded to 2 decimals half-up
    """
    market_rate = Decimal(str(market_rate))
    discount = refinance_discount(category)
    rate = market_rate - market_rate * discount
    return rate.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def refinance_initial_status(
    category: Union[CustomerCategory, str, None],
) -> ApplicationStatus:
    """Status a refinanced application starts in; PENDING for unknown categories."""
    return REFINANCE_INITIAL_STATUS.get(_known_category(category), ApplicationStatus.PENDING)


def calculate_monthly_payment(
    principal: Decimal,
    annual_rate: Decimal,
    term_months: int,
) -> Decimal:
    """
    Annuity payment: P * r * (1 + r)^n / ((1 + r)^n - 1).

    Args:
        principal: Amount borrowed
        annual_rate: Annual interest rate in percent
        term_months: Number of monthly payments (>= 1)

    Returns:
        Monthly payment rounded to 2 decimals half-up
    """
    principal = Decimal(str(principal))
    term_months = max(term_months, 1)
    monthly_rate = Decimal(str(annual_rate)) / Decimal(1200)

    if monthly_rate == 0:
        return (principal / term_months).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

    growth = (1 + monthly_rate) ** term_months
    payment = principal * monthly_rate * growth / (growth - 1)
    return payment.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def build_refinance_quote(
    application: CreditApplication,
    market_rate: Decimal,
    category: Union[CustomerCategory, str, None],
) -> RefinanceQuote:
    """
    Price a refinance of an application at today's market rate.

    Args:
        application: The credit being refinanced
        market_rate: Current market rate (annual, percent)
        category: The customer's current category

    Returns:
        RefinanceQuote with rate and monthly payment over the existing term
    """
    rate = calculate_refinance_rate(market_rate, category)
    return RefinanceQuote(
        market_rate=Decimal(str(market_rate)),
        discount=refinance_discount(category),
        refinance_rate=rate,
        term_months=application.term_months,
        monthly_payment=calculate_monthly_payment(
            application.amount, rate, application.term_months
        ),
    )
