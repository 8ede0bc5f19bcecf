"""Refinance pricing."""

from .refinance import (
    REFINANCE_DISCOUNTS,
    RefinanceQuote,
    build_refinance_quote,
    calculate_monthly_payment,
    calculate_refinance_rate,
    refinance_discount,
    refinance_initial_status,
)

__all__ = [
    "REFINANCE_DISCOUNTS",
    "RefinanceQuote",
    "build_refinance_quote",
    "calculate_monthly_payment",
    "calculate_refinance_rate",
    "refinance_discount",
    "refinance_initial_status",
]
