"""Customer category tiers derived from the credit score."""

from credit_core.domain.entities import CustomerCategory

from .settings import ScoringSettings, scoring_settings


def determine_customer_category(
    credit_score: int,
    settings: ScoringSettings = scoring_settings,
) -> CustomerCategory:
    """
    Map a credit score to its policy tier.

    Lower bounds are inclusive: 750 is VIP, 600 is STANDARD.

    Args:
        credit_score: The calculated credit score
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        VIP, STANDARD or RISKY
    """
    if credit_score >= settings.vip_threshold:
        return CustomerCategory.VIP
    elif credit_score >= settings.standard_threshold:
        return CustomerCategory.STANDARD
    else:
        return CustomerCategory.RISKY
