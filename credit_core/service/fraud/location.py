"""Unusual location rule: flags transactions from risky countries."""

from typing import FrozenSet, Iterable, Optional

from credit_core.domain.entities import FraudEvaluationRequest, RiskLevel

from .base import FraudDetectionRule

HIGH_RISK_COUNTRIES = frozenset({"XY", "ZZ", "YY"})
MEDIUM_RISK_COUNTRIES = frozenset({"AB", "CD", "EF"})


def extract_country_code(location: str) -> str:
    """
    Pull a country code out of a free-text location.

    "Istanbul, TR" -> "TR"; without a comma the first two characters
    are used ("TR-34" -> "TR"). Trailing empty parts are ignored.
    """
    parts = location.rstrip(",").split(",")
    if len(parts) > 1:
        return parts[-1].strip()
    return location[:2]


class UnusualLocationRule(FraudDetectionRule):
    """HIGH for high-risk countries, MEDIUM for medium-risk ones, else LOW."""

    name = "unusual_location"

    def __init__(
        self,
        high_risk_countries: Optional[Iterable[str]] = None,
        medium_risk_countries: Optional[Iterable[str]] = None,
    ):
        super().__init__()
        self._high_risk: FrozenSet[str] = (
            frozenset(high_risk_countries)
            if high_risk_countries is not None
            else HIGH_RISK_COUNTRIES
        )
        self._medium_risk: FrozenSet[str] = (
            frozenset(medium_risk_countries)
            if medium_risk_countries is not None
            else MEDIUM_RISK_COUNTRIES
        )

    def is_applicable(self, request: FraudEvaluationRequest) -> bool:
        return bool(request.location)

    def evaluate_risk(self, request: FraudEvaluationRequest) -> RiskLevel:
        country_code = extract_country_code(request.location or "")

        if country_code in self._high_risk:
            self._risk_reason = f"Transaction from high-risk location: {country_code}"
            return RiskLevel.HIGH

        if country_code in self._medium_risk:
            self._risk_reason = f"Transaction from medium-risk location: {country_code}"
            return RiskLevel.MEDIUM

        self._risk_reason = "No location-based risk detected"
        return RiskLevel.LOW
