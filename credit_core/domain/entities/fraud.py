"""Fraud evaluation request and result types."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class RiskLevel(str, Enum):
    """Ordered fraud risk level: LOW < MEDIUM < HIGH < CRITICAL."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    @classmethod
    def highest(cls, levels) -> "RiskLevel":
        """Return the most severe level, LOW for an empty iterable."""
        return max(levels, key=lambda level: level.severity, default=cls.LOW)


_SEVERITY = {
    RiskLevel.LOW: 0,
    RiskLevel.MEDIUM: 1,
    RiskLevel.HIGH: 2,
    RiskLevel.CRITICAL: 3,
}


@dataclass(frozen=True)
class FraudEvaluationRequest:
    """
    A monitored transaction submitted for fraud rule evaluation.

    Immutable input; never persisted by the core.
    """

    customer_number: str
    transaction_type: str
    amount: Decimal
    ip_address: str
    user_agent: Optional[str] = None
    device_id: Optional[str] = None
    location: Optional[str] = None
    transaction_id: Optional[str] = None
    account_number: Optional[str] = None
    recipient_account_number: Optional[str] = None
    recipient_name: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class FraudRuleResult:
    """Outcome of one rule for one request."""

    rule: str
    risk_level: RiskLevel
    reason: str

    def to_dict(self) -> dict:
        return {
            "rule": self.rule,
            "risk_level": self.risk_level.value,
            "reason": self.reason,
        }
