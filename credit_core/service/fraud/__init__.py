"""
Fraud Rule Engine: independently registered transaction fraud rules.
"""

from typing import List

from credit_core.domain.interfaces import SeenIpStore

from .base import FraudDetectionRule, evaluate_rules
from .location import (
    HIGH_RISK_COUNTRIES,
    MEDIUM_RISK_COUNTRIES,
    UnusualLocationRule,
    extract_country_code,
)
from .unfamiliar_ip import UnfamiliarIpRule
from .amount import HighAmountRule


def build_default_rules(seen_ip_store: SeenIpStore) -> List[FraudDetectionRule]:
    """Register the standard rule set around a caller-owned seen-IP store."""
    return [
        UnusualLocationRule(),
        UnfamiliarIpRule(seen_ip_store),
        HighAmountRule(),
    ]


__all__ = [
    "FraudDetectionRule",
    "evaluate_rules",
    "HIGH_RISK_COUNTRIES",
    "MEDIUM_RISK_COUNTRIES",
    "UnusualLocationRule",
    "extract_country_code",
    "UnfamiliarIpRule",
    "HighAmountRule",
    "build_default_rules",
]
