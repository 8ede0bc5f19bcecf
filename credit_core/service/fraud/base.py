"""Fraud detection rule contract."""

from abc import ABC, abstractmethod
from typing import Iterable, List

import structlog

from credit_core.core.metrics import record_fraud_rule_evaluation
from credit_core.domain.entities import FraudEvaluationRequest, FraudRuleResult, RiskLevel

logger = structlog.get_logger(__name__)


class FraudDetectionRule(ABC):
    """
    A single suspicious-transaction pattern.

    Callers check is_applicable first and only evaluate applicable
    rules. The reason behind the last evaluate_risk call is readable
    from risk_reason straight afterwards.
    """

    name: str = "fraud_rule"

    def __init__(self):
        self._risk_reason = ""

    @abstractmethod
    def is_applicable(self, request: FraudEvaluationRequest) -> bool:
        """Return True if the rule has enough data to judge the request."""
        ...

    @abstractmethod
    def evaluate_risk(self, request: FraudEvaluationRequest) -> RiskLevel:
        """Evaluate the request and remember why."""
        ...

    @property
    def risk_reason(self) -> str:
        return self._risk_reason

    def assess(self, request: FraudEvaluationRequest) -> FraudRuleResult:
        """Evaluate the request and pair the level with its reason."""
        level = self.evaluate_risk(request)
        result = FraudRuleResult(rule=self.name, risk_level=level, reason=self.risk_reason)

        record_fraud_rule_evaluation(self.name, level.value)
        logger.debug(
            "fraud_rule_evaluated",
            rule=self.name,
            customer_number=request.customer_number,
            risk_level=level.value,
            reason=result.reason,
        )

        return result


def evaluate_rules(
    rules: Iterable[FraudDetectionRule],
    request: FraudEvaluationRequest,
) -> List[FraudRuleResult]:
    """
    Assess a request against every applicable rule.

    Args:
        rules: Registered rules, in any order
        request: The monitored transaction

    Returns:
        One result per applicable rule
    """
    return [rule.assess(request) for rule in rules if rule.is_applicable(request)]
