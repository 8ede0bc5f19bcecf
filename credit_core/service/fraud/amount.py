"""High amount rule: flags unusually large transactions."""

from decimal import Decimal

from credit_core.domain.entities import FraudEvaluationRequest, RiskLevel

from .base import FraudDetectionRule

HIGH_AMOUNT_THRESHOLD = Decimal("50000")
MEDIUM_AMOUNT_THRESHOLD = Decimal("10000")


class HighAmountRule(FraudDetectionRule):
    """>= 50,000 is HIGH, >= 10,000 is MEDIUM, anything smaller LOW."""

    name = "high_amount"

    def __init__(
        self,
        high_threshold: Decimal = HIGH_AMOUNT_THRESHOLD,
        medium_threshold: Decimal = MEDIUM_AMOUNT_THRESHOLD,
    ):
        super().__init__()
        self._high_threshold = Decimal(str(high_threshold))
        self._medium_threshold = Decimal(str(medium_threshold))

    def is_applicable(self, request: FraudEvaluationRequest) -> bool:
        return request.amount is not None and request.amount > 0

    def evaluate_risk(self, request: FraudEvaluationRequest) -> RiskLevel:
        amount = Decimal(str(request.amount))

        if amount >= self._high_threshold:
            self._risk_reason = f"Transaction amount {amount} at or above {self._high_threshold}"
            return RiskLevel.HIGH

        if amount >= self._medium_threshold:
            self._risk_reason = f"Transaction amount {amount} at or above {self._medium_threshold}"
            return RiskLevel.MEDIUM

        self._risk_reason = "Transaction amount within normal range"
        return RiskLevel.LOW
