"""Unfamiliar IP rule: flags the first use of an IP address by a customer."""

from credit_core.domain.entities import FraudEvaluationRequest, RiskLevel
from credit_core.domain.interfaces import SeenIpStore

from .base import FraudDetectionRule


class UnfamiliarIpRule(FraudDetectionRule):
    """
    MEDIUM the first time an IP shows up for a customer, LOW afterwards.

    The memory of seen IPs lives in the injected store, which bounds it
    by TTL and size; evaluating a request remembers its IP.
    """

    name = "unfamiliar_ip"

    def __init__(self, seen_ip_store: SeenIpStore):
        super().__init__()
        self._store = seen_ip_store

    def is_applicable(self, request: FraudEvaluationRequest) -> bool:
        return bool(request.customer_number) and bool(request.ip_address)

    def evaluate_risk(self, request: FraudEvaluationRequest) -> RiskLevel:
        seen = self._store.has_seen(request.customer_number, request.ip_address)
        self._store.remember(request.customer_number, request.ip_address)

        if seen:
            self._risk_reason = "IP address previously used by customer"
            return RiskLevel.LOW

        self._risk_reason = f"Transaction from unfamiliar IP address: {request.ip_address}"
        return RiskLevel.MEDIUM
