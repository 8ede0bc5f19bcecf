"""Domain Entities - Core business objects."""

from .application import (
    ApplicationStatus,
    CreditApplication,
    CreditType,
    OPEN_STATUSES,
    StatusTransition,
    TERMINAL_STATUSES,
)
from .customer import Customer, CustomerCategory, FinancialSignals
from .event import CreditEvent, CreditEventType
from .fraud import FraudEvaluationRequest, FraudRuleResult, RiskLevel

__all__ = [
    "ApplicationStatus",
    "CreditApplication",
    "CreditType",
    "OPEN_STATUSES",
    "StatusTransition",
    "TERMINAL_STATUSES",
    "Customer",
    "CustomerCategory",
    "FinancialSignals",
    "CreditEvent",
    "CreditEventType",
    "FraudEvaluationRequest",
    "FraudRuleResult",
    "RiskLevel",
]
