"""Application services - use case orchestration."""

from .transitions import TransitionRecorder
from .decision_service import CreditDecisionService
from .tracking_service import ApplicationTrackingService, STAGE_DESCRIPTIONS
from .refinance_service import RefinanceService
from .portfolio_service import PortfolioRiskService

__all__ = [
    "TransitionRecorder",
    "CreditDecisionService",
    "ApplicationTrackingService",
    "STAGE_DESCRIPTIONS",
    "RefinanceService",
    "PortfolioRiskService",
]
