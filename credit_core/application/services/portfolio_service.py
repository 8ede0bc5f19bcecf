"""Portfolio risk service - bank-wide and per-application risk reports."""

from typing import Optional
from uuid import UUID

import structlog

from credit_core.core.config import settings
from credit_core.core.metrics import track_portfolio_analysis_latency
from credit_core.domain.entities import CreditApplication
from credit_core.domain.exceptions import ApplicationNotFoundException
from credit_core.domain.interfaces import ApplicationRepository
from credit_core.service.risk import (
    ApplicationRiskReport,
    BankRiskReport,
    build_application_risk_report,
    build_bank_risk_report,
)

logger = structlog.get_logger(__name__)


class PortfolioRiskService:
    """
    Application service for portfolio risk analysis.

    Scans the whole application store; the scoring itself is pure.
    """

    def __init__(self, application_repository: ApplicationRepository):
        self._application_repo = application_repository

    async def analyze_bank_credit_risk(self, window_days: Optional[int] = None) -> BankRiskReport:
        """
        Bank-wide exposure, approval rate and composite risk score.

        Args:
            window_days: Approval-rate window; defaults to the configured value

        Returns:
            BankRiskReport snapshot
        """
        if window_days is None:
            window_days = settings.portfolio_window_days

        with track_portfolio_analysis_latency():
            applications = await self._application_repo.get_all()
            report = build_bank_risk_report(applications, window_days)

        logger.info(
            "bank_credit_risk_analyzed",
            total_active_credit=str(report.total_active_credit),
            active_credit_count=report.active_credit_count,
            approval_rate=str(report.approval_rate),
            risk_score=report.risk_score,
        )

        return report

    async def analyze_application_risk(
        self,
        application: CreditApplication | UUID,
    ) -> ApplicationRiskReport:
        """
        Risk of one application relative to the active portfolio.

        Args:
            application: The application or its ID

        Returns:
            ApplicationRiskReport with factors and score

        Raises:
            ApplicationNotFoundException: If an ID is given and not found
        """
        if isinstance(application, UUID):
            application_id = application
            application = await self._application_repo.get_by_id(application_id)
            if application is None:
                raise ApplicationNotFoundException(str(application_id))

        with track_portfolio_analysis_latency():
            applications = await self._application_repo.get_all()
            report = build_application_risk_report(application, applications)

        logger.info(
            "application_risk_analyzed",
            application_id=str(application.id),
            risk_score=report.risk_score,
        )

        return report
