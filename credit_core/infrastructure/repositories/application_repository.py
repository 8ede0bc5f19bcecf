"""SQLAlchemy implementation of ApplicationRepository."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from credit_core.domain.entities import (
    ApplicationStatus,
    CreditApplication,
    CreditType,
    OPEN_STATUSES,
)
from credit_core.domain.interfaces import ApplicationRepository
from credit_core.infrastructure.database.models import CreditApplicationModel


class SqlAlchemyApplicationRepository(ApplicationRepository):
    """
    SQL-backed credit application repository.

    Writes are flushed, never committed; the session owner decides
    when the unit of work ends.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, application: CreditApplication) -> CreditApplication:
        """Insert a new application or update the stored copy."""
        model = await self._session.get(CreditApplicationModel, str(application.id))

        if model is None:
            model = CreditApplicationModel(id=str(application.id))
            self._session.add(model)

        self._apply(application, model)
        await self._session.flush()

        return application

    async def get_by_id(self, application_id: UUID) -> Optional[CreditApplication]:
        model = await self._session.get(CreditApplicationModel, str(application_id))

        if model is None:
            return None

        return self._to_entity(model)

    async def get_by_customer_and_status(
        self,
        customer_number: str,
        status: ApplicationStatus,
    ) -> List[CreditApplication]:
        stmt = (
            select(CreditApplicationModel)
            .where(CreditApplicationModel.customer_number == customer_number)
            .where(CreditApplicationModel.status == status.value)
            .where(CreditApplicationModel.deleted_at.is_(None))
            .order_by(CreditApplicationModel.created_at)
        )
        return await self._fetch(stmt)

    async def get_by_customer(self, customer_number: str) -> List[CreditApplication]:
        stmt = (
            select(CreditApplicationModel)
            .where(CreditApplicationModel.customer_number == customer_number)
            .where(CreditApplicationModel.deleted_at.is_(None))
            .order_by(CreditApplicationModel.created_at)
        )
        return await self._fetch(stmt)

    async def get_by_status(self, status: ApplicationStatus) -> List[CreditApplication]:
        stmt = (
            select(CreditApplicationModel)
            .where(CreditApplicationModel.status == status.value)
            .where(CreditApplicationModel.deleted_at.is_(None))
            .order_by(CreditApplicationModel.created_at)
        )
        return await self._fetch(stmt)

    async def get_open_updated_before(self, threshold: datetime) -> List[CreditApplication]:
        stmt = (
            select(CreditApplicationModel)
            .where(CreditApplicationModel.status.in_([s.value for s in OPEN_STATUSES]))
            .where(CreditApplicationModel.deleted_at.is_(None))
            .where(CreditApplicationModel.updated_at < threshold)
            .order_by(CreditApplicationModel.updated_at)
        )
        return await self._fetch(stmt)

    async def get_all(self) -> List[CreditApplication]:
        stmt = select(CreditApplicationModel).order_by(CreditApplicationModel.created_at)
        return await self._fetch(stmt)

    async def _fetch(self, stmt) -> List[CreditApplication]:
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    def _apply(self, application: CreditApplication, model: CreditApplicationModel) -> None:
        """Copy entity state onto the ORM row."""
        model.customer_number = application.customer_number
        model.credit_type = application.credit_type.value
        model.amount = application.amount
        model.term_months = application.term_months
        model.monthly_income = application.monthly_income
        model.interest_rate = application.interest_rate
        model.status = application.status.value
        model.notes = application.notes or ""
        model.created_at = application.created_at
        model.updated_at = application.updated_at
        model.approved_at = application.approved_at
        model.rejected_at = application.rejected_at
        model.deleted_at = application.deleted_at

    def _to_entity(self, model: CreditApplicationModel) -> CreditApplication:
        """Convert database model to domain entity."""
        return CreditApplication(
            id=UUID(str(model.id)),
            customer_number=model.customer_number,
            credit_type=CreditType(model.credit_type),
            amount=Decimal(model.amount),
            term_months=model.term_months,
            monthly_income=Decimal(model.monthly_income),
            interest_rate=Decimal(model.interest_rate) if model.interest_rate is not None else None,
            status=ApplicationStatus(model.status),
            notes=model.notes or "",
            created_at=model.created_at,
            updated_at=model.updated_at,
            approved_at=model.approved_at,
            rejected_at=model.rejected_at,
            deleted_at=model.deleted_at,
        )
