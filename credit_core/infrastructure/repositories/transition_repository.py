"""SQLAlchemy repository for the status transition log."""

from typing import List
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from credit_core.domain.entities import ApplicationStatus, StatusTransition
from credit_core.domain.interfaces import StatusTransitionRepository
from credit_core.infrastructure.database.models import StatusTransitionModel


class SqlAlchemyStatusTransitionRepository(StatusTransitionRepository):
    """Append-only transition log; entries are never updated."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def append(self, transition: StatusTransition) -> StatusTransition:
        stmt = select(func.coalesce(func.max(StatusTransitionModel.sequence), 0)).where(
            StatusTransitionModel.application_id == str(transition.application_id)
        )
        last_sequence = (await self._session.execute(stmt)).scalar_one()

        model = StatusTransitionModel(
            id=str(transition.id),
            application_id=str(transition.application_id),
            sequence=last_sequence + 1,
            from_status=transition.from_status.value if transition.from_status else None,
            to_status=transition.to_status.value,
            actor=transition.actor,
            notes=transition.notes or "",
            occurred_at=transition.occurred_at,
        )

        self._session.add(model)
        await self._session.flush()

        return transition

    async def get_by_application_id(self, application_id: UUID) -> List[StatusTransition]:
        stmt = (
            select(StatusTransitionModel)
            .where(StatusTransitionModel.application_id == str(application_id))
            .order_by(StatusTransitionModel.sequence)
        )
        result = await self._session.execute(stmt)

        return [self._to_entity(model) for model in result.scalars().all()]

    def _to_entity(self, model: StatusTransitionModel) -> StatusTransition:
        return StatusTransition(
            id=UUID(str(model.id)),
            application_id=UUID(str(model.application_id)),
            from_status=ApplicationStatus(model.from_status) if model.from_status else None,
            to_status=ApplicationStatus(model.to_status),
            actor=model.actor,
            notes=model.notes or "",
            occurred_at=model.occurred_at,
        )
