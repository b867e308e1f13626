"""SQLAlchemy implementation of the manual log detail repository."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.activity import ManualLogDetail
from infrastructure.database.models import ManualLogModel


class SQLAlchemyManualLogRepository:
    """SQLAlchemy implementation of IManualLogRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_activity_id(self, activity_id: UUID) -> ManualLogDetail | None:
        """Get the note attached to an activity log."""
        stmt = select(ManualLogModel).where(ManualLogModel.activity_id == activity_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_activity_ids(
        self, activity_ids: list[UUID]
    ) -> dict[UUID, ManualLogDetail]:
        """Get notes for several activity logs in a single query."""
        if not activity_ids:
            return {}

        stmt = select(ManualLogModel).where(ManualLogModel.activity_id.in_(activity_ids))
        result = await self._session.execute(stmt)
        return {model.activity_id: self._to_entity(model) for model in result.scalars()}

    async def create(self, detail: ManualLogDetail) -> ManualLogDetail:
        """Create a note for an existing activity log."""
        model = self._to_model(detail)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update_content(self, activity_id: UUID, content: str) -> ManualLogDetail | None:
        """Replace the note text and bump ``updated_at``."""
        stmt = select(ManualLogModel).where(ManualLogModel.activity_id == activity_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        model.content = content
        model.updated_at = datetime.utcnow()

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, activity_id: UUID) -> bool:
        """Delete the note attached to an activity log."""
        stmt = delete(ManualLogModel).where(ManualLogModel.activity_id == activity_id)
        result = await self._session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined, no-any-return]

    def _to_entity(self, model: ManualLogModel) -> ManualLogDetail:
        """Convert ORM model to domain entity."""
        return ManualLogDetail(
            id=model.id,
            activity_id=model.activity_id,
            content=model.content,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: ManualLogDetail) -> ManualLogModel:
        """Convert domain entity to ORM model."""
        return ManualLogModel(
            id=entity.id,
            activity_id=entity.activity_id,
            content=entity.content,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
