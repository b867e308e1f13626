"""SQLAlchemy implementation of the Activity Log repository."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, Select, bindparam, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.activity import ActivityLog, ActivityLogFilters, ActivityType
from infrastructure.database.models import ActivityLogModel


def build_filtered_query(filters: ActivityLogFilters | None = None) -> Select[tuple[ActivityLogModel]]:
    """Build the base-log lookup for a filter set.

    Every supplied field adds one bound-parameter predicate; absent fields add
    nothing. Results are ordered newest first.
    """
    stmt = select(ActivityLogModel)

    if filters is not None:
        if filters.from_date is not None:
            stmt = stmt.where(ActivityLogModel.created_at >= filters.from_date)
        if filters.to_date is not None:
            stmt = stmt.where(ActivityLogModel.created_at <= filters.to_date)
        if filters.reviewed is not None:
            # A bare bool compiles to an inline true/false literal; bind it instead.
            stmt = stmt.where(
                ActivityLogModel.reviewed == bindparam("reviewed", filters.reviewed, type_=Boolean)
            )
        if filters.type is not None:
            stmt = stmt.where(ActivityLogModel.type == filters.type.value)

    return stmt.order_by(ActivityLogModel.created_at.desc())


class SQLAlchemyActivityLogRepository:
    """SQLAlchemy implementation of IActivityLogRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_all(self, filters: ActivityLogFilters | None = None) -> list[ActivityLog]:
        """Get logs matching every supplied filter, newest first."""
        result = await self._session.execute(build_filtered_query(filters))
        return [self._to_entity(model) for model in result.scalars()]

    async def get(self, id: UUID) -> ActivityLog | None:
        """Get a log by ID."""
        stmt = select(ActivityLogModel).where(ActivityLogModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, log: ActivityLog) -> ActivityLog:
        """Create a new log."""
        model = self._to_model(log)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update_review_state(
        self, id: UUID, reviewed: bool, reviewed_at: datetime | None
    ) -> ActivityLog | None:
        """Set the review flag; a ``None`` timestamp keeps the stored one."""
        stmt = select(ActivityLogModel).where(ActivityLogModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        model.reviewed = reviewed
        if reviewed_at is not None:
            model.reviewed_at = reviewed_at

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a log. The detail row goes with it via ON DELETE CASCADE."""
        stmt = delete(ActivityLogModel).where(ActivityLogModel.id == id)
        result = await self._session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined, no-any-return]

    async def mark_reviewed(self, ids: list[UUID]) -> list[ActivityLog]:
        """Mark all given logs reviewed in one statement."""
        if not ids:
            return []

        stmt = (
            update(ActivityLogModel)
            .where(ActivityLogModel.id.in_(ids))
            .values(reviewed=True, reviewed_at=datetime.utcnow())
        )
        await self._session.execute(stmt)

        refreshed = (
            select(ActivityLogModel)
            .where(ActivityLogModel.id.in_(ids))
            .order_by(ActivityLogModel.created_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(refreshed)
        return [self._to_entity(model) for model in result.scalars()]

    def _to_entity(self, model: ActivityLogModel) -> ActivityLog:
        """Convert ORM model to domain entity."""
        return ActivityLog(
            id=model.id,
            type=ActivityType(model.type),
            reviewed=model.reviewed,
            created_at=model.created_at,
            reviewed_at=model.reviewed_at,
        )

    def _to_model(self, entity: ActivityLog) -> ActivityLogModel:
        """Convert domain entity to ORM model."""
        return ActivityLogModel(
            id=entity.id,
            type=entity.type.value,
            reviewed=entity.reviewed,
            created_at=entity.created_at,
            reviewed_at=entity.reviewed_at,
        )
