"""SQLAlchemy implementation of the git checkout detail repository."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.activity import CheckoutDetail
from infrastructure.database.models import GitCheckoutModel


class SQLAlchemyGitCheckoutRepository:
    """SQLAlchemy implementation of IGitCheckoutRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_activity_id(self, activity_id: UUID) -> CheckoutDetail | None:
        stmt = select(GitCheckoutModel).where(GitCheckoutModel.activity_id == activity_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, detail: CheckoutDetail) -> CheckoutDetail:
        model = self._to_model(detail)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, activity_id: UUID) -> bool:
        stmt = delete(GitCheckoutModel).where(GitCheckoutModel.activity_id == activity_id)
        result = await self._session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined, no-any-return]

    def _to_entity(self, model: GitCheckoutModel) -> CheckoutDetail:
        """Convert ORM model to domain entity."""
        return CheckoutDetail(
            id=model.id,
            activity_id=model.activity_id,
            repo_id=model.repo_id,
            timestamp=model.timestamp,
            prev_head=model.prev_head,
            new_head=model.new_head,
            prev_branch=model.prev_branch,
            new_branch=model.new_branch,
            repo_path=model.repo_path,
            repo_name=model.repo_name,
            created_at=model.created_at,
        )

    def _to_model(self, entity: CheckoutDetail) -> GitCheckoutModel:
        """Convert domain entity to ORM model."""
        return GitCheckoutModel(
            id=entity.id,
            activity_id=entity.activity_id,
            repo_id=entity.repo_id,
            timestamp=entity.timestamp,
            prev_head=entity.prev_head,
            new_head=entity.new_head,
            prev_branch=entity.prev_branch,
            new_branch=entity.new_branch,
            repo_path=entity.repo_path,
            repo_name=entity.repo_name,
            created_at=entity.created_at,
        )
