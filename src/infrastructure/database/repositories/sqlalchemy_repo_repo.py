"""SQLAlchemy implementation of the connected repository store."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.repo import ConnectedRepo
from infrastructure.database.models import ConnectedRepoModel


class SQLAlchemyConnectedRepoRepository:
    """SQLAlchemy implementation of IConnectedRepoRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_all(self) -> list[ConnectedRepo]:
        """Get all repos, newest first."""
        stmt = select(ConnectedRepoModel).order_by(ConnectedRepoModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_active(self) -> list[ConnectedRepo]:
        """Get repos still being tracked, newest first."""
        stmt = (
            select(ConnectedRepoModel)
            .where(ConnectedRepoModel.is_active.is_(True))
            .order_by(ConnectedRepoModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_by_path(self, local_repo_path: str) -> ConnectedRepo | None:
        """Get a repo by its local checkout path."""
        stmt = select(ConnectedRepoModel).where(
            ConnectedRepoModel.local_repo_path == local_repo_path
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, repo: ConnectedRepo) -> ConnectedRepo:
        """Register a new repo."""
        model = self._to_model(repo)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a repo and return success status."""
        stmt = select(ConnectedRepoModel).where(ConnectedRepoModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    def _to_entity(self, model: ConnectedRepoModel) -> ConnectedRepo:
        """Convert ORM model to domain entity."""
        return ConnectedRepo(
            id=model.id,
            name=model.name,
            local_repo_path=model.local_repo_path,
            remote_url=model.remote_url,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: ConnectedRepo) -> ConnectedRepoModel:
        """Convert domain entity to ORM model."""
        return ConnectedRepoModel(
            id=entity.id,
            name=entity.name,
            local_repo_path=entity.local_repo_path,
            remote_url=entity.remote_url,
            is_active=entity.is_active,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
