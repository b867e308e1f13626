"""SQLAlchemy implementation of the git hook installation repository."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.activity import HookInstallDetail
from infrastructure.database.models import GitHookInstallModel


class SQLAlchemyGitHookRepository:
    """SQLAlchemy implementation of IGitHookRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_activity_id(self, activity_id: UUID) -> HookInstallDetail | None:
        stmt = select(GitHookInstallModel).where(GitHookInstallModel.activity_id == activity_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_for_repo(self, repo_id: UUID) -> list[HookInstallDetail]:
        """Get hook installations for a repository, newest first."""
        stmt = (
            select(GitHookInstallModel)
            .where(GitHookInstallModel.repo_id == repo_id)
            .order_by(GitHookInstallModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, detail: HookInstallDetail) -> HookInstallDetail:
        model = self._to_model(detail)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, activity_id: UUID) -> bool:
        stmt = delete(GitHookInstallModel).where(GitHookInstallModel.activity_id == activity_id)
        result = await self._session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined, no-any-return]

    def _to_entity(self, model: GitHookInstallModel) -> HookInstallDetail:
        """Convert ORM model to domain entity."""
        return HookInstallDetail(
            id=model.id,
            activity_id=model.activity_id,
            repo_id=model.repo_id,
            hook_type=model.hook_type,
            hook_script_path=model.hook_script_path,
            installation_timestamp=model.installation_timestamp,
            repo_path=model.repo_path,
            repo_name=model.repo_name,
            metadata=model.metadata_,
            created_at=model.created_at,
        )

    def _to_model(self, entity: HookInstallDetail) -> GitHookInstallModel:
        """Convert domain entity to ORM model."""
        return GitHookInstallModel(
            id=entity.id,
            activity_id=entity.activity_id,
            repo_id=entity.repo_id,
            hook_type=entity.hook_type,
            hook_script_path=entity.hook_script_path,
            installation_timestamp=entity.installation_timestamp,
            repo_path=entity.repo_path,
            repo_name=entity.repo_name,
            metadata_=entity.metadata,
            created_at=entity.created_at,
        )
