"""SQLAlchemy implementation of the git commit detail repository."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.activity import GitCommitDetail
from infrastructure.database.models import GitCommitModel


class SQLAlchemyGitCommitRepository:
    """SQLAlchemy implementation of IGitCommitRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_activity_id(self, activity_id: UUID) -> GitCommitDetail | None:
        stmt = select(GitCommitModel).where(GitCommitModel.activity_id == activity_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_hash(self, commit_hash: str, repo_id: UUID) -> GitCommitDetail | None:
        """Look up a commit already recorded for a repository."""
        stmt = select(GitCommitModel).where(
            GitCommitModel.commit_hash == commit_hash,
            GitCommitModel.repo_id == repo_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, detail: GitCommitDetail) -> GitCommitDetail:
        model = self._to_model(detail)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, activity_id: UUID) -> bool:
        stmt = delete(GitCommitModel).where(GitCommitModel.activity_id == activity_id)
        result = await self._session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined, no-any-return]

    def _to_entity(self, model: GitCommitModel) -> GitCommitDetail:
        """Convert ORM model to domain entity."""
        return GitCommitDetail(
            id=model.id,
            activity_id=model.activity_id,
            repo_id=model.repo_id,
            commit_hash=model.commit_hash,
            message=model.message,
            author_name=model.author_name,
            author_email=model.author_email,
            committed_at=model.committed_at,
            files_changed=model.files_changed,
            metadata=model.metadata_,
        )

    def _to_model(self, entity: GitCommitDetail) -> GitCommitModel:
        """Convert domain entity to ORM model."""
        return GitCommitModel(
            id=entity.id,
            activity_id=entity.activity_id,
            repo_id=entity.repo_id,
            commit_hash=entity.commit_hash,
            message=entity.message,
            author_name=entity.author_name,
            author_email=entity.author_email,
            committed_at=entity.committed_at,
            files_changed=entity.files_changed,
            metadata_=entity.metadata,
        )
