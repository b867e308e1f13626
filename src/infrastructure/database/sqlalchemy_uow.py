"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.repositories.sqlalchemy_activity_repo import (
    SQLAlchemyActivityLogRepository,
)
from infrastructure.database.repositories.sqlalchemy_conversation_repo import (
    SQLAlchemyConversationRepository,
)
from infrastructure.database.repositories.sqlalchemy_git_checkout_repo import (
    SQLAlchemyGitCheckoutRepository,
)
from infrastructure.database.repositories.sqlalchemy_git_commit_repo import (
    SQLAlchemyGitCommitRepository,
)
from infrastructure.database.repositories.sqlalchemy_git_hook_repo import (
    SQLAlchemyGitHookRepository,
)
from infrastructure.database.repositories.sqlalchemy_manual_log_repo import (
    SQLAlchemyManualLogRepository,
)
from infrastructure.database.repositories.sqlalchemy_repo_repo import (
    SQLAlchemyConnectedRepoRepository,
)


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    def _require_session(self) -> AsyncSession:
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._session

    @property
    def activity_logs(self) -> SQLAlchemyActivityLogRepository:
        """Get base activity log repository."""
        return SQLAlchemyActivityLogRepository(self._require_session())

    @property
    def manual_logs(self) -> SQLAlchemyManualLogRepository:
        """Get manual log detail repository."""
        return SQLAlchemyManualLogRepository(self._require_session())

    @property
    def git_commits(self) -> SQLAlchemyGitCommitRepository:
        """Get git commit detail repository."""
        return SQLAlchemyGitCommitRepository(self._require_session())

    @property
    def conversations(self) -> SQLAlchemyConversationRepository:
        """Get assistant conversation detail repository."""
        return SQLAlchemyConversationRepository(self._require_session())

    @property
    def git_checkouts(self) -> SQLAlchemyGitCheckoutRepository:
        """Get git checkout detail repository."""
        return SQLAlchemyGitCheckoutRepository(self._require_session())

    @property
    def git_hooks(self) -> SQLAlchemyGitHookRepository:
        """Get git hook installation repository."""
        return SQLAlchemyGitHookRepository(self._require_session())

    @property
    def repos(self) -> SQLAlchemyConnectedRepoRepository:
        """Get connected repository store."""
        return SQLAlchemyConnectedRepoRepository(self._require_session())

    async def commit(self) -> None:
        """Commit the current transaction."""
        if self._session:
            await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager and create session."""
        self._session = self._session_factory()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager and cleanup."""
        if self._session:
            if exc_type:
                await self.rollback()
            await self._session.close()
            self._session = None
