"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.activity_repository import IActivityLogRepository
from domain.repositories.detail_repository import (
    IConversationRepository,
    IGitCheckoutRepository,
    IGitCommitRepository,
    IGitHookRepository,
    IManualLogRepository,
)
from domain.repositories.repo_repository import IConnectedRepoRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    activity_logs: IActivityLogRepository
    manual_logs: IManualLogRepository
    git_commits: IGitCommitRepository
    conversations: IConversationRepository
    git_checkouts: IGitCheckoutRepository
    git_hooks: IGitHookRepository
    repos: IConnectedRepoRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
