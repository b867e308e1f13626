"""Connected repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.repo import ConnectedRepo


class IConnectedRepoRepository(Protocol):
    """Repository interface for ConnectedRepo entities."""

    async def get_all(self) -> list[ConnectedRepo]:
        """Get all repos, newest first."""
        ...

    async def get_active(self) -> list[ConnectedRepo]:
        """Get repos still being tracked, newest first."""
        ...

    async def get_by_path(self, local_repo_path: str) -> ConnectedRepo | None:
        ...

    async def create(self, repo: ConnectedRepo) -> ConnectedRepo:
        ...

    async def delete(self, id: UUID) -> bool:
        ...
