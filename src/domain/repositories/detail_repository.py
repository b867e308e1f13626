"""Detail record repository protocols, one per activity variant."""

from typing import Protocol
from uuid import UUID

from domain.entities.activity import (
    CheckoutDetail,
    ConversationDetail,
    GitCommitDetail,
    HookInstallDetail,
    ManualLogDetail,
)


class IManualLogRepository(Protocol):
    """Repository interface for manual log details."""

    async def get_by_activity_id(self, activity_id: UUID) -> ManualLogDetail | None:
        ...

    async def get_by_activity_ids(
        self, activity_ids: list[UUID]
    ) -> dict[UUID, ManualLogDetail]:
        """Batch lookup keyed by activity ID."""
        ...

    async def create(self, detail: ManualLogDetail) -> ManualLogDetail:
        ...

    async def update_content(self, activity_id: UUID, content: str) -> ManualLogDetail | None:
        ...

    async def delete(self, activity_id: UUID) -> bool:
        ...


class IGitCommitRepository(Protocol):
    """Repository interface for git commit details."""

    async def get_by_activity_id(self, activity_id: UUID) -> GitCommitDetail | None:
        ...

    async def get_by_hash(self, commit_hash: str, repo_id: UUID) -> GitCommitDetail | None:
        ...

    async def create(self, detail: GitCommitDetail) -> GitCommitDetail:
        ...

    async def delete(self, activity_id: UUID) -> bool:
        ...


class IConversationRepository(Protocol):
    """Repository interface for assistant conversation details."""

    async def get_by_activity_id(self, activity_id: UUID) -> ConversationDetail | None:
        ...

    async def create(self, detail: ConversationDetail) -> ConversationDetail:
        ...

    async def delete(self, activity_id: UUID) -> bool:
        ...


class IGitCheckoutRepository(Protocol):
    """Repository interface for git checkout details."""

    async def get_by_activity_id(self, activity_id: UUID) -> CheckoutDetail | None:
        ...

    async def create(self, detail: CheckoutDetail) -> CheckoutDetail:
        ...

    async def delete(self, activity_id: UUID) -> bool:
        ...


class IGitHookRepository(Protocol):
    """Repository interface for git hook installation details."""

    async def get_by_activity_id(self, activity_id: UUID) -> HookInstallDetail | None:
        ...

    async def get_for_repo(self, repo_id: UUID) -> list[HookInstallDetail]:
        """Get installations for a repository, newest first."""
        ...

    async def create(self, detail: HookInstallDetail) -> HookInstallDetail:
        ...

    async def delete(self, activity_id: UUID) -> bool:
        ...
