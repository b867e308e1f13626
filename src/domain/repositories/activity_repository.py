"""Activity log repository protocol."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from domain.entities.activity import ActivityLog, ActivityLogFilters


class IActivityLogRepository(Protocol):
    """Repository interface for base ActivityLog records."""

    async def find_all(self, filters: ActivityLogFilters | None = None) -> list[ActivityLog]:
        """Get logs matching every supplied filter, newest first."""
        ...

    async def get(self, id: UUID) -> ActivityLog | None:
        """Get a log by ID."""
        ...

    async def create(self, log: ActivityLog) -> ActivityLog:
        """Create a new log."""
        ...

    async def update_review_state(
        self, id: UUID, reviewed: bool, reviewed_at: datetime | None
    ) -> ActivityLog | None:
        """Set the review flag. ``reviewed_at=None`` leaves the stored value untouched."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a log and return whether a row was removed."""
        ...

    async def mark_reviewed(self, ids: list[UUID]) -> list[ActivityLog]:
        """Mark all given logs reviewed in one statement."""
        ...
