"""Shared fixtures for unit tests."""

from datetime import datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock

import pytest

from domain.entities.activity import ActivityLog, ActivityType, ManualLogDetail


class FakeUnitOfWork:
    """Fake Unit of Work with all 7 repository mocks for unit testing."""

    def __init__(self) -> None:
        self.activity_logs = AsyncMock()
        self.manual_logs = AsyncMock()
        self.git_commits = AsyncMock()
        self.conversations = AsyncMock()
        self.git_checkouts = AsyncMock()
        self.git_hooks = AsyncMock()
        self.repos = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def manual_log() -> ActivityLog:
    """An unreviewed manual log."""
    return ActivityLog(type=ActivityType.MANUAL)


@pytest.fixture
def manual_detail(manual_log: ActivityLog) -> ManualLogDetail:
    """The note attached to ``manual_log``."""
    return ManualLogDetail(activity_id=manual_log.id, content="wrote the runbook")


@pytest.fixture
def commit_log() -> ActivityLog:
    """A git commit log, created a minute before now."""
    return ActivityLog(
        type=ActivityType.GIT_COMMIT,
        created_at=datetime.utcnow() - timedelta(minutes=1),
    )
