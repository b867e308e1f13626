"""Dependency injection factories for API v1."""

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Callable

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from domain.services.activity_log_service import ActivityLogService
from domain.services.frontend_log_service import FrontendLogService
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    """Session factory owned by the running application."""
    return request.app.state.session_factory  # type: ignore[no-any-return]


def get_uow_factory(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


async def get_async_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions."""
    async with session_factory() as session:
        yield session


def get_activity_log_service(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork] = Depends(get_uow_factory),
) -> ActivityLogService:
    """Get Activity Log service instance."""
    return ActivityLogService(uow_factory)


@lru_cache
def get_frontend_log_service() -> FrontendLogService:
    """Get Frontend Log service instance."""
    return FrontendLogService()
