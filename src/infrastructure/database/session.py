"""Database engine and session factory construction.

The engine is built once by the application lifespan and handed to the
services through a session factory; nothing here holds a module-level
connection.
"""

from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import Settings


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine with a bounded connection pool."""
    url = make_url(settings.async_database_url)
    engine_kwargs: dict[str, Any] = {
        "echo": settings.debug,
        "pool_pre_ping": True,
    }

    if url.get_backend_name() == "postgresql":
        # Exhausting the pool blocks for at most pool_timeout, then raises.
        engine_kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=0,
            pool_timeout=settings.db_pool_timeout,
            connect_args={"timeout": settings.db_connect_timeout},
        )

    return create_async_engine(url, **engine_kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory bound to ``engine``."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
