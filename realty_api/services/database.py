"""Async database session management.

This module provides the async SQLAlchemy engine and session
factory for non-blocking database operations.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from realty_api.core.config import settings


def _engine_options(url: str) -> Dict[str, Any]:
    """Pick pool options supported by the configured driver."""
    options: Dict[str, Any] = {"echo": settings.DEBUG, "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        options.update(pool_size=5, max_overflow=10)
    return options


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """Turn on ``ON DELETE`` enforcement for SQLite connections.

    SQLite ignores foreign keys unless the pragma is set on every
    new connection. Other dialects are left untouched.

    Args:
        async_engine: Engine whose connections should enforce foreign keys.
    """
    if async_engine.dialect.name != "sqlite":
        return

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Create async engine with connection pooling
engine = create_async_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    **_engine_options(settings.SQLALCHEMY_DATABASE_URI),
)
enable_sqlite_foreign_keys(engine)

# Session factory for creating async sessions
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session.

    This is a FastAPI dependency that yields an async session
    and ensures proper cleanup after the request completes.
    Handlers that coordinate media with the transaction commit
    explicitly; the trailing commit is then a no-op.

    Yields:
        AsyncSession: SQLAlchemy async session for database operations.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def create_all() -> None:
    """Create any missing tables for the registered models."""
    from realty_api.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
