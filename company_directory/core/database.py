"""
Async database engine and session management.

The listing store is any SQLAlchemy async backend: asyncpg in production,
aiosqlite for development and tests.
"""
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from company_directory.core.config import settings


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


def make_engine(url: str = None) -> AsyncEngine:
    """Create the async engine. SQLite does not take pool sizing arguments."""
    url = url or settings.database_url

    if url.startswith("sqlite"):
        return create_async_engine(url, echo=settings.db_echo)

    return create_async_engine(
        url,
        echo=settings.db_echo,
        pool_pre_ping=True,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
    )


engine = make_engine()
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency yielding one session per request.

    The directory only reads, so the session is rolled back on error
    and simply closed otherwise.
    """
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create tables that do not exist yet."""
    # Import models so they register on Base.metadata
    from company_directory import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Dispose of the connection pool."""
    await engine.dispose()
