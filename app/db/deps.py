from __future__ import annotations

from collections.abc import AsyncIterator
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.core.settings import get_settings
from app.db.session import create_engine, create_sessionmaker


@lru_cache
def get_engine() -> AsyncEngine:
    settings = get_settings()
    return create_engine(settings.database_url, echo=settings.log_level.upper() == "DEBUG")


@lru_cache
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return create_sessionmaker(get_engine())


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """One session per request; uncommitted work is rolled back on error."""
    async with get_sessionmaker()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
