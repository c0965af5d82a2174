"""
Database engine and per-request sessions.

The engine is created on first use so importing the app never opens a
connection; tests replace ``get_db`` outright.
"""

import logging
from collections.abc import AsyncGenerator
from functools import lru_cache

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ideaforge.config import settings

logger = logging.getLogger(__name__)


def _get_async_url(url: str) -> str:
    """Point a plain ``postgresql://`` URL at the asyncpg driver."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


@lru_cache
def _get_engine() -> AsyncEngine:
    return create_async_engine(
        _get_async_url(settings.ideaforge_db_url),
        echo=settings.debug,
        pool_pre_ping=True,
    )


@lru_cache
def _get_session_factory() -> async_sessionmaker[AsyncSession]:
    # Routes return ORM rows after commit; keep their attributes loaded
    return async_sessionmaker(
        _get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session; uncommitted work is rolled back if the request fails."""
    async with _get_session_factory()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def dispose_engine() -> None:
    """Close pooled connections. Called on application shutdown.

    A no-op when no request ever touched the database.
    """
    if _get_engine.cache_info().currsize == 0:
        return
    await _get_engine().dispose()
    _get_session_factory.cache_clear()
    _get_engine.cache_clear()
    logger.info("Disposed database engine")
