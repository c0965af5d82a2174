"""Tests for database engine lifecycle."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ideaforge import db


class TestAsyncUrl:
    def test_plain_postgres_uses_asyncpg(self):
        assert db._get_async_url("postgresql://h/d") == "postgresql+asyncpg://h/d"

    def test_explicit_driver_untouched(self):
        assert db._get_async_url("sqlite+aiosqlite:///x.db") == "sqlite+aiosqlite:///x.db"


class TestDisposeEngine:
    """Tests for dispose_engine."""

    @pytest.mark.asyncio
    async def test_noop_without_engine(self):
        with patch("ideaforge.db.create_async_engine") as create:
            await db.dispose_engine()
        create.assert_not_called()

    @pytest.mark.asyncio
    async def test_disposes_and_forgets_engine(self):
        engine = MagicMock()
        engine.dispose = AsyncMock()
        with patch("ideaforge.db.create_async_engine", return_value=engine):
            assert db._get_engine() is engine
            await db.dispose_engine()

        engine.dispose.assert_awaited_once()
        assert db._get_engine.cache_info().currsize == 0
