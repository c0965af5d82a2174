"""Tests for per-user settings storage."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from cryptography.fernet import Fernet

from ideaforge.models import UserSettings
from ideaforge.storage.crypto import EncryptionError, encrypt_value
from ideaforge.storage.settings import (
    DEFAULT_SETTINGS,
    SettingsRecord,
    get_settings_async,
    upsert_settings_async,
)

TEST_KEY = Fernet.generate_key().decode()


@pytest.fixture
def mock_settings():
    with patch("ideaforge.storage.crypto.settings") as mock:
        mock.ideaforge_encryption_key = TEST_KEY
        yield mock


@pytest.fixture
def mock_db():
    """Mock async database session."""
    db = MagicMock()
    db.execute = AsyncMock()
    db.get = AsyncMock(return_value=None)
    db.commit = AsyncMock()
    db.refresh = AsyncMock()
    return db


def _returning(db, row):
    result = MagicMock()
    result.scalar_one_or_none.return_value = row
    db.execute.return_value = result


class TestGetSettings:
    @pytest.mark.asyncio
    async def test_defaults_when_missing(self, mock_db):
        _returning(mock_db, None)
        assert await get_settings_async(mock_db, "alice") == DEFAULT_SETTINGS

    @pytest.mark.asyncio
    async def test_decrypts_stored_key(self, mock_db, mock_settings):
        row = UserSettings(
            user_id="alice",
            provider="openai",
            api_key_encrypted=encrypt_value("sk-secret"),
            model="gpt-4o",
        )
        _returning(mock_db, row)

        record = await get_settings_async(mock_db, "alice")

        assert record == SettingsRecord(provider="openai", api_key="sk-secret", model="gpt-4o")

    @pytest.mark.asyncio
    async def test_no_key_needs_no_encryption(self, mock_db):
        _returning(mock_db, UserSettings(user_id="a", provider="ollama", model="llama3"))

        record = await get_settings_async(mock_db, "a")

        assert record == SettingsRecord(provider="ollama", api_key="", model="llama3")


class TestUpsertSettings:
    """Tests for upsert_settings_async."""

    @pytest.mark.asyncio
    async def test_creates_row_with_encrypted_key(self, mock_db, mock_settings):
        record = await upsert_settings_async(mock_db, "alice", "gemini", "g-key", "")

        row = mock_db.add.call_args.args[0]
        assert row.user_id == "alice"
        assert row.api_key_encrypted != b"g-key"
        assert b"g-key" not in row.api_key_encrypted
        assert record == SettingsRecord(provider="gemini", api_key="g-key", model="")
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_updates_existing_row(self, mock_db, mock_settings):
        existing = UserSettings(user_id="alice", provider="gemini", model="")
        mock_db.get.return_value = existing

        record = await upsert_settings_async(mock_db, "alice", "ollama", "", "mistral")

        mock_db.add.assert_not_called()
        assert existing.provider == "ollama"
        assert existing.api_key_encrypted is None
        assert record.model == "mistral"

    @pytest.mark.asyncio
    async def test_storing_key_requires_encryption_key(self, mock_db, mock_settings):
        mock_settings.ideaforge_encryption_key = ""

        with pytest.raises(EncryptionError):
            await upsert_settings_async(mock_db, "alice", "openai", "sk", "")
        mock_db.commit.assert_not_called()
