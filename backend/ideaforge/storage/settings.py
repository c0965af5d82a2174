"""Storage functions for per-user provider settings."""

from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ideaforge.constants import DEFAULT_PROVIDER
from ideaforge.models import UserSettings
from ideaforge.storage.crypto import decrypt_value, encrypt_value


@dataclass(frozen=True)
class SettingsRecord:
    """Decrypted settings as handed to callers."""

    provider: str = DEFAULT_PROVIDER
    api_key: str = ""
    model: str = ""


DEFAULT_SETTINGS = SettingsRecord()


def _to_record(row: UserSettings) -> SettingsRecord:
    api_key = decrypt_value(row.api_key_encrypted) if row.api_key_encrypted else ""
    return SettingsRecord(provider=row.provider, api_key=api_key, model=row.model or "")


async def get_settings_async(db: AsyncSession, user_id: str) -> SettingsRecord:
    """Get a user's settings, or the defaults when none are stored."""
    result = await db.execute(select(UserSettings).where(UserSettings.user_id == user_id))
    row = result.scalar_one_or_none()
    if row is None:
        return DEFAULT_SETTINGS
    return _to_record(row)


async def upsert_settings_async(
    db: AsyncSession,
    user_id: str,
    provider: str,
    api_key: str,
    model: str,
) -> SettingsRecord:
    """Create or replace a user's settings."""
    encrypted = encrypt_value(api_key) if api_key else None

    row = await db.get(UserSettings, user_id)
    if row is None:
        row = UserSettings(user_id=user_id)
        db.add(row)
    row.provider = provider
    row.api_key_encrypted = encrypted
    row.model = model

    await db.commit()
    await db.refresh(row)
    return _to_record(row)
