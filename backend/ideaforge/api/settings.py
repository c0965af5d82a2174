"""Settings API - per-user provider configuration."""

import logging
from typing import Literal

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ideaforge.api.deps import DbDep, UserDep, load_user_settings
from ideaforge.storage.crypto import EncryptionError
from ideaforge.storage.settings import upsert_settings_async

logger = logging.getLogger(__name__)

router = APIRouter()

ProviderName = Literal["gemini", "openai", "openrouter", "ollama"]


class SettingsBody(BaseModel):
    """Provider configuration as read and written by the client."""

    provider: ProviderName = Field("gemini", description="Text-generation provider")
    api_key: str = Field("", description="Provider API key; empty for ollama")
    model: str = Field("", description="Model id; empty uses the provider default")


@router.get("/settings", response_model=SettingsBody)
async def get_settings(db: DbDep, user_id: UserDep) -> SettingsBody:
    """Get the user's provider settings, or defaults."""
    record = await load_user_settings(db, user_id)
    return SettingsBody(provider=record.provider, api_key=record.api_key, model=record.model)


@router.post("/settings", response_model=SettingsBody)
async def update_settings(body: SettingsBody, db: DbDep, user_id: UserDep) -> SettingsBody:
    """Replace the user's provider settings."""
    try:
        record = await upsert_settings_async(
            db, user_id, provider=body.provider, api_key=body.api_key, model=body.model.strip()
        )
    except EncryptionError as e:
        logger.error(f"Cannot store API key: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Configuration error: {e}. Check IDEAFORGE_ENCRYPTION_KEY.",
        ) from e
    logger.info(f"Updated settings for {user_id} (provider={record.provider})")
    return SettingsBody(provider=record.provider, api_key=record.api_key, model=record.model)
