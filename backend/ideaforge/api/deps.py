"""Shared API dependencies: user identity, database and gateways."""

import logging
from typing import Annotated

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from ideaforge.adapters.provider_config import DefaultCredentials
from ideaforge.config import settings
from ideaforge.constants import DEFAULT_USER_ID
from ideaforge.db import get_db
from ideaforge.services.gateways import (
    ImageGenerationGateway,
    ModelDiscoveryGateway,
    TextGenerationGateway,
)
from ideaforge.services.http_client import get_http_client
from ideaforge.storage.crypto import EncryptionError
from ideaforge.storage.settings import SettingsRecord, get_settings_async

logger = logging.getLogger(__name__)


def get_user_id(x_user_id: Annotated[str | None, Header()] = None) -> str:
    """User identity from the upstream auth layer, or the default user."""
    return x_user_id or DEFAULT_USER_ID


def get_default_credentials() -> DefaultCredentials:
    """Fallback credentials from the environment. Composition root only."""
    return DefaultCredentials(gemini_api_key=settings.gemini_api_key)


def get_text_gateway() -> TextGenerationGateway:
    return TextGenerationGateway(
        get_http_client(),
        get_default_credentials(),
        ollama_base_url=settings.ollama_base_url,
        timeout=settings.request_timeout,
    )


def get_image_gateway() -> ImageGenerationGateway:
    return ImageGenerationGateway(get_default_credentials(), timeout=settings.request_timeout)


def get_discovery_gateway() -> ModelDiscoveryGateway:
    return ModelDiscoveryGateway(
        get_http_client(),
        get_default_credentials(),
        ollama_base_url=settings.ollama_base_url,
        timeout=settings.request_timeout,
    )


# Type aliases for dependencies
DbDep = Annotated[AsyncSession, Depends(get_db)]
UserDep = Annotated[str, Depends(get_user_id)]
TextGatewayDep = Annotated[TextGenerationGateway, Depends(get_text_gateway)]
ImageGatewayDep = Annotated[ImageGenerationGateway, Depends(get_image_gateway)]
DiscoveryGatewayDep = Annotated[ModelDiscoveryGateway, Depends(get_discovery_gateway)]


async def load_user_settings(db: AsyncSession, user_id: str) -> SettingsRecord:
    """Read a user's stored provider settings."""
    try:
        return await get_settings_async(db, user_id)
    except EncryptionError as e:
        logger.error(f"Cannot read stored settings for user: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Configuration error: {e}. Check IDEAFORGE_ENCRYPTION_KEY.",
        ) from e
