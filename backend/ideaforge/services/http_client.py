"""Process-wide HTTP client shared by all provider calls."""

import logging

import httpx

from ideaforge.config import settings

logger = logging.getLogger(__name__)

_http_client: httpx.AsyncClient | None = None


def get_http_client() -> httpx.AsyncClient:
    """Get the shared pooled client, creating it on first use."""
    global _http_client
    if _http_client is None or _http_client.is_closed:
        _http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.request_timeout, connect=10.0),
        )
        logger.info(f"Created shared HTTP client (timeout={settings.request_timeout}s)")
    return _http_client


async def close_http_client() -> None:
    """Close the shared client. Called on application shutdown."""
    global _http_client
    if _http_client is not None and not _http_client.is_closed:
        await _http_client.aclose()
    _http_client = None
