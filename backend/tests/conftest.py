"""Shared pytest fixtures and configuration.

IMPORTANT: All tests that reach a provider MUST mock it.
The block_real_llm_calls fixture (autouse=True) will raise an error if
any test tries to make a real Gemini call without proper mocking. Raw HTTP
backends are mocked with pytest-httpx's ``httpx_mock`` fixture.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from ideaforge.adapters.gemini import clear_genai_client_cache
from ideaforge.adapters.provider_config import DefaultCredentials
from ideaforge.main import app


@pytest.fixture
def test_client():
    """Create FastAPI test client."""
    with TestClient(app) as client:
        yield client


async def _null_db():
    """Return None for database dependency - API tests patch the storage functions."""
    yield None


@pytest.fixture(autouse=True)
def setup_test_app_state():
    """Clear dependency overrides and disable database sessions."""
    from ideaforge.db import get_db

    app.dependency_overrides.clear()
    app.dependency_overrides[get_db] = _null_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def clear_caches():
    """Clear cached clients so each test sees its own mocks."""
    from ideaforge import db

    clear_genai_client_cache()
    db._get_engine.cache_clear()
    db._get_session_factory.cache_clear()
    yield
    clear_genai_client_cache()
    db._get_engine.cache_clear()
    db._get_session_factory.cache_clear()


class RealAPICallError(Exception):
    """Raised when a test tries to make a real API call without proper mocking."""

    pass


def _raise_real_api_error(*args, **kwargs):
    raise RealAPICallError(
        "Test attempted to make a real Gemini API call! "
        "Use the mock_genai fixture or patch the gateway in your test."
    )


@pytest.fixture(autouse=True)
def block_real_llm_calls():
    """Block real Gemini SDK calls in every test."""
    with patch("google.genai.Client") as mock_client:
        mock_client.return_value.aio.models.generate_content = AsyncMock(
            side_effect=_raise_real_api_error
        )
        yield


@pytest.fixture
def mock_genai():
    """Mock Google GenAI module as seen by the Gemini adapters.

    The client is reachable as ``mock_genai.Client.return_value`` and its
    ``aio.models.generate_content`` is an AsyncMock.
    """
    with patch("ideaforge.adapters.gemini.genai") as mock:
        client = MagicMock()
        client.aio.models.generate_content = AsyncMock()
        mock.Client.return_value = client
        yield mock


@pytest.fixture
def generate_content(mock_genai):
    """Shortcut to the mocked ``generate_content`` coroutine."""
    return mock_genai.Client.return_value.aio.models.generate_content


@pytest_asyncio.fixture
async def http_client():
    """Real httpx client; pair with ``httpx_mock`` to intercept requests."""
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def defaults():
    """Default credentials with a Gemini fallback key."""
    return DefaultCredentials(gemini_api_key="default-gemini-key")
