"""Tests for /api/images endpoints."""

import base64
from unittest.mock import AsyncMock, patch

import pytest

from ideaforge.adapters.base import (
    InvalidImageError,
    NoImageProducedError,
    Operation,
    ProviderRequestError,
    UnsupportedProviderError,
)
from ideaforge.adapters.image_base import (
    AspectRatio,
    ImageGenerationResult,
    ImageSize,
    ImageTier,
)
from ideaforge.adapters.provider_config import GeminiConfig, OpenAIConfig
from ideaforge.api.deps import get_image_gateway, get_text_gateway
from ideaforge.constants import GEMINI_IMAGE_FREE
from ideaforge.main import app
from ideaforge.storage.settings import DEFAULT_SETTINGS, SettingsRecord

IMAGE_BYTES = b"fake-image-data"
IMAGE_B64 = base64.b64encode(IMAGE_BYTES).decode()


@pytest.fixture
def image_gateway():
    mock = AsyncMock()
    result = ImageGenerationResult(image_data=IMAGE_BYTES, model=GEMINI_IMAGE_FREE, provider="gemini")
    mock.generate = AsyncMock(return_value=result)
    mock.edit = AsyncMock(return_value=result)
    app.dependency_overrides[get_image_gateway] = lambda: mock
    return mock


@pytest.fixture
def text_gateway():
    mock = AsyncMock()
    mock.analyze_image = AsyncMock(return_value="A sunset")
    app.dependency_overrides[get_text_gateway] = lambda: mock
    return mock


@pytest.fixture
def user_settings():
    with patch("ideaforge.api.deps.get_settings_async", new_callable=AsyncMock) as mock:
        mock.return_value = DEFAULT_SETTINGS
        yield mock


class TestImageGenerationEndpoint:
    """Tests for POST /api/images/generate."""

    def test_generate_image_success(self, test_client, image_gateway, user_settings):
        response = test_client.post("/api/images/generate", json={"prompt": "A sunset"})

        assert response.status_code == 200
        data = response.json()
        assert data["image_base64"] == IMAGE_B64
        assert data["data_uri"] == f"data:image/png;base64,{IMAGE_B64}"
        assert data["mime_type"] == "image/png"
        assert data["model"] == GEMINI_IMAGE_FREE
        assert data["provider"] == "gemini"

        request = image_gateway.generate.call_args.args[0]
        assert request.prompt == "A sunset"
        assert request.tier == ImageTier.FREE
        assert request.size == ImageSize.SIZE_1K
        assert request.aspect_ratio == AspectRatio.SQUARE
        assert image_gateway.generate.call_args.kwargs["api_key"] == ""

    def test_paid_tier_options_forwarded(self, test_client, image_gateway, user_settings):
        test_client.post(
            "/api/images/generate",
            json={"prompt": "A sunset", "tier": "paid", "size": "4K", "aspect_ratio": "16:9"},
        )

        request = image_gateway.generate.call_args.args[0]
        assert request.tier == ImageTier.PAID
        assert request.size == ImageSize.SIZE_4K
        assert request.aspect_ratio == AspectRatio.WIDE

    def test_style_template_applied(self, test_client, image_gateway, user_settings):
        test_client.post(
            "/api/images/generate", json={"prompt": "a budgeting app", "style": "wireframe"}
        )

        prompt = image_gateway.generate.call_args.args[0].prompt
        assert "wireframe" in prompt
        assert "a budgeting app" in prompt

    def test_gemini_user_key_used(self, test_client, image_gateway, user_settings):
        user_settings.return_value = SettingsRecord(provider="gemini", api_key="user-key")

        test_client.post("/api/images/generate", json={"prompt": "x"})

        assert image_gateway.generate.call_args.kwargs["api_key"] == "user-key"

    def test_other_provider_key_not_sent_to_gemini(
        self, test_client, image_gateway, user_settings
    ):
        user_settings.return_value = SettingsRecord(provider="openai", api_key="sk-user")

        test_client.post("/api/images/generate", json={"prompt": "x"})

        assert image_gateway.generate.call_args.kwargs["api_key"] == ""

    def test_empty_prompt_rejected(self, test_client, image_gateway, user_settings):
        response = test_client.post("/api/images/generate", json={"prompt": ""})
        assert response.status_code == 422

    def test_invalid_tier_rejected(self, test_client, image_gateway, user_settings):
        response = test_client.post("/api/images/generate", json={"prompt": "x", "tier": "gold"})
        assert response.status_code == 422

    def test_no_image_is_422(self, test_client, image_gateway, user_settings):
        image_gateway.generate.side_effect = NoImageProducedError(
            "gemini", Operation.GENERATE_IMAGE, text="Cannot comply"
        )

        response = test_client.post("/api/images/generate", json={"prompt": "x"})

        assert response.status_code == 422
        assert "Cannot comply" in response.json()["detail"]

    def test_rate_limit_is_429(self, test_client, image_gateway, user_settings):
        image_gateway.generate.side_effect = ProviderRequestError(
            "gemini", Operation.GENERATE_IMAGE, status_code=429
        )

        response = test_client.post("/api/images/generate", json={"prompt": "x"})

        assert response.status_code == 429
        assert "Retry-After" in response.headers


class TestImageEditEndpoint:
    """Tests for POST /api/images/edit."""

    def test_edit_success(self, test_client, image_gateway, user_settings):
        response = test_client.post(
            "/api/images/edit",
            json={"prompt": "add a hat", "image": IMAGE_B64, "mime_type": "image/jpeg"},
        )

        assert response.status_code == 200
        assert response.json()["image_base64"] == IMAGE_B64
        call = image_gateway.edit.call_args
        assert call.args == ("add a hat", IMAGE_B64, "image/jpeg")
        assert call.kwargs == {"api_key": ""}

    def test_invalid_source_is_400(self, test_client, image_gateway, user_settings):
        image_gateway.edit.side_effect = InvalidImageError("Source image is not valid base64")

        response = test_client.post("/api/images/edit", json={"prompt": "x", "image": "%%%"})

        assert response.status_code == 400


class TestImageAnalysisEndpoint:
    """Tests for POST /api/images/analyze."""

    def test_analyze_with_gemini(self, test_client, text_gateway, user_settings):
        user_settings.return_value = SettingsRecord(provider="gemini", api_key="user-key")

        response = test_client.post(
            "/api/images/analyze", json={"prompt": "What is this?", "image": IMAGE_B64}
        )

        assert response.status_code == 200
        assert response.json() == {"content": "A sunset"}
        assert text_gateway.analyze_image.call_args.args == (
            "What is this?",
            IMAGE_B64,
            "image/png",
            GeminiConfig(api_key="user-key", model=""),
        )

    def test_analyze_with_other_provider_is_400(self, test_client, text_gateway, user_settings):
        user_settings.return_value = SettingsRecord(provider="openai", api_key="sk")
        text_gateway.analyze_image.side_effect = UnsupportedProviderError(
            "openai", Operation.ANALYZE
        )

        response = test_client.post("/api/images/analyze", json={"image": IMAGE_B64})

        assert response.status_code == 400
        assert text_gateway.analyze_image.call_args.args[3] == OpenAIConfig(api_key="sk")
