"""Gemini adapter using Google GenAI SDK."""

import base64
import binascii
import logging
from functools import lru_cache
from typing import Any

import httpx
from google import genai
from google.genai import errors, types
from google.genai.types import HttpOptions

from ideaforge.adapters.base import (
    InvalidImageError,
    Operation,
    ProviderRequestError,
    TextAdapter,
    request_json,
    transport_reason,
)
from ideaforge.constants import (
    DEFAULT_ANALYZE_PROMPT,
    GEMINI_API_BASE,
    GEMINI_FLASH,
    GEMINI_MODEL_PREFIX,
    GEMINI_PRO,
)

logger = logging.getLogger(__name__)

PROVIDER_NAME = "gemini"


@lru_cache(maxsize=64)
def get_genai_client(api_key: str, timeout_seconds: float) -> genai.Client:
    """Get a cached GenAI client for an API key.

    Clients own their connection pool, so one is kept per key rather than per call.
    At most 64 keys are held. Evicted clients are left to garbage collection
    and the whole cache is dropped on application shutdown.
    """
    # HttpOptions timeout is in milliseconds
    return genai.Client(
        api_key=api_key,
        http_options=HttpOptions(timeout=int(timeout_seconds * 1000)),
    )


def clear_genai_client_cache() -> None:
    """Drop cached GenAI clients. Called on shutdown and between tests."""
    get_genai_client.cache_clear()


def decode_image(image: str) -> bytes:
    """Decode raw base64 or a ``data:<mime>;base64,`` URI into bytes.

    Raises:
        InvalidImageError: If the payload is not valid base64.
    """
    payload = image.split(",", 1)[1] if image.startswith("data:") else image
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageError("Source image is not valid base64", provider=PROVIDER_NAME) from e


async def call_generate_content(
    client: genai.Client,
    *,
    operation: Operation,
    model: str,
    contents: Any,
    config: types.GenerateContentConfig | None = None,
) -> types.GenerateContentResponse:
    """Single ``generate_content`` call with SDK failures mapped to ProviderRequestError."""
    try:
        return await client.aio.models.generate_content(
            model=model,
            contents=contents,
            config=config,
        )
    except errors.APIError as e:
        logger.warning(f"Gemini {operation.value} failed with HTTP {e.code}: {e.message}")
        raise ProviderRequestError(
            PROVIDER_NAME, operation, status_code=e.code, detail=e.message
        ) from e
    except httpx.TransportError as e:
        reason = transport_reason(e)
        logger.warning(f"Gemini {operation.value} transport failure: {reason}")
        raise ProviderRequestError(PROVIDER_NAME, operation, transport_reason=reason) from e


class GeminiAdapter(TextAdapter):
    """Adapter for Gemini models via Google GenAI API."""

    def __init__(self, api_key: str, http: httpx.AsyncClient, timeout: float = 60.0):
        """
        Initialize Gemini adapter.

        Args:
            api_key: Resolved Google API key (per-user or default).
            http: Shared HTTP client, used for the REST model listing.
            timeout: Per-call timeout in seconds.
        """
        self._api_key = api_key
        self._http = http
        self._timeout = timeout

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    @property
    def _client(self) -> genai.Client:
        return get_genai_client(self._api_key, self._timeout)

    async def generate(
        self,
        prompt: str,
        model: str = "",
        system_instruction: str | None = None,
        reasoning_effort: bool = False,
    ) -> str:
        """Generate text using Gemini API."""
        resolved_model = model or (GEMINI_PRO if reasoning_effort else GEMINI_FLASH)

        config = types.GenerateContentConfig()
        if system_instruction:
            config.system_instruction = system_instruction
        if reasoning_effort:
            config.thinking_config = types.ThinkingConfig(
                thinking_level=types.ThinkingLevel.HIGH,
            )
            logger.debug(f"Gemini thinking_level=HIGH for model={resolved_model}")

        response = await call_generate_content(
            self._client,
            operation=Operation.GENERATE,
            model=resolved_model,
            contents=prompt,
            config=config,
        )
        return response.text or ""

    async def analyze_image(
        self,
        prompt: str,
        image: str,
        mime_type: str,
        model: str = "",
    ) -> str:
        """Describe or answer a question about an image.

        Args:
            prompt: Question about the image; empty uses a generic analysis request.
            image: Base64 payload or data URI.
            mime_type: MIME type of the image.
            model: Model override; defaults to the high-effort model.
        """
        image_bytes = decode_image(image)
        contents = types.Content(
            role="user",
            parts=[
                types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                types.Part(text=prompt or DEFAULT_ANALYZE_PROMPT),
            ],
        )
        response = await call_generate_content(
            self._client,
            operation=Operation.ANALYZE,
            model=model or GEMINI_PRO,
            contents=contents,
        )
        return response.text or ""

    async def list_models(self) -> list[str]:
        """List Gemini models via the REST listing endpoint."""
        data = await request_json(
            self._http,
            "GET",
            f"{GEMINI_API_BASE}/models",
            params={"key": self._api_key},
            provider=PROVIDER_NAME,
            operation=Operation.LIST_MODELS,
        )
        try:
            return [m["name"].removeprefix(GEMINI_MODEL_PREFIX) for m in data.get("models", [])]
        except (AttributeError, KeyError, TypeError) as e:
            raise ProviderRequestError(
                PROVIDER_NAME,
                Operation.LIST_MODELS,
                status_code=200,
                transport_reason="malformed_response",
            ) from e
