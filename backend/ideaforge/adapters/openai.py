"""OpenAI-compatible chat-completions adapters (OpenAI, OpenRouter)."""

import logging
from typing import Any

import httpx

from ideaforge.adapters.base import (
    Operation,
    ProviderRequestError,
    TextAdapter,
    request_json,
)
from ideaforge.constants import (
    DEFAULT_OPENAI_MODEL,
    DEFAULT_OPENROUTER_MODEL,
    OPENAI_API_BASE,
    OPENROUTER_API_BASE,
)

logger = logging.getLogger(__name__)


class ChatCompletionsAdapter(TextAdapter):
    """Adapter for any backend speaking the OpenAI chat-completions schema.

    Subclasses only set the provider name, base URL and default model.
    """

    name: str
    base_url: str
    default_model: str

    def __init__(self, api_key: str, http: httpx.AsyncClient):
        self._api_key = api_key
        self._http = http

    @property
    def provider_name(self) -> str:
        return self.name

    @property
    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}

    async def generate(
        self,
        prompt: str,
        model: str = "",
        system_instruction: str | None = None,
        reasoning_effort: bool = False,
    ) -> str:
        """Generate a chat completion.

        ``reasoning_effort`` has no equivalent here and is ignored.
        """
        messages: list[dict[str, str]] = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})
        messages.append({"role": "user", "content": prompt})

        payload = {"model": model or self.default_model, "messages": messages}
        logger.debug(f"{self.name} chat completion with model={payload['model']}")

        data = await request_json(
            self._http,
            "POST",
            f"{self.base_url}/chat/completions",
            headers=self._headers,
            json=payload,
            provider=self.name,
            operation=Operation.GENERATE,
        )
        try:
            content: Any = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderRequestError(
                self.name,
                Operation.GENERATE,
                status_code=200,
                transport_reason="malformed_response",
            ) from e
        return content or ""

    async def list_models(self) -> list[str]:
        """List model ids in the order the backend returns them."""
        data = await request_json(
            self._http,
            "GET",
            f"{self.base_url}/models",
            headers=self._headers,
            provider=self.name,
            operation=Operation.LIST_MODELS,
        )
        try:
            return [m["id"] for m in data["data"]]
        except (KeyError, TypeError) as e:
            raise ProviderRequestError(
                self.name,
                Operation.LIST_MODELS,
                status_code=200,
                transport_reason="malformed_response",
            ) from e


class OpenAIAdapter(ChatCompletionsAdapter):
    name = "openai"
    base_url = OPENAI_API_BASE
    default_model = DEFAULT_OPENAI_MODEL


class OpenRouterAdapter(ChatCompletionsAdapter):
    name = "openrouter"
    base_url = OPENROUTER_API_BASE
    default_model = DEFAULT_OPENROUTER_MODEL
