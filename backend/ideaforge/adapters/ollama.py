"""Ollama adapter for the local model server."""

import logging

import httpx

from ideaforge.adapters.base import (
    Operation,
    ProviderRequestError,
    TextAdapter,
    request_json,
)
from ideaforge.constants import DEFAULT_OLLAMA_MODEL

logger = logging.getLogger(__name__)


class OllamaAdapter(TextAdapter):
    """Adapter for a local Ollama server. No authentication."""

    def __init__(self, base_url: str, http: httpx.AsyncClient):
        self._base_url = base_url.rstrip("/")
        self._http = http

    @property
    def provider_name(self) -> str:
        return "ollama"

    async def generate(
        self,
        prompt: str,
        model: str = "",
        system_instruction: str | None = None,
        reasoning_effort: bool = False,
    ) -> str:
        """Single-shot, non-streaming generate.

        The local protocol has no system channel, so the instruction is
        prepended to the prompt. ``reasoning_effort`` is ignored.
        """
        if system_instruction:
            prompt = f"{system_instruction}\n\n{prompt}"

        data = await request_json(
            self._http,
            "POST",
            f"{self._base_url}/api/generate",
            json={"model": model or DEFAULT_OLLAMA_MODEL, "prompt": prompt, "stream": False},
            provider=self.provider_name,
            operation=Operation.GENERATE,
        )
        if not isinstance(data, dict):
            raise ProviderRequestError(
                self.provider_name,
                Operation.GENERATE,
                status_code=200,
                transport_reason="malformed_response",
            )
        return data.get("response") or ""

    async def list_models(self) -> list[str]:
        """List locally pulled models from the tags endpoint."""
        data = await request_json(
            self._http,
            "GET",
            f"{self._base_url}/api/tags",
            provider=self.provider_name,
            operation=Operation.LIST_MODELS,
        )
        try:
            return [m["name"] for m in data["models"]]
        except (KeyError, TypeError) as e:
            raise ProviderRequestError(
                self.provider_name,
                Operation.LIST_MODELS,
                status_code=200,
                transport_reason="malformed_response",
            ) from e
