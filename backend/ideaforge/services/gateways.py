"""Generation gateways.

Uniform entry points over the provider adapters:

- TextGenerationGateway: prompt -> plain text, on the user's chosen provider
- ImageGenerationGateway: image create/edit, always on Gemini
- ModelDiscoveryGateway: list a backend's model identifiers

Gateways hold no per-call state. The only shared resources are the pooled
HTTP client and the injected default credentials.
"""

import logging

import httpx

from ideaforge.adapters.base import (
    MissingCredentialsError,
    Operation,
    Provider,
    TextAdapter,
    UnsupportedProviderError,
)
from ideaforge.adapters.gemini import GeminiAdapter
from ideaforge.adapters.gemini_image import GeminiImageAdapter
from ideaforge.adapters.image_base import ImageGenerationResult, ImageRequest
from ideaforge.adapters.ollama import OllamaAdapter
from ideaforge.adapters.openai import OpenAIAdapter, OpenRouterAdapter
from ideaforge.adapters.provider_config import (
    DefaultCredentials,
    GeminiConfig,
    OllamaConfig,
    OpenAIConfig,
    OpenRouterConfig,
    ProviderConfig,
    provider_config_from_record,
)

logger = logging.getLogger(__name__)


def resolve_gemini_key(
    api_key: str,
    defaults: DefaultCredentials,
    operation: Operation | None = None,
) -> str:
    """Per-user key, else the default key.

    Raises:
        MissingCredentialsError: If neither is set.
    """
    key = api_key or defaults.gemini_api_key
    if not key:
        raise MissingCredentialsError(Provider.GEMINI.value, operation=operation)
    return key


class _AdapterFactory:
    """Builds the adapter for a config variant. The single dispatch site."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        defaults: DefaultCredentials,
        ollama_base_url: str,
        timeout: float,
    ):
        self._http = http
        self._defaults = defaults
        self._ollama_base_url = ollama_base_url
        self._timeout = timeout

    def gemini(self, config: GeminiConfig, operation: Operation) -> GeminiAdapter:
        key = resolve_gemini_key(config.api_key, self._defaults, operation)
        return GeminiAdapter(key, self._http, timeout=self._timeout)

    def adapter_for(self, config: ProviderConfig, operation: Operation) -> TextAdapter:
        match config:
            case GeminiConfig():
                return self.gemini(config, operation)
            case OpenAIConfig(api_key=api_key):
                return OpenAIAdapter(api_key, self._http)
            case OpenRouterConfig(api_key=api_key):
                return OpenRouterAdapter(api_key, self._http)
            case OllamaConfig():
                return OllamaAdapter(self._ollama_base_url, self._http)
            case _:
                raise UnsupportedProviderError(
                    str(getattr(config, "provider", config)), operation=operation
                )


class TextGenerationGateway:
    """Routes text requests to the provider named by the config."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        defaults: DefaultCredentials,
        ollama_base_url: str,
        timeout: float = 60.0,
    ):
        self._adapters = _AdapterFactory(http, defaults, ollama_base_url, timeout)

    async def generate(
        self,
        prompt: str,
        config: ProviderConfig,
        system_instruction: str | None = None,
        reasoning_effort: bool = False,
    ) -> str:
        """Generate text on the configured provider.

        Raises:
            UnsupportedProviderError: config is not a known variant; no call is made.
            MissingCredentialsError: Gemini without per-user or default key.
            ProviderRequestError: Backend rejected the call or was unreachable.
        """
        adapter = self._adapters.adapter_for(config, Operation.GENERATE)
        logger.debug(
            f"Text generation via {adapter.provider_name} "
            f"(model={config.model or 'default'}, reasoning_effort={reasoning_effort})"
        )
        return await adapter.generate(
            prompt,
            model=config.model,
            system_instruction=system_instruction,
            reasoning_effort=reasoning_effort,
        )

    async def analyze_image(
        self,
        prompt: str,
        image: str,
        mime_type: str,
        config: ProviderConfig,
    ) -> str:
        """Answer a prompt about an image. Gemini only.

        Raises:
            UnsupportedProviderError: config is not a Gemini config.
        """
        if not isinstance(config, GeminiConfig):
            raise UnsupportedProviderError(
                str(getattr(config, "provider", config)), operation=Operation.ANALYZE
            )
        adapter = self._adapters.gemini(config, Operation.ANALYZE)
        return await adapter.analyze_image(prompt, image, mime_type, model=config.model)


class ImageGenerationGateway:
    """Image creation and editing on the hosted multi-modal provider."""

    def __init__(self, defaults: DefaultCredentials, timeout: float = 60.0):
        self._defaults = defaults
        self._timeout = timeout

    def _adapter(self, api_key: str, operation: Operation) -> GeminiImageAdapter:
        key = resolve_gemini_key(api_key, self._defaults, operation)
        return GeminiImageAdapter(key, timeout=self._timeout)

    async def generate(self, request: ImageRequest, api_key: str = "") -> ImageGenerationResult:
        """Generate an image; tier decides model, size and search grounding."""
        adapter = self._adapter(api_key, Operation.GENERATE_IMAGE)
        return await adapter.generate_image(request)

    async def edit(
        self,
        prompt: str,
        source_image: str,
        mime_type: str,
        api_key: str = "",
    ) -> ImageGenerationResult:
        """Edit an existing image (base64 or data URI)."""
        adapter = self._adapter(api_key, Operation.EDIT_IMAGE)
        return await adapter.edit_image(prompt, source_image, mime_type)


class ModelDiscoveryGateway:
    """Lists model identifiers offered by a backend."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        defaults: DefaultCredentials,
        ollama_base_url: str,
        timeout: float = 60.0,
    ):
        self._adapters = _AdapterFactory(http, defaults, ollama_base_url, timeout)

    async def list_models(self, provider: str, api_key: str = "") -> list[str]:
        """List models for a provider name.

        Unknown providers yield an empty list instead of an error; callers
        fall back to manual model entry.

        Raises:
            ProviderRequestError: Backend rejected the listing call.
        """
        try:
            config = provider_config_from_record(provider, api_key, operation=Operation.LIST_MODELS)
        except UnsupportedProviderError:
            logger.debug(f"No model listing for provider {provider!r}")
            return []
        return await self.list_models_for(config)

    async def list_models_for(self, config: ProviderConfig) -> list[str]:
        """List models for an existing config; its model field is ignored."""
        adapter = self._adapters.adapter_for(config, Operation.LIST_MODELS)
        return await adapter.list_models()
