"""Provider configuration variants.

One frozen dataclass per provider, each carrying only the fields that
provider needs. ``ProviderConfig`` is the union the gateways dispatch on.
"""

from dataclasses import dataclass
from typing import ClassVar

from ideaforge.adapters.base import Operation, Provider, UnsupportedProviderError


@dataclass(frozen=True)
class GeminiConfig:
    """Hosted multi-modal provider. Empty key falls back to the default key."""

    api_key: str = ""
    model: str = ""
    provider: ClassVar[Provider] = Provider.GEMINI


@dataclass(frozen=True)
class OpenAIConfig:
    api_key: str = ""
    model: str = ""
    provider: ClassVar[Provider] = Provider.OPENAI


@dataclass(frozen=True)
class OpenRouterConfig:
    api_key: str = ""
    model: str = ""
    provider: ClassVar[Provider] = Provider.OPENROUTER


@dataclass(frozen=True)
class OllamaConfig:
    """Local model server; unauthenticated."""

    model: str = ""
    provider: ClassVar[Provider] = Provider.OLLAMA


ProviderConfig = GeminiConfig | OpenAIConfig | OpenRouterConfig | OllamaConfig


@dataclass(frozen=True)
class DefaultCredentials:
    """Fallback credentials injected into gateways at construction time."""

    gemini_api_key: str = ""


def provider_config_from_record(
    provider: str,
    api_key: str | None = None,
    model: str | None = None,
    operation: Operation | None = None,
) -> ProviderConfig:
    """Build a config variant from a stored ``{provider, api_key, model}`` record.

    Raises:
        UnsupportedProviderError: If provider is not a supported backend.
    """
    key = api_key or ""
    model_id = (model or "").strip()

    if provider == Provider.GEMINI.value:
        return GeminiConfig(api_key=key, model=model_id)
    if provider == Provider.OPENAI.value:
        return OpenAIConfig(api_key=key, model=model_id)
    if provider == Provider.OPENROUTER.value:
        return OpenRouterConfig(api_key=key, model=model_id)
    if provider == Provider.OLLAMA.value:
        return OllamaConfig(model=model_id)
    raise UnsupportedProviderError(provider, operation=operation)
