"""Provider adapters for AI services."""

from ideaforge.adapters.base import (
    Cancelled,
    GenerationError,
    InvalidImageError,
    MissingCredentialsError,
    NoImageProducedError,
    Operation,
    Provider,
    ProviderRequestError,
    TextAdapter,
    UnsupportedProviderError,
)
from ideaforge.adapters.provider_config import (
    DefaultCredentials,
    GeminiConfig,
    OllamaConfig,
    OpenAIConfig,
    OpenRouterConfig,
    ProviderConfig,
    provider_config_from_record,
)

__all__ = [
    "Cancelled",
    "DefaultCredentials",
    "GeminiConfig",
    "GenerationError",
    "InvalidImageError",
    "MissingCredentialsError",
    "NoImageProducedError",
    "OllamaConfig",
    "OpenAIConfig",
    "OpenRouterConfig",
    "Operation",
    "Provider",
    "ProviderConfig",
    "ProviderRequestError",
    "TextAdapter",
    "UnsupportedProviderError",
    "provider_config_from_record",
]
