"""Base protocol, error taxonomy and shared HTTP helpers for provider adapters."""

import asyncio
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

import httpx

logger = logging.getLogger(__name__)

# Cancellation is never converted into a GenerationError; this alias only names it.
Cancelled = asyncio.CancelledError


class Provider(str, Enum):
    """Supported generative-AI backends."""

    GEMINI = "gemini"
    OPENAI = "openai"
    OPENROUTER = "openrouter"
    OLLAMA = "ollama"


class Operation(str, Enum):
    """Gateway sub-operation a failure belongs to."""

    GENERATE = "generate"
    ANALYZE = "analyze"
    GENERATE_IMAGE = "generate_image"
    EDIT_IMAGE = "edit_image"
    LIST_MODELS = "list_models"


class GenerationError(Exception):
    """Base exception for gateway errors."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        operation: Operation | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.operation = operation


class UnsupportedProviderError(GenerationError):
    """Provider value is not one of the supported backends."""

    def __init__(self, provider: str, operation: Operation | None = None):
        super().__init__(
            f"Unsupported provider: {provider!r}",
            provider=provider,
            operation=operation,
        )


class MissingCredentialsError(GenerationError):
    """No per-user key and no default key available for a provider that needs one."""

    def __init__(self, provider: str, operation: Operation | None = None):
        super().__init__(
            f"No API key configured for {provider}",
            provider=provider,
            operation=operation,
        )


class ProviderRequestError(GenerationError):
    """Backend rejected the call or could not be reached.

    Exactly one of ``status_code`` (backend answered) or ``transport_reason``
    (backend unreachable) is normally set. A 2xx reply with an unusable body
    carries both, with ``transport_reason="malformed_response"``.
    """

    def __init__(
        self,
        provider: str,
        operation: Operation,
        status_code: int | None = None,
        transport_reason: str | None = None,
        detail: str | None = None,
    ):
        if status_code is None:
            message = f"{provider} {operation.value} failed: {transport_reason}"
        elif transport_reason:
            message = f"{provider} {operation.value} failed: {transport_reason} (HTTP {status_code})"
        else:
            message = f"{provider} {operation.value} failed with HTTP {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, provider=provider, operation=operation)
        self.status_code = status_code
        self.transport_reason = transport_reason
        self.detail = detail

    @property
    def retriable(self) -> bool:
        """Hint for callers; the gateway itself never retries."""
        if self.status_code is None:
            return self.transport_reason != "malformed_response"
        return self.status_code == 429 or self.status_code >= 500


class NoImageProducedError(GenerationError):
    """Backend answered successfully but returned no inline image part."""

    def __init__(self, provider: str, operation: Operation, text: str | None = None):
        message = "Response did not contain image data"
        if text:
            message = f"{message}: {text[:200]}"
        super().__init__(message, provider=provider, operation=operation)
        self.text = text


class InvalidImageError(GenerationError):
    """Source image supplied for edit/analysis is not valid base64."""


def transport_reason(exc: httpx.TransportError) -> str:
    """Classify a transport failure."""
    if isinstance(exc, httpx.TimeoutException):
        return "timeout"
    if isinstance(exc, httpx.ConnectError):
        return "connect"
    return "network"


async def request_json(
    http: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    provider: str,
    operation: Operation,
    **kwargs: Any,
) -> Any:
    """Send one request and return the decoded JSON body.

    Raises:
        ProviderRequestError: On transport failure, non-2xx status or non-JSON body.
    """
    try:
        response = await http.request(method, url, **kwargs)
    except httpx.TransportError as e:
        reason = transport_reason(e)
        logger.warning(f"{provider} {operation.value} transport failure: {reason}")
        raise ProviderRequestError(
            provider, operation, transport_reason=reason, detail=str(e) or None
        ) from e

    if not response.is_success:
        logger.warning(f"{provider} {operation.value} returned HTTP {response.status_code}")
        raise ProviderRequestError(
            provider,
            operation,
            status_code=response.status_code,
            detail=response.text[:500] or None,
        )

    try:
        return response.json()
    except ValueError as e:
        raise ProviderRequestError(
            provider,
            operation,
            status_code=response.status_code,
            transport_reason="malformed_response",
        ) from e


class TextAdapter(ABC):
    """Protocol for text-generation provider adapters."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'gemini', 'ollama')."""
        ...

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        model: str = "",
        system_instruction: str | None = None,
        reasoning_effort: bool = False,
    ) -> str:
        """
        Generate text for a single prompt.

        Args:
            prompt: User content
            model: Model identifier; empty selects the provider default
            system_instruction: Optional steering text
            reasoning_effort: Request the provider's highest-effort mode where supported

        Returns:
            Plain text reply, possibly empty

        Raises:
            ProviderRequestError: If the request fails
        """
        ...

    @abstractmethod
    async def list_models(self) -> list[str]:
        """List model identifiers offered by the backend."""
        ...
