"""Translate gateway errors into HTTP responses."""

import logging

from fastapi import HTTPException

from ideaforge.adapters.base import (
    GenerationError,
    InvalidImageError,
    MissingCredentialsError,
    NoImageProducedError,
    ProviderRequestError,
    UnsupportedProviderError,
)

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER = "60"


def to_http_exception(e: GenerationError) -> HTTPException:
    """Map a gateway error to the HTTP status the API reports for it."""
    if isinstance(e, UnsupportedProviderError | InvalidImageError):
        logger.warning(f"Rejected request: {e}")
        return HTTPException(status_code=400, detail=str(e))

    if isinstance(e, MissingCredentialsError):
        logger.warning(f"Missing credentials for {e.provider}")
        return HTTPException(
            status_code=401,
            detail=f"{e}. Add an API key in settings.",
        )

    if isinstance(e, NoImageProducedError):
        logger.warning(f"No image produced by {e.provider}")
        return HTTPException(status_code=422, detail=str(e))

    if isinstance(e, ProviderRequestError):
        if e.status_code in (401, 403):
            logger.error(f"Auth error for {e.provider}")
            return HTTPException(
                status_code=401,
                detail=f"Authentication failed for {e.provider}. Verify your API key.",
            )
        if e.status_code == 429:
            logger.warning(f"Rate limit for {e.provider}")
            return HTTPException(
                status_code=429,
                detail=f"Rate limit exceeded for {e.provider}.",
                headers={"Retry-After": DEFAULT_RETRY_AFTER},
            )
        logger.error(f"Provider error: {e}")
        detail = str(e)
        if e.retriable:
            detail += " This error may be transient; retry may succeed."
        return HTTPException(status_code=502, detail=detail)

    logger.error(f"Unhandled generation error: {e}")
    return HTTPException(status_code=500, detail=str(e))
