"""Model discovery API endpoint."""

import logging

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ideaforge.adapters.base import GenerationError
from ideaforge.api.deps import DiscoveryGatewayDep

logger = logging.getLogger(__name__)

router = APIRouter()


class ModelListRequest(BaseModel):
    provider: str = Field(..., description="Provider to query")
    api_key: str = Field(default="", description="Key to query with; unused for ollama")


class ModelListResponse(BaseModel):
    models: list[str]
    error: str | None = None


@router.post("/models", response_model=ModelListResponse)
async def list_models(request: ModelListRequest, gateway: DiscoveryGatewayDep) -> ModelListResponse:
    """List available models for a provider.

    Discovery is a convenience: failures degrade to an empty list plus an
    error message so the client can fall back to manual entry.
    """
    try:
        models = await gateway.list_models(request.provider, request.api_key)
    except GenerationError as e:
        logger.warning(f"Model discovery failed for {request.provider}: {e}")
        return ModelListResponse(models=[], error=str(e))
    return ModelListResponse(models=models)
