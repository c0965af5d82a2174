"""Text generation API endpoint."""

import logging

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ideaforge.adapters.base import GenerationError
from ideaforge.adapters.provider_config import provider_config_from_record
from ideaforge.api.deps import DbDep, TextGatewayDep, UserDep, load_user_settings
from ideaforge.api.errors import to_http_exception
from ideaforge.prompts import DocumentType, PresetName, resolve_preset

logger = logging.getLogger(__name__)

router = APIRouter()


class GenerateRequest(BaseModel):
    """Request body for text generation."""

    prompt: str = Field(..., description="User content")
    system_instruction: str | None = Field(
        default=None, description="Steering text; overrides the preset's instruction"
    )
    reasoning_effort: bool | None = Field(
        default=None, description="High-effort mode; defaults to the preset's choice, else off"
    )
    preset: PresetName | None = Field(default=None, description="Built-in instruction preset")
    document_type: DocumentType = Field(
        default=DocumentType.PRD, description="Document kind for the document preset"
    )


class GenerateResponse(BaseModel):
    """Response body for text generation."""

    content: str
    provider: str
    model: str = Field(..., description="Configured model; empty when the provider default was used")


@router.post("/generate", response_model=GenerateResponse)
async def generate(
    request: GenerateRequest,
    db: DbDep,
    user_id: UserDep,
    gateway: TextGatewayDep,
) -> GenerateResponse:
    """Generate text with the user's configured provider."""
    record = await load_user_settings(db, user_id)

    system_instruction = request.system_instruction
    reasoning_effort = request.reasoning_effort
    if request.preset is not None:
        preset = resolve_preset(request.preset, record.provider, request.document_type)
        if system_instruction is None:
            system_instruction = preset.system_instruction
        if reasoning_effort is None:
            reasoning_effort = preset.reasoning_effort

    try:
        config = provider_config_from_record(record.provider, record.api_key, record.model)
        content = await gateway.generate(
            request.prompt,
            config,
            system_instruction=system_instruction,
            reasoning_effort=bool(reasoning_effort),
        )
    except GenerationError as e:
        raise to_http_exception(e) from e

    return GenerateResponse(content=content, provider=record.provider, model=record.model)
