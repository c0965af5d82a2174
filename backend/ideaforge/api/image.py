"""Image generation, editing and analysis API endpoints."""

import logging

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ideaforge.adapters.base import GenerationError, Provider
from ideaforge.adapters.image_base import (
    AspectRatio,
    ImageGenerationResult,
    ImageRequest,
    ImageSize,
    ImageTier,
)
from ideaforge.adapters.provider_config import provider_config_from_record
from ideaforge.api.deps import (
    DbDep,
    ImageGatewayDep,
    TextGatewayDep,
    UserDep,
    load_user_settings,
)
from ideaforge.api.errors import to_http_exception
from ideaforge.prompts import MockupStyle, mockup_prompt
from ideaforge.storage.settings import SettingsRecord

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/images")


class ImageGenerationRequest(BaseModel):
    """Request body for image generation."""

    prompt: str = Field(..., min_length=1, description="Text description of desired image")
    tier: ImageTier = Field(default=ImageTier.FREE, description="free or paid")
    size: ImageSize = Field(default=ImageSize.SIZE_1K, description="Output size (paid tier only)")
    aspect_ratio: AspectRatio = Field(default=AspectRatio.SQUARE)
    style: MockupStyle = Field(
        default=MockupStyle.CUSTOM, description="Template applied to the prompt"
    )


class ImageEditRequest(BaseModel):
    """Request body for image editing."""

    prompt: str = Field(..., min_length=1, description="Edit instruction")
    image: str = Field(..., description="Base64 payload or data URI")
    mime_type: str = Field(default="image/png")


class ImageAnalysisRequest(BaseModel):
    """Request body for image analysis."""

    prompt: str = Field(default="", description="Question about the image")
    image: str = Field(..., description="Base64 payload or data URI")
    mime_type: str = Field(default="image/png")


class ImageResponse(BaseModel):
    """Response body for image generation and editing."""

    image_base64: str = Field(..., description="Base64-encoded image data")
    data_uri: str = Field(..., description="PNG data URI")
    mime_type: str
    model: str
    provider: str


class ImageAnalysisResponse(BaseModel):
    content: str


def _gemini_key(record: SettingsRecord) -> str:
    """User's own key when their provider is Gemini; otherwise the default applies."""
    return record.api_key if record.provider == Provider.GEMINI.value else ""


def _to_response(result: ImageGenerationResult) -> ImageResponse:
    return ImageResponse(
        image_base64=result.image_base64,
        data_uri=result.data_uri,
        mime_type=result.mime_type,
        model=result.model,
        provider=result.provider,
    )


@router.post("/generate", response_model=ImageResponse)
async def generate_image(
    request: ImageGenerationRequest,
    db: DbDep,
    user_id: UserDep,
    gateway: ImageGatewayDep,
) -> ImageResponse:
    """Generate an image from a text prompt."""
    record = await load_user_settings(db, user_id)
    image_request = ImageRequest(
        prompt=mockup_prompt(request.style, request.prompt),
        tier=request.tier,
        size=request.size,
        aspect_ratio=request.aspect_ratio,
    )
    try:
        result = await gateway.generate(image_request, api_key=_gemini_key(record))
    except GenerationError as e:
        raise to_http_exception(e) from e
    return _to_response(result)


@router.post("/edit", response_model=ImageResponse)
async def edit_image(
    request: ImageEditRequest,
    db: DbDep,
    user_id: UserDep,
    gateway: ImageGatewayDep,
) -> ImageResponse:
    """Edit an uploaded image according to an instruction."""
    record = await load_user_settings(db, user_id)
    try:
        result = await gateway.edit(
            request.prompt, request.image, request.mime_type, api_key=_gemini_key(record)
        )
    except GenerationError as e:
        raise to_http_exception(e) from e
    return _to_response(result)


@router.post("/analyze", response_model=ImageAnalysisResponse)
async def analyze_image(
    request: ImageAnalysisRequest,
    db: DbDep,
    user_id: UserDep,
    gateway: TextGatewayDep,
) -> ImageAnalysisResponse:
    """Ask a question about an image. Requires Gemini as the user's provider."""
    record = await load_user_settings(db, user_id)
    try:
        config = provider_config_from_record(record.provider, record.api_key, record.model)
        content = await gateway.analyze_image(
            request.prompt, request.image, request.mime_type, config
        )
    except GenerationError as e:
        raise to_http_exception(e) from e
    return ImageAnalysisResponse(content=content)
