"""Gemini image generation adapter."""

import logging

from google.genai import types

from ideaforge.adapters.base import NoImageProducedError, Operation
from ideaforge.adapters.gemini import (
    PROVIDER_NAME,
    call_generate_content,
    decode_image,
    get_genai_client,
)
from ideaforge.adapters.image_base import (
    EDIT_CAPABILITIES,
    IMAGE_TIER_CAPABILITIES,
    AspectRatio,
    ImageAdapter,
    ImageGenerationResult,
    ImageRequest,
    ImageSize,
    ImageTier,
)

logger = logging.getLogger(__name__)


def build_image_config(
    tier: ImageTier,
    size: ImageSize,
    aspect_ratio: AspectRatio,
) -> tuple[str, types.GenerateContentConfig]:
    """Resolve the model and request config for a tier.

    Aspect ratio is always attached. Output size and search grounding are
    attached only when the tier's capabilities allow them.
    """
    capabilities = IMAGE_TIER_CAPABILITIES[ImageTier(tier)]

    image_config = types.ImageConfig(aspect_ratio=AspectRatio(aspect_ratio).value)
    if capabilities.image_size:
        image_config.image_size = ImageSize(size).value

    config = types.GenerateContentConfig(image_config=image_config)
    if capabilities.search_grounding:
        config.tools = [types.Tool(google_search=types.GoogleSearch())]

    return capabilities.model, config


def extract_image(
    response: types.GenerateContentResponse,
    operation: Operation,
) -> bytes:
    """Return the first inline-data part of the first candidate.

    Raises:
        NoImageProducedError: If no part carries inline data (e.g. a text refusal).
    """
    candidate = response.candidates[0] if response.candidates else None
    parts = candidate.content.parts if candidate and candidate.content else None

    text_parts: list[str] = []
    for part in parts or []:
        if part.inline_data and part.inline_data.data:
            return part.inline_data.data
        if part.text:
            text_parts.append(part.text)

    refusal = " ".join(text_parts) or None
    logger.warning(f"Gemini {operation.value} returned no image")
    raise NoImageProducedError(PROVIDER_NAME, operation, text=refusal)


class GeminiImageAdapter(ImageAdapter):
    """Adapter for Gemini image generation."""

    def __init__(self, api_key: str, timeout: float = 60.0):
        """Initialize Gemini image adapter.

        Args:
            api_key: Resolved Google API key.
            timeout: Per-call timeout in seconds.
        """
        self._api_key = api_key
        self._timeout = timeout

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    async def generate_image(self, request: ImageRequest) -> ImageGenerationResult:
        """Generate an image using Gemini."""
        model, config = build_image_config(request.tier, request.size, request.aspect_ratio)
        logger.debug(f"Gemini image generation: tier={request.tier.value} model={model}")

        response = await call_generate_content(
            get_genai_client(self._api_key, self._timeout),
            operation=Operation.GENERATE_IMAGE,
            model=model,
            contents=types.Content(role="user", parts=[types.Part(text=request.prompt)]),
            config=config,
        )
        return ImageGenerationResult(
            image_data=extract_image(response, Operation.GENERATE_IMAGE),
            model=model,
            provider=PROVIDER_NAME,
            metadata={
                "tier": request.tier.value,
                "aspect_ratio": request.aspect_ratio.value,
                "size": request.size.value if config.image_config.image_size else None,
            },
        )

    async def edit_image(
        self,
        prompt: str,
        source_image: str,
        mime_type: str,
    ) -> ImageGenerationResult:
        """Edit an image using Gemini's lightweight image model."""
        image_bytes = decode_image(source_image)
        model = EDIT_CAPABILITIES.model

        response = await call_generate_content(
            get_genai_client(self._api_key, self._timeout),
            operation=Operation.EDIT_IMAGE,
            model=model,
            contents=types.Content(
                role="user",
                parts=[
                    types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                    types.Part(text=prompt),
                ],
            ),
        )
        return ImageGenerationResult(
            image_data=extract_image(response, Operation.EDIT_IMAGE),
            model=model,
            provider=PROVIDER_NAME,
            metadata={"source_mime_type": mime_type},
        )
