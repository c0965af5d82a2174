"""Base interface, request types and tier capabilities for image adapters."""

import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ideaforge.constants import GEMINI_IMAGE_FREE, GEMINI_IMAGE_PAID


class ImageTier(str, Enum):
    """Image-generation capability level."""

    FREE = "free"
    PAID = "paid"


class ImageSize(str, Enum):
    """Output resolution; only honored on tiers that allow it."""

    SIZE_1K = "1K"
    SIZE_2K = "2K"
    SIZE_4K = "4K"


class AspectRatio(str, Enum):
    SQUARE = "1:1"
    PORTRAIT = "3:4"
    LANDSCAPE = "4:3"
    TALL = "9:16"
    WIDE = "16:9"


@dataclass(frozen=True)
class TierCapabilities:
    """What a tier unlocks on the request."""

    model: str
    image_size: bool
    search_grounding: bool


IMAGE_TIER_CAPABILITIES: dict[ImageTier, TierCapabilities] = {
    ImageTier.FREE: TierCapabilities(
        model=GEMINI_IMAGE_FREE,
        image_size=False,
        search_grounding=False,
    ),
    ImageTier.PAID: TierCapabilities(
        model=GEMINI_IMAGE_PAID,
        image_size=True,
        search_grounding=True,
    ),
}

# Editing is not tier-gated and always runs on the lightweight model
EDIT_CAPABILITIES = IMAGE_TIER_CAPABILITIES[ImageTier.FREE]


@dataclass(frozen=True)
class ImageRequest:
    """Image creation request."""

    prompt: str
    tier: ImageTier = ImageTier.FREE
    size: ImageSize = ImageSize.SIZE_1K
    aspect_ratio: AspectRatio = AspectRatio.SQUARE


@dataclass
class ImageGenerationResult:
    """Result from image generation or editing."""

    image_data: bytes  # Raw image bytes
    model: str
    provider: str
    mime_type: str = "image/png"
    metadata: dict[str, Any] | None = None

    @property
    def image_base64(self) -> str:
        return base64.b64encode(self.image_data).decode("ascii")

    @property
    def data_uri(self) -> str:
        """PNG data URI, as the backend emits PNG for both generate and edit."""
        return f"data:image/png;base64,{self.image_base64}"


class ImageAdapter(ABC):
    """Abstract base class for image generation adapters."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'gemini')."""
        ...

    @abstractmethod
    async def generate_image(self, request: ImageRequest) -> ImageGenerationResult:
        """Generate an image from a text prompt.

        Args:
            request: Prompt plus tier, size and aspect ratio.

        Returns:
            ImageGenerationResult with image data and metadata.

        Raises:
            ProviderRequestError: If the backend call fails.
            NoImageProducedError: If the response holds no image.
        """
        ...

    @abstractmethod
    async def edit_image(
        self,
        prompt: str,
        source_image: str,
        mime_type: str,
    ) -> ImageGenerationResult:
        """Transform an existing image according to an instruction.

        Args:
            prompt: Edit instruction.
            source_image: Base64 payload or data URI of the image to edit.
            mime_type: MIME type of the source image.

        Raises:
            InvalidImageError: If the source image cannot be decoded.
            ProviderRequestError: If the backend call fails.
            NoImageProducedError: If the response holds no image.
        """
        ...
