"""
Image Generation Service Abstract Base Class

Defines the interface for providers that draw a menu picture from its name.
A successful result carries `image_url`, which is either a fetchable URL
or an inline `data:image/...;base64,` URL.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class ImageGenerationResult:
    """
    Standardized result from an image generation request.

    Attributes:
        success: Whether a usable image was produced
        image_url: Fetchable URL or data URL of the image
        error_message: Short error description if generation failed
        detail: Provider-specific error detail
        provider: Provider that produced the result
    """
    success: bool
    image_url: Optional[str] = None
    error_message: Optional[str] = None
    detail: Optional[str] = None
    provider: str = "unknown"
    response_time_ms: float = 0.0


class BaseImageService(ABC):
    """Abstract base class for image generation services."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @abstractmethod
    async def generate_menu_image(self, prompt: str) -> ImageGenerationResult:
        """
        Generate a picture of the dish named by `prompt`.

        Args:
            prompt: Menu name (Korean)

        Returns:
            ImageGenerationResult: URL preferred, data URL otherwise
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Verify the provider is usable."""
        pass
