"""
OpenAI Image Generation Service

Production implementation using the OpenAI images API.

The API answers with either `data[0].url` or `data[0].b64_json` depending
on the model and account; a URL is preferred, base64 is wrapped into a
`data:image/png;base64,` URL, and an answer with neither is a failure.
"""

import logging
from datetime import datetime
from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from kiosk_admin.core.config import get_settings
from kiosk_admin.services.imaging.base import (
    BaseImageService,
    ImageGenerationResult,
)

logger = logging.getLogger(__name__)


def build_prompt(menu_name: str) -> str:
    return (
        f'A high-quality realistic photo of the Korean food "{menu_name}". '
        "White background, 1:1 aspect ratio. No text. Only Simple Image"
    )


class OpenAIImageService(BaseImageService):
    """Menu pictures generated by an OpenAI image model."""

    def __init__(self, client: Optional[AsyncOpenAI] = None):
        settings = get_settings()
        self.model = settings.openai_image_model
        self.size = settings.openai_image_size

        if client is not None:
            self._client = client
        elif settings.openai_api_key:
            self._client = AsyncOpenAI(api_key=settings.openai_api_key)
        else:
            self._client = None
            logger.warning("OpenAI API key not configured")

        logger.info(f"OpenAIImageService initialized (model={self.model}, size={self.size})")

    @property
    def provider_name(self) -> str:
        return "openai"

    async def generate_menu_image(self, prompt: str) -> ImageGenerationResult:
        if self._client is None:
            logger.error("OPENAI_API_KEY is not set")
            return ImageGenerationResult(
                success=False,
                error_message="OPENAI_API_KEY is not set",
                provider=self.provider_name,
            )

        start_time = datetime.now()
        try:
            response = await self._client.images.generate(
                model=self.model,
                prompt=build_prompt(prompt),
                n=1,
                size=self.size,
            )
        except OpenAIError as e:
            logger.error(f"OpenAI image error: {e}")
            return ImageGenerationResult(
                success=False,
                error_message="Image generation failed",
                detail=str(e),
                provider=self.provider_name,
            )

        elapsed = round((datetime.now() - start_time).total_seconds() * 1000, 2)
        first = response.data[0] if response.data else None

        if first is not None and first.url:
            return ImageGenerationResult(
                success=True,
                image_url=first.url,
                provider=self.provider_name,
                response_time_ms=elapsed,
            )

        if first is not None and first.b64_json:
            return ImageGenerationResult(
                success=True,
                image_url=f"data:image/png;base64,{first.b64_json}",
                provider=self.provider_name,
                response_time_ms=elapsed,
            )

        logger.error(f"No URL or base64 in OpenAI response: {response}")
        return ImageGenerationResult(
            success=False,
            error_message="No usable image returned from OpenAI",
            provider=self.provider_name,
            response_time_ms=elapsed,
        )

    async def health_check(self) -> bool:
        return self._client is not None
