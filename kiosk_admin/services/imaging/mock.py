"""
Mock Image Generation Service

Returns a placeholder PNG as an inline data URL, the same shape the
OpenAI provider returns when it answers with base64 instead of a URL.
"""

import asyncio
import logging
import random

from kiosk_admin.services.imaging.base import (
    BaseImageService,
    ImageGenerationResult,
)

logger = logging.getLogger(__name__)

# 1x1 transparent PNG
PLACEHOLDER_PNG_B64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


class MockImageService(BaseImageService):
    """Mock image generation for development."""

    def __init__(
        self,
        failure_rate: float = 0.0,
        min_latency: float = 0.0,
        max_latency: float = 0.0,
    ):
        self.failure_rate = failure_rate
        self.min_latency = min_latency
        self.max_latency = max_latency
        logger.info(f"MockImageService initialized (failure_rate={failure_rate:.0%})")

    @property
    def provider_name(self) -> str:
        return "mock"

    async def _simulate_latency(self) -> None:
        if self.max_latency > 0:
            await asyncio.sleep(random.uniform(self.min_latency, self.max_latency))

    def _should_fail(self) -> bool:
        return random.random() < self.failure_rate

    async def generate_menu_image(self, prompt: str) -> ImageGenerationResult:
        await self._simulate_latency()

        if self._should_fail():
            logger.warning(f"Mock image generation failed (simulated) for '{prompt}'")
            return ImageGenerationResult(
                success=False,
                error_message="Image generation failed",
                detail="Simulated failure",
                provider=self.provider_name,
            )

        logger.info(f"Mock image generated for '{prompt}'")
        return ImageGenerationResult(
            success=True,
            image_url=f"data:image/png;base64,{PLACEHOLDER_PNG_B64}",
            provider=self.provider_name,
        )

    async def health_check(self) -> bool:
        return True
