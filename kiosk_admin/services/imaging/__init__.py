"""
Image Generation Service Factory

Usage:
    from kiosk_admin.services.imaging import get_image_service

    service = get_image_service()
    result = await service.generate_menu_image("김치볶음밥")

Environment Switching:
    - ENV_MODE=development → MockImageService (placeholder PNG)
    - ENV_MODE=staging/production → OpenAIImageService
"""

import logging
from functools import lru_cache

from kiosk_admin.core.config import get_settings
from kiosk_admin.services.imaging.base import (
    BaseImageService,
    ImageGenerationResult,
)
from kiosk_admin.services.imaging.mock import MockImageService
from kiosk_admin.services.imaging.openai_images import OpenAIImageService

logger = logging.getLogger(__name__)


@lru_cache()
def get_image_service() -> BaseImageService:
    """Get the configured image service instance (cached)."""
    settings = get_settings()

    if settings.is_development:
        logger.info("Image Service: Using MockImageService (development mode)")
        return MockImageService(min_latency=0.2, max_latency=0.6)

    logger.info(f"Image Service: Using OpenAIImageService ({settings.env_mode.value} mode)")
    return OpenAIImageService()


def reset_image_service() -> None:
    """Clear the cached service instance."""
    get_image_service.cache_clear()


__all__ = [
    "get_image_service",
    "reset_image_service",
    "BaseImageService",
    "ImageGenerationResult",
    "MockImageService",
    "OpenAIImageService",
]
