"""
Translation Service Factory

Provides a single entry point for obtaining a translation service instance.

Usage:
    from kiosk_admin.services.translation import get_translation_service

    # Returns MockTranslationService or OpenAITranslationService based on ENV_MODE
    service = get_translation_service()
    result = await service.translate_menu_name("비빔밥")

Environment Switching:
    - ENV_MODE=development → MockTranslationService (no API calls)
    - ENV_MODE=staging/production → OpenAITranslationService
"""

import logging
from functools import lru_cache

from kiosk_admin.core.config import get_settings
from kiosk_admin.services.translation.base import (
    BaseTranslationService,
    TranslationResult,
)
from kiosk_admin.services.translation.mock import MockTranslationService
from kiosk_admin.services.translation.openai_chat import OpenAITranslationService

logger = logging.getLogger(__name__)


@lru_cache()
def get_translation_service() -> BaseTranslationService:
    """
    Get the configured translation service instance (cached).

    Returns:
        BaseTranslationService: Mock in development, OpenAI otherwise
    """
    settings = get_settings()

    if settings.is_development:
        logger.info("Translation Service: Using MockTranslationService (development mode)")
        return MockTranslationService(min_latency=0.1, max_latency=0.3)

    logger.info(
        f"Translation Service: Using OpenAITranslationService "
        f"({settings.env_mode.value} mode)"
    )
    return OpenAITranslationService()


def reset_translation_service() -> None:
    """Clear the cached instance; the next call builds a new one."""
    get_translation_service.cache_clear()
    logger.debug("Translation service cache cleared")


__all__ = [
    "get_translation_service",
    "reset_translation_service",
    "BaseTranslationService",
    "TranslationResult",
    "MockTranslationService",
    "OpenAITranslationService",
]
