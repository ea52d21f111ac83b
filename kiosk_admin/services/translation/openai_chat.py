"""
OpenAI Translation Service Implementation

Production implementation using the OpenAI chat completions API.
Used when ENV_MODE=production or ENV_MODE=staging.

Requirements:
    - OPENAI_API_KEY must be set in environment
"""

import logging
from datetime import datetime
from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from kiosk_admin.core.config import get_settings
from kiosk_admin.services.translation.base import (
    BaseTranslationService,
    TranslationResult,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a translator. Translate the given Korean food menu name into "
    "a short English menu name. Do not add explanations."
)


class OpenAITranslationService(BaseTranslationService):
    """
    Menu-name translation backed by an OpenAI chat model.

    Without an API key the service still starts; every request then fails
    with "OPENAI_API_KEY is not set".
    """

    def __init__(self, client: Optional[AsyncOpenAI] = None):
        settings = get_settings()
        self.model = settings.openai_translation_model

        if client is not None:
            self._client = client
        elif settings.openai_api_key:
            self._client = AsyncOpenAI(api_key=settings.openai_api_key)
        else:
            self._client = None
            logger.warning("OpenAI API key not configured")

        logger.info(f"OpenAITranslationService initialized (model={self.model})")

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "openai"

    async def translate_menu_name(self, text: str) -> TranslationResult:
        if self._client is None:
            return TranslationResult(
                success=False,
                error_message="OPENAI_API_KEY is not set",
                provider=self.provider_name,
            )

        start_time = datetime.now()
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": text},
                ],
            )
        except OpenAIError as e:
            logger.error(f"OpenAI translation error: {e}")
            return TranslationResult(
                success=False,
                error_message="Translation API error",
                provider=self.provider_name,
            )

        elapsed = (datetime.now() - start_time).total_seconds() * 1000
        content = ""
        if response.choices:
            content = (response.choices[0].message.content or "").strip()

        logger.info(f"OpenAI translation: '{text}' -> '{content}' ({elapsed:.0f}ms)")
        return TranslationResult(
            success=True,
            translated_text=content,
            provider=self.provider_name,
            response_time_ms=round(elapsed, 2),
        )

    async def health_check(self) -> bool:
        return self._client is not None
