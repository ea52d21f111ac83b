"""
Mock Translation Service Implementation

Produces English menu names without calling OpenAI.
Used in development mode (ENV_MODE=development) to:
    - Exercise the menu auto-fill flow offline
    - Keep tests deterministic

Behavior:
    - Known dishes come from a small glossary
    - Anything else is romanized syllable by syllable (Revised Romanization,
      without sound-change rules) and title-cased
    - Optional simulated latency and failure rate
"""

import asyncio
import logging
import random
from datetime import datetime

from kiosk_admin.services.translation.base import (
    BaseTranslationService,
    TranslationResult,
)

logger = logging.getLogger(__name__)


GLOSSARY = {
    "김치볶음밥": "Kimchi Fried Rice",
    "비빔밥": "Bibimbap",
    "불고기": "Bulgogi",
    "떡볶이": "Tteokbokki",
    "김치찌개": "Kimchi Stew",
    "된장찌개": "Soybean Paste Stew",
    "순두부찌개": "Soft Tofu Stew",
    "냉면": "Cold Noodles",
    "삼겹살": "Grilled Pork Belly",
    "잡채": "Japchae",
    "김밥": "Gimbap",
    "제육볶음": "Spicy Stir-fried Pork",
    "콜라": "Coke",
    "사이다": "Sprite",
}

_INITIALS = [
    "g", "kk", "n", "d", "tt", "r", "m", "b", "pp", "s",
    "ss", "", "j", "jj", "ch", "k", "t", "p", "h",
]
_MEDIALS = [
    "a", "ae", "ya", "yae", "eo", "e", "yeo", "ye", "o", "wa", "wae",
    "oe", "yo", "u", "wo", "we", "wi", "yu", "eu", "ui", "i",
]
_FINALS = [
    "", "k", "k", "k", "n", "n", "n", "t", "l", "k", "m", "l",
    "l", "l", "p", "l", "m", "p", "p", "t", "t", "ng", "t", "t",
    "k", "t", "p", "t",
]

_HANGUL_FIRST = 0xAC00
_HANGUL_LAST = 0xD7A3


def romanize(text: str) -> str:
    """Romanize Hangul syllables; other characters pass through."""
    words = []
    for word in text.split():
        out = []
        for ch in word:
            code = ord(ch)
            if _HANGUL_FIRST <= code <= _HANGUL_LAST:
                offset = code - _HANGUL_FIRST
                initial, rest = divmod(offset, 588)
                medial, final = divmod(rest, 28)
                out.append(_INITIALS[initial] + _MEDIALS[medial] + _FINALS[final])
            else:
                out.append(ch)
        words.append("".join(out).capitalize())
    return " ".join(words)


class MockTranslationService(BaseTranslationService):
    """
    Mock implementation of the translation service.

    Attributes:
        failure_rate: Probability of a simulated provider failure (0.0-1.0)
        min_latency: Minimum simulated response time in seconds
        max_latency: Maximum simulated response time in seconds
    """

    def __init__(
        self,
        failure_rate: float = 0.0,
        min_latency: float = 0.0,
        max_latency: float = 0.0,
    ):
        self.failure_rate = failure_rate
        self.min_latency = min_latency
        self.max_latency = max_latency

        logger.info(
            f"MockTranslationService initialized "
            f"(failure_rate={failure_rate:.0%}, "
            f"latency={min_latency}-{max_latency}s)"
        )

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "mock"

    async def _simulate_latency(self) -> None:
        if self.max_latency > 0:
            await asyncio.sleep(random.uniform(self.min_latency, self.max_latency))

    def _should_fail(self) -> bool:
        return random.random() < self.failure_rate

    async def translate_menu_name(self, text: str) -> TranslationResult:
        """Translate via glossary, falling back to romanization."""
        start_time = datetime.now()
        await self._simulate_latency()

        if self._should_fail():
            logger.warning(f"Mock translation failed (simulated) for '{text}'")
            return TranslationResult(
                success=False,
                error_message="Translation API error",
                provider=self.provider_name,
            )

        key = text.strip()
        translated = GLOSSARY.get(key) or romanize(key)
        elapsed = (datetime.now() - start_time).total_seconds() * 1000

        logger.info(f"Mock translation: '{key}' -> '{translated}'")
        return TranslationResult(
            success=True,
            translated_text=translated,
            provider=self.provider_name,
            response_time_ms=round(elapsed, 2),
        )

    async def health_check(self) -> bool:
        """Mock service is always healthy."""
        return True
