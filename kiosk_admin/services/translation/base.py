"""
Translation Service Abstract Base Class

Defines the interface contract for menu-name translation providers.
Both MockTranslationService and OpenAITranslationService implement it,
so the translation endpoint behaves identically whichever is active.

Design Pattern: Strategy Pattern
    - Runtime switching between providers via ENV_MODE
    - Mock implementation for offline development and tests
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class TranslationResult:
    """
    Standardized result from a translation request.

    Attributes:
        success: Whether the provider answered
        translated_text: English menu name (may be empty on a blank answer)
        error_message: Error description if the call failed
        provider: Provider that produced the result
        response_time_ms: Time taken by the provider
    """
    success: bool
    translated_text: str = ""
    error_message: Optional[str] = None
    provider: str = "unknown"
    response_time_ms: float = 0.0


class BaseTranslationService(ABC):
    """
    Abstract base class for translation services.

    Example:
        >>> service = get_translation_service()  # Mock or OpenAI
        >>> result = await service.translate_menu_name("김치볶음밥")
        >>> if result.success:
        ...     print(result.translated_text)
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """
        Return the name of the translation provider.

        Returns:
            str: Provider name (e.g., "mock", "openai")
        """
        pass

    @abstractmethod
    async def translate_menu_name(self, text: str) -> TranslationResult:
        """
        Translate a Korean menu name into a short English menu name.

        Args:
            text: Menu name in Korean

        Returns:
            TranslationResult: Standardized result object

        Note:
            Implementations return a failed result instead of raising.
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Verify the provider is usable.

        Returns:
            bool: True if the service can serve requests
        """
        pass
