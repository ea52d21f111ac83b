"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
Supports two families of modes:
    - DEVELOPMENT: Uses mock AI services (no OpenAI key needed)
    - PRODUCTION / STAGING: Uses the OpenAI APIs for translation and images

The ENV_MODE variable controls which collaborator services are instantiated,
so the console can be exercised end to end on a laptop without spending
OpenAI credits.

Usage:
    from kiosk_admin.core.config import get_settings

    settings = get_settings()
    if settings.is_development:
        # Mock translation / image services
    else:
        # OpenAI-backed services
"""

import logging
import sys
from enum import Enum
from typing import Optional
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentMode(str, Enum):
    """
    Application environment modes.

    Attributes:
        DEVELOPMENT: Local work with mock AI services
        PRODUCTION: Live console with OpenAI integrations
        STAGING: Pre-production console with OpenAI integrations
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    The OpenAI key should NEVER be committed to version control.

    Attributes:
        env_mode: Current environment (development/production/staging)
        debug: Enable verbose logging and error details

        backend_api_url: Base URL of the platform's backend REST API
        http_timeout_seconds: Optional client timeout (None = no timeout)

        openai_api_key: OpenAI API key (required outside development)
        openai_translation_model: Chat model used for menu name translation
        openai_image_model: Image model used for menu pictures

        reserved_category_name: Backend name of the "All" sentinel category
        session_file: Local token store path
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================

    env_mode: EnvironmentMode = Field(
        default=EnvironmentMode.DEVELOPMENT,
        description="Application environment mode"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )

    # ==========================================================================
    # APPLICATION
    # ==========================================================================

    app_name: str = Field(
        default="Kiosk Admin Console",
        description="Application display name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="Console server host"
    )
    api_port: int = Field(
        default=3000,
        description="Console server port"
    )

    # ==========================================================================
    # BACKEND REST API
    # ==========================================================================

    backend_api_url: str = Field(
        default="http://localhost:8080",
        description="Base URL of the kiosk platform backend"
    )
    http_timeout_seconds: Optional[float] = Field(
        default=None,
        description="Client-side HTTP timeout in seconds (None disables it)"
    )

    # ==========================================================================
    # OPENAI
    # ==========================================================================

    openai_api_key: Optional[str] = Field(
        default=None,
        description="OpenAI API key (sk-...)"
    )
    openai_translation_model: str = Field(
        default="gpt-3.5-turbo",
        description="Chat completion model for menu name translation"
    )
    openai_image_model: str = Field(
        default="gpt-image-1",
        description="Image generation model for menu pictures"
    )
    openai_image_size: str = Field(
        default="1024x1024",
        description="Generated image size"
    )

    # ==========================================================================
    # CATALOG
    # ==========================================================================

    reserved_category_name: str = Field(
        default="전체",
        description="Backend name of the 'All' category sentinel"
    )

    # ==========================================================================
    # SESSION
    # ==========================================================================

    session_file: str = Field(
        default="data/session.json",
        description="Local token store (access/refresh tokens)"
    )
    access_token_cookie: str = Field(
        default="accessToken",
        description="Cookie name for the access token"
    )
    refresh_token_cookie: str = Field(
        default="refreshToken",
        description="Cookie name for the refresh token"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("env_mode", mode="before")
    @classmethod
    def validate_env_mode(cls, v: str) -> EnvironmentMode:
        """Convert string to EnvironmentMode enum."""
        if isinstance(v, EnvironmentMode):
            return v
        try:
            return EnvironmentMode(v.lower())
        except ValueError:
            valid = [e.value for e in EnvironmentMode]
            raise ValueError(f"Invalid env_mode. Must be one of: {valid}")

    @field_validator("backend_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.env_mode == EnvironmentMode.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env_mode == EnvironmentMode.PRODUCTION

    @property
    def use_real_services(self) -> bool:
        """Check if the OpenAI-backed services should be used."""
        return self.env_mode in (EnvironmentMode.PRODUCTION, EnvironmentMode.STAGING)

    # ==========================================================================
    # VALIDATION METHODS
    # ==========================================================================

    def validate_production_config(self) -> list[str]:
        """
        Validate that all required production settings are configured.

        Returns:
            List of missing configuration keys (empty if all present)
        """
        missing = []

        if self.use_real_services:
            if not self.openai_api_key:
                missing.append("OPENAI_API_KEY")

        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are read once per process; tests call
    ``get_settings.cache_clear()`` after changing the environment.
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured package logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-25s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)

    return logging.getLogger("kiosk_admin")
