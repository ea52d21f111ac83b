"""
Backend API Client Factory

Usage:
    from kiosk_admin.services.backend import create_backend_client

    backend = create_backend_client(session)
    categories = await backend.list_categories()
"""

import logging
from typing import Optional

import httpx

from kiosk_admin.core.config import get_settings
from kiosk_admin.session import SessionManager
from kiosk_admin.services.backend.client import (
    BackendClient,
    BackendError,
    error_message,
)

logger = logging.getLogger(__name__)


def create_backend_client(
    session: SessionManager,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> BackendClient:
    """
    Build a backend client whose bearer token follows the session.

    Args:
        session: Session manager supplying the access token per request
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """
    settings = get_settings()
    logger.info(f"Backend API: {settings.backend_api_url}")
    return BackendClient(
        base_url=settings.backend_api_url,
        token_provider=lambda: session.access_token,
        timeout=settings.http_timeout_seconds,
        transport=transport,
    )


__all__ = [
    "create_backend_client",
    "BackendClient",
    "BackendError",
    "error_message",
]
