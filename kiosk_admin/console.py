"""
Console Assembly

Wires the session, the backend client, the auto-fill pipeline and the
screens together. All screens share one toast queue and one
confirmation gate, so a single prompt is open at any time.
"""

import logging
from typing import Optional

import httpx

from kiosk_admin.confirm import ConfirmGate
from kiosk_admin.core.config import get_settings
from kiosk_admin.screens import (
    AccountScreen,
    AuthScreen,
    CategoriesScreen,
    DashboardScreen,
    MenusScreen,
    OrdersScreen,
)
from kiosk_admin.services.backend import BackendClient, create_backend_client
from kiosk_admin.services.menu_autofill import MenuAutoFill
from kiosk_admin.session import FileTokenStore, SessionManager, TokenStore
from kiosk_admin.toasts import ToastQueue

logger = logging.getLogger(__name__)


class Console:
    """The operator's console: shared services plus one object per screen."""

    def __init__(
        self,
        session: SessionManager,
        backend: BackendClient,
        autofill: MenuAutoFill,
    ):
        self.session = session
        self.backend = backend
        self.autofill = autofill
        self.toasts = ToastQueue()
        self.gate = ConfirmGate()

        self.auth = AuthScreen(backend, self.toasts, session, self.gate)
        self.account = AccountScreen(backend, self.toasts, session, self.gate)
        self.dashboard = DashboardScreen(backend, self.toasts, self.gate)
        self.categories = CategoriesScreen(backend, self.toasts, self.gate)
        self.menus = MenusScreen(backend, self.toasts, autofill, self.gate)
        self.orders = OrdersScreen(backend, self.toasts, self.gate)

    async def aclose(self) -> None:
        await self.backend.aclose()


def build_console(
    collaborators: httpx.AsyncClient,
    fetcher: Optional[httpx.AsyncClient] = None,
    store: Optional[TokenStore] = None,
    backend_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Console:
    """
    Build a console from settings.

    Args:
        collaborators: Client for /api/translate-menu and /api/generate-menu-image
        fetcher: Client used to download generated image URLs
        store: Token store (defaults to the SESSION_FILE JSON file)
        backend_transport: Optional httpx transport for the backend client
    """
    settings = get_settings()

    session = SessionManager(
        store or FileTokenStore(settings.session_file),
        access_cookie=settings.access_token_cookie,
        refresh_cookie=settings.refresh_token_cookie,
    )
    backend = create_backend_client(session, transport=backend_transport)
    autofill = MenuAutoFill(collaborators, backend, fetcher=fetcher)

    logger.info("Console assembled")
    return Console(session, backend, autofill)
