# conftest.py
import os

os.environ["ENV_MODE"] = "development"
os.environ["BACKEND_API_URL"] = "http://backend.test"
os.environ.pop("OPENAI_API_KEY", None)

from typing import Any, Callable, Optional, Union

import httpx
import pytest

from kiosk_admin.confirm import ConfirmGate
from kiosk_admin.core.config import get_settings
from kiosk_admin.services.backend import BackendClient
from kiosk_admin.services.imaging import reset_image_service
from kiosk_admin.services.menu_autofill import MenuAutoFill
from kiosk_admin.services.translation import reset_translation_service
from kiosk_admin.session import FileTokenStore, SessionManager
from kiosk_admin.schemas import SessionTokens
from kiosk_admin.toasts import ToastQueue

BACKEND_URL = "http://backend.test"
CONSOLE_URL = "http://console"

Handler = Callable[[httpx.Request], httpx.Response]


class Router:
    """Canned responses keyed by (method, path); records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Union[Handler, tuple[int, dict]]] = {}
        self.calls: list[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, **kwargs: Any) -> "Router":
        self.routes[(method, path)] = (status, kwargs)
        return self

    def handle(self, method: str, path: str, handler: Handler) -> "Router":
        self.routes[(method, path)] = handler
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "no route"})
        if callable(route):
            return route(request)
        status, kwargs = route
        return httpx.Response(status, **kwargs)

    def calls_to(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.calls if r.method == method and r.url.path == path]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    reset_translation_service()
    reset_image_service()
    yield
    get_settings.cache_clear()


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def session(tmp_path) -> SessionManager:
    return SessionManager(FileTokenStore(tmp_path / "session.json"))


@pytest.fixture
def signed_in(session) -> SessionManager:
    session.set(SessionTokens(access_token="access-1", refresh_token="refresh-1"))
    return session


@pytest.fixture
def backend_router() -> Router:
    return Router()


@pytest.fixture
def backend(backend_router, signed_in) -> BackendClient:
    return BackendClient(
        BACKEND_URL,
        token_provider=lambda: signed_in.access_token,
        transport=backend_router.transport,
    )


@pytest.fixture
def collab_router() -> Router:
    return Router()


@pytest.fixture
def collaborators(collab_router) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=collab_router.transport, base_url=CONSOLE_URL)


@pytest.fixture
def autofill(collaborators, backend) -> MenuAutoFill:
    return MenuAutoFill(collaborators, backend)


@pytest.fixture
def toasts() -> ToastQueue:
    return ToastQueue()


@pytest.fixture
def gate() -> ConfirmGate:
    return ConfirmGate()


def error_messages(toasts: ToastQueue) -> list[str]:
    return [t.message for t in toasts.peek() if t.level.value == "error"]


def success_messages(toasts: ToastQueue) -> list[str]:
    return [t.message for t in toasts.peek() if t.level.value == "success"]


def category_json(category_id: int, name: str, name_en: Optional[str] = None, type_: str = "FOOD") -> dict:
    return {
        "categoryId": category_id,
        "categoryName": name,
        "categoryNameEn": name_en,
        "categoryType": type_,
    }
