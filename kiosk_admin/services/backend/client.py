"""
Backend REST API Client

Async client for the kiosk platform backend. Authenticated calls carry
`Authorization: Bearer <accessToken>` taken from the session; a 401 is
reported like any other failure (there is no refresh flow).

Non-success responses raise BackendError with the best message the
backend provided (`{"message": ...}`), falling back to a generic text.
"""

import logging
from typing import Any, Callable, Optional

import httpx
from pydantic import TypeAdapter

from kiosk_admin.schemas import (
    Category,
    ImageFile,
    Kiosk,
    Menu,
    SessionTokens,
    StoreInfo,
)

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]

_categories_adapter = TypeAdapter(list[Category])
_menus_adapter = TypeAdapter(list[Menu])
_kiosks_adapter = TypeAdapter(list[Kiosk])


class BackendError(Exception):
    """A backend call failed (non-success status or unusable body)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def error_message(response: httpx.Response, fallback: str) -> str:
    """Best-effort `message` field of an error body."""
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return fallback


class BackendClient:
    """
    Thin wrapper over httpx.AsyncClient, one method per backend endpoint.

    Attributes:
        base_url: Backend base URL (BACKEND_API_URL)

    Example:
        >>> client = BackendClient("http://localhost:8080", lambda: session.access_token)
        >>> menus = await client.list_menus()
    """

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self._token_provider = token_provider
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    # ==========================================================================
    # TRANSPORT
    # ==========================================================================

    async def _request(
        self,
        method: str,
        path: str,
        *,
        fallback: str,
        auth: bool = True,
        json: Optional[dict] = None,
        files: Optional[dict] = None,
    ) -> httpx.Response:
        headers = {}
        if auth:
            token = self._token_provider()
            if token:
                headers["Authorization"] = f"Bearer {token}"

        logger.debug(f"Backend {method} {path}")
        response = await self._client.request(
            method,
            path,
            headers=headers,
            json=json,
            files=files,
        )

        if response.is_error:
            message = error_message(response, fallback)
            logger.warning(f"Backend {method} {path} -> {response.status_code}: {message}")
            raise BackendError(message, response.status_code)

        return response

    @staticmethod
    def _body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    # ==========================================================================
    # AUTH & SIGN-UP
    # ==========================================================================

    async def login(self, email: str, password: str) -> SessionTokens:
        response = await self._request(
            "POST", "/login",
            auth=False,
            json={"email": email, "password": password},
            fallback="Login failed",
        )
        return SessionTokens.model_validate(response.json())

    async def send_email_code(self, email: str) -> None:
        await self._request(
            "POST", "/api/admin/emailSend",
            auth=False,
            json={"email": email},
            fallback="Failed to send the verification code",
        )

    async def verify_email_code(self, email: str, code: str) -> None:
        await self._request(
            "POST", "/api/admin/emailCheck",
            auth=False,
            json={"email": email, "authNum": code},
            fallback="Verification code does not match",
        )

    async def check_store_name(self, store_name: str, store_name_en: str) -> None:
        await self._request(
            "POST", "/api/admin/checkStoreName",
            auth=False,
            json={"storeName": store_name, "storeNameEn": store_name_en},
            fallback="Store name is already in use",
        )

    async def join(
        self,
        email: str,
        password: str,
        admin_name: str,
        store_name: str,
        store_name_en: str,
    ) -> None:
        await self._request(
            "POST", "/api/admin/join",
            auth=False,
            json={
                "email": email,
                "password": password,
                "adminName": admin_name,
                "storeName": store_name,
                "storeNameEn": store_name_en,
            },
            fallback="Sign-up failed",
        )

    # ==========================================================================
    # ADMIN PROFILE
    # ==========================================================================

    async def get_store_info(self) -> StoreInfo:
        response = await self._request(
            "GET", "/api/admin/store-info",
            fallback="Failed to fetch store info",
        )
        return StoreInfo.model_validate(response.json())

    async def change_store_name(self, name: str, name_en: str) -> None:
        await self._request(
            "PATCH", "/api/admin/change-store-name",
            json={"newName": name, "newNameEn": name_en},
            fallback="Failed to update store name",
        )

    async def change_admin_name(self, name: str) -> None:
        await self._request(
            "PATCH", "/api/admin/change-admin-name",
            json={"newName": name},
            fallback="Failed to update admin name",
        )

    async def change_password(self, old_password: str, new_password: str) -> None:
        await self._request(
            "PATCH", "/api/admin/change-password",
            json={"oldPassword": old_password, "newPassword": new_password},
            fallback="Failed to update password",
        )

    async def delete_admin(self, password: str) -> None:
        await self._request(
            "DELETE", "/api/admin/delete-admin",
            json={"password": password},
            fallback="Failed to delete account",
        )

    # ==========================================================================
    # CATEGORIES
    # ==========================================================================

    async def list_categories(self) -> list[Category]:
        response = await self._request(
            "GET", "/api/admin/categories",
            fallback="Failed to fetch categories",
        )
        data = self._body(response)
        if not isinstance(data, list):
            logger.error(f"Unexpected categories payload: {data!r}")
            raise BackendError("Category data is not in the expected format")
        return _categories_adapter.validate_python(data)

    async def create_category(self, name: str, name_en: str, category_type: str) -> None:
        await self._request(
            "POST", "/api/category",
            json={
                "categoryName": name,
                "categoryNameEn": name_en,
                "categoryType": category_type,
            },
            fallback="Failed to add category",
        )

    async def update_category(
        self,
        category_id: int,
        name: str,
        name_en: str,
        category_type: str,
    ) -> None:
        await self._request(
            "PUT", f"/api/category/{category_id}",
            json={
                "categoryName": name,
                "categoryNameEn": name_en,
                "categoryType": category_type,
            },
            fallback="Failed to update category",
        )

    async def delete_category(self, category_id: int) -> None:
        await self._request(
            "DELETE", f"/api/category/{category_id}",
            fallback="Failed to delete category",
        )

    # ==========================================================================
    # MENUS
    # ==========================================================================

    async def list_menus(self) -> list[Menu]:
        response = await self._request(
            "GET", "/api/admin/menus",
            fallback="Failed to fetch menus",
        )
        return _menus_adapter.validate_python(self._body(response) or [])

    @staticmethod
    def _menu_parts(
        name: str,
        name_en: str,
        price: str,
        count: Optional[str],
        category_id: Optional[str],
        image: Optional[ImageFile],
    ) -> dict[str, tuple]:
        # Text fields go in as filename-less parts so the body is always
        # multipart/form-data, with or without an image.
        fields = {
            "menuName": name,
            "menuNameEn": name_en,
            "menuPrice": price,
        }
        if count:
            fields["menuCount"] = count
        if category_id:
            fields["categoryIds"] = category_id

        parts = {key: (None, value.encode("utf-8")) for key, value in fields.items()}
        if image is not None:
            parts["image"] = image.as_upload()
        return parts

    async def create_menu(
        self,
        name: str,
        name_en: str,
        price: str,
        category_id: str,
        image: ImageFile,
        count: Optional[str] = None,
    ) -> Any:
        response = await self._request(
            "POST", "/api/menu",
            files=self._menu_parts(name, name_en, price, count, category_id, image),
            fallback="Failed to add menu",
        )
        return self._body(response)

    async def update_menu(
        self,
        menu_id: int,
        name: str,
        name_en: str,
        price: str,
        category_id: Optional[str] = None,
        image: Optional[ImageFile] = None,
        count: Optional[str] = None,
    ) -> Any:
        response = await self._request(
            "PUT", f"/api/menu/{menu_id}",
            files=self._menu_parts(name, name_en, price, count, category_id, image),
            fallback="Failed to update menu",
        )
        return self._body(response)

    async def delete_menu(self, menu_id: int) -> None:
        await self._request(
            "DELETE", f"/api/menu/{menu_id}",
            fallback="Failed to delete menu",
        )

    # ==========================================================================
    # KIOSKS & ORDERS
    # ==========================================================================

    async def set_kiosk_count(self, count: str) -> None:
        await self._request(
            "POST", "/api/kiosk/set",
            json={"count": count},
            fallback="Failed to update table count",
        )

    async def list_kiosk_orders(self) -> list[Kiosk]:
        response = await self._request(
            "GET", "/api/admin/orders",
            fallback="Failed to fetch orders",
        )
        return _kiosks_adapter.validate_python(self._body(response) or [])

    async def deactivate_kiosk(self, kiosk_id: int) -> None:
        await self._request(
            "POST", "/api/kiosk/deactivate",
            json={"kioskId": kiosk_id},
            fallback="Failed to deactivate kiosk",
        )

    async def clear_kiosk_orders(self, kiosk_number: int) -> None:
        await self._request(
            "DELETE", f"/api/order/by-kiosk/{kiosk_number}",
            fallback="Failed to clear orders",
        )
