"""
Account screen: the signed-in store's header info, logout and account deletion.
"""

import logging
from typing import Optional

from fastapi import Response

from kiosk_admin.schemas import StoreInfo
from kiosk_admin.screens.base import BaseScreen
from kiosk_admin.session import SessionManager

logger = logging.getLogger(__name__)


class AccountScreen(BaseScreen):
    name = "account"

    def __init__(self, backend, toasts, session: SessionManager, gate=None):
        super().__init__(backend, toasts, gate)
        self.session = session
        self.store_info: Optional[StoreInfo] = None

    async def load(self) -> None:
        try:
            self.store_info = await self.backend.get_store_info()
        except Exception as e:
            self.report_failure("store info fetch", e, "Failed to fetch store info", show_detail=False)

    def logout(self, response: Optional[Response] = None) -> None:
        self.session.clear(response)
        self.store_info = None
        self.toasts.info("Logged out")

    def request_delete_account(self, password: str) -> bool:
        """Ask for confirmation before deleting the owner's account."""
        if not password:
            self.toasts.error("Please enter your password")
            return False

        async def delete_account() -> None:
            try:
                await self.backend.delete_admin(password)
            except Exception as e:
                self.report_failure("account deletion", e, "Failed to delete account", show_detail=False)
                return
            self.session.clear()
            self.store_info = None
            self.toasts.success("Account deleted")

        self.gate.open("Delete this account? This cannot be undone.", delete_account)
        return True

    def snapshot(self) -> dict:
        return {
            "signed_in": self.session.access_token is not None,
            "store_info": self.store_info.model_dump(by_alias=True) if self.store_info else None,
        }
