"""
Dashboard (store settings) screen.

Loads the store info into an editable form. Each change is its own
backend call; on success the store info is reloaded, except after a
password change, which only clears the two password fields.
"""

import logging

from kiosk_admin.schemas import StoreSettingsForm
from kiosk_admin.screens.base import BaseScreen

logger = logging.getLogger(__name__)


class DashboardScreen(BaseScreen):
    name = "dashboard"

    def __init__(self, backend, toasts, gate=None):
        super().__init__(backend, toasts, gate)
        self.form = StoreSettingsForm()

    async def load(self) -> None:
        try:
            info = await self.backend.get_store_info()
        except Exception as e:
            logger.error(f"[{self.name}] store info fetch failed: {e}")
            return

        self.form = self.form.model_copy(update={
            "email": info.email,
            "admin_name": info.admin_name,
            "store_name": info.store_name,
            "store_name_en": info.store_name_en or "",
            "table_count": str(info.kiosk_count),
        })

    def set_form(self, **values) -> None:
        self.form = self.form.model_copy(update=values)

    async def change_store_name(self) -> bool:
        try:
            await self.backend.change_store_name(self.form.store_name, self.form.store_name_en)
        except Exception as e:
            self.report_failure("store name change", e, "Failed to update store name")
            return False

        self.toasts.success("Store name updated")
        await self.load()
        return True

    async def change_admin_name(self) -> bool:
        try:
            await self.backend.change_admin_name(self.form.admin_name)
        except Exception as e:
            self.report_failure("admin name change", e, "Failed to update admin name")
            return False

        self.toasts.success("Admin name updated")
        await self.load()
        return True

    async def change_password(self) -> bool:
        try:
            await self.backend.change_password(self.form.old_password, self.form.new_password)
        except Exception as e:
            self.report_failure("password change", e, "Failed to update password")
            return False

        self.toasts.success("Password updated")
        self.set_form(old_password="", new_password="")
        return True

    async def set_table_count(self) -> bool:
        try:
            await self.backend.set_kiosk_count(self.form.table_count)
        except Exception as e:
            self.report_failure("table count change", e, "Failed to update table count")
            return False

        self.toasts.success("Table count updated")
        await self.load()
        return True

    def snapshot(self) -> dict:
        return {"form": self.form.model_dump(exclude={"old_password", "new_password"})}
