"""
Menus screen.

New menus go through MenuAutoFill, which fills in a missing English name
and image before the multipart create request. Until the create succeeds
the form keeps whatever the operator typed, so a failed enrichment can
be retried without re-entering anything.
"""

import logging
from typing import Optional

from kiosk_admin.schemas import Category, ImageFile, Menu, MenuForm, MenuUpdateForm
from kiosk_admin.screens.base import BaseScreen
from kiosk_admin.services.menu_autofill import MenuAutoFill, MenuDraft

logger = logging.getLogger(__name__)

ALL_CATEGORIES = 0


class MenusScreen(BaseScreen):
    name = "menus"

    def __init__(self, backend, toasts, autofill: MenuAutoFill, gate=None):
        super().__init__(backend, toasts, gate)
        self.autofill = autofill
        self.menus: list[Menu] = []
        self.categories: list[Category] = []
        self.selected_category = ALL_CATEGORIES
        self.form = MenuForm()
        self.image: Optional[ImageFile] = None
        self.submitting = False

    # ==========================================================================
    # LOADING
    # ==========================================================================

    async def load_menus(self) -> None:
        try:
            self.menus = await self.backend.list_menus()
        except Exception as e:
            self.report_failure("menu fetch", e, "Failed to fetch menus")

    async def load_categories(self) -> None:
        try:
            categories = await self.backend.list_categories()
        except Exception as e:
            self.report_failure("category fetch", e, "Failed to fetch categories")
            return

        self.categories = [c for c in categories if not c.is_all]
        selectable = {str(c.category_id) for c in self.categories}
        if self.categories and self.form.category_id not in selectable:
            self.set_form(category_id=str(self.categories[0].category_id))

    async def load(self) -> None:
        await self.load_categories()
        await self.load_menus()

    @property
    def filtered_menus(self) -> list[Menu]:
        if self.selected_category == ALL_CATEGORIES:
            return list(self.menus)
        return [m for m in self.menus if m.in_category(self.selected_category)]

    def select_category(self, category_id: int) -> None:
        self.selected_category = category_id

    # ==========================================================================
    # CREATE
    # ==========================================================================

    def set_form(self, **values) -> None:
        self.form = self.form.model_copy(update=values)

    def choose_image(self, image: Optional[ImageFile]) -> None:
        self.image = image

    def reset_form(self) -> None:
        default_category = str(self.categories[0].category_id) if self.categories else ""
        self.form = MenuForm(category_id=default_category)
        self.image = None

    async def add(self) -> bool:
        form = self.form
        if not form.name.strip():
            self.toasts.error("Please enter the menu name")
            return False
        if not form.price.strip():
            self.toasts.error("Please enter the price")
            return False
        if not form.category_id:
            self.toasts.error("Please select a category")
            return False

        draft = MenuDraft(
            name=form.name,
            name_en=form.name_en,
            price=form.price,
            count=form.count or None,
            category_id=form.category_id,
            image=self.image,
        )

        self.submitting = True
        try:
            await self.autofill.submit(draft)
        except Exception as e:
            self.report_failure("menu add", e, "Failed to add menu")
            return False
        finally:
            self.submitting = False

        self.toasts.success("Menu added")
        self.reset_form()
        await self.load_menus()
        return True

    # ==========================================================================
    # UPDATE / DELETE
    # ==========================================================================

    def find(self, menu_id: int) -> Optional[Menu]:
        return next((m for m in self.menus if m.menu_id == menu_id), None)

    async def update(self, menu_id: int, form: MenuUpdateForm, image: Optional[ImageFile] = None) -> bool:
        menu = self.find(menu_id)
        if menu is None:
            self.toasts.error("Please select a menu to edit")
            return False

        primary = menu.primary_category
        try:
            await self.backend.update_menu(
                menu_id,
                name=form.name,
                name_en=form.name_en,
                price=str(form.price),
                count=form.count,
                category_id=str(primary.category_id) if primary else None,
                image=image,
            )
        except Exception as e:
            self.report_failure("menu update", e, "Failed to update menu")
            return False

        self.toasts.success("Menu updated")
        await self.load_menus()
        return True

    def request_delete(self, menu_id: int) -> bool:
        menu = self.find(menu_id)
        if menu is None:
            self.toasts.error("Please select a menu to delete")
            return False

        async def delete_menu() -> None:
            try:
                await self.backend.delete_menu(menu_id)
            except Exception as e:
                self.report_failure("menu delete", e, "Failed to delete menu")
                return
            self.toasts.success("Menu deleted")
            await self.load_menus()

        self.gate.open(f"Delete the menu '{menu.name}'?", delete_menu)
        return True

    def snapshot(self) -> dict:
        return {
            "selected_category": self.selected_category,
            "categories": [c.model_dump(by_alias=True, mode="json") for c in self.categories],
            "menus": [m.model_dump(by_alias=True, mode="json") for m in self.filtered_menus],
            "form": self.form.model_dump(),
            "image": self.image.filename if self.image else None,
            "submitting": self.submitting,
        }
