"""
Categories screen.

The backend list includes the reserved "All" category; it is kept in
`categories` but never offered for editing or deletion.
"""

import logging
from typing import Optional

from kiosk_admin.schemas import Category, CategoryForm
from kiosk_admin.screens.base import BaseScreen

logger = logging.getLogger(__name__)


class CategoriesScreen(BaseScreen):
    name = "categories"

    def __init__(self, backend, toasts, gate=None):
        super().__init__(backend, toasts, gate)
        self.categories: list[Category] = []

    @property
    def visible(self) -> list[Category]:
        return [c for c in self.categories if not c.is_all]

    def find(self, category_id: Optional[int]) -> Optional[Category]:
        """A selectable (non-ALL) category by id."""
        return next((c for c in self.visible if c.category_id == category_id), None)

    async def load(self) -> None:
        try:
            self.categories = await self.backend.list_categories()
        except Exception as e:
            self.report_failure("category fetch", e, "Failed to fetch categories")

    async def add(self, form: CategoryForm) -> bool:
        if not form.is_complete:
            self.toasts.error("Please fill in every category field")
            return False

        try:
            await self.backend.create_category(form.name.strip(), form.name_en.strip(), form.type.strip())
        except Exception as e:
            self.report_failure("category add", e, "Failed to add category")
            return False

        self.toasts.success("Category added")
        await self.load()
        return True

    async def update(self, category_id: Optional[int], form: CategoryForm) -> bool:
        if self.find(category_id) is None:
            self.toasts.error("Please select a category to edit")
            return False
        if not form.is_complete:
            self.toasts.error("Please fill in every category field")
            return False

        try:
            await self.backend.update_category(
                category_id, form.name.strip(), form.name_en.strip(), form.type.strip()
            )
        except Exception as e:
            self.report_failure("category update", e, "Failed to update category")
            return False

        self.toasts.success("Category updated")
        await self.load()
        return True

    def request_delete(self, category_id: Optional[int]) -> bool:
        category = self.find(category_id)
        if category is None:
            self.toasts.error("Please select a category to delete")
            return False

        async def delete_category() -> None:
            try:
                await self.backend.delete_category(category.category_id)
            except Exception as e:
                self.report_failure("category delete", e, "Failed to delete category", show_detail=False)
                return
            self.toasts.success("Category deleted")
            await self.load()

        self.gate.open(f"Delete the category '{category.name}'?", delete_category)
        return True

    def snapshot(self) -> dict:
        return {"categories": [c.model_dump(by_alias=True, mode="json") for c in self.visible]}
