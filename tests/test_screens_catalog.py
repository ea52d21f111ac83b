import base64
import json

import pytest

from conftest import category_json, error_messages, success_messages
from kiosk_admin.schemas import CategoryForm, ImageFile, MenuUpdateForm
from kiosk_admin.screens import CategoriesScreen, MenusScreen
from kiosk_admin.services.menu_autofill import GENERATE_IMAGE_PATH, TRANSLATE_PATH

pytestmark = pytest.mark.anyio

CATEGORIES = [category_json(1, "전체"), category_json(4, "식사", "Meals"), category_json(5, "음료", "Drinks", "DRINK")]

MENUS = [
    {
        "menuId": 10,
        "menuName": "비빔밥",
        "menuNameEn": "Bibimbap",
        "menuPrice": 9000,
        "categories": [{"categoryId": 1, "categoryName": "전체"}, {"categoryId": 4, "categoryName": "식사"}],
    },
    {
        "menuId": 11,
        "menuName": "콜라",
        "menuNameEn": "Coke",
        "menuPrice": 2000,
        "categories": [{"categoryId": 1, "categoryName": "전체"}, {"categoryId": 5, "categoryName": "음료"}],
    },
]


@pytest.fixture
def catalog(backend_router):
    backend_router.add("GET", "/api/admin/categories", json=CATEGORIES)
    backend_router.add("GET", "/api/admin/menus", json=MENUS)
    return backend_router


# =============================================================================
# CATEGORIES
# =============================================================================

async def test_visible_categories_exclude_all(backend, catalog, toasts, gate):
    screen = CategoriesScreen(backend, toasts, gate)
    await screen.load()

    assert [c.category_id for c in screen.visible] == [4, 5]
    assert len(screen.categories) == 3
    assert [c["categoryId"] for c in screen.snapshot()["categories"]] == [4, 5]


async def test_add_requires_every_field(backend, catalog, toasts, gate):
    screen = CategoriesScreen(backend, toasts, gate)

    assert await screen.add(CategoryForm(name="디저트", name_en=" ", type="FOOD")) is False
    assert error_messages(toasts) == ["Please fill in every category field"]
    assert catalog.calls == []


async def test_add_then_reload(backend, catalog, toasts, gate):
    catalog.add("POST", "/api/category")
    screen = CategoriesScreen(backend, toasts, gate)

    assert await screen.add(CategoryForm(name=" 디저트 ", name_en="Dessert", type="FOOD"))

    [create] = catalog.calls_to("POST", "/api/category")
    assert json.loads(create.content) == {"categoryName": "디저트", "categoryNameEn": "Dessert", "categoryType": "FOOD"}
    assert len(catalog.calls_to("GET", "/api/admin/categories")) == 1
    assert success_messages(toasts) == ["Category added"]


async def test_update_requires_a_selection(backend, catalog, toasts, gate):
    screen = CategoriesScreen(backend, toasts, gate)
    await screen.load()

    assert await screen.update(1, CategoryForm(name="x", name_en="x", type="x")) is False
    assert error_messages(toasts) == ["Please select a category to edit"]
    assert catalog.calls_to("PUT", "/api/category/1") == []


async def test_update_failure_is_toasted(backend, catalog, toasts, gate):
    catalog.add("PUT", "/api/category/4", status=409, json={"message": "name already used"})
    screen = CategoriesScreen(backend, toasts, gate)
    await screen.load()

    assert await screen.update(4, CategoryForm(name="음료", name_en="Drinks", type="DRINK")) is False
    assert error_messages(toasts) == ["name already used"]


async def test_delete_waits_for_confirmation(backend, catalog, toasts, gate):
    catalog.add("DELETE", "/api/category/5")
    screen = CategoriesScreen(backend, toasts, gate)
    await screen.load()

    assert screen.request_delete(5)
    assert catalog.calls_to("DELETE", "/api/category/5") == []

    await gate.confirm()

    assert len(catalog.calls_to("DELETE", "/api/category/5")) == 1
    assert len(catalog.calls_to("GET", "/api/admin/categories")) == 2
    assert success_messages(toasts) == ["Category deleted"]


async def test_cancelled_delete_sends_nothing(backend, catalog, toasts, gate):
    screen = CategoriesScreen(backend, toasts, gate)
    await screen.load()

    screen.request_delete(5)
    gate.cancel()

    assert catalog.calls_to("DELETE", "/api/category/5") == []


async def test_all_category_cannot_be_deleted(backend, catalog, toasts, gate):
    screen = CategoriesScreen(backend, toasts, gate)
    await screen.load()

    assert screen.request_delete(1) is False
    assert not gate.is_open


async def test_malformed_category_list_is_toasted(backend, backend_router, toasts, gate):
    backend_router.add("GET", "/api/admin/categories", json={"oops": True})
    screen = CategoriesScreen(backend, toasts, gate)

    await screen.load()

    assert error_messages(toasts) == ["Category data is not in the expected format"]
    assert screen.categories == []


# =============================================================================
# MENUS
# =============================================================================

@pytest.fixture
def menus_screen(backend, autofill, toasts, gate):
    return MenusScreen(backend, toasts, autofill, gate)


async def test_load_defaults_form_to_first_selectable_category(menus_screen, catalog):
    await menus_screen.load()

    assert [c.category_id for c in menus_screen.categories] == [4, 5]
    assert menus_screen.form.category_id == "4"


async def test_load_replaces_stale_form_category(menus_screen, catalog):
    menus_screen.set_form(category_id="99")

    await menus_screen.load()

    assert menus_screen.form.category_id == "4"


async def test_load_keeps_valid_form_category(menus_screen, catalog):
    menus_screen.set_form(category_id="5")

    await menus_screen.load()

    assert menus_screen.form.category_id == "5"



async def test_filter_by_category(menus_screen, catalog):
    await menus_screen.load()

    assert len(menus_screen.filtered_menus) == 2
    menus_screen.select_category(5)
    assert [m.menu_id for m in menus_screen.filtered_menus] == [11]
    menus_screen.select_category(0)
    assert len(menus_screen.filtered_menus) == 2


async def test_add_validates_before_any_call(menus_screen, catalog, collab_router, toasts):
    menus_screen.set_form(name="김밥", price="", category_id="4")

    assert await menus_screen.add() is False
    assert error_messages(toasts) == ["Please enter the price"]
    assert collab_router.calls == []
    assert catalog.calls == []


async def test_add_success_resets_form_and_reloads(menus_screen, catalog, collab_router, toasts):
    png = base64.b64encode(b"png").decode()
    collab_router.add("POST", TRANSLATE_PATH, json={"translatedText": "Gimbap"})
    collab_router.add("POST", GENERATE_IMAGE_PATH, json={"imageUrl": f"data:image/png;base64,{png}"})
    catalog.add("POST", "/api/menu", json={"menuId": 12})
    await menus_screen.load()
    menus_screen.set_form(name="김밥", price="4000")

    assert await menus_screen.add()

    assert success_messages(toasts) == ["Menu added"]
    assert menus_screen.form.name == ""
    assert menus_screen.form.category_id == "4"
    assert menus_screen.image is None
    assert len(catalog.calls_to("GET", "/api/admin/menus")) == 2


async def test_add_with_chosen_image_skips_generation(menus_screen, catalog, collab_router):
    catalog.add("POST", "/api/menu", json={})
    await menus_screen.load()
    menus_screen.set_form(name="Bibimbap", name_en="Bibimbap", price="9000")
    menus_screen.choose_image(ImageFile("b.jpg", b"jpeg", "image/jpeg"))

    assert await menus_screen.add()
    assert collab_router.calls == []


async def test_update_sends_primary_category(menus_screen, catalog, toasts):
    catalog.add("PUT", "/api/menu/10", json={})
    await menus_screen.load()

    ok = await menus_screen.update(10, MenuUpdateForm(name="비빔밥", name_en="Bibimbap", price=9500))

    assert ok
    [call] = catalog.calls_to("PUT", "/api/menu/10")
    assert b'name="categoryIds"\r\n\r\n4' in call.content
    assert b"9500" in call.content
    assert len(catalog.calls_to("GET", "/api/admin/menus")) == 2
    assert success_messages(toasts) == ["Menu updated"]


async def test_delete_menu_is_gated_and_reloads(menus_screen, catalog, gate, toasts):
    catalog.add("DELETE", "/api/menu/11")
    await menus_screen.load()

    assert menus_screen.request_delete(11)
    assert gate.pending.message == "Delete the menu '콜라'?"
    await gate.confirm()

    assert len(catalog.calls_to("DELETE", "/api/menu/11")) == 1
    assert len(catalog.calls_to("GET", "/api/admin/menus")) == 2
    assert success_messages(toasts) == ["Menu deleted"]


async def test_failed_delete_does_not_reload(menus_screen, catalog, gate, toasts):
    catalog.add("DELETE", "/api/menu/11", status=500, json={"message": "menu is in use"})
    await menus_screen.load()

    menus_screen.request_delete(11)
    await gate.confirm()

    assert error_messages(toasts) == ["menu is in use"]
    assert len(catalog.calls_to("GET", "/api/admin/menus")) == 1
