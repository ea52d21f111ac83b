import pytest
from pydantic import ValidationError

from conftest import category_json
from kiosk_admin.core.config import get_settings
from kiosk_admin.schemas import (
    Category,
    CategoryForm,
    CategoryKind,
    Kiosk,
    LoginForm,
    Menu,
    SignUpForm,
    TableCountBody,
)


def test_reserved_name_is_classified_as_all():
    assert Category.model_validate(category_json(1, "전체")).is_all
    assert not Category.model_validate(category_json(2, "식사")).is_all


def test_reserved_name_follows_settings(monkeypatch):
    monkeypatch.setenv("RESERVED_CATEGORY_NAME", "ALL")
    get_settings.cache_clear()

    assert Category.model_validate(category_json(1, "ALL")).kind == CategoryKind.ALL
    assert Category.model_validate(category_json(2, "전체")).kind == CategoryKind.REGULAR


def test_menu_primary_category_skips_all():
    menu = Menu.model_validate({
        "menuId": 5,
        "menuName": "비빔밥",
        "menuPrice": 9000,
        "menuCount": 3,
        "categories": [
            {"categoryId": 1, "categoryName": "전체"},
            {"categoryId": 4, "categoryName": "식사"},
        ],
    })

    assert menu.primary_category.category_id == 4
    assert menu.count == "3"
    assert menu.in_category(1) and menu.in_category(4)
    assert not menu.in_category(9)


def test_kiosk_totals():
    kiosk = Kiosk.model_validate({
        "kioskId": 10,
        "kioskNumber": 1,
        "kioskIsActive": True,
        "orders": [
            {
                "orderId": 1,
                "createdAt": "2025-01-15T18:30:00",
                "items": [
                    {"menuName": "김밥", "menuPrice": 4000, "quantity": 2},
                    {"menuName": "라면", "menuPrice": 5000, "quantity": 1},
                ],
            },
            {
                "orderId": 2,
                "createdAt": "2025-01-15T18:45:00",
                "items": [{"menuName": "콜라", "menuPrice": 2000, "quantity": 3}],
            },
        ],
    })

    assert kiosk.orders[0].total_price == 13000
    assert kiosk.total_price == 19000


@pytest.mark.parametrize(
    "email, password, message",
    [
        ("", "secret", "Please enter your email"),
        ("not-an-email", "secret", "Email format is invalid"),
        ("owner@store.kr", "", "Please enter your password"),
    ],
)
def test_login_form_validation(email, password, message):
    with pytest.raises(ValidationError, match=message):
        LoginForm(email=email, password=password)


def test_sign_up_form_requires_long_password():
    with pytest.raises(ValidationError, match="at least 8 characters"):
        SignUpForm(
            name="홍길동",
            store_name="길동분식",
            store_name_en="Gildong Snacks",
            email="owner@store.kr",
            password="short",
        )


def test_category_form_completeness_trims():
    assert CategoryForm(name="식사", name_en="Meals", type="FOOD").is_complete
    assert not CategoryForm(name="식사", name_en="  ", type="FOOD").is_complete
    assert CategoryForm.model_validate(
        {"categoryName": "음료", "categoryNameEn": "Drinks", "categoryType": "DRINK"}
    ).is_complete


def test_table_count_accepts_numbers():
    assert TableCountBody.model_validate({"count": 12}).count == "12"
