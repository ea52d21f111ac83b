"""
Pydantic Schemas for Backend Records and Console Forms

Three groups live here:
- Backend records mirrored from the platform API (camelCase on the wire)
- Collaborator request/response bodies for the AI endpoints
- Console forms validated before any network call is made
"""

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from kiosk_admin.core.config import get_settings


EMAIL_PATTERN = re.compile(r"^[\w\.\-+]+@[\w\.-]+\.\w+$")


# =============================================================================
# ENUMS
# =============================================================================

class CategoryKind(str, Enum):
    """Whether a category is a regular one or the reserved "All" sentinel."""
    REGULAR = "regular"
    ALL = "all"


def classify_category(name: str) -> CategoryKind:
    """Map a backend category name onto its kind."""
    if name == get_settings().reserved_category_name:
        return CategoryKind.ALL
    return CategoryKind.REGULAR


class WireModel(BaseModel):
    """Base for records that use camelCase aliases on the wire."""
    model_config = ConfigDict(populate_by_name=True)


# =============================================================================
# BACKEND RECORDS
# =============================================================================

class SessionTokens(WireModel):
    """Bearer credentials issued by the backend on login."""
    access_token: str = Field(..., alias="accessToken")
    refresh_token: Optional[str] = Field(None, alias="refreshToken")


class Category(WireModel):
    """A menu category ("점포" in the store's vocabulary)."""
    category_id: int = Field(..., alias="categoryId")
    name: str = Field(..., alias="categoryName")
    name_en: Optional[str] = Field(None, alias="categoryNameEn")
    type: Optional[str] = Field(None, alias="categoryType")
    kind: CategoryKind = CategoryKind.REGULAR

    @model_validator(mode="after")
    def classify_kind(self) -> "Category":
        if self.kind == CategoryKind.REGULAR:
            self.kind = classify_category(self.name)
        return self

    @property
    def is_all(self) -> bool:
        return self.kind == CategoryKind.ALL


class MenuCategoryRef(WireModel):
    """Category reference embedded in a menu record."""
    category_id: int = Field(..., alias="categoryId")
    name: str = Field(..., alias="categoryName")
    kind: CategoryKind = CategoryKind.REGULAR

    @model_validator(mode="after")
    def classify_kind(self) -> "MenuCategoryRef":
        if self.kind == CategoryKind.REGULAR:
            self.kind = classify_category(self.name)
        return self

    @property
    def is_all(self) -> bool:
        return self.kind == CategoryKind.ALL


class Menu(WireModel):
    """A menu item as listed by the backend."""
    menu_id: int = Field(..., alias="menuId")
    name: str = Field(..., alias="menuName")
    name_en: Optional[str] = Field(None, alias="menuNameEn")
    price: int = Field(..., alias="menuPrice")
    count: Optional[str] = Field(None, alias="menuCount")
    image_url: Optional[str] = Field(None, alias="imageUrl")
    admin_id: Optional[int] = Field(None, alias="adminId")
    categories: List[MenuCategoryRef] = Field(default_factory=list)

    @field_validator("count", mode="before")
    @classmethod
    def count_as_text(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return str(v)

    @property
    def primary_category(self) -> Optional[MenuCategoryRef]:
        """First category that is not the "All" sentinel."""
        return next((c for c in self.categories if not c.is_all), None)

    def in_category(self, category_id: int) -> bool:
        return any(c.category_id == category_id for c in self.categories)


class OrderItem(WireModel):
    """One line of a kiosk order."""
    name: str = Field(..., alias="menuName")
    name_en: Optional[str] = Field(None, alias="menuNameEn")
    price: int = Field(..., alias="menuPrice")
    quantity: int

    @property
    def total_price(self) -> int:
        return self.price * self.quantity


class Order(WireModel):
    """An order placed from a kiosk (read-only for the admin)."""
    order_id: int = Field(..., alias="orderId")
    created_at: datetime = Field(..., alias="createdAt")
    items: List[OrderItem] = Field(default_factory=list)

    @property
    def total_price(self) -> int:
        return sum(item.total_price for item in self.items)


class Kiosk(WireModel):
    """A table's kiosk with its outstanding orders."""
    kiosk_id: int = Field(..., alias="kioskId")
    number: int = Field(..., alias="kioskNumber")
    is_active: bool = Field(..., alias="kioskIsActive")
    orders: List[Order] = Field(default_factory=list)

    @property
    def total_price(self) -> int:
        return sum(order.total_price for order in self.orders)


class StoreInfo(WireModel):
    """Store and owner profile shown on the dashboard."""
    email: str
    admin_name: str = Field(..., alias="adminName")
    store_name: str = Field(..., alias="storeName")
    store_name_en: Optional[str] = Field(None, alias="storeNameEn")
    kiosk_count: int = Field(0, alias="kioskCount")


# =============================================================================
# AI COLLABORATOR BODIES
# =============================================================================

class TranslateRequest(BaseModel):
    """Body of POST /api/translate-menu."""
    text: Optional[str] = None


class TranslateResponse(BaseModel):
    """Successful translation response."""
    translatedText: str


class GenerateImageRequest(BaseModel):
    """Body of POST /api/generate-menu-image."""
    prompt: Optional[str] = None


class GenerateImageResponse(BaseModel):
    """Successful image generation response."""
    imageUrl: str


class MessageResponse(BaseModel):
    """Error body shared by the collaborator endpoints."""
    message: str
    detail: Optional[str] = None


# =============================================================================
# CONSOLE FORMS
# =============================================================================

class LoginForm(BaseModel):
    """Login form; validated before the backend is contacted."""
    model_config = ConfigDict(validate_default=True)

    email: str = ""
    password: str = ""

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if not v:
            raise ValueError("Please enter your email")
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Email format is invalid")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Please enter your password")
        return v


class SignUpForm(BaseModel):
    """Owner registration form."""
    model_config = ConfigDict(validate_default=True)

    name: str = ""
    store_name: str = ""
    store_name_en: str = ""
    email: str = ""
    password: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v:
            raise ValueError("Please enter your name")
        return v

    @field_validator("store_name")
    @classmethod
    def validate_store_name(cls, v: str) -> str:
        if not v:
            raise ValueError("Please enter the store name")
        return v

    @field_validator("store_name_en")
    @classmethod
    def validate_store_name_en(cls, v: str) -> str:
        if not v:
            raise ValueError("Please enter the English store name")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if not v:
            raise ValueError("Please enter your email")
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Email format is invalid")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters")
        return v


class CategoryForm(WireModel):
    """Add/rename category form; all three fields are required."""
    name: str = Field("", alias="categoryName")
    name_en: str = Field("", alias="categoryNameEn")
    type: str = Field("", alias="categoryType")

    @property
    def is_complete(self) -> bool:
        return bool(self.name.strip() and self.name_en.strip() and self.type.strip())


class MenuForm(BaseModel):
    """Menu creation form values held by the menus screen until submit."""
    name: str = ""
    name_en: str = ""
    price: str = ""
    count: str = ""
    category_id: str = ""


class MenuUpdateForm(BaseModel):
    """Edits applied to an existing menu."""
    name: str
    name_en: str = ""
    price: int
    count: Optional[str] = None


class StoreSettingsForm(BaseModel):
    """Dashboard form mirroring the store info plus password fields."""
    email: str = ""
    admin_name: str = ""
    store_name: str = ""
    store_name_en: str = ""
    table_count: str = ""
    old_password: str = ""
    new_password: str = ""


# =============================================================================
# CONSOLE REQUEST BODIES
# =============================================================================
# Everything defaults to "" so missing input reaches the screen's own
# validation (and its toast) instead of a 422.

class CredentialsBody(WireModel):
    email: str = ""
    password: str = ""


class EmailCodeBody(WireModel):
    email: str = ""
    code: str = Field("", alias="authNum")


class StoreNameBody(WireModel):
    store_name: str = Field("", alias="storeName")
    store_name_en: str = Field("", alias="storeNameEn")


class SignUpBody(WireModel):
    email: str = ""
    password: str = ""
    admin_name: str = Field("", alias="adminName")
    store_name: str = Field("", alias="storeName")
    store_name_en: str = Field("", alias="storeNameEn")


class AdminNameBody(WireModel):
    admin_name: str = Field("", alias="adminName")


class PasswordChangeBody(WireModel):
    old_password: str = Field("", alias="oldPassword")
    new_password: str = Field("", alias="newPassword")


class PasswordBody(WireModel):
    password: str = ""


class TableCountBody(WireModel):
    count: str = ""

    @field_validator("count", mode="before")
    @classmethod
    def count_as_text(cls, v: Any) -> str:
        return "" if v is None else str(v)


# =============================================================================
# UPLOADS
# =============================================================================

@dataclass
class ImageFile:
    """Binary image ready to be attached to a multipart request."""
    filename: str
    content: bytes
    content_type: str = "image/png"

    def as_upload(self) -> tuple[str, bytes, str]:
        return (self.filename, self.content, self.content_type)
