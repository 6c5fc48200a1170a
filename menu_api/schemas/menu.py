"""Menu schemas"""

from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from urllib.parse import urlparse
from pydantic import Field, field_validator

from menu_api.schemas.base import CamelModel, reject_null

GROUP_NAME_PATTERN = r"^[A-Za-z0-9_\- ]+$"


def _check_image_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    parsed = urlparse(value)
    # Uploaded images are served from /uploads on this host
    if value.startswith("/uploads/"):
        return value
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Invalid image URL")
    return value


# Categories

class CategoryCreate(CamelModel):
    """Create category request"""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    display_order: int = Field(0, ge=0)
    is_active: bool = True


class CategoryUpdate(CamelModel):
    """Update category request"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    display_order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None

    @field_validator("name", "display_order", "is_active")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class CategoryResponse(CamelModel):
    """Category response"""
    id: int
    name: str
    description: Optional[str]
    display_order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


# Customization options

class CustomizationOptionCreate(CamelModel):
    """Customization option embedded in a menu item or created on its own"""
    name: str = Field(..., min_length=1, max_length=100)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    is_available: bool = True
    group_name: Optional[str] = Field(None, max_length=50, pattern=GROUP_NAME_PATTERN)
    is_mutually_exclusive: bool = False


class CustomizationOptionUpdate(CamelModel):
    """Update customization option request"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    is_available: Optional[bool] = None
    group_name: Optional[str] = Field(None, max_length=50, pattern=GROUP_NAME_PATTERN)
    is_mutually_exclusive: Optional[bool] = None

    @field_validator("name", "price", "is_available", "is_mutually_exclusive")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class CustomizationOptionResponse(CamelModel):
    """Customization option response"""
    id: int
    menu_item_id: int
    name: str
    price: Decimal
    is_available: bool
    group_name: Optional[str]
    is_mutually_exclusive: bool
    created_at: datetime
    updated_at: datetime


# Menu items

class MenuItemCreate(CamelModel):
    """Create menu item request"""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    image_url: Optional[str] = Field(None, max_length=500)
    category_id: int = Field(..., ge=1)
    is_available: bool = True
    is_popular: bool = False
    customization_options: List[CustomizationOptionCreate] = []

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, value):
        return _check_image_url(value)


class MenuItemUpdate(CamelModel):
    """Update menu item request"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    image_url: Optional[str] = Field(None, max_length=500)
    category_id: Optional[int] = Field(None, ge=1)
    is_available: Optional[bool] = None
    is_popular: Optional[bool] = None

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, value):
        return _check_image_url(value)

    @field_validator("name", "price", "category_id", "is_available", "is_popular")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class MenuItemSummary(CamelModel):
    """Menu item without its relationships"""
    id: int
    name: str
    description: Optional[str]
    price: Decimal
    image_url: Optional[str]
    category_id: Optional[int]
    is_available: bool
    is_popular: bool
    created_at: datetime
    updated_at: datetime


class MenuItemResponse(MenuItemSummary):
    """Menu item response"""
    category: Optional[CategoryResponse] = None
    customization_options: List[CustomizationOptionResponse] = []


class CategoryDetailResponse(CategoryResponse):
    """Category with its live menu items"""
    menu_items: List[MenuItemSummary] = []
