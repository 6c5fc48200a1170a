"""Pydantic schemas for request/response validation"""

from menu_api.schemas.auth import (
    SessionClaim,
    RefreshRequest,
    TokenResponse,
)
from menu_api.schemas.menu import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryDetailResponse,
    CustomizationOptionCreate,
    CustomizationOptionUpdate,
    CustomizationOptionResponse,
    MenuItemCreate,
    MenuItemUpdate,
    MenuItemSummary,
    MenuItemResponse,
)

__all__ = [
    "SessionClaim",
    "RefreshRequest",
    "TokenResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryDetailResponse",
    "CustomizationOptionCreate",
    "CustomizationOptionUpdate",
    "CustomizationOptionResponse",
    "MenuItemCreate",
    "MenuItemUpdate",
    "MenuItemSummary",
    "MenuItemResponse",
]
