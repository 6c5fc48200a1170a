"""Database models"""

from menu_api.models.menu import Category, MenuItem, CustomizationOption

__all__ = [
    "Category",
    "MenuItem",
    "CustomizationOption",
]
