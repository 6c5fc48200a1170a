"""Data access for categories, menu items and customization options"""

from menu_api.repositories.categories import CategoryRepository
from menu_api.repositories.customizations import CustomizationRepository
from menu_api.repositories.menu_items import MenuItemRepository

__all__ = [
    "CategoryRepository",
    "CustomizationRepository",
    "MenuItemRepository",
]
