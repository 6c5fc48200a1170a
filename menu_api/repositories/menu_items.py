"""Menu item persistence.

Menu items are never removed from the table. Deleting one stamps
``deleted_at`` and every query here filters those rows out, so a deleted item
is "not found" everywhere in the API while the row stays for auditing.
"""

from datetime import datetime
from typing import List, Optional, Tuple

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from menu_api.errors import CategoryNotFound, MenuItemNotFound
from menu_api.models.menu import Category, CustomizationOption, MenuItem
from menu_api.schemas.menu import MenuItemCreate, MenuItemUpdate

logger = structlog.get_logger()


def live_items():
    """Select non-deleted menu items with their category and options"""
    return (
        select(MenuItem)
        .where(MenuItem.deleted_at.is_(None))
        .options(
            selectinload(MenuItem.category),
            selectinload(MenuItem.customization_options),
        )
    )


class MenuItemRepository:
    """CRUD for menu items with soft delete"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> List[MenuItem]:
        result = await self.db.execute(live_items().order_by(MenuItem.id))
        return list(result.scalars().all())

    async def list_by_category(self, category_id: int) -> List[MenuItem]:
        result = await self.db.execute(
            live_items()
            .where(MenuItem.category_id == category_id)
            .order_by(MenuItem.id)
        )
        return list(result.scalars().all())

    async def get(self, item_id: int) -> Optional[MenuItem]:
        result = await self.db.execute(
            live_items()
            .where(MenuItem.id == item_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_or_raise(self, item_id: int) -> MenuItem:
        item = await self.get(item_id)
        if item is None:
            raise MenuItemNotFound()
        return item

    async def create(self, data: MenuItemCreate) -> MenuItem:
        """Create an item and its customization options in one transaction"""
        await self._ensure_category(data.category_id)

        item = MenuItem(
            **data.model_dump(exclude={"customization_options"}),
            customization_options=[
                CustomizationOption(**option.model_dump())
                for option in data.customization_options
            ],
        )
        self.db.add(item)
        await self._commit("create_menu_item")

        logger.info(
            "Menu item created",
            menu_item_id=item.id,
            options=len(data.customization_options),
        )
        return await self.get_or_raise(item.id)

    async def update(self, item_id: int, data: MenuItemUpdate) -> MenuItem:
        item = await self.get_or_raise(item_id)
        changes = data.model_dump(exclude_unset=True)

        if "category_id" in changes and changes["category_id"] != item.category_id:
            await self._ensure_category(changes["category_id"])

        for field, value in changes.items():
            setattr(item, field, value)

        await self._commit("update_menu_item")
        return await self.get_or_raise(item_id)

    async def soft_delete(self, item_id: int) -> None:
        item = await self.get_or_raise(item_id)
        item.deleted_at = datetime.utcnow()
        await self._commit("delete_menu_item")
        logger.info("Menu item deleted", menu_item_id=item_id)

    async def set_image(self, item_id: int, image_url: str) -> Tuple[MenuItem, Optional[str]]:
        """Point the item at a new image; returns the item and the previous URL"""
        item = await self.get_or_raise(item_id)
        previous = item.image_url
        item.image_url = image_url
        await self._commit("set_menu_item_image")
        return await self.get_or_raise(item_id), previous

    async def _ensure_category(self, category_id: int) -> None:
        result = await self.db.execute(select(Category.id).where(Category.id == category_id))
        if result.scalar_one_or_none() is None:
            raise CategoryNotFound()

    async def _commit(self, action: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.error("Menu item write failed", action=action)
            raise
