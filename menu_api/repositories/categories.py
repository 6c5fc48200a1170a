"""Category persistence"""

from typing import List, Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from menu_api.errors import CategoryHasItemsError, CategoryNotFound
from menu_api.models.menu import Category, MenuItem
from menu_api.schemas.menu import CategoryCreate, CategoryUpdate

logger = structlog.get_logger()

# Loads only the items that are not soft-deleted
LIVE_ITEMS = selectinload(Category.menu_items.and_(MenuItem.deleted_at.is_(None)))


class CategoryRepository:
    """CRUD for categories plus the delete-time referential guard"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> List[Category]:
        result = await self.db.execute(
            select(Category)
            .options(LIVE_ITEMS)
            .order_by(Category.display_order, Category.id)
        )
        return list(result.scalars().all())

    async def get(self, category_id: int) -> Optional[Category]:
        result = await self.db.execute(
            select(Category)
            .where(Category.id == category_id)
            .options(LIVE_ITEMS)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def exists(self, category_id: int) -> bool:
        result = await self.db.execute(select(Category.id).where(Category.id == category_id))
        return result.scalar_one_or_none() is not None

    async def create(self, data: CategoryCreate) -> Category:
        category = Category(**data.model_dump())
        self.db.add(category)
        await self.db.commit()
        await self.db.refresh(category)
        logger.info("Category created", category_id=category.id)
        return category

    async def update(self, category_id: int, data: CategoryUpdate) -> Category:
        result = await self.db.execute(select(Category).where(Category.id == category_id))
        category = result.scalar_one_or_none()
        if category is None:
            raise CategoryNotFound()

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(category, field, value)

        await self.db.commit()
        await self.db.refresh(category)
        return category

    async def delete(self, category_id: int) -> None:
        """Delete a category that has no live menu items.

        The check and the delete are not atomic: an item created for this
        category in between is detached by the foreign key (ON DELETE SET
        NULL) rather than blocking the delete.
        """
        category = await self.get(category_id)
        if category is None:
            raise CategoryNotFound()

        if category.menu_items:
            raise CategoryHasItemsError(
                details=[{"menuItemIds": [item.id for item in category.menu_items]}]
            )

        await self.db.delete(category)
        await self.db.commit()
        logger.info("Category deleted", category_id=category_id)
