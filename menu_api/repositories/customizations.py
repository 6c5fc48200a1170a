"""Customization option persistence"""

from typing import List, Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from menu_api.errors import CustomizationNotFound, MenuItemNotFound
from menu_api.models.menu import CustomizationOption, MenuItem
from menu_api.schemas.menu import CustomizationOptionCreate, CustomizationOptionUpdate

logger = structlog.get_logger()


class CustomizationRepository:
    """CRUD for customization options; options are hard-deleted"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_item(self, menu_item_id: int) -> List[CustomizationOption]:
        await self._ensure_live_item(menu_item_id)
        result = await self.db.execute(
            select(CustomizationOption)
            .where(CustomizationOption.menu_item_id == menu_item_id)
            .order_by(CustomizationOption.group_name, CustomizationOption.id)
        )
        return list(result.scalars().all())

    async def get(self, option_id: int) -> Optional[CustomizationOption]:
        # Options of a soft-deleted item are gone along with it
        result = await self.db.execute(
            select(CustomizationOption)
            .join(MenuItem, CustomizationOption.menu_item_id == MenuItem.id)
            .where(CustomizationOption.id == option_id, MenuItem.deleted_at.is_(None))
        )
        return result.scalar_one_or_none()

    async def create(self, menu_item_id: int, data: CustomizationOptionCreate) -> CustomizationOption:
        await self._ensure_live_item(menu_item_id)
        option = CustomizationOption(menu_item_id=menu_item_id, **data.model_dump())
        self.db.add(option)
        await self.db.commit()
        await self.db.refresh(option)
        logger.info("Customization created", customization_id=option.id, menu_item_id=menu_item_id)
        return option

    async def update(self, option_id: int, data: CustomizationOptionUpdate) -> CustomizationOption:
        option = await self.get(option_id)
        if option is None:
            raise CustomizationNotFound()

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(option, field, value)

        await self.db.commit()
        await self.db.refresh(option)
        return option

    async def delete(self, option_id: int) -> None:
        option = await self.get(option_id)
        if option is None:
            raise CustomizationNotFound()

        await self.db.delete(option)
        await self.db.commit()
        logger.info("Customization deleted", customization_id=option_id)

    async def _ensure_live_item(self, menu_item_id: int) -> None:
        result = await self.db.execute(
            select(MenuItem.id).where(MenuItem.id == menu_item_id, MenuItem.deleted_at.is_(None))
        )
        if result.scalar_one_or_none() is None:
            raise MenuItemNotFound()
