"""Shared route dependencies"""

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from menu_api.database import get_db
from menu_api.repositories import CategoryRepository, CustomizationRepository, MenuItemRepository
from menu_api.schemas.auth import SessionClaim
from menu_api.security.gate import auth_gate, optional_auth, required_auth, role_gate
from menu_api.services.images import ImageService

maybe_authenticated = auth_gate(optional_auth)


async def require_editor(request: Request) -> Optional[SessionClaim]:
    """Authenticated user whose role may modify the menu"""
    gate = auth_gate(required_auth, role_gate(request.app.state.settings.editor_roles_list))
    return await gate(request)


def get_category_repository(db: AsyncSession = Depends(get_db)) -> CategoryRepository:
    return CategoryRepository(db)


def get_menu_item_repository(db: AsyncSession = Depends(get_db)) -> MenuItemRepository:
    return MenuItemRepository(db)


def get_customization_repository(db: AsyncSession = Depends(get_db)) -> CustomizationRepository:
    return CustomizationRepository(db)


def get_image_service(request: Request) -> ImageService:
    return request.app.state.images
