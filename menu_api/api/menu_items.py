"""Menu management API endpoints"""

from typing import List

import structlog
from fastapi import APIRouter, Depends, File, Response, UploadFile

from menu_api.api.deps import (
    get_image_service,
    get_menu_item_repository,
    maybe_authenticated,
    require_editor,
)
from menu_api.repositories import MenuItemRepository
from menu_api.schemas.menu import MenuItemCreate, MenuItemResponse, MenuItemUpdate
from menu_api.services.images import ImageService

router = APIRouter()
logger = structlog.get_logger()


@router.get("", response_model=List[MenuItemResponse], dependencies=[Depends(maybe_authenticated)])
async def list_menu_items(repo: MenuItemRepository = Depends(get_menu_item_repository)):
    """List all menu items"""
    return await repo.list_all()


@router.get(
    "/category/{category_id}",
    response_model=List[MenuItemResponse],
    dependencies=[Depends(maybe_authenticated)],
)
async def list_menu_items_by_category(
    category_id: int,
    repo: MenuItemRepository = Depends(get_menu_item_repository),
):
    """List menu items of one category"""
    return await repo.list_by_category(category_id)


@router.get("/{item_id}", response_model=MenuItemResponse, dependencies=[Depends(maybe_authenticated)])
async def get_menu_item(item_id: int, repo: MenuItemRepository = Depends(get_menu_item_repository)):
    """Get a specific menu item"""
    return await repo.get_or_raise(item_id)


@router.post("", response_model=MenuItemResponse, status_code=201, dependencies=[Depends(require_editor)])
async def create_menu_item(
    item_data: MenuItemCreate,
    repo: MenuItemRepository = Depends(get_menu_item_repository),
):
    """Create a new menu item with its customization options"""
    return await repo.create(item_data)


@router.put("/{item_id}", response_model=MenuItemResponse, dependencies=[Depends(require_editor)])
async def update_menu_item(
    item_id: int,
    item_data: MenuItemUpdate,
    repo: MenuItemRepository = Depends(get_menu_item_repository),
):
    """Update a menu item"""
    return await repo.update(item_id, item_data)


@router.delete("/{item_id}", status_code=204, dependencies=[Depends(require_editor)])
async def delete_menu_item(item_id: int, repo: MenuItemRepository = Depends(get_menu_item_repository)):
    """Delete a menu item (soft delete)"""
    await repo.soft_delete(item_id)
    return Response(status_code=204)


@router.post("/{item_id}/image", response_model=MenuItemResponse, dependencies=[Depends(require_editor)])
async def upload_menu_item_image(
    item_id: int,
    file: UploadFile = File(...),
    repo: MenuItemRepository = Depends(get_menu_item_repository),
    images: ImageService = Depends(get_image_service),
):
    """Upload a new image for a menu item"""
    await repo.get_or_raise(item_id)

    saved = await images.save_image(file)
    try:
        item, previous_url = await repo.set_image(item_id, saved.url)
    except Exception:
        images.delete_image(saved.filename)
        raise

    previous = images.filename_from_url(previous_url)
    if previous and previous != saved.filename:
        images.delete_image(previous)

    logger.info("Menu item image updated", menu_item_id=item_id, filename=saved.filename)
    return item
