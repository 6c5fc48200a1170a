"""Customization option API endpoints"""

from typing import List

from fastapi import APIRouter, Depends, Response

from menu_api.api.deps import get_customization_repository, maybe_authenticated, require_editor
from menu_api.errors import CustomizationNotFound
from menu_api.repositories import CustomizationRepository
from menu_api.schemas.menu import (
    CustomizationOptionCreate,
    CustomizationOptionResponse,
    CustomizationOptionUpdate,
)

router = APIRouter()


@router.get(
    "/menu-item/{menu_item_id}",
    response_model=List[CustomizationOptionResponse],
    dependencies=[Depends(maybe_authenticated)],
)
async def list_customizations(
    menu_item_id: int,
    repo: CustomizationRepository = Depends(get_customization_repository),
):
    """List customization options of a menu item"""
    return await repo.list_for_item(menu_item_id)


@router.get(
    "/{option_id}",
    response_model=CustomizationOptionResponse,
    dependencies=[Depends(maybe_authenticated)],
)
async def get_customization(option_id: int, repo: CustomizationRepository = Depends(get_customization_repository)):
    """Get a specific customization option"""
    option = await repo.get(option_id)
    if not option:
        raise CustomizationNotFound()
    return option


@router.post(
    "/menu-item/{menu_item_id}",
    response_model=CustomizationOptionResponse,
    status_code=201,
    dependencies=[Depends(require_editor)],
)
async def create_customization(
    menu_item_id: int,
    option_data: CustomizationOptionCreate,
    repo: CustomizationRepository = Depends(get_customization_repository),
):
    """Add a customization option to a menu item"""
    return await repo.create(menu_item_id, option_data)


@router.put("/{option_id}", response_model=CustomizationOptionResponse, dependencies=[Depends(require_editor)])
async def update_customization(
    option_id: int,
    option_data: CustomizationOptionUpdate,
    repo: CustomizationRepository = Depends(get_customization_repository),
):
    """Update a customization option"""
    return await repo.update(option_id, option_data)


@router.delete("/{option_id}", status_code=204, dependencies=[Depends(require_editor)])
async def delete_customization(option_id: int, repo: CustomizationRepository = Depends(get_customization_repository)):
    """Delete a customization option"""
    await repo.delete(option_id)
    return Response(status_code=204)
