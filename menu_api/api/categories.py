"""Category API endpoints"""

from typing import List

from fastapi import APIRouter, Depends, Response

from menu_api.api.deps import get_category_repository, maybe_authenticated, require_editor
from menu_api.errors import CategoryNotFound
from menu_api.repositories import CategoryRepository
from menu_api.schemas.menu import (
    CategoryCreate,
    CategoryDetailResponse,
    CategoryResponse,
    CategoryUpdate,
)

router = APIRouter()


@router.get("", response_model=List[CategoryDetailResponse], dependencies=[Depends(maybe_authenticated)])
async def list_categories(repo: CategoryRepository = Depends(get_category_repository)):
    """List categories with their menu items"""
    return await repo.list_all()


@router.get("/{category_id}", response_model=CategoryDetailResponse, dependencies=[Depends(maybe_authenticated)])
async def get_category(category_id: int, repo: CategoryRepository = Depends(get_category_repository)):
    """Get a specific category"""
    category = await repo.get(category_id)
    if not category:
        raise CategoryNotFound()
    return category


@router.post("", response_model=CategoryResponse, status_code=201, dependencies=[Depends(require_editor)])
async def create_category(
    category_data: CategoryCreate,
    repo: CategoryRepository = Depends(get_category_repository),
):
    """Create a new category"""
    return await repo.create(category_data)


@router.put("/{category_id}", response_model=CategoryResponse, dependencies=[Depends(require_editor)])
async def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    repo: CategoryRepository = Depends(get_category_repository),
):
    """Update a category"""
    return await repo.update(category_id, category_data)


@router.delete("/{category_id}", status_code=204, dependencies=[Depends(require_editor)])
async def delete_category(category_id: int, repo: CategoryRepository = Depends(get_category_repository)):
    """Delete a category that has no active menu items"""
    await repo.delete(category_id)
    return Response(status_code=204)
