"""Tests for category endpoints and the category delete guard"""

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from menu_api.models.menu import Category, MenuItem


@pytest.mark.asyncio
async def test_create_category(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/categories",
        json={"name": "  Drinks  ", "description": "Cold and hot", "displayOrder": 3},
        headers=admin_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Drinks"
    assert data["displayOrder"] == 3
    assert data["isActive"] is True
    assert "createdAt" in data


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"name": ""},
        {"name": "x" * 101},
        {"name": "Drinks", "displayOrder": -1},
        {"name": "Drinks", "description": "x" * 501},
    ],
)
async def test_create_category_validation(client: AsyncClient, admin_headers, payload):
    response = await client.post("/api/categories", json=payload, headers=admin_headers)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"]


@pytest.mark.asyncio
async def test_list_categories_ordered_with_live_items(
    client: AsyncClient, test_db, test_category, empty_category, test_menu_items, admin_headers
):
    first = Category(name="Starters", display_order=0)
    test_db.add(first)
    await test_db.commit()

    deleted = await client.delete(f"/api/menu-items/{test_menu_items[1].id}", headers=admin_headers)
    assert deleted.status_code == 204

    response = await client.get("/api/categories")

    assert response.status_code == 200
    data = response.json()
    assert [c["name"] for c in data] == ["Starters", "Pizza", "Desserts"]
    pizza = data[1]
    assert [item["name"] for item in pizza["menuItems"]] == ["Margherita Pizza"]


@pytest.mark.asyncio
async def test_get_category(client: AsyncClient, test_category, test_menu_items):
    response = await client.get(f"/api/categories/{test_category.id}")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Pizza"
    assert len(data["menuItems"]) == 2


@pytest.mark.asyncio
async def test_get_missing_category(client: AsyncClient):
    response = await client.get("/api/categories/999")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "CATEGORY_NOT_FOUND"


@pytest.mark.asyncio
async def test_update_category(client: AsyncClient, test_category, admin_headers):
    response = await client.put(
        f"/api/categories/{test_category.id}",
        json={"isActive": False},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["isActive"] is False
    assert data["name"] == "Pizza"


@pytest.mark.asyncio
async def test_update_category_rejects_null_name(client: AsyncClient, test_category, admin_headers):
    response = await client.put(
        f"/api/categories/{test_category.id}",
        json={"name": None},
        headers=admin_headers,
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_missing_category(client: AsyncClient, admin_headers):
    response = await client.put("/api/categories/999", json={"name": "Nope"}, headers=admin_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_empty_category(client: AsyncClient, test_db, empty_category, admin_headers):
    response = await client.delete(f"/api/categories/{empty_category.id}", headers=admin_headers)

    assert response.status_code == 204
    assert (await client.get(f"/api/categories/{empty_category.id}")).status_code == 404

    result = await test_db.execute(
        select(Category).where(Category.id == empty_category.id).execution_options(populate_existing=True)
    )
    assert result.scalar_one_or_none() is None


@pytest.mark.asyncio
async def test_delete_category_with_items(client: AsyncClient, test_category, test_menu_items, admin_headers):
    response = await client.delete(f"/api/categories/{test_category.id}", headers=admin_headers)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "CATEGORY_HAS_ITEMS"
    assert error["message"] == "Cannot delete category with active menu items"

    response = await client.get(f"/api/categories/{test_category.id}")
    assert response.status_code == 200
    assert len(response.json()["menuItems"]) == 2


@pytest.mark.asyncio
async def test_delete_category_after_items_soft_deleted(
    client: AsyncClient, test_db, test_category, test_menu_items, admin_headers
):
    for item in test_menu_items:
        response = await client.delete(f"/api/menu-items/{item.id}", headers=admin_headers)
        assert response.status_code == 204

    response = await client.delete(f"/api/categories/{test_category.id}", headers=admin_headers)
    assert response.status_code == 204

    # The soft-deleted rows are kept
    result = await test_db.execute(select(MenuItem).execution_options(populate_existing=True))
    rows = result.scalars().all()
    assert len(rows) == 2
    assert all(row.deleted_at is not None for row in rows)


@pytest.mark.asyncio
async def test_delete_missing_category(client: AsyncClient, admin_headers):
    response = await client.delete("/api/categories/999", headers=admin_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_category_requires_editor(client: AsyncClient, empty_category, staff_headers):
    response = await client.delete(f"/api/categories/{empty_category.id}", headers=staff_headers)

    assert response.status_code == 403
