"""Tests for the centralized error responses"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from menu_api.error_handlers import register_error_handlers
from menu_api.errors import CategoryHasItemsError


@pytest.mark.asyncio
async def test_unknown_route(client: AsyncClient):
    response = await client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"error": {"message": "Route not found", "code": "NOT_FOUND"}}


@pytest.mark.asyncio
async def test_invalid_path_parameter(client: AsyncClient):
    response = await client.get("/api/categories/abc")

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"][0]["location"] == ["path", "category_id"]


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def app_with_failures(settings) -> FastAPI:
    app = FastAPI()
    register_error_handlers(app, settings)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database exploded")

    @app.get("/busy")
    async def busy():
        raise CategoryHasItemsError()

    return app


async def call(app: FastAPI, path: str):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.get(path)


@pytest.mark.asyncio
async def test_unhandled_error_includes_stack_outside_production(settings):
    response = await call(app_with_failures(settings), "/boom")

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert error["message"] == "Internal Server Error"
    assert "database exploded" in error["stack"]


@pytest.mark.asyncio
async def test_unhandled_error_hides_stack_in_production(settings):
    production = settings.model_copy(update={"environment": "production"})
    response = await call(app_with_failures(production), "/boom")

    assert response.status_code == 500
    assert response.json() == {"error": {"message": "Internal Server Error", "code": "INTERNAL_ERROR"}}


@pytest.mark.asyncio
async def test_domain_error_body(settings):
    response = await call(app_with_failures(settings), "/busy")

    assert response.status_code == 400
    assert response.json() == {
        "error": {"message": "Cannot delete category with active menu items", "code": "CATEGORY_HAS_ITEMS"}
    }
