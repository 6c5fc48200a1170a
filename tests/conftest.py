"""Test configuration and fixtures"""

from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from menu_api.config import Settings
from menu_api.database import Base, get_db
from menu_api.main import create_app
from menu_api.models.menu import Category, CustomizationOption, MenuItem


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ACCESS_SECRET = "test-access-secret"
REFRESH_SECRET = "test-refresh-secret"


@pytest.fixture
def settings(tmp_path):
    """Settings independent of the environment"""
    return Settings(
        _env_file=None,
        environment="test",
        database_url=TEST_DATABASE_URL,
        jwt_secret=ACCESS_SECRET,
        jwt_refresh_secret=REFRESH_SECRET,
        uploads_dir=str(tmp_path / "uploads"),
    )


@pytest.fixture
async def session_factory():
    """Create test database"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(settings, session_factory):
    """Application wired to the test database"""
    app = create_app(settings)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def tokens(app):
    return app.state.tokens


@pytest.fixture
async def client(app):
    """Create test client"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(tokens):
    return bearer(tokens.issue(1, "admin"))


@pytest.fixture
def manager_headers(tokens):
    return bearer(tokens.issue(2, "manager"))


@pytest.fixture
def staff_headers(tokens):
    return bearer(tokens.issue(3, "staff"))


@pytest.fixture
async def test_category(test_db):
    """Create a test category"""
    category = Category(name="Pizza", description="Stone oven pizzas", display_order=1)
    test_db.add(category)
    await test_db.commit()
    return category


@pytest.fixture
async def empty_category(test_db):
    category = Category(name="Desserts", display_order=2)
    test_db.add(category)
    await test_db.commit()
    return category


@pytest.fixture
async def test_menu_items(test_db, test_category):
    """Create test menu items"""
    items = [
        MenuItem(
            category_id=test_category.id,
            name="Margherita Pizza",
            description="Classic tomato and mozzarella",
            price=Decimal("14.99"),
            customization_options=[
                CustomizationOption(name="Large", price=Decimal("3.00"), group_name="Size"),
                CustomizationOption(name="Extra basil", price=Decimal("0.50"), group_name="Extras"),
            ],
        ),
        MenuItem(
            category_id=test_category.id,
            name="Pepperoni Pizza",
            description="Pepperoni with mozzarella",
            price=Decimal("16.99"),
            is_popular=True,
        ),
    ]

    for item in items:
        test_db.add(item)

    await test_db.commit()
    return items
