"""Database engine, session factory and request-scoped sessions"""

from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from menu_api.config import Settings

Base = declarative_base()


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database"""
    return create_async_engine(settings.database_url, echo=settings.database_echo, pool_pre_ping=True)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Yield a session bound to the application's engine"""
    async with request.app.state.session_factory() as session:
        yield session
