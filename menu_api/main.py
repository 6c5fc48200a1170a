"""
Menu API - FastAPI Backend Application
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
import structlog

from menu_api.config import Settings, get_settings
from menu_api.database import build_engine, build_session_factory
from menu_api.error_handlers import register_error_handlers
from menu_api.api import auth, categories, menu_items, customizations
from menu_api.security.tokens import TokenService
from menu_api.services.images import ImageService

VERSION = "1.0.0"


def configure_logging(settings: Settings) -> None:
    """Configure structured logging"""
    logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

    renderer = (
        structlog.dev.ConsoleRenderer()
        if settings.log_format == "console"
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application from explicit settings"""
    settings = settings or get_settings()
    configure_logging(settings)

    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        app.state.images.initialize()
        logger.info("Starting Menu API", version=VERSION, environment=settings.environment)
        yield
        await engine.dispose()
        logger.info("Shutting down Menu API")

    app = FastAPI(
        title="Menu API",
        description="Restaurant menu management: categories, menu items and customizations",
        version=VERSION,
        lifespan=lifespan,
    )

    # Process-wide state, created once and never mutated
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.tokens = TokenService.from_settings(settings)
    app.state.images = ImageService(settings)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        structlog.contextvars.clear_contextvars()
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "Request handled",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response

    register_error_handlers(app, settings)

    # Health check endpoint
    @app.get("/health")
    async def health():
        """Basic health check"""
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    # Include API routers
    app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
    app.include_router(categories.router, prefix="/api/categories", tags=["Categories"])
    app.include_router(menu_items.router, prefix="/api/menu-items", tags=["Menu"])
    app.include_router(customizations.router, prefix="/api/customizations", tags=["Customizations"])

    # Uploaded images
    app.mount("/uploads", StaticFiles(directory=settings.uploads_dir, check_dir=False), name="uploads")

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "menu_api.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
