"""Centralized error responses.

Every error leaves the API as ``{"error": {"message", "code", "details"?}}``.
Outside production, server errors also carry the formatted traceback as
``stack``.
"""

import traceback
from typing import Any, Dict, List, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from menu_api.config import Settings
from menu_api.errors import MenuError

logger = structlog.get_logger()


def error_body(message: str, code: str, details: Optional[List[Any]] = None, stack: Optional[str] = None) -> Dict:
    error: Dict[str, Any] = {"message": message, "code": code}
    if details:
        error["details"] = details
    if stack:
        error["stack"] = stack
    return {"error": error}


def register_error_handlers(app: FastAPI, settings: Settings) -> None:
    """Install the API's exception handlers on ``app``"""

    def stack_for(exc: Exception, status_code: int = 500) -> Optional[str]:
        if settings.is_production or status_code < 500:
            return None
        return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    def log_failure(request: Request, exc: Exception, status_code: int) -> None:
        fields = {
            "path": request.url.path,
            "method": request.method,
            "status_code": status_code,
        }
        if status_code >= 500:
            logger.error(str(exc) or exc.__class__.__name__, exc_info=exc, **fields)
        else:
            logger.warning(str(exc), **fields)

    @app.exception_handler(MenuError)
    async def menu_error_handler(request: Request, exc: MenuError):
        log_failure(request, exc, exc.status_code)
        return JSONResponse(
            status_code=exc.status_code,
            content=jsonable_encoder(error_body(exc.message, exc.code, exc.details, stack_for(exc, exc.status_code))),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = [
            {"location": list(err["loc"]), "message": err["msg"], "type": err["type"]}
            for err in exc.errors()
        ]
        log_failure(request, exc, 400)
        return JSONResponse(
            status_code=400,
            content=jsonable_encoder(error_body("Validation error", "VALIDATION_ERROR", details)),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            body = error_body("Route not found", "NOT_FOUND")
        elif exc.status_code == 405:
            body = error_body("Method not allowed", "METHOD_NOT_ALLOWED")
        else:
            body = error_body(str(exc.detail), "HTTP_ERROR")
        return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        log_failure(request, exc, 500)
        return JSONResponse(
            status_code=500,
            content=error_body("Internal Server Error", "INTERNAL_ERROR", stack=stack_for(exc)),
        )
