"""Authentication API endpoints"""

import structlog
from fastapi import APIRouter, Request

from menu_api.errors import AuthenticationError, InvalidRefreshTokenError
from menu_api.schemas.auth import RefreshRequest, TokenResponse
from menu_api.security.tokens import TokenError

router = APIRouter()
logger = structlog.get_logger()


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(body: RefreshRequest, request: Request):
    """Exchange a refresh token for a new access token"""
    if not body.refresh_token:
        raise AuthenticationError("No refresh token provided")

    tokens = request.app.state.tokens
    try:
        token = tokens.refresh(body.refresh_token)
    except TokenError as e:
        logger.warning("Invalid refresh token", reason=str(e))
        raise InvalidRefreshTokenError() from e

    return TokenResponse(token=token, expires_in=tokens.expires_in_seconds)
