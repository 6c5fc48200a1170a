"""Authentication schemas"""

from datetime import datetime
from typing import Optional
from pydantic import Field, model_validator

from menu_api.schemas.base import CamelModel


class SessionClaim(CamelModel):
    """Identity carried by a signed token"""
    subject: int = Field(..., gt=0)
    role: str
    issued_at: datetime
    expires_at: datetime

    @model_validator(mode="after")
    def check_window(self) -> "SessionClaim":
        if self.expires_at <= self.issued_at:
            raise ValueError("expires_at must be after issued_at")
        return self


class RefreshRequest(CamelModel):
    """Token refresh request"""
    refresh_token: Optional[str] = None


class TokenResponse(CamelModel):
    """Refreshed access token"""
    token: str
    expires_in: int  # seconds
