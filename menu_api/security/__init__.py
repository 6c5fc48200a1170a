"""Token issuance and request gating"""

from menu_api.security.gate import (
    Proceed,
    Reject,
    RequestContext,
    auth_gate,
    optional_auth,
    required_auth,
    role_gate,
    run_pipeline,
)
from menu_api.security.tokens import TokenError, TokenExpired, TokenInvalid, TokenService

__all__ = [
    "Proceed",
    "Reject",
    "RequestContext",
    "auth_gate",
    "optional_auth",
    "required_auth",
    "role_gate",
    "run_pipeline",
    "TokenError",
    "TokenExpired",
    "TokenInvalid",
    "TokenService",
]
