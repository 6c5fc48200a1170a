"""Request authentication and authorization.

A gate is an ordered list of interceptors. Each interceptor looks at the
request context and returns either ``Proceed`` (possibly with an annotated
context) or ``Reject``. ``run_pipeline`` applies them in order and stops at
the first rejection; ``auth_gate`` adapts a pipeline to a FastAPI dependency.

    required_auth                      verify the bearer token or reject 401
    optional_auth                      verify if possible, never reject
    role_gate({"admin", "manager"})    reject 403 unless the attached role is allowed

``role_gate`` only reads the claim attached by an earlier interceptor, so it
must come after ``required_auth`` or ``optional_auth``.
"""

from dataclasses import dataclass, replace
from typing import Callable, Iterable, Optional, Union

import structlog
from fastapi import Request
from fastapi.security.utils import get_authorization_scheme_param

from menu_api.errors import AuthenticationError, ForbiddenError, InvalidTokenError, MenuError
from menu_api.schemas.auth import SessionClaim
from menu_api.security.tokens import TokenError, TokenExpired, TokenService

logger = structlog.get_logger()

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


@dataclass(frozen=True)
class RequestContext:
    """What an interceptor knows about the request"""
    authorization: Optional[str]
    tokens: TokenService
    claim: Optional[SessionClaim] = None


@dataclass(frozen=True)
class Proceed:
    context: RequestContext


@dataclass(frozen=True)
class Reject:
    error: MenuError

    @property
    def status_code(self) -> int:
        return self.error.status_code


Decision = Union[Proceed, Reject]
Interceptor = Callable[[RequestContext], Decision]


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from ``Bearer <token>``; anything else counts as no token"""
    scheme, token = get_authorization_scheme_param(authorization)
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def required_auth(context: RequestContext) -> Decision:
    token = bearer_token(context.authorization)
    if token is None:
        logger.warning("Authentication error", reason="no token provided")
        return Reject(AuthenticationError("No token provided", headers=BEARER_CHALLENGE))

    try:
        claim = context.tokens.verify(token)
    except TokenExpired:
        logger.warning("Invalid token", reason="expired")
        return Reject(InvalidTokenError("Token expired", headers=BEARER_CHALLENGE))
    except TokenError as e:
        logger.warning("Invalid token", reason=str(e))
        return Reject(InvalidTokenError(headers=BEARER_CHALLENGE))

    return Proceed(replace(context, claim=claim))


def optional_auth(context: RequestContext) -> Decision:
    token = bearer_token(context.authorization)
    if token is None:
        return Proceed(context)

    try:
        claim = context.tokens.verify(token)
    except TokenError as e:
        # An unusable token is the same as no token here
        logger.warning("Invalid token in optional auth", reason=str(e))
        return Proceed(context)

    return Proceed(replace(context, claim=claim))


def role_gate(allowed_roles: Iterable[str]) -> Interceptor:
    """Interceptor factory restricting access to ``allowed_roles``"""
    allowed = frozenset(allowed_roles)

    def check_role(context: RequestContext) -> Decision:
        if context.claim is None:
            return Reject(AuthenticationError("User not authenticated", headers=BEARER_CHALLENGE))

        if context.claim.role not in allowed:
            logger.warning(
                "Restricted resource access denied",
                user_id=context.claim.subject,
                role=context.claim.role,
            )
            return Reject(ForbiddenError())

        return Proceed(context)

    return check_role


def run_pipeline(context: RequestContext, *interceptors: Interceptor) -> Decision:
    """Apply interceptors in order, stopping at the first rejection"""
    decision: Decision = Proceed(context)
    for interceptor in interceptors:
        decision = interceptor(decision.context)
        if isinstance(decision, Reject):
            return decision
    return decision


def auth_gate(*interceptors: Interceptor):
    """Dependency factory running ``interceptors`` against the current request.

    Returns the attached claim (or None). A rejection is raised so the
    centralized error handler renders it.
    """
    async def gate(request: Request) -> Optional[SessionClaim]:
        context = RequestContext(
            authorization=request.headers.get("Authorization"),
            tokens=request.app.state.tokens,
        )
        decision = run_pipeline(context, *interceptors)
        if isinstance(decision, Reject):
            raise decision.error

        claim = decision.context.claim
        request.state.user = claim
        if claim is not None:
            structlog.contextvars.bind_contextvars(user_id=claim.subject, role=claim.role)
        return claim

    return gate
