"""Signed session tokens.

Tokens are stateless HS256 JWTs. Validity is decided by the signature and the
embedded expiry only; the process keeps no session table. Access and refresh
tokens are signed with different secrets and carry a ``type`` marker, so a
token of one class never verifies as the other.
"""

from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from menu_api.config import Settings
from menu_api.schemas.auth import SessionClaim

ACCESS = "access"
REFRESH = "refresh"


class TokenError(Exception):
    """Base class for token verification failures"""


class TokenInvalid(TokenError):
    """Malformed token, bad signature or wrong token class"""


class TokenExpired(TokenError):
    """Signature is valid but the token is past its expiry"""


class TokenService:
    """Issue, verify and refresh session tokens"""

    def __init__(
        self,
        secret: str,
        refresh_secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(hours=24),
        refresh_expires_in: timedelta = timedelta(days=7),
    ):
        if not secret or not refresh_secret:
            raise ValueError("Token secrets must be set")
        if secret == refresh_secret:
            raise ValueError("Access and refresh secrets must differ")
        if expires_in < timedelta(seconds=1) or refresh_expires_in < timedelta(seconds=1):
            raise ValueError("Token lifetimes must be at least one second")
        self._secret = secret
        self._refresh_secret = refresh_secret
        self.algorithm = algorithm
        self.expires_in = expires_in
        self.refresh_expires_in = refresh_expires_in

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            refresh_secret=settings.jwt_refresh_secret,
            algorithm=settings.jwt_algorithm,
            expires_in=timedelta(minutes=settings.jwt_expires_minutes),
            refresh_expires_in=timedelta(days=settings.jwt_refresh_expires_days),
        )

    @property
    def expires_in_seconds(self) -> int:
        return int(self.expires_in.total_seconds())

    def issue(self, subject: int, role: str) -> str:
        """Create an access token for subject/role"""
        return self._sign(subject, role, self._secret, self.expires_in, ACCESS)

    def issue_refresh(self, subject: int, role: str) -> str:
        """Create a refresh token for subject/role"""
        return self._sign(subject, role, self._refresh_secret, self.refresh_expires_in, REFRESH)

    def verify(self, token: str) -> SessionClaim:
        """Verify an access token"""
        return self._decode(token, self._secret, ACCESS)

    def verify_refresh(self, token: str) -> SessionClaim:
        """Verify a refresh token"""
        return self._decode(token, self._refresh_secret, REFRESH)

    def refresh(self, refresh_token: str) -> str:
        """Exchange a refresh token for a new access token.

        Only subject and role are copied from the refresh token, nothing the
        caller sends can widen the new token's privileges.
        """
        claim = self.verify_refresh(refresh_token)
        return self.issue(claim.subject, claim.role)

    def _sign(self, subject: int, role: str, secret: str, lifetime: timedelta, token_type: str) -> str:
        if isinstance(subject, bool) or not isinstance(subject, int) or subject <= 0:
            raise ValueError("subject must be a positive integer")
        if not role:
            raise ValueError("role must be set")
        now = datetime.now(timezone.utc)
        payload = {
            "id": subject,
            "role": role,
            "iat": now,
            "exp": now + lifetime,
            "type": token_type,
        }
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    def _decode(self, token: str, secret: str, token_type: str) -> SessionClaim:
        try:
            payload = jwt.decode(token, secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise TokenExpired("Token expired") from e
        except JWTError as e:
            raise TokenInvalid(str(e)) from e

        if payload.get("type") != token_type:
            raise TokenInvalid(f"Expected {token_type} token")

        try:
            return SessionClaim(
                subject=payload["id"],
                role=payload["role"],
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise TokenInvalid("Malformed token payload") from e
