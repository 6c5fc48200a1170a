"""Tests for token issuance and verification"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt
from pydantic import ValidationError

from menu_api.config import Settings
from menu_api.security.tokens import TokenExpired, TokenInvalid, TokenService

ACCESS_SECRET = "access-secret"
REFRESH_SECRET = "refresh-secret"


@pytest.fixture
def service():
    return TokenService(secret=ACCESS_SECRET, refresh_secret=REFRESH_SECRET)


@pytest.mark.parametrize("subject,role", [(1, "admin"), (42, "manager"), (9000, "staff")])
def test_issue_verify_round_trip(service, subject, role):
    claim = service.verify(service.issue(subject, role))

    assert claim.subject == subject
    assert claim.role == role
    assert claim.expires_at > claim.issued_at


def test_default_lifetimes(service):
    access = service.verify(service.issue(1, "admin"))
    refresh = service.verify_refresh(service.issue_refresh(1, "admin"))

    assert access.expires_at - access.issued_at == timedelta(hours=24)
    assert refresh.expires_at - refresh.issued_at == timedelta(days=7)


def test_refresh_token_is_not_an_access_token(service):
    with pytest.raises(TokenInvalid):
        service.verify(service.issue_refresh(1, "admin"))


def test_access_token_is_not_a_refresh_token(service):
    with pytest.raises(TokenInvalid):
        service.verify_refresh(service.issue(1, "admin"))


def test_token_signed_with_other_secret_is_invalid(service):
    other = TokenService(secret="someone-else", refresh_secret="someone-else-refresh")
    with pytest.raises(TokenInvalid):
        service.verify(other.issue(1, "admin"))


def test_expired_token(service):
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    token = jwt.encode(
        {"id": 1, "role": "admin", "iat": past, "exp": past + timedelta(hours=1), "type": "access"},
        ACCESS_SECRET,
        algorithm="HS256",
    )

    with pytest.raises(TokenExpired):
        service.verify(token)


def test_expired_token_with_bad_signature_is_invalid(service):
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    token = jwt.encode(
        {"id": 1, "role": "admin", "iat": past, "exp": past + timedelta(hours=1), "type": "access"},
        "wrong-secret",
        algorithm="HS256",
    )

    with pytest.raises(TokenInvalid):
        service.verify(token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token(service, token):
    with pytest.raises(TokenInvalid):
        service.verify(token)


def test_tampered_payload(service):
    header, _, signature = service.issue(1, "staff").split(".")
    forged_payload = jwt.encode({"id": 1, "role": "admin"}, "x", algorithm="HS256").split(".")[1]

    with pytest.raises(TokenInvalid):
        service.verify(f"{header}.{forged_payload}.{signature}")


def test_token_without_identity_is_invalid(service):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"role": "admin", "iat": now, "exp": now + timedelta(hours=1), "type": "access"},
        ACCESS_SECRET,
        algorithm="HS256",
    )

    with pytest.raises(TokenInvalid):
        service.verify(token)


def test_refresh_issues_access_token_with_same_identity(service):
    new_token = service.refresh(service.issue_refresh(7, "manager"))
    claim = service.verify(new_token)

    assert claim.subject == 7
    assert claim.role == "manager"


def test_refresh_copies_only_identity(service):
    now = datetime.now(timezone.utc)
    refresh_token = jwt.encode(
        {
            "id": 7,
            "role": "manager",
            "iat": now,
            "exp": now + timedelta(days=1),
            "type": "refresh",
            "permissions": ["everything"],
        },
        REFRESH_SECRET,
        algorithm="HS256",
    )

    payload = jwt.get_unverified_claims(service.refresh(refresh_token))

    assert set(payload) == {"id", "role", "iat", "exp", "type"}
    assert payload["type"] == "access"


def test_refresh_rejects_access_token(service):
    with pytest.raises(TokenInvalid):
        service.refresh(service.issue(7, "manager"))


@pytest.mark.parametrize("subject", [0, -1, "1", True, None])
def test_issue_requires_positive_integer_subject(service, subject):
    with pytest.raises(ValueError):
        service.issue(subject, "admin")


def test_issue_requires_role(service):
    with pytest.raises(ValueError):
        service.issue(1, "")


def test_secrets_must_differ():
    with pytest.raises(ValueError):
        TokenService(secret="same", refresh_secret="same")


def test_settings_reject_shared_secret():
    with pytest.raises(ValidationError):
        Settings(
            _env_file=None,
            database_url="sqlite+aiosqlite:///:memory:",
            jwt_secret="same",
            jwt_refresh_secret="same",
        )


@pytest.mark.parametrize("missing", ["JWT_SECRET", "JWT_REFRESH_SECRET", "DATABASE_URL"])
def test_settings_require_secrets_and_database(monkeypatch, missing):
    values = {
        "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
        "JWT_SECRET": "access",
        "JWT_REFRESH_SECRET": "refresh",
    }
    for name, value in values.items():
        monkeypatch.setenv(name, value)
    monkeypatch.delenv(missing)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("JWT_SECRET", "access")
    monkeypatch.setenv("JWT_REFRESH_SECRET", "refresh")
    monkeypatch.setenv("EDITOR_ROLES", "admin, owner")

    settings = Settings(_env_file=None)
    service = TokenService.from_settings(settings)

    assert settings.editor_roles_list == ["admin", "owner"]
    assert service.expires_in_seconds == 24 * 60 * 60
