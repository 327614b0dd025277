"""
Name: Session Helper Tests

Responsibilities:
  - Argon2 hash/verify
  - Access token issue/decode (claims, expiry, tampering, role catalog)
  - authenticate_user / resolve_session_user against the in-memory repository
  - Token extraction (Bearer header / cookie) and BoardActor mapping
"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from uuid import uuid4

import jwt
import pytest

from noteboard.container import get_user_repository
from noteboard.crosscutting.error_responses import AppHTTPException
from noteboard.identity.auth_users import (
    JWT_ALGORITHM,
    TokenConfig,
    authenticate_user,
    create_access_token,
    decode_access_token,
    extract_access_token,
    hash_password,
    resolve_session_user,
    verify_password,
)
from noteboard.identity.users import User, UserRole, normalize_email
from noteboard.interfaces.api.http.dependencies import to_board_actor

pytestmark = pytest.mark.unit

CONFIG = TokenConfig(secret="unit-secret", ttl_minutes=30)


def _user(*, role=UserRole.SUPPORT_TI, password="secret", is_active=True) -> User:
    return User(
        id=uuid4(),
        email="sam@example.com",
        name="Sam",
        password_hash=hash_password(password),
        role=role,
        is_active=is_active,
    )


def _signed(claims: dict, secret: str = CONFIG.secret) -> str:
    base = {
        "sub": str(uuid4()),
        "email": "x@example.com",
        "role": "Viewer",
        "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
    }
    base.update(claims)
    return jwt.encode(base, secret, algorithm=JWT_ALGORITHM)


# =============================================================================
# Passwords
# =============================================================================


def test_hash_and_verify_password():
    hashed = hash_password("secret")
    assert hashed != "secret"
    assert verify_password("secret", hashed) is True
    assert verify_password("wrong", hashed) is False


def test_verify_password_with_garbage_hash():
    assert verify_password("secret", "not-an-argon2-hash") is False


def test_normalize_email():
    assert normalize_email("  Sam@Example.COM ") == "sam@example.com"
    assert normalize_email(None) == ""


# =============================================================================
# Tokens
# =============================================================================


def test_token_carries_identity_claims():
    user = _user()
    token, expires_in = create_access_token(user, CONFIG)

    claims = decode_access_token(token, CONFIG)

    assert expires_in == 30 * 60
    assert claims.user_id == user.id
    assert claims.email == user.email
    assert claims.role == UserRole.SUPPORT_TI
    assert claims.name == "Sam"


def test_expired_token_is_unauthorized():
    token = _signed({"exp": datetime.now(timezone.utc) - timedelta(minutes=1)})
    with pytest.raises(AppHTTPException) as exc:
        decode_access_token(token, CONFIG)
    assert exc.value.status_code == 401
    assert "expirado" in exc.value.detail


def test_token_signed_with_other_secret_is_rejected():
    token, _ = create_access_token(_user(), CONFIG)
    with pytest.raises(AppHTTPException) as exc:
        decode_access_token(token, TokenConfig(secret="other-secret", ttl_minutes=30))
    assert exc.value.status_code == 401


@pytest.mark.parametrize(
    "claims",
    [
        {"role": "Intern"},
        {"typ": "refresh"},
        {"sub": "not-a-uuid"},
    ],
)
def test_malformed_claims_are_unauthorized(claims):
    with pytest.raises(AppHTTPException) as exc:
        decode_access_token(_signed(claims), CONFIG)
    assert exc.value.status_code == 401


def test_token_missing_required_claim_is_rejected():
    token = jwt.encode(
        {"sub": str(uuid4()), "role": "Viewer"}, CONFIG.secret, algorithm=JWT_ALGORITHM
    )
    with pytest.raises(AppHTTPException):
        decode_access_token(token, CONFIG)


# =============================================================================
# Users
# =============================================================================


def test_authenticate_user_normalizes_email():
    repo = get_user_repository()
    user = repo.create_user(_user())

    assert authenticate_user(repo, "  SAM@example.com ", "secret").id == user.id
    assert authenticate_user(repo, "sam@example.com", "wrong") is None
    assert authenticate_user(repo, "nobody@example.com", "secret") is None
    assert authenticate_user(repo, "", "secret") is None


def test_authenticate_inactive_user_is_forbidden():
    repo = get_user_repository()
    repo.create_user(_user(is_active=False))
    with pytest.raises(AppHTTPException) as exc:
        authenticate_user(repo, "sam@example.com", "secret")
    assert exc.value.status_code == 403


def test_inactive_user_with_wrong_password_is_just_rejected():
    repo = get_user_repository()
    repo.create_user(_user(is_active=False))
    assert authenticate_user(repo, "sam@example.com", "wrong") is None


def test_resolve_session_user_reads_persisted_user():
    repo = get_user_repository()
    user = repo.create_user(_user())
    token, _ = create_access_token(user)
    assert resolve_session_user(repo, token).id == user.id


def test_resolve_session_user_for_unknown_user_is_unauthorized():
    token, _ = create_access_token(_user())
    with pytest.raises(AppHTTPException) as exc:
        resolve_session_user(get_user_repository(), token)
    assert exc.value.status_code == 401


def test_to_board_actor():
    user = _user(role=UserRole.ADMIN)
    actor = to_board_actor(user)
    assert actor.user_id == user.id
    assert actor.name == "Sam"
    assert actor.role == UserRole.ADMIN


# =============================================================================
# Token extraction
# =============================================================================


def _request(cookies: dict | None = None):
    return SimpleNamespace(cookies=cookies or {})


def test_extract_prefers_bearer_header():
    request = _request({"access_token": "from-cookie"})
    assert extract_access_token(request, "Bearer from-header", "access_token") == (
        "from-header"
    )


def test_extract_falls_back_to_cookie():
    request = _request({"access_token": "from-cookie"})
    assert extract_access_token(request, None, "access_token") == "from-cookie"
    assert extract_access_token(request, "Basic abc", "access_token") == "from-cookie"


def test_extract_returns_none_without_credentials():
    assert extract_access_token(_request(), None, "access_token") is None
    assert extract_access_token(_request(), "Bearer   ", "access_token") is None
