"""
===============================================================================
TARJETA CRC — identity/auth_users.py
===============================================================================

Módulo:
    Sesión del tablero (passwords + access tokens)

Responsabilidades:
    - Hashear/verificar passwords (Argon2).
    - Emitir y leer el access token JWT de una sesión.
    - Resolver el usuario de la sesión contra el UserRepository.
    - Exponer dependencias FastAPI: current_user, require_role.
    - Asociar el actor autenticado al contexto de logs.

Colaboradores:
    - crosscutting.config.get_settings: secreto, TTL y cookie.
    - crosscutting.error_responses: unauthorized / forbidden.
    - container.get_user_repository (inyectado vía Depends).
    - identity.users: User / UserRole / normalize_email.

Decisiones:
    - El token solo identifica (sub); rol y nombre vigentes salen del usuario
      persistido. Un cambio de rol o una baja aplican en el próximo request.
    - Credenciales inválidas y usuario inexistente responden igual (None).
    - Nunca se loguean passwords ni tokens.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Final
from uuid import UUID

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from fastapi import Depends, Header, Request

from ..container import get_user_repository
from ..context import bind_actor
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import forbidden, unauthorized
from ..crosscutting.logger import logger
from ..domain.repositories import UserRepository
from .users import User, UserRole, normalize_email

JWT_ALGORITHM: Final = "HS256"
ACCESS_TOKEN_TYPE: Final = "access"
FALLBACK_COOKIE_NAME: Final = "access_token"

_REQUIRED_CLAIMS: Final = ("sub", "email", "role", "exp")

_hasher = PasswordHasher()


@dataclass(frozen=True, slots=True)
class TokenConfig:
    """Parámetros de emisión/lectura del access token."""

    secret: str
    ttl_minutes: int
    cookie_name: str = FALLBACK_COOKIE_NAME
    cookie_secure: bool = False

    @property
    def ttl_seconds(self) -> int:
        return self.ttl_minutes * 60


@dataclass(frozen=True, slots=True)
class AccessClaims:
    """Claims de un access token ya validado."""

    user_id: UUID
    email: str
    role: UserRole
    name: str | None = None


def token_config() -> TokenConfig:
    s = get_settings()
    return TokenConfig(
        secret=s.jwt_secret,
        ttl_minutes=s.jwt_access_ttl_minutes,
        cookie_name=(s.jwt_cookie_name or "").strip() or FALLBACK_COOKIE_NAME,
        cookie_secure=s.jwt_cookie_secure,
    )


# =============================================================================
# Passwords
# =============================================================================


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return _hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def authenticate_user(repo: UserRepository, email: str, password: str) -> User | None:
    """
    Login: usuario activo con password correcto, o None.

    Un usuario inactivo con password correcto recibe 403 explícito.
    """
    normalized = normalize_email(email)
    if not normalized:
        return None

    user = repo.get_user_by_email(normalized)
    if user is None or not verify_password(password, user.password_hash):
        return None

    if not user.is_active:
        logger.warning("Login de usuario inactivo", extra={"user_id": str(user.id)})
        raise forbidden("El usuario está inactivo.")
    return user


# =============================================================================
# Access tokens
# =============================================================================


def create_access_token(
    user: User, config: TokenConfig | None = None
) -> tuple[str, int]:
    """Firma un access token para `user`. Retorna (token, expires_in)."""
    config = config or token_config()
    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role.value,
        "name": user.name,
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=config.ttl_seconds),
        "typ": ACCESS_TOKEN_TYPE,
    }
    return jwt.encode(claims, config.secret, algorithm=JWT_ALGORITHM), config.ttl_seconds


def decode_access_token(token: str, config: TokenConfig | None = None) -> AccessClaims:
    """Valida firma, expiración y catálogo de rol. Cualquier falla => 401."""
    config = config or token_config()
    try:
        raw = jwt.decode(
            token,
            config.secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": list(_REQUIRED_CLAIMS)},
        )
    except jwt.ExpiredSignatureError as exc:
        raise unauthorized("Token expirado.") from exc
    except jwt.InvalidTokenError as exc:
        raise unauthorized("Token inválido.") from exc

    if raw.get("typ", ACCESS_TOKEN_TYPE) != ACCESS_TOKEN_TYPE:
        raise unauthorized("Tipo de token inválido.")

    try:
        return AccessClaims(
            user_id=UUID(str(raw["sub"])),
            email=str(raw["email"]),
            role=UserRole(str(raw["role"])),
            name=str(raw["name"]) if raw.get("name") is not None else None,
        )
    except ValueError as exc:
        raise unauthorized("Token inválido.") from exc


def extract_access_token(
    request: Request,
    authorization: str | None,
    cookie_name: str | None = None,
) -> str | None:
    """`Authorization: Bearer <token>` primero; si no, la cookie de sesión."""
    scheme, _, credentials = (authorization or "").strip().partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(cookie_name or token_config().cookie_name)


def resolve_session_user(repo: UserRepository, token: str) -> User:
    """Token -> usuario persistido y activo."""
    claims = decode_access_token(token)
    user = repo.get_user_by_id(claims.user_id)
    if user is None:
        raise unauthorized("Token inválido.")
    if not user.is_active:
        raise forbidden("El usuario está inactivo.")
    return user


# =============================================================================
# Dependencias FastAPI
# =============================================================================


async def current_user(
    request: Request,
    authorization: str | None = Header(None, alias="Authorization"),
    repo: UserRepository = Depends(get_user_repository),
) -> User:
    """Usuario autenticado del request (401 si no hay sesión)."""
    token = extract_access_token(request, authorization)
    if not token:
        raise unauthorized("Falta token Bearer.")
    user = resolve_session_user(repo, token)
    request.state.user = user
    bind_actor(actor_id=str(user.id), role=user.role.value)
    return user


def require_role(*roles: UserRole) -> Callable[..., User]:
    """Dependency: el usuario autenticado debe tener alguno de `roles`."""
    allowed = frozenset(roles)

    def dependency(user: User = Depends(current_user)) -> User:
        if user.role not in allowed:
            raise forbidden("Rol insuficiente.")
        return user

    return dependency
