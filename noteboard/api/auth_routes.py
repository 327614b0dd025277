"""
===============================================================================
TARJETA CRC — noteboard/api/auth_routes.py (Autenticación y Usuarios)
===============================================================================

Responsabilidades:
  - Exponer endpoints de autenticación (register/login/logout/me) con JWT.
  - Cambio de password del usuario autenticado.
  - Gestionar cookie httpOnly de forma consistente.
  - Exponer endpoints administrativos de usuarios (listar/crear con rol).

Patrones aplicados:
  - Adapter / Presentation Layer: traduce HTTP ↔ repositorio de usuarios.
  - Fail-safe security: si la autenticación falla, se deniega por defecto.

Colaboradores:
  - identity.auth_users: authenticate_user, create_access_token, current_user
  - container.get_user_repository: CRUD de usuarios
  - identity.users: User / UserRole

Decisiones:
  - El registro público crea siempre usuarios Viewer; otros roles los asigna
    un Admin vía POST /auth/users.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field, field_validator

from ..container import get_user_repository
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    OPENAPI_ERROR_RESPONSES,
    conflict,
    unauthorized,
)
from ..crosscutting.logger import logger
from ..domain.repositories import UserRepository
from ..identity.auth_users import (
    authenticate_user,
    create_access_token,
    current_user,
    hash_password,
    require_role,
    token_config,
    verify_password,
)
from ..identity.users import User, UserRole, normalize_email

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

_MIN_PASSWORD_CHARS = get_settings().min_password_chars


# -----------------------------------------------------------------------------
# Modelos HTTP (DTOs)
# -----------------------------------------------------------------------------


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=512)

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        return normalize_email(v)


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=_MIN_PASSWORD_CHARS, max_length=512)

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("name")
    @classmethod
    def nombre_no_vacio(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class CreateUserRequest(RegisterRequest):
    role: UserRole = Field(default=UserRole.VIEWER)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1, max_length=512)
    new_password: str = Field(..., min_length=_MIN_PASSWORD_CHARS, max_length=512)


class UserResponse(BaseModel):
    id: UUID
    email: str
    name: str
    role: UserRole
    is_active: bool
    created_at: datetime | None


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def _to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        is_active=user.is_active,
        created_at=user.created_at,
    )


def _set_auth_cookie(response: Response, token: str, expires_in: int) -> None:
    """Setea cookie httpOnly de acceso."""
    config = token_config()
    response.set_cookie(
        key=config.cookie_name,
        value=token,
        httponly=True,
        secure=config.cookie_secure,
        samesite="lax",
        max_age=expires_in,
        path="/",
    )


def _clear_auth_cookie(response: Response) -> None:
    config = token_config()
    response.delete_cookie(
        key=config.cookie_name,
        path="/",
        samesite="lax",
        secure=config.cookie_secure,
    )


def _create_user(
    repo: UserRepository,
    *,
    name: str,
    email: str,
    password: str,
    role: UserRole,
) -> User:
    """Alta de usuario: email único + hash Argon2."""
    if repo.get_user_by_email(email):
        raise conflict("El email ya existe.")

    try:
        return repo.create_user(
            User(
                id=uuid4(),
                email=email,
                name=name,
                password_hash=hash_password(password),
                role=role,
            )
        )
    except ValueError as exc:
        # Carrera entre el chequeo y el insert
        raise conflict("El email ya existe.") from exc


def _login_response(user: User, response: Response) -> LoginResponse:
    token, expires_in = create_access_token(user)
    _set_auth_cookie(response, token, expires_in)
    return LoginResponse(
        access_token=token,
        expires_in=expires_in,
        user=_to_user_response(user),
    )


# -----------------------------------------------------------------------------
# Endpoints públicos (register/login/logout/me)
# -----------------------------------------------------------------------------


@router.post(
    "/auth/register", response_model=LoginResponse, status_code=201, tags=["auth"]
)
def register(
    req: RegisterRequest,
    response: Response,
    repo: UserRepository = Depends(get_user_repository),
):
    """Auto-registro: crea un Viewer y devuelve sesión iniciada."""
    user = _create_user(
        repo,
        name=req.name,
        email=req.email,
        password=req.password,
        role=UserRole.VIEWER,
    )
    logger.info("Usuario registrado", extra={"user_id": str(user.id)})
    return _login_response(user, response)


@router.post("/auth/login", response_model=LoginResponse, tags=["auth"])
def login(
    req: LoginRequest,
    response: Response,
    repo: UserRepository = Depends(get_user_repository),
):
    """
    Inicia sesión y devuelve JWT.

    - También setea cookie httpOnly.
    """
    user = authenticate_user(repo, req.email, req.password)
    if not user:
        raise unauthorized("Credenciales inválidas.")

    return _login_response(user, response)


@router.post("/auth/logout", tags=["auth"])
def logout(response: Response):
    """Cierra sesión (idempotente, no requiere autenticación)."""
    _clear_auth_cookie(response)
    return {"ok": True}


@router.get("/auth/me", response_model=UserResponse, tags=["auth"])
def me(user: User = Depends(current_user)):
    return _to_user_response(user)


@router.put("/auth/change-password", tags=["auth"])
def change_password(
    req: ChangePasswordRequest,
    user: User = Depends(current_user),
    repo: UserRepository = Depends(get_user_repository),
):
    """Cambia el password propio (requiere el password actual)."""
    if not verify_password(req.current_password, user.password_hash):
        raise unauthorized("Password actual incorrecto.")

    repo.update_user_password(user.id, hash_password(req.new_password))
    logger.info("Password actualizado", extra={"user_id": str(user.id)})
    return {"ok": True}


# -----------------------------------------------------------------------------
# Endpoints administrativos (usuarios)
# -----------------------------------------------------------------------------


@router.get("/auth/users", response_model=list[UserResponse], tags=["auth"])
def list_users_admin(
    limit: int = 200,
    offset: int = 0,
    _admin: User = Depends(require_role(UserRole.ADMIN)),
    repo: UserRepository = Depends(get_user_repository),
):
    """Lista usuarios (admin)."""
    users = repo.list_users(limit=limit, offset=offset)
    return [_to_user_response(u) for u in users]


@router.post(
    "/auth/users", response_model=UserResponse, status_code=201, tags=["auth"]
)
def create_user_admin(
    req: CreateUserRequest,
    admin: User = Depends(require_role(UserRole.ADMIN)),
    repo: UserRepository = Depends(get_user_repository),
):
    """Crea un usuario con rol explícito (admin)."""
    user = _create_user(
        repo,
        name=req.name,
        email=req.email,
        password=req.password,
        role=req.role,
    )
    logger.info(
        "Usuario creado por admin",
        extra={
            "user_id": str(user.id),
            "role": user.role.value,
            "admin_id": str(admin.id),
        },
    )
    return _to_user_response(user)
