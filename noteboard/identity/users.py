"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelos de Usuario (JWT)

Responsabilidades:
    - Definir el enum de roles de usuario (catálogo cerrado del tablero).
    - Definir el dataclass User utilizado por los flujos de auth (registro / login / token).
    - Mantener el contrato de datos de auth centralizado y estable.

Colaboradores:
    - identity/auth_users.py: usa User y UserRole para emitir/validar JWT.
    - domain/visibility_policy.py: decide visibilidad a partir de UserRole.
    - infrastructure/repositories/*/user.py: mapean filas -> User.

Notas:
    - Los valores del enum son los strings "de cable" (los que viajan en JSON y
      quedan persistidos), por eso incluyen espacios ("Support TI").
    - Este módulo NO contiene lógica de negocio: solo "shapes" de datos.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class UserRole(str, Enum):
    """Roles soportados por el tablero."""

    ADMIN = "Admin"
    SUPPORT_TI = "Support TI"
    SISTEMAS_MV = "Sistemas MV"
    VIEWER = "Viewer"


# Roles "de equipo": cada uno tiene un equipo propio del mismo nombre.
TEAM_ROLES: frozenset[UserRole] = frozenset({UserRole.SUPPORT_TI, UserRole.SISTEMAS_MV})


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario utilizado por autenticación (JWT)."""

    id: UUID
    email: str
    name: str
    password_hash: str
    role: UserRole
    is_active: bool = True
    created_at: datetime | None = None


def normalize_email(email: str | None) -> str:
    """Forma canónica del email (clave única de usuarios)."""
    return (email or "").strip().lower()
