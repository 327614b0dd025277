"""
===============================================================================
TARJETA CRC — dependencies.py (Dependencias y helpers comunes)
===============================================================================

Responsabilidades:
  - Resolver el BoardActor del request (usuario autenticado -> actor).
  - Parsear ids de path: un id mal formado es entrada inválida (400), no 422.

Colaboradores:
  - identity.auth_users.current_user
  - crosscutting.error_responses.invalid_input
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import Depends

from ....crosscutting.error_responses import invalid_input
from ....domain.visibility_policy import BoardActor
from ....identity.auth_users import current_user
from ....identity.users import User


def to_board_actor(user: User) -> BoardActor:
    """Usuario persistido -> actor inmutable para la policy."""
    return BoardActor(user_id=user.id, name=user.name, role=user.role)


def get_current_actor(user: User = Depends(current_user)) -> BoardActor:
    """Dependency FastAPI: actor autenticado para la policy."""
    return to_board_actor(user)


def parse_resource_id(raw: str, resource: str) -> UUID:
    try:
        return UUID(raw.strip())
    except (ValueError, AttributeError):
        raise invalid_input(f"Invalid {resource.lower()} id: {raw}")
