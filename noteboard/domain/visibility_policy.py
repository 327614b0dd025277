"""
===============================================================================
TARJETA CRC — domain/visibility_policy.py
===============================================================================

Módulo:
    Política de Visibilidad del tablero (listado / lectura / escritura / comentarios)

Responsabilidades:
    - Resolver qué equipos puede listar un actor (con o sin filtro pedido).
    - Decidir Read/Update/Delete sobre una nota o evento concreto.
    - Decidir quién comenta, quién cambia el equipo y en qué equipo se crea.
    - Ser 100% testeable: funciones puras, inputs explícitos, sin estado.

Colaboradores:
    - domain.entities.Note / Event / Team
    - identity.users.UserRole (catálogo de roles)
    - application.usecases.*: consultan esta policy antes de mutar/listar.

Reglas (intención):
    - Admin puede todo.
    - Viewer solo ve "Geral" y no escribe.
    - Un rol de equipo R ve su equipo + Geral; modifica lo propio, lo de R y lo de Geral.
    - PolicyMode.OVERVIEW amplía SOLO lectura/listado hacia el equipo hermano.
    - Cualquier rol desconocido cae en "denegado".
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Union
from uuid import UUID

from ..identity.users import TEAM_ROLES, UserRole
from .entities import ALL_TEAMS, Event, Note, Team

BoardResource = Union[Note, Event]


class PolicyMode(str, Enum):
    """Modo global de la policy (constante de configuración, no por request)."""

    STRICT = "strict"
    OVERVIEW = "overview"


class AccessAction(str, Enum):
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class BoardActor:
    """Actor autenticado para decisiones de acceso."""

    user_id: UUID
    name: str
    role: UserRole | str | None


_HOME_TEAM: Final[dict[UserRole, Team]] = {
    UserRole.SUPPORT_TI: Team.SUPPORT_TI,
    UserRole.SISTEMAS_MV: Team.SISTEMAS_MV,
}


def parse_team(value: Team | str | None) -> Team | None:
    """Convierte un valor externo a Team; None si no pertenece al catálogo."""
    if value is None or isinstance(value, Team):
        return value
    try:
        return Team(str(value).strip())
    except ValueError:
        return None


def _role_of(actor: BoardActor | None) -> UserRole | None:
    if actor is None or actor.role is None:
        return None
    if isinstance(actor.role, UserRole):
        return actor.role
    try:
        return UserRole(str(actor.role))
    except ValueError:
        return None


def home_team(role: UserRole | None) -> Team | None:
    """Equipo propio de un rol de equipo (None para Admin/Viewer)."""
    if role is None:
        return None
    return _HOME_TEAM.get(role)


def _is_author(actor: BoardActor, resource: BoardResource) -> bool:
    return actor.user_id is not None and resource.author_id == actor.user_id


# =============================================================================
# Listados
# =============================================================================


def resolve_allowed_teams(
    actor: BoardActor | None,
    requested_team: Team | str | None = None,
    *,
    mode: PolicyMode = PolicyMode.STRICT,
) -> frozenset[Team] | None:
    """
    Equipos visibles en un listado.

    Retorna:
      - frozenset de equipos permitidos
      - None => Forbidden (el actor no puede ver lo pedido)
    """
    role = _role_of(actor)
    if role is None:
        return None

    requested = parse_team(requested_team)
    has_request = requested_team is not None and requested_team != ""
    if has_request and requested is None:
        # Valor fuera de catálogo: nadie lo puede ver.
        return None

    if role == UserRole.ADMIN:
        return frozenset({requested}) if requested else ALL_TEAMS

    if role == UserRole.VIEWER:
        if requested in (None, Team.GERAL):
            return frozenset({Team.GERAL})
        return None

    if role not in TEAM_ROLES:
        return None

    own = home_team(role)
    if requested is None:
        if mode == PolicyMode.OVERVIEW:
            return ALL_TEAMS
        return frozenset({own, Team.GERAL})
    if requested == own:
        return frozenset({own})
    if requested == Team.GERAL:
        if mode == PolicyMode.OVERVIEW:
            return frozenset({own, Team.GERAL})
        return frozenset({Team.GERAL})

    # Equipo hermano: solo lectura en overview.
    if mode == PolicyMode.OVERVIEW:
        return frozenset({requested})
    return None


# =============================================================================
# Recurso individual
# =============================================================================


def can_access(
    actor: BoardActor | None,
    resource: BoardResource,
    action: AccessAction,
    *,
    mode: PolicyMode = PolicyMode.STRICT,
) -> bool:
    """Evalúa Read/Update/Delete sobre una nota o evento."""
    role = _role_of(actor)
    if role is None:
        return False

    if role == UserRole.ADMIN:
        return True

    if role == UserRole.VIEWER:
        return action == AccessAction.READ and resource.team == Team.GERAL

    if role not in TEAM_ROLES:
        return False

    if (
        _is_author(actor, resource)
        or resource.team == home_team(role)
        or resource.team == Team.GERAL
    ):
        return True

    # Overview amplía lectura; nunca escritura ni borrado.
    return action == AccessAction.READ and mode == PolicyMode.OVERVIEW


def can_comment(actor: BoardActor | None, note: Note) -> bool:
    """Comentarios: más laxo que Update (los roles de equipo comentan en todo)."""
    role = _role_of(actor)
    if role is None:
        return False
    if role == UserRole.ADMIN or _is_author(actor, note):
        return True
    if role in TEAM_ROLES:
        return True
    if role == UserRole.VIEWER:
        return note.team == Team.GERAL
    return False


def can_retag(actor: BoardActor | None) -> bool:
    """Solo Admin cambia el equipo de un recurso existente."""
    return _role_of(actor) == UserRole.ADMIN


def can_create_in(actor: BoardActor | None, team: Team) -> bool:
    """Admin crea en cualquier equipo; un rol de equipo solo en el propio o Geral."""
    role = _role_of(actor)
    if role == UserRole.ADMIN:
        return True
    if role in TEAM_ROLES:
        return team in (home_team(role), Team.GERAL)
    return False
