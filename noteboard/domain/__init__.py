"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio (API pública del dominio)

Responsabilidades:
    - Centralizar exports para imports limpios en application/interfaces.
    - Evitar imports profundos y acoplamientos innecesarios.

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import (
    ALL_TEAMS,
    Comment,
    Event,
    EventType,
    Note,
    NotificationType,
    Team,
    VersionEntry,
)
from .repositories import EventRepository, NoteRepository, UserRepository
from .value_objects import TAG_ALL, BoardQuery, month_range
from .visibility_policy import (
    AccessAction,
    BoardActor,
    PolicyMode,
    can_access,
    can_comment,
    can_create_in,
    can_retag,
    parse_team,
    resolve_allowed_teams,
)

__all__ = [
    # Entities
    "ALL_TEAMS",
    "Comment",
    "Event",
    "EventType",
    "Note",
    "NotificationType",
    "Team",
    "VersionEntry",
    # Repositories
    "EventRepository",
    "NoteRepository",
    "UserRepository",
    # Value objects
    "TAG_ALL",
    "BoardQuery",
    "month_range",
    # Policy
    "AccessAction",
    "BoardActor",
    "PolicyMode",
    "can_access",
    "can_comment",
    "can_create_in",
    "can_retag",
    "parse_team",
    "resolve_allowed_teams",
]
