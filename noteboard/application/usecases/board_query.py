"""
===============================================================================
BOARD QUERY TRANSLATOR (List filters -> authorized BoardQuery)
===============================================================================

Name:
    Board Query Translator

Business Goal:
    Convertir los filtros crudos de un listado (teamView, search, tag,
    month/year) en un BoardQuery que el storage pueda ejecutar, pidiendo a la
    policy el conjunto de equipos permitido ANTES de tocar la base.

Why (Context / Intención):
    - Fail-fast: si el actor pide un equipo que no puede ver, se devuelve
      FORBIDDEN sin consultar storage (nunca un listado vacío silencioso).
    - Un solo lugar para normalizar filtros evita que notas y eventos diverjan.

-------------------------------------------------------------------------------
CRC CARD (Functions-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    build_board_query (module-level function)

Responsibilities:
    - Resolver equipos permitidos (visibility_policy.resolve_allowed_teams).
    - Normalizar search/tag (centinela "all" = sin filtro).
    - Validar month/year (ambos o ninguno) y convertirlos en rango inclusivo.
    - Retornar (BoardQuery | None, BoardError | None).

Collaborators:
    - domain.visibility_policy
    - domain.value_objects.BoardQuery / month_range
    - board_results (errores tipados)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Tuple

from ...domain.entities import ALL_TEAMS
from ...domain.value_objects import TAG_ALL, BoardQuery, month_range
from ...domain.visibility_policy import (
    BoardActor,
    PolicyMode,
    parse_team,
    resolve_allowed_teams,
)
from ...identity.users import UserRole
from .board_results import BoardError, forbidden_error, validation_error

_MSG_TEAM_FORBIDDEN: Final[str] = "You are not allowed to view this team."
_MSG_INVALID_TEAM: Final[str] = "Invalid team."
_MSG_PARTIAL_DATE: Final[str] = "Both month and year are required to filter by date."
_MSG_INVALID_MONTH: Final[str] = "Invalid month or year."


@dataclass(frozen=True, slots=True)
class ListFilters:
    """Filtros crudos tal como llegan del borde HTTP."""

    team_view: str | None = None
    search: str | None = None
    tag: str | None = None
    month: int | None = None
    year: int | None = None


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def build_board_query(
    actor: BoardActor | None,
    filters: ListFilters,
    *,
    mode: PolicyMode = PolicyMode.STRICT,
    with_dates: bool = False,
    resource: str | None = None,
) -> Tuple[BoardQuery | None, BoardError | None]:
    """
    Traduce filtros a BoardQuery.

    with_dates:
      - True (eventos): month/year se aplican sobre event_date.
      - False (notas): month/year se ignoran.
    """
    # -------------------------------------------------------------------------
    # 1) Equipos permitidos (policy).
    # -------------------------------------------------------------------------
    team_view = _clean(filters.team_view)
    if (
        team_view is not None
        and parse_team(team_view) is None
        and actor is not None
        and actor.role == UserRole.ADMIN
    ):
        # Admin puede pedir cualquier equipo; un valor fuera de catálogo es input inválido.
        return None, validation_error(_MSG_INVALID_TEAM, resource)

    allowed = resolve_allowed_teams(actor, team_view, mode=mode)
    if allowed is None:
        return None, forbidden_error(_MSG_TEAM_FORBIDDEN, resource)

    # -------------------------------------------------------------------------
    # 2) Texto y tag.
    # -------------------------------------------------------------------------
    search = _clean(filters.search)
    tag = _clean(filters.tag)
    if tag == TAG_ALL:
        tag = None

    # -------------------------------------------------------------------------
    # 3) Rango mensual (solo eventos).
    # -------------------------------------------------------------------------
    date_from = date_to = None
    if with_dates and (filters.month is not None or filters.year is not None):
        if filters.month is None or filters.year is None:
            return None, validation_error(_MSG_PARTIAL_DATE, resource)
        try:
            date_from, date_to = month_range(filters.year, filters.month)
        except ValueError:
            return None, validation_error(_MSG_INVALID_MONTH, resource)

    return (
        BoardQuery(
            teams=None if allowed == ALL_TEAMS else allowed,
            search=search,
            tag=tag,
            date_from=date_from,
            date_to=date_to,
        ),
        None,
    )
