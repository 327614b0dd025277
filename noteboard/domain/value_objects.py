"""
===============================================================================
DOMAIN: Value Objects (Immutable Domain Primitives)
===============================================================================

Contenido:
    - BoardQuery: predicado de listado neutral respecto del storage
      (equipos permitidos + búsqueda + tag + rango de fechas).
    - month_range(): límites inclusivos de un mes calendario.

Principios:
    - Inmutabilidad (frozen dataclasses)
    - Sin side effects
    - Los repositorios traducen BoardQuery a SQL o lo evalúan en memoria
      con matches_note()/matches_event(); ambos caminos deben coincidir.
===============================================================================
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Final, Optional

from .entities import Event, Note, Team

# Centinela de la UI para "sin filtro de tag".
TAG_ALL: Final[str] = "all"


@dataclass(frozen=True, slots=True)
class BoardQuery:
    """
    Filtro de listado ya autorizado.

    teams:
      - None => sin restricción de equipo (Admin sin filtro)
      - frozenset => team IN teams
    """

    teams: Optional[frozenset[Team]] = None
    search: Optional[str] = None
    tag: Optional[str] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None

    def _team_ok(self, team: Team) -> bool:
        return self.teams is None or team in self.teams

    def _search_ok(self, *fields: Optional[str]) -> bool:
        if not self.search:
            return True
        needle = self.search.casefold()
        return any(needle in (value or "").casefold() for value in fields)

    def matches_note(self, note: Note) -> bool:
        if not self._team_ok(note.team):
            return False
        if not self._search_ok(note.title, note.content, note.author_name, *note.tags):
            return False
        if self.tag and self.tag not in note.tags:
            return False
        return True

    def matches_event(self, event: Event) -> bool:
        if not self._team_ok(event.team):
            return False
        if not self._search_ok(event.title, event.description, event.author_name):
            return False
        if self.date_from is not None and event.event_date < self.date_from:
            return False
        if self.date_to is not None and event.event_date > self.date_to:
            return False
        return True


def month_range(year: int, month: int) -> tuple[datetime, datetime]:
    """
    Primer instante y último milisegundo del mes (UTC, ambos inclusivos).

    Lanza ValueError si month no está en 1..12.
    """
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    end = datetime(year, month, last_day, 23, 59, 59, 999000, tzinfo=timezone.utc)
    return start, end
