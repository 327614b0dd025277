"""
===============================================================================
USE CASE: List Events
===============================================================================

Class:
    ListEventsUseCase

Responsibilities:
    - Traducir filtros (teamView/search/month/year) a BoardQuery.
    - month/year: ambos o ninguno (VALIDATION_ERROR si llega uno solo).
    - Orden: event_date ASC, event_time ASC.

Collaborators:
    - board_query.build_board_query(with_dates=True)
    - EventRepository.list_events
===============================================================================
"""

from __future__ import annotations

from dataclasses import replace
from typing import Final

from ....crosscutting.metrics import record_policy_denial
from ....domain.repositories import EventRepository
from ....domain.visibility_policy import BoardActor, PolicyMode
from ..board_query import ListFilters, build_board_query
from ..board_results import BoardErrorCode, EventListResult

_RESOURCE_NAME: Final[str] = "Event"


class ListEventsUseCase:
    def __init__(
        self,
        event_repository: EventRepository,
        *,
        mode: PolicyMode = PolicyMode.STRICT,
    ) -> None:
        self._events = event_repository
        self._mode = mode

    def execute(
        self, actor: BoardActor | None, filters: ListFilters | None = None
    ) -> EventListResult:
        query, error = build_board_query(
            actor,
            filters or ListFilters(),
            mode=self._mode,
            with_dates=True,
            resource=_RESOURCE_NAME,
        )
        if error is not None:
            if error.code == BoardErrorCode.FORBIDDEN:
                record_policy_denial("event.list")
            return EventListResult(events=[], error=error)

        # Eventos no tienen tags: el filtro se ignora.
        return EventListResult(events=self._events.list_events(replace(query, tag=None)))
