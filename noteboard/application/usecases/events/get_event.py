"""
===============================================================================
USE CASE: Get Event
===============================================================================

Class:
    GetEventUseCase

Responsibilities:
    - NOT_FOUND si no existe; FORBIDDEN si can_access(READ) falla con el modo
      configurado.

Collaborators:
    - EventRepository.get_event
    - visibility_policy.can_access
===============================================================================
"""

from __future__ import annotations

from typing import Final
from uuid import UUID

from ....crosscutting.metrics import record_policy_denial
from ....domain.repositories import EventRepository
from ....domain.visibility_policy import (
    AccessAction,
    BoardActor,
    PolicyMode,
    can_access,
)
from ..board_results import EventResult, forbidden_error, not_found_error

_RESOURCE_NAME: Final[str] = "Event"


class GetEventUseCase:
    def __init__(
        self,
        event_repository: EventRepository,
        *,
        mode: PolicyMode = PolicyMode.STRICT,
    ) -> None:
        self._events = event_repository
        self._mode = mode

    def execute(self, event_id: UUID, actor: BoardActor | None) -> EventResult:
        event = self._events.get_event(event_id)
        if event is None:
            return EventResult(error=not_found_error(_RESOURCE_NAME))

        if not can_access(actor, event, AccessAction.READ, mode=self._mode):
            record_policy_denial("event.read")
            return EventResult(
                error=forbidden_error("You cannot view this event.", _RESOURCE_NAME)
            )

        return EventResult(event=event)
