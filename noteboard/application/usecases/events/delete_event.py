"""
===============================================================================
USE CASE: Delete Event
===============================================================================

Class:
    DeleteEventUseCase

Responsibilities:
    - NOT_FOUND si no existe; FORBIDDEN si can_access(DELETE) es False.
    - Borrado definitivo.
===============================================================================
"""

from __future__ import annotations

from typing import Final
from uuid import UUID

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_policy_denial
from ....domain.repositories import EventRepository
from ....domain.visibility_policy import AccessAction, BoardActor, can_access
from ..board_results import DeleteResult, forbidden_error, not_found_error

_RESOURCE_NAME: Final[str] = "Event"


class DeleteEventUseCase:
    def __init__(self, event_repository: EventRepository) -> None:
        self._events = event_repository

    def execute(self, event_id: UUID, actor: BoardActor | None) -> DeleteResult:
        event = self._events.get_event(event_id)
        if event is None:
            return DeleteResult(deleted=False, error=not_found_error(_RESOURCE_NAME))

        if not can_access(actor, event, AccessAction.DELETE):
            record_policy_denial("event.delete")
            return DeleteResult(
                deleted=False,
                error=forbidden_error("You cannot delete this event.", _RESOURCE_NAME),
            )

        if not self._events.delete_event(event_id):
            return DeleteResult(deleted=False, error=not_found_error(_RESOURCE_NAME))

        logger.info("Evento eliminado", extra={"event_id": str(event_id)})
        return DeleteResult(deleted=True)
