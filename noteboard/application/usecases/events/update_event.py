"""
===============================================================================
USE CASE: Update Event
===============================================================================

Business Goal:
    Patch parcial de un evento con las mismas reglas de equipo que una nota
    (sin historial de versiones ni comentarios).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    UpdateEventUseCase

Responsibilities:
    - NOT_FOUND / FORBIDDEN (can_access UPDATE).
    - Cambio de equipo solo por Admin; si no, se rechaza el patch completo.
    - Validar todos los campos presentes antes de mutar.
    - Persistir y devolver EventResult.

Collaborators:
    - EventRepository.get_event / update_event
    - visibility_policy.can_access / can_retag / parse_team
    - event_fields (parsers)

Notas:
    - None => campo ausente. Para description/event_time, "" => borrar valor.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Final
from uuid import UUID

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_policy_denial
from ....domain.repositories import EventRepository
from ....domain.visibility_policy import (
    AccessAction,
    BoardActor,
    can_access,
    can_retag,
    parse_team,
)
from ..board_results import (
    EventResult,
    forbidden_error,
    not_found_error,
    validation_error,
)
from .event_fields import (
    parse_event_date,
    parse_event_time,
    parse_event_type,
    parse_notification_type,
)

_RESOURCE_NAME: Final[str] = "Event"


@dataclass(frozen=True)
class UpdateEventInput:
    title: str | None = None
    description: str | None = None
    event_date: datetime | date | str | None = None
    event_time: str | None = None
    notification_type: str | None = None
    event_type: str | None = None
    team: str | None = None


class UpdateEventUseCase:
    """Use Case (Command): patch parcial de un evento."""

    def __init__(self, event_repository: EventRepository) -> None:
        self._events = event_repository

    def execute(
        self,
        event_id: UUID,
        actor: BoardActor | None,
        patch: UpdateEventInput,
    ) -> EventResult:
        # ---------------------------------------------------------------------
        # 1) Cargar + autorizar.
        # ---------------------------------------------------------------------
        event = self._events.get_event(event_id)
        if event is None:
            return self._not_found()
        if not can_access(actor, event, AccessAction.UPDATE):
            return self._forbidden("You cannot edit this event.")

        # ---------------------------------------------------------------------
        # 2) Cambio de equipo: todo o nada.
        # ---------------------------------------------------------------------
        new_team = None
        if patch.team is not None and parse_team(patch.team) != event.team:
            if not can_retag(actor):
                return self._forbidden("Only an Admin can change the team.")
            new_team = parse_team(patch.team)
            if new_team is None:
                return self._validation_error("Invalid team.")

        # ---------------------------------------------------------------------
        # 3) Validar campos presentes.
        # ---------------------------------------------------------------------
        title = patch.title.strip() if patch.title is not None else None
        if title is not None and not title:
            return self._validation_error("Title cannot be empty.")

        event_date = None
        if patch.event_date is not None:
            event_date, error = parse_event_date(patch.event_date)
            if error:
                return self._validation_error(error)

        event_time = None
        if patch.event_time is not None:
            event_time, error = parse_event_time(patch.event_time)
            if error:
                return self._validation_error(error)

        notification_type = None
        if patch.notification_type is not None:
            notification_type, error = parse_notification_type(
                patch.notification_type
            )
            if error:
                return self._validation_error(error)

        event_type = None
        if patch.event_type is not None:
            event_type, error = parse_event_type(patch.event_type)
            if error:
                return self._validation_error(error)

        # ---------------------------------------------------------------------
        # 4) Aplicar.
        # ---------------------------------------------------------------------
        if new_team is not None:
            event.team = new_team
        if title is not None:
            event.title = title
        if patch.description is not None:
            event.description = patch.description.strip() or None
        if event_date is not None:
            event.event_date = event_date
        if patch.event_time is not None:
            event.event_time = event_time
        if notification_type is not None:
            event.notification_type = notification_type
        if event_type is not None:
            event.event_type = event_type
        event.touch(datetime.now(timezone.utc))

        # ---------------------------------------------------------------------
        # 5) Persistir.
        # ---------------------------------------------------------------------
        updated = self._events.update_event(event)
        if updated is None:
            return self._not_found()

        logger.info("Evento actualizado", extra={"event_id": str(event_id)})
        return EventResult(event=updated)

    @staticmethod
    def _not_found() -> EventResult:
        return EventResult(error=not_found_error(_RESOURCE_NAME))

    @staticmethod
    def _forbidden(message: str) -> EventResult:
        record_policy_denial("event.update")
        return EventResult(error=forbidden_error(message, _RESOURCE_NAME))

    @staticmethod
    def _validation_error(message: str) -> EventResult:
        return EventResult(error=validation_error(message, _RESOURCE_NAME))
