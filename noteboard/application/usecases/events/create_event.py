"""
===============================================================================
USE CASE: Create Event
===============================================================================

Business Goal:
    Crear un evento de calendario en un equipo permitido para el actor.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateEventUseCase

Responsibilities:
    - Rechazar Viewer (no escribe).
    - Validar equipo (catálogo + permiso de autoría).
    - Validar título, fecha, hora y catálogos (notificationType/eventType).
    - Persistir y devolver EventResult.

Collaborators:
    - EventRepository.create_event
    - visibility_policy.can_create_in
    - event_fields (parsers)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Final
from uuid import uuid4

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_policy_denial
from ....domain.entities import Event
from ....domain.repositories import EventRepository
from ....domain.visibility_policy import BoardActor, can_create_in, parse_team
from ....identity.users import UserRole
from ..board_results import EventResult, forbidden_error, validation_error
from .event_fields import (
    parse_event_date,
    parse_event_time,
    parse_event_type,
    parse_notification_type,
)

_RESOURCE_NAME: Final[str] = "Event"


@dataclass(frozen=True)
class CreateEventInput:
    title: str | None
    event_date: datetime | date | str | None
    team: str | None
    description: str | None = None
    event_time: str | None = None
    notification_type: str | None = None
    event_type: str | None = None
    actor: BoardActor | None = None


class CreateEventUseCase:
    """Use Case (Command): crea un evento."""

    def __init__(self, event_repository: EventRepository) -> None:
        self._events = event_repository

    def execute(self, input_data: CreateEventInput) -> EventResult:
        actor = input_data.actor

        # 1) Viewer (o actor ausente) no crea.
        if actor is None or actor.role in (None, UserRole.VIEWER):
            return self._forbidden("Viewers cannot create events.")

        # 2) Equipo.
        team = parse_team(input_data.team)
        if team is None:
            return self._validation_error("Invalid or missing team.")
        if not can_create_in(actor, team):
            return self._forbidden("You can only create events for your team or Geral.")

        # 3) Campos.
        title = (input_data.title or "").strip()
        if not title:
            return self._validation_error("Title is required.")

        event_date, error = parse_event_date(input_data.event_date)
        if error:
            return self._validation_error(error)
        event_time, error = parse_event_time(input_data.event_time)
        if error:
            return self._validation_error(error)
        notification_type, error = parse_notification_type(
            input_data.notification_type
        )
        if error:
            return self._validation_error(error)
        event_type, error = parse_event_type(input_data.event_type)
        if error:
            return self._validation_error(error)

        # 4) Construir + persistir.
        now = datetime.now(timezone.utc)
        description = (input_data.description or "").strip() or None
        event = Event(
            id=uuid4(),
            title=title,
            event_date=event_date,
            author_id=actor.user_id,
            author_name=actor.name,
            team=team,
            description=description,
            event_time=event_time,
            notification_type=notification_type,
            event_type=event_type,
            created_at=now,
            updated_at=now,
        )
        created = self._events.create_event(event)
        logger.info(
            "Evento creado",
            extra={"event_id": str(created.id), "team": created.team.value},
        )
        return EventResult(event=created)

    @staticmethod
    def _forbidden(message: str) -> EventResult:
        record_policy_denial("event.create")
        return EventResult(error=forbidden_error(message, _RESOURCE_NAME))

    @staticmethod
    def _validation_error(message: str) -> EventResult:
        return EventResult(error=validation_error(message, _RESOURCE_NAME))
