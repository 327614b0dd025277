"""
===============================================================================
TARJETA CRC — schemas/events.py
===============================================================================

Módulo:
    Schemas HTTP para Eventos de calendario

Responsabilidades:
    - DTOs de request/response (camelCase en el cable).
    - eventDate llega como string ISO (fecha o fecha-hora) y se parsea en el
      caso de uso; eventTime/notificationType/eventType también.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from .....crosscutting.config import get_settings
from .common import CamelModel

_settings = get_settings()


class CreateEventReq(CamelModel):
    title: str | None = Field(default=None, max_length=_settings.max_title_chars)
    description: str | None = Field(
        default=None, max_length=_settings.max_content_chars
    )
    event_date: str | None = Field(default=None, description="ISO 8601 date or datetime")
    event_time: str | None = Field(default=None, description="HH:MM")
    notification_type: str | None = Field(
        default=None, description="none | hourBefore | dayBefore"
    )
    event_type: str | None = Field(
        default=None, description="general | birthday | reminder"
    )
    team: str | None = None


class UpdateEventReq(CamelModel):
    """Patch parcial. description/eventTime: "" borra el valor."""

    title: str | None = Field(default=None, max_length=_settings.max_title_chars)
    description: str | None = Field(
        default=None, max_length=_settings.max_content_chars
    )
    event_date: str | None = None
    event_time: str | None = None
    notification_type: str | None = None
    event_type: str | None = None
    team: str | None = None


class EventRes(CamelModel):
    id: UUID
    title: str
    description: str | None = None
    event_date: datetime
    event_time: str | None = None
    notification_type: str
    event_type: str
    author: UUID
    author_name: str
    team: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class EventsListRes(CamelModel):
    events: list[EventRes]
