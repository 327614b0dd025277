"""
===============================================================================
EVENT USE CASES PACKAGE (Public API / Exports)
===============================================================================

Responsibilities:
    - Re-exportar casos de uso de Eventos (create/get/list/update/delete).
    - Re-exportar DTOs de entrada y parsers de campos.
===============================================================================
"""

from __future__ import annotations

from .create_event import CreateEventInput, CreateEventUseCase
from .delete_event import DeleteEventUseCase
from .event_fields import (
    parse_event_date,
    parse_event_time,
    parse_event_type,
    parse_notification_type,
)
from .get_event import GetEventUseCase
from .list_events import ListEventsUseCase
from .update_event import UpdateEventInput, UpdateEventUseCase

__all__ = [
    "CreateEventInput",
    "CreateEventUseCase",
    "DeleteEventUseCase",
    "GetEventUseCase",
    "ListEventsUseCase",
    "UpdateEventInput",
    "UpdateEventUseCase",
    "parse_event_date",
    "parse_event_time",
    "parse_event_type",
    "parse_notification_type",
]
