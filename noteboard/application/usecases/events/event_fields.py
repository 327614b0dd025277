"""
===============================================================================
EVENT FIELD PARSERS (input normalization for Event use cases)
===============================================================================

Responsabilidades:
    - Parsear eventDate (ISO fecha o fecha-hora; naive => UTC).
    - Validar eventTime (HH:MM, 24h).
    - Convertir notificationType / eventType a sus enums.

Contrato:
    - Cada parser retorna (valor, None) o (None, mensaje de error).
    - Sin side effects: los use cases deciden cómo reportar el error.
===============================================================================
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Final, Optional, Tuple

from ....domain.entities import EventType, NotificationType

EVENT_TIME_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"
)


def as_utc(value: datetime) -> datetime:
    """Naive => UTC; aware => convertido a UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_event_date(
    value: datetime | date | str | None,
) -> Tuple[Optional[datetime], Optional[str]]:
    if value is None:
        return None, "Event date is required."
    if isinstance(value, datetime):
        return as_utc(value), None
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc), None

    raw = str(value).strip()
    if not raw:
        return None, "Event date is required."
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None, "Invalid event date."
    return as_utc(parsed), None


def parse_event_time(value: str | None) -> Tuple[Optional[str], Optional[str]]:
    """
    '' o None => sin hora.

    Se normaliza a HH:MM con cero a la izquierda ("9:05" -> "09:05") para que
    el orden lexicográfico coincida con el cronológico.
    """
    raw = (value or "").strip()
    if not raw:
        return None, None
    if not EVENT_TIME_PATTERN.match(raw):
        return None, "Invalid event time (expected HH:MM)."
    hours, minutes = raw.split(":")
    return f"{int(hours):02d}:{minutes}", None


def parse_notification_type(
    value: NotificationType | str | None,
) -> Tuple[Optional[NotificationType], Optional[str]]:
    if value is None:
        return NotificationType.NONE, None
    try:
        return NotificationType(value), None
    except ValueError:
        return None, "Invalid notification type."


def parse_event_type(
    value: EventType | str | None,
) -> Tuple[Optional[EventType], Optional[str]]:
    if value is None:
        return EventType.GENERAL, None
    try:
        return EventType(value), None
    except ValueError:
        return None, "Invalid event type."
