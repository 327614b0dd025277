"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/event.py
============================================================
Class: InMemoryEventRepository

Responsibilities:
  - Almacenar eventos en memoria (tests / APP_ENV=test).
  - Evaluar BoardQuery con BoardQuery.matches_event.
  - Ordering alineado con Postgres:
      event_date ASC, event_time ASC NULLS FIRST, id ASC

Constraints / Notes:
  - Thread-safe (Lock) y copias defensivas, igual que InMemoryNoteRepository.
============================================================
"""

from __future__ import annotations

import copy
from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID

from ....domain.entities import Event
from ....domain.repositories import EventRepository
from ....domain.value_objects import BoardQuery


class InMemoryEventRepository(EventRepository):
    """Repositorio in-memory, thread-safe, para Eventos."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._events: Dict[UUID, Event] = {}

    @staticmethod
    def _sort_key(event: Event) -> tuple:
        # "" ordena antes que cualquier HH:MM (NULLS FIRST).
        return (event.event_date, event.event_time or "", str(event.id))

    def create_event(self, event: Event) -> Event:
        with self._lock:
            self._events[event.id] = copy.deepcopy(event)
            return copy.deepcopy(event)

    def get_event(self, event_id: UUID) -> Optional[Event]:
        with self._lock:
            event = self._events.get(event_id)
            return copy.deepcopy(event) if event else None

    def update_event(self, event: Event) -> Optional[Event]:
        with self._lock:
            if event.id not in self._events:
                return None
            self._events[event.id] = copy.deepcopy(event)
            return copy.deepcopy(event)

    def delete_event(self, event_id: UUID) -> bool:
        with self._lock:
            return self._events.pop(event_id, None) is not None

    def list_events(self, query: BoardQuery) -> List[Event]:
        with self._lock:
            matches = [
                copy.deepcopy(e) for e in self._events.values() if query.matches_event(e)
            ]
        return sorted(matches, key=self._sort_key)
