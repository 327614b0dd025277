"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/note.py
============================================================
Class: InMemoryNoteRepository

Responsibilities:
  - Almacenar notas en memoria (tests / APP_ENV=test).
  - Evaluar BoardQuery con BoardQuery.matches_note (misma semántica que SQL).
  - Ordering alineado con Postgres: updated_at DESC, id ASC.

Collaborators:
  - domain.entities.Note / Comment
  - domain.repositories.NoteRepository

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Copias profundas al entrar y salir: un caller puede mutar la nota que
    recibió sin alterar el "storage" hasta llamar update_note().
  - update_note agrega solo las versiones nuevas y conserva comentarios
    agregados por add_comment mientras tanto (igual que Postgres).
============================================================
"""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from ....domain.entities import Comment, Note, VersionEntry
from ....domain.repositories import NoteRepository
from ....domain.value_objects import BoardQuery

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class InMemoryNoteRepository(NoteRepository):
    """Repositorio in-memory, thread-safe, para Notas."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._notes: Dict[UUID, Note] = {}

    @staticmethod
    def _sorted(items: List[Note]) -> List[Note]:
        by_id = sorted(items, key=lambda n: str(n.id))
        return sorted(by_id, key=lambda n: n.updated_at or _EPOCH, reverse=True)

    def create_note(self, note: Note) -> Note:
        with self._lock:
            self._notes[note.id] = copy.deepcopy(note)
            return copy.deepcopy(self._notes[note.id])

    def get_note(self, note_id: UUID) -> Optional[Note]:
        with self._lock:
            note = self._notes.get(note_id)
            return copy.deepcopy(note) if note else None

    def update_note(
        self, note: Note, *, new_versions: Sequence[VersionEntry] = ()
    ) -> Optional[Note]:
        """Campos editables del caller; historial y comentarios solo crecen."""
        with self._lock:
            stored = self._notes.get(note.id)
            if stored is None:
                return None
            updated = copy.deepcopy(note)
            updated.version_history = [*stored.version_history, *new_versions]
            known = {c.id for c in stored.comments}
            updated.comments = [
                *stored.comments,
                *(copy.deepcopy(c) for c in note.comments if c.id not in known),
            ]
            self._notes[note.id] = updated
            return copy.deepcopy(updated)

    def delete_note(self, note_id: UUID) -> bool:
        with self._lock:
            return self._notes.pop(note_id, None) is not None

    def add_comment(self, note_id: UUID, comment: Comment) -> bool:
        with self._lock:
            note = self._notes.get(note_id)
            if note is None:
                return False
            note.add_comment(comment)
            return True

    def list_notes(self, query: BoardQuery) -> List[Note]:
        with self._lock:
            matches = [copy.deepcopy(n) for n in self._notes.values() if query.matches_note(n)]
        return self._sorted(matches)

    def ping(self) -> bool:
        return True
