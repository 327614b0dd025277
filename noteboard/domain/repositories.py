"""
===============================================================================
TARJETA CRC — domain/repositories.py
===============================================================================

Módulo:
    Puertos de persistencia (Protocols)

Responsabilidades:
    - Definir los contratos que la capa de aplicación necesita del storage.
    - Mantener el dominio libre de SQL / drivers.

Colaboradores:
    - infrastructure.repositories.postgres.* (implementación real)
    - infrastructure.repositories.in_memory.* (tests / dev)

Notas:
    - "No existe" se expresa con None / False, nunca con excepción.
    - Los listados reciben un BoardQuery YA autorizado por la policy.
===============================================================================
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence
from uuid import UUID

from ..identity.users import User
from .entities import Comment, Event, Note, VersionEntry
from .value_objects import BoardQuery


class NoteRepository(Protocol):
    """
    R: Interface for note persistence.

    Implementations must provide:
      - Note CRUD (hard delete)
      - Append-only version history and comments
      - Listing ordered by updated_at DESC
    """

    def create_note(self, note: Note) -> Note:
        """R: Persist a new note (with its initial version entry)."""
        ...

    def get_note(self, note_id: UUID) -> Optional[Note]:
        """R: Fetch a note with its history and comments."""
        ...

    def update_note(
        self, note: Note, *, new_versions: Sequence[VersionEntry] = ()
    ) -> Optional[Note]:
        """
        R: Persist mutable fields, append `new_versions` and keep stored comments.

        `new_versions` are exactly the entries this update archived; they are
        appended after whatever history is already stored.
        Returns None if the note no longer exists.
        """
        ...

    def delete_note(self, note_id: UUID) -> bool:
        """R: Remove a note permanently."""
        ...

    def add_comment(self, note_id: UUID, comment: Comment) -> bool:
        """R: Append a comment. False if the note no longer exists."""
        ...

    def list_notes(self, query: BoardQuery) -> List[Note]:
        """R: List notes matching an authorized query."""
        ...

    def ping(self) -> bool:
        """R: Storage health check."""
        ...


class EventRepository(Protocol):
    """
    R: Interface for calendar event persistence.

    Listing order: event_date ASC, event_time ASC (missing time first).
    """

    def create_event(self, event: Event) -> Event:
        """R: Persist a new event."""
        ...

    def get_event(self, event_id: UUID) -> Optional[Event]:
        """R: Fetch an event by id."""
        ...

    def update_event(self, event: Event) -> Optional[Event]:
        """R: Persist mutable fields. None if the event no longer exists."""
        ...

    def delete_event(self, event_id: UUID) -> bool:
        """R: Remove an event permanently."""
        ...

    def list_events(self, query: BoardQuery) -> List[Event]:
        """R: List events matching an authorized query."""
        ...


class UserRepository(Protocol):
    """R: Interface for user accounts (authentication)."""

    def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        ...

    def create_user(self, user: User) -> User:
        ...

    def update_user_password(
        self, user_id: UUID, password_hash: str
    ) -> Optional[User]:
        ...

    def list_users(self, *, limit: int = 200, offset: int = 0) -> List[User]:
        ...
