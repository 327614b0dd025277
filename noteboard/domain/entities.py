"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Notas / Eventos / Comentarios / Historial)

Responsabilidades:
    - Definir el modelo del tablero: Note, Event, VersionEntry, Comment.
    - Definir catálogos cerrados: Team, NotificationType, EventType.
    - Encapsular las mutaciones con invariantes (historial de versiones).

Colaboradores:
    - domain.visibility_policy: decide acceso sobre Note/Event.
    - application.usecases.*: crean y mutan entidades.
    - infrastructure.repositories.*: persisten/mapean entidades.

Invariantes:
    - version_history nunca queda vacío luego de crear una nota.
    - version_history guarda SOLO estados pasados: el contenido vigente vive en
      `content` y no se duplica en el historial.
    - VersionEntry y Comment son inmutables una vez agregados.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import UUID


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Team(str, Enum):
    """Equipo al que pertenece un recurso (un solo valor, no lista)."""

    GERAL = "Geral"
    SUPPORT_TI = "Support TI"
    SISTEMAS_MV = "Sistemas MV"


class NotificationType(str, Enum):
    """Aviso previo configurado en un evento."""

    NONE = "none"
    HOUR_BEFORE = "hourBefore"
    DAY_BEFORE = "dayBefore"


class EventType(str, Enum):
    """Tipo de evento del calendario."""

    GENERAL = "general"
    BIRTHDAY = "birthday"
    REMINDER = "reminder"


ALL_TEAMS: frozenset[Team] = frozenset(Team)


@dataclass(frozen=True, slots=True)
class VersionEntry:
    """Snapshot de un contenido previo de la nota."""

    content: str
    edited_at: datetime
    editor_id: UUID
    editor_name: str


@dataclass(frozen=True, slots=True)
class Comment:
    """Comentario sobre una nota (append-only)."""

    id: UUID
    content: str
    author_id: UUID
    author_name: str
    created_at: datetime


@dataclass
class Note:
    """
    Nota del tablero.

    `author_id` nunca cambia; `team` solo cambia por un Admin (lo decide la
    policy antes de llegar acá).
    """

    id: UUID
    title: str
    content: str
    author_id: UUID
    author_name: str
    team: Team
    tags: List[str] = field(default_factory=list)
    version_history: List[VersionEntry] = field(default_factory=list)
    comments: List[Comment] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def change_content(
        self,
        content: str,
        *,
        editor_id: UUID,
        editor_name: str,
        at: datetime | None = None,
    ) -> bool:
        """
        Reemplaza el contenido archivando el anterior.

        Retorna False (y no toca el historial) si el contenido es idéntico.
        """
        if content == self.content:
            return False
        self.version_history.append(
            VersionEntry(
                content=self.content,
                edited_at=at or _utcnow(),
                editor_id=editor_id,
                editor_name=editor_name,
            )
        )
        self.content = content
        return True

    def add_comment(self, comment: Comment) -> None:
        self.comments.append(comment)

    def touch(self, at: datetime | None = None) -> None:
        self.updated_at = at or _utcnow()


@dataclass
class Event:
    """Evento del calendario (sin historial ni comentarios)."""

    id: UUID
    title: str
    event_date: datetime
    author_id: UUID
    author_name: str
    team: Team
    description: Optional[str] = None
    event_time: Optional[str] = None
    notification_type: NotificationType = NotificationType.NONE
    event_type: EventType = EventType.GENERAL
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def touch(self, at: datetime | None = None) -> None:
        self.updated_at = at or _utcnow()
