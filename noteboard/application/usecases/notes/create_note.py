"""
===============================================================================
USE CASE: Create Note
===============================================================================

Business Goal:
    Crear una nota en un equipo permitido para el actor, dejando registrado el
    contenido inicial como primera entrada del historial de versiones.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateNoteUseCase

Responsibilities:
    - Rechazar Viewer (no escribe).
    - Validar equipo (catálogo + permiso de autoría) y campos requeridos.
    - Normalizar tags.
    - Persistir y devolver NoteResult.

Collaborators:
    - NoteRepository.create_note(note) -> Note
    - visibility_policy.can_create_in
    - board_results (NoteResult / BoardError)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Final, Iterable, List
from uuid import uuid4

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_policy_denial
from ....domain.entities import Note, VersionEntry
from ....domain.repositories import NoteRepository
from ....domain.visibility_policy import BoardActor, can_create_in, parse_team
from ....identity.users import UserRole
from ..board_results import (
    NoteResult,
    forbidden_error,
    validation_error,
)

_RESOURCE_NAME: Final[str] = "Note"


def normalize_tags(tags: Iterable[str] | None) -> List[str]:
    """Trim, descarta vacíos y duplicados conservando el primer orden visto."""
    result: List[str] = []
    for raw in tags or []:
        tag = (raw or "").strip()
        if tag and tag not in result:
            result.append(tag)
    return result


@dataclass(frozen=True)
class CreateNoteInput:
    """DTO de entrada (team llega crudo: se valida acá, no en HTTP)."""

    title: str | None
    content: str | None
    team: str | None
    tags: List[str] | None = None
    actor: BoardActor | None = None


class CreateNoteUseCase:
    """Use Case (Command): crea una nota con su versión inicial."""

    def __init__(self, note_repository: NoteRepository) -> None:
        self._notes = note_repository

    def execute(self, input_data: CreateNoteInput) -> NoteResult:
        actor = input_data.actor

        # ---------------------------------------------------------------------
        # 1) Viewer (o actor ausente) no crea.
        # ---------------------------------------------------------------------
        if actor is None or actor.role in (None, UserRole.VIEWER):
            return self._forbidden("Viewers cannot create notes.")

        # ---------------------------------------------------------------------
        # 2) Equipo: catálogo y permiso de autoría.
        # ---------------------------------------------------------------------
        team = parse_team(input_data.team)
        if team is None:
            return self._validation_error("Invalid or missing team.")
        if not can_create_in(actor, team):
            return self._forbidden("You can only create notes for your team or Geral.")

        # ---------------------------------------------------------------------
        # 3) Campos requeridos.
        # ---------------------------------------------------------------------
        title = (input_data.title or "").strip()
        content = input_data.content or ""
        if not title or not content.strip():
            return self._validation_error("Title and content are required.")

        # ---------------------------------------------------------------------
        # 4) Construir agregado (historial arranca con el contenido inicial).
        # ---------------------------------------------------------------------
        now = datetime.now(timezone.utc)
        note = Note(
            id=uuid4(),
            title=title,
            content=content,
            author_id=actor.user_id,
            author_name=actor.name,
            team=team,
            tags=normalize_tags(input_data.tags),
            version_history=[
                VersionEntry(
                    content=content,
                    edited_at=now,
                    editor_id=actor.user_id,
                    editor_name=actor.name,
                )
            ],
            comments=[],
            created_at=now,
            updated_at=now,
        )

        # ---------------------------------------------------------------------
        # 5) Persistir.
        # ---------------------------------------------------------------------
        created = self._notes.create_note(note)
        logger.info(
            "Nota creada",
            extra={"note_id": str(created.id), "team": created.team.value},
        )
        return NoteResult(note=created)

    @staticmethod
    def _forbidden(message: str) -> NoteResult:
        record_policy_denial("note.create")
        return NoteResult(error=forbidden_error(message, _RESOURCE_NAME))

    @staticmethod
    def _validation_error(message: str) -> NoteResult:
        return NoteResult(error=validation_error(message, _RESOURCE_NAME))
