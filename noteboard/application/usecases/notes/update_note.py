"""
===============================================================================
USE CASE: Update Note
===============================================================================

Name:
    Update Note (partial update + version history)

Business Goal:
    Aplicar un patch parcial a una nota garantizando que:
      - solo un Admin cambia el equipo (si otro rol lo intenta, se rechaza TODO
        el patch, sin aplicar ningún otro campo)
      - cada cambio real de contenido archiva el contenido previo en el historial
      - los campos ausentes quedan como estaban

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    UpdateNoteUseCase

Responsibilities:
    - Cargar nota (NOT_FOUND), autorizar Update (FORBIDDEN).
    - Chequear cambio de equipo ANTES de tocar contenido/campos.
    - Validar el patch completo antes de mutar.
    - Persistir y devolver NoteResult.

Collaborators:
    - NoteRepository.get_note / update_note
    - visibility_policy.can_access / can_retag / parse_team
    - Note.change_content (invariante de historial)

Notas:
    - Concurrencia: last-write-wins. El snapshot del historial se calcula con
      el valor leído en el paso 1.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Final, List
from uuid import UUID

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_policy_denial
from ....domain.repositories import NoteRepository
from ....domain.visibility_policy import (
    AccessAction,
    BoardActor,
    can_access,
    can_retag,
    parse_team,
)
from ..board_results import (
    NoteResult,
    forbidden_error,
    not_found_error,
    validation_error,
)
from .create_note import normalize_tags

_RESOURCE_NAME: Final[str] = "Note"


@dataclass(frozen=True)
class UpdateNoteInput:
    """Patch parcial: None => campo ausente (no se toca)."""

    title: str | None = None
    content: str | None = None
    team: str | None = None
    tags: List[str] | None = None


class UpdateNoteUseCase:
    """Use Case (Command): patch parcial de una nota."""

    def __init__(self, note_repository: NoteRepository) -> None:
        self._notes = note_repository

    def execute(
        self,
        note_id: UUID,
        actor: BoardActor | None,
        patch: UpdateNoteInput,
    ) -> NoteResult:
        # ---------------------------------------------------------------------
        # 1) Cargar nota.
        # ---------------------------------------------------------------------
        note = self._notes.get_note(note_id)
        if note is None:
            return self._not_found()

        # ---------------------------------------------------------------------
        # 2) Autorización de Update.
        # ---------------------------------------------------------------------
        if not can_access(actor, note, AccessAction.UPDATE):
            return self._forbidden("You cannot edit this note.")

        # ---------------------------------------------------------------------
        # 3) Cambio de equipo: todo o nada.
        # ---------------------------------------------------------------------
        new_team = None
        if patch.team is not None and parse_team(patch.team) != note.team:
            if not can_retag(actor):
                return self._forbidden("Only an Admin can change the team.")
            new_team = parse_team(patch.team)
            if new_team is None:
                return self._validation_error("Invalid team.")

        # ---------------------------------------------------------------------
        # 4) Validar el resto del patch antes de mutar.
        # ---------------------------------------------------------------------
        title = patch.title.strip() if patch.title is not None else None
        if title is not None and not title:
            return self._validation_error("Title cannot be empty.")

        # ---------------------------------------------------------------------
        # 5) Aplicar (historial antes de sobrescribir contenido).
        # ---------------------------------------------------------------------
        now = datetime.now(timezone.utc)
        if new_team is not None:
            note.team = new_team
        archived = len(note.version_history)
        if patch.content is not None:
            note.change_content(
                patch.content,
                editor_id=actor.user_id,
                editor_name=actor.name,
                at=now,
            )
        if title is not None:
            note.title = title
        if patch.tags is not None:
            note.tags = normalize_tags(patch.tags)
        note.touch(now)

        # ---------------------------------------------------------------------
        # 6) Persistir.
        # ---------------------------------------------------------------------
        updated = self._notes.update_note(
            note, new_versions=note.version_history[archived:]
        )
        if updated is None:
            # Race condition: puede desaparecer entre read y write.
            return self._not_found()

        logger.info(
            "Nota actualizada",
            extra={
                "note_id": str(note_id),
                "versions": len(updated.version_history),
            },
        )
        return NoteResult(note=updated)

    @staticmethod
    def _not_found() -> NoteResult:
        return NoteResult(error=not_found_error(_RESOURCE_NAME))

    @staticmethod
    def _forbidden(message: str) -> NoteResult:
        record_policy_denial("note.update")
        return NoteResult(error=forbidden_error(message, _RESOURCE_NAME))

    @staticmethod
    def _validation_error(message: str) -> NoteResult:
        return NoteResult(error=validation_error(message, _RESOURCE_NAME))
