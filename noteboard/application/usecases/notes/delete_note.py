"""
===============================================================================
USE CASE: Delete Note
===============================================================================

Class:
    DeleteNoteUseCase

Responsibilities:
    - NOT_FOUND si no existe; FORBIDDEN si can_access(DELETE) es False.
    - Borrado definitivo (sin soft-delete ni recuperación).

Collaborators:
    - NoteRepository.get_note / delete_note
    - visibility_policy.can_access
===============================================================================
"""

from __future__ import annotations

from typing import Final
from uuid import UUID

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_policy_denial
from ....domain.repositories import NoteRepository
from ....domain.visibility_policy import AccessAction, BoardActor, can_access
from ..board_results import DeleteResult, forbidden_error, not_found_error

_RESOURCE_NAME: Final[str] = "Note"


class DeleteNoteUseCase:
    def __init__(self, note_repository: NoteRepository) -> None:
        self._notes = note_repository

    def execute(self, note_id: UUID, actor: BoardActor | None) -> DeleteResult:
        note = self._notes.get_note(note_id)
        if note is None:
            return DeleteResult(deleted=False, error=not_found_error(_RESOURCE_NAME))

        if not can_access(actor, note, AccessAction.DELETE):
            record_policy_denial("note.delete")
            return DeleteResult(
                deleted=False,
                error=forbidden_error("You cannot delete this note.", _RESOURCE_NAME),
            )

        if not self._notes.delete_note(note_id):
            return DeleteResult(deleted=False, error=not_found_error(_RESOURCE_NAME))

        logger.info("Nota eliminada", extra={"note_id": str(note_id)})
        return DeleteResult(deleted=True)
