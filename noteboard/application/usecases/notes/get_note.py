"""
===============================================================================
USE CASE: Get Note
===============================================================================

Class:
    GetNoteUseCase

Responsibilities:
    - Cargar una nota por id (NOT_FOUND si no existe).
    - Aplicar can_access(READ) con el modo configurado (FORBIDDEN si no).

Collaborators:
    - NoteRepository.get_note
    - visibility_policy.can_access
===============================================================================
"""

from __future__ import annotations

from typing import Final
from uuid import UUID

from ....crosscutting.metrics import record_policy_denial
from ....domain.repositories import NoteRepository
from ....domain.visibility_policy import (
    AccessAction,
    BoardActor,
    PolicyMode,
    can_access,
)
from ..board_results import NoteResult, forbidden_error, not_found_error

_RESOURCE_NAME: Final[str] = "Note"


class GetNoteUseCase:
    """Use Case (Query): lee una nota respetando la policy de lectura."""

    def __init__(
        self,
        note_repository: NoteRepository,
        *,
        mode: PolicyMode = PolicyMode.STRICT,
    ) -> None:
        self._notes = note_repository
        self._mode = mode

    def execute(self, note_id: UUID, actor: BoardActor | None) -> NoteResult:
        note = self._notes.get_note(note_id)
        if note is None:
            return NoteResult(error=not_found_error(_RESOURCE_NAME))

        if not can_access(actor, note, AccessAction.READ, mode=self._mode):
            record_policy_denial("note.read")
            return NoteResult(
                error=forbidden_error("You cannot view this note.", _RESOURCE_NAME)
            )

        return NoteResult(note=note)
