"""
===============================================================================
USE CASE: List Notes
===============================================================================

Class:
    ListNotesUseCase

Responsibilities:
    - Traducir filtros a BoardQuery (policy primero; FORBIDDEN sin tocar storage).
    - Delegar el listado al repositorio (orden: updated_at DESC).

Collaborators:
    - board_query.build_board_query
    - NoteRepository.list_notes
===============================================================================
"""

from __future__ import annotations

from typing import Final

from ....crosscutting.metrics import record_policy_denial
from ....domain.repositories import NoteRepository
from ....domain.visibility_policy import BoardActor, PolicyMode
from ..board_query import ListFilters, build_board_query
from ..board_results import BoardErrorCode, NoteListResult

_RESOURCE_NAME: Final[str] = "Note"


class ListNotesUseCase:
    def __init__(
        self,
        note_repository: NoteRepository,
        *,
        mode: PolicyMode = PolicyMode.STRICT,
    ) -> None:
        self._notes = note_repository
        self._mode = mode

    def execute(
        self, actor: BoardActor | None, filters: ListFilters | None = None
    ) -> NoteListResult:
        query, error = build_board_query(
            actor,
            filters or ListFilters(),
            mode=self._mode,
            with_dates=False,
            resource=_RESOURCE_NAME,
        )
        if error is not None:
            if error.code == BoardErrorCode.FORBIDDEN:
                record_policy_denial("note.list")
            return NoteListResult(notes=[], error=error)

        return NoteListResult(notes=self._notes.list_notes(query))
