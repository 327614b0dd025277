"""
===============================================================================
USE CASE: Add Comment
===============================================================================

Business Goal:
    Agregar un comentario (append-only) a una nota, con una policy más laxa
    que la de edición: los roles de equipo comentan en cualquier nota.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    AddCommentUseCase

Responsibilities:
    - Validar contenido ANTES de cualquier lectura (vacío => VALIDATION_ERROR,
      aunque la nota no exista o el actor no tenga permiso).
    - NOT_FOUND / FORBIDDEN (can_comment).
    - Persistir y devolver el comentario creado.

Collaborators:
    - NoteRepository.get_note / add_comment
    - visibility_policy.can_comment
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Final
from uuid import UUID, uuid4

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_policy_denial
from ....domain.entities import Comment
from ....domain.repositories import NoteRepository
from ....domain.visibility_policy import BoardActor, can_comment
from ..board_results import (
    CommentResult,
    forbidden_error,
    not_found_error,
    validation_error,
)

_RESOURCE_NAME: Final[str] = "Note"


class AddCommentUseCase:
    def __init__(self, note_repository: NoteRepository) -> None:
        self._notes = note_repository

    def execute(
        self,
        note_id: UUID,
        actor: BoardActor | None,
        content: str | None,
    ) -> CommentResult:
        # 1) Contenido (primero, independiente de existencia/permisos).
        text = (content or "").strip()
        if not text:
            return CommentResult(
                error=validation_error("Comment content is required.", "Comment")
            )

        # 2) Nota.
        note = self._notes.get_note(note_id)
        if note is None:
            return CommentResult(error=not_found_error(_RESOURCE_NAME))

        # 3) Policy de comentarios.
        if actor is None or not can_comment(actor, note):
            record_policy_denial("note.comment")
            return CommentResult(
                error=forbidden_error(
                    "You cannot comment on this note.", _RESOURCE_NAME
                )
            )

        # 4) Append + persistir.
        comment = Comment(
            id=uuid4(),
            content=text,
            author_id=actor.user_id,
            author_name=actor.name,
            created_at=datetime.now(timezone.utc),
        )
        if not self._notes.add_comment(note_id, comment):
            return CommentResult(error=not_found_error(_RESOURCE_NAME))

        logger.info(
            "Comentario agregado",
            extra={"note_id": str(note_id), "comment_id": str(comment.id)},
        )
        return CommentResult(comment=comment)
