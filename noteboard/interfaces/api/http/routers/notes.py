"""
===============================================================================
TARJETA CRC — noteboard/interfaces/api/http/routers/notes.py
===============================================================================

Class/Module:
    Notes Router

Responsibilities:
    - Exponer endpoints HTTP de Notas y Comentarios.
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir BoardError -> RFC7807.
    - Mapear entidades -> DTOs camelCase.

Collaborators:
    - application.usecases.notes
    - container (factories DI)
    - dependencies.get_current_actor / parse_resource_id
    - error_mapping.raise_board_error
    - schemas.notes

Patterns:
    - Controller / Router
    - Adapter (HTTP -> UseCase)
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from .....application.usecases import (
    AddCommentUseCase,
    CreateNoteInput,
    CreateNoteUseCase,
    DeleteNoteUseCase,
    GetNoteUseCase,
    ListFilters,
    ListNotesUseCase,
    UpdateNoteInput,
    UpdateNoteUseCase,
)
from .....container import (
    get_add_comment_use_case,
    get_create_note_use_case,
    get_delete_note_use_case,
    get_get_note_use_case,
    get_list_notes_use_case,
    get_update_note_use_case,
)
from .....crosscutting.error_responses import internal_error
from .....domain.entities import Comment, Note
from .....domain.visibility_policy import BoardActor
from ..dependencies import get_current_actor, parse_resource_id
from ..error_mapping import raise_board_error
from ..schemas.common import DeleteRes
from ..schemas.notes import (
    AddCommentReq,
    CommentRes,
    CreateNoteReq,
    NoteRes,
    NotesListRes,
    UpdateNoteReq,
    VersionEntryRes,
)

router = APIRouter()

_RESOURCE = "Note"


# =============================================================================
# Mapping
# =============================================================================


def _to_comment_res(comment: Comment) -> CommentRes:
    return CommentRes(
        id=comment.id,
        content=comment.content,
        author_id=comment.author_id,
        author_name=comment.author_name,
        created_at=comment.created_at,
    )


def _to_note_res(note: Note) -> NoteRes:
    return NoteRes(
        id=note.id,
        title=note.title,
        content=note.content,
        author=note.author_id,
        author_name=note.author_name,
        team=note.team.value,
        tags=list(note.tags),
        version_history=[
            VersionEntryRes(
                content=v.content,
                edited_at=v.edited_at,
                editor_id=v.editor_id,
                editor_name=v.editor_name,
            )
            for v in note.version_history
        ],
        comments=[_to_comment_res(c) for c in note.comments],
        created_at=note.created_at,
        updated_at=note.updated_at,
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/notes", response_model=NotesListRes, tags=["notes"])
def list_notes(
    team_view: str | None = Query(None, alias="teamView"),
    search: str | None = Query(None),
    tag: str | None = Query(None),
    use_case: ListNotesUseCase = Depends(get_list_notes_use_case),
    actor: BoardActor = Depends(get_current_actor),
):
    result = use_case.execute(
        actor, ListFilters(team_view=team_view, search=search, tag=tag)
    )
    if result.error is not None:
        raise_board_error(result.error)
    return NotesListRes(notes=[_to_note_res(n) for n in result.notes])


@router.post("/notes", response_model=NoteRes, status_code=201, tags=["notes"])
def create_note(
    req: CreateNoteReq,
    use_case: CreateNoteUseCase = Depends(get_create_note_use_case),
    actor: BoardActor = Depends(get_current_actor),
):
    result = use_case.execute(
        CreateNoteInput(
            title=req.title,
            content=req.content,
            team=req.team,
            tags=req.tags,
            actor=actor,
        )
    )
    if result.error is not None:
        raise_board_error(result.error)
    if result.note is None:
        raise internal_error("Note creation returned no result.")
    return _to_note_res(result.note)


@router.get("/notes/{note_id}", response_model=NoteRes, tags=["notes"])
def get_note(
    note_id: str,
    use_case: GetNoteUseCase = Depends(get_get_note_use_case),
    actor: BoardActor = Depends(get_current_actor),
):
    parsed_id = parse_resource_id(note_id, _RESOURCE)
    result = use_case.execute(parsed_id, actor)
    if result.error is not None:
        raise_board_error(result.error, resource_id=parsed_id)
    return _to_note_res(result.note)


@router.put("/notes/{note_id}", response_model=NoteRes, tags=["notes"])
def update_note(
    note_id: str,
    req: UpdateNoteReq,
    use_case: UpdateNoteUseCase = Depends(get_update_note_use_case),
    actor: BoardActor = Depends(get_current_actor),
):
    parsed_id = parse_resource_id(note_id, _RESOURCE)
    result = use_case.execute(
        parsed_id,
        actor,
        UpdateNoteInput(
            title=req.title,
            content=req.content,
            team=req.team,
            tags=req.tags,
        ),
    )
    if result.error is not None:
        raise_board_error(result.error, resource_id=parsed_id)
    return _to_note_res(result.note)


@router.delete("/notes/{note_id}", response_model=DeleteRes, tags=["notes"])
def delete_note(
    note_id: str,
    use_case: DeleteNoteUseCase = Depends(get_delete_note_use_case),
    actor: BoardActor = Depends(get_current_actor),
):
    parsed_id = parse_resource_id(note_id, _RESOURCE)
    result = use_case.execute(parsed_id, actor)
    if result.error is not None:
        raise_board_error(result.error, resource_id=parsed_id)
    return DeleteRes(id=parsed_id, deleted=result.deleted)


@router.post(
    "/notes/{note_id}/comments",
    response_model=CommentRes,
    status_code=201,
    tags=["notes"],
)
def add_comment(
    note_id: str,
    req: AddCommentReq,
    use_case: AddCommentUseCase = Depends(get_add_comment_use_case),
    actor: BoardActor = Depends(get_current_actor),
):
    parsed_id = parse_resource_id(note_id, _RESOURCE)
    result = use_case.execute(parsed_id, actor, req.content)
    if result.error is not None:
        raise_board_error(result.error, resource_id=parsed_id)
    return _to_comment_res(result.comment)
