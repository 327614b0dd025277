"""
===============================================================================
TARJETA CRC — schemas/notes.py
===============================================================================

Módulo:
    Schemas HTTP para Notas y Comentarios

Responsabilidades:
    - DTOs de request/response (camelCase en el cable).
    - Límites de tamaño desde settings (título, contenido, tags, comentario).

Colaboradores:
    - crosscutting.config.get_settings (límites)
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from .....crosscutting.config import get_settings
from .common import CamelModel

_settings = get_settings()


def _check_tags(tags: list[str] | None) -> list[str] | None:
    if tags is None:
        return None
    for tag in tags:
        if len(tag) > _settings.max_tag_chars:
            raise ValueError(
                f"tag exceeds {_settings.max_tag_chars} characters: {tag[:20]}"
            )
    return tags


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateNoteReq(CamelModel):
    """Request para crear nota (title/content/team se validan en el caso de uso)."""

    title: str | None = Field(default=None, max_length=_settings.max_title_chars)
    content: str | None = Field(default=None, max_length=_settings.max_content_chars)
    team: str | None = Field(default=None, description="Geral | Support TI | Sistemas MV")
    tags: list[str] | None = Field(default=None, max_length=_settings.max_tags)

    @field_validator("tags")
    @classmethod
    def tags_within_limits(cls, v: list[str] | None) -> list[str] | None:
        return _check_tags(v)


class UpdateNoteReq(CamelModel):
    """Patch parcial: campos ausentes no se tocan."""

    title: str | None = Field(default=None, max_length=_settings.max_title_chars)
    content: str | None = Field(default=None, max_length=_settings.max_content_chars)
    team: str | None = None
    tags: list[str] | None = Field(default=None, max_length=_settings.max_tags)

    @field_validator("tags")
    @classmethod
    def tags_within_limits(cls, v: list[str] | None) -> list[str] | None:
        return _check_tags(v)


class AddCommentReq(CamelModel):
    content: str | None = Field(default=None, max_length=_settings.max_comment_chars)


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class VersionEntryRes(CamelModel):
    content: str
    edited_at: datetime
    editor_id: UUID
    editor_name: str


class CommentRes(CamelModel):
    id: UUID
    content: str
    author_id: UUID
    author_name: str
    created_at: datetime


class NoteRes(CamelModel):
    id: UUID
    title: str
    content: str
    author: UUID
    author_name: str
    team: str
    tags: list[str] = Field(default_factory=list)
    version_history: list[VersionEntryRes] = Field(default_factory=list)
    comments: list[CommentRes] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class NotesListRes(CamelModel):
    notes: list[NoteRes]
