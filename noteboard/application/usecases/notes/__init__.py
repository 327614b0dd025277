"""
===============================================================================
NOTE USE CASES PACKAGE (Public API / Exports)
===============================================================================

Name:
    Note Use Cases (package exports)

Business Goal:
    Punto único de importación para los casos de uso de Notas y sus DTOs.

-------------------------------------------------------------------------------
CRC CARD (Module-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    notes usecases package (__init__.py)

Responsibilities:
    - Re-exportar casos de uso (create/get/list/update/delete/comment).
    - Re-exportar DTOs de entrada y el helper de normalización de tags.
    - Definir __all__ como contrato de API pública del paquete.

Collaborators:
    - add_comment, create_note, delete_note, get_note, list_notes, update_note
===============================================================================
"""

from __future__ import annotations

# -----------------------------------------------------------------------------
# Use Cases
# -----------------------------------------------------------------------------
from .add_comment import AddCommentUseCase
from .create_note import CreateNoteInput, CreateNoteUseCase, normalize_tags
from .delete_note import DeleteNoteUseCase
from .get_note import GetNoteUseCase
from .list_notes import ListNotesUseCase
from .update_note import UpdateNoteInput, UpdateNoteUseCase

__all__ = [
    "AddCommentUseCase",
    "CreateNoteInput",
    "CreateNoteUseCase",
    "DeleteNoteUseCase",
    "GetNoteUseCase",
    "ListNotesUseCase",
    "UpdateNoteInput",
    "UpdateNoteUseCase",
    "normalize_tags",
]
