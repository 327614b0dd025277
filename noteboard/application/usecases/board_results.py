"""
===============================================================================
BOARD USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Board Use Case Results

Business Goal:
    Proveer modelos compartidos de resultados y errores para los casos de uso
    de Notas y Eventos, con un contrato estable y explícito para:
      - validaciones (entrada inválida)
      - autorización (policy denegó)
      - recursos no encontrados

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de lanzar excepciones
      "hacia afuera"; la capa HTTP traduce a RFC7807.
    - FORBIDDEN y NOT_FOUND nunca se mezclan: el cliente distingue "no existe"
      de "existe pero no podés tocarlo".

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    board_results models (module)

Responsibilities:
    - BoardErrorCode / BoardError.
    - Resultados: NoteResult, NoteListResult, EventResult, EventListResult,
      CommentResult, DeleteResult.
    - Builders de error consistentes (forbidden/not_found/validation_error).

Collaborators:
    - domain.entities.Note / Event / Comment
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

from ...domain.entities import Comment, Event, Note


class BoardErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: inputs inválidos, incompletos o fuera de catálogo.
      - FORBIDDEN: el actor está identificado pero la policy deniega.
      - NOT_FOUND: el id no resuelve a un recurso.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class BoardError:
    """Error de caso de uso (code + message [+ resource])."""

    code: BoardErrorCode
    message: str
    resource: str | None = None


@dataclass
class NoteResult:
    note: Note | None = None
    error: BoardError | None = None


@dataclass
class NoteListResult:
    notes: List[Note]
    error: BoardError | None = None


@dataclass
class CommentResult:
    comment: Comment | None = None
    error: BoardError | None = None


@dataclass
class EventResult:
    event: Event | None = None
    error: BoardError | None = None


@dataclass
class EventListResult:
    events: List[Event]
    error: BoardError | None = None


@dataclass
class DeleteResult:
    """Resultado de borrado definitivo (no hay soft-delete)."""

    deleted: bool
    error: BoardError | None = None


# =============================================================================
# Builders
# =============================================================================


def forbidden_error(message: str, resource: str | None = None) -> BoardError:
    return BoardError(code=BoardErrorCode.FORBIDDEN, message=message, resource=resource)


def not_found_error(resource: str, message: str | None = None) -> BoardError:
    return BoardError(
        code=BoardErrorCode.NOT_FOUND,
        message=message or f"{resource} not found.",
        resource=resource,
    )


def validation_error(message: str, resource: str | None = None) -> BoardError:
    return BoardError(
        code=BoardErrorCode.VALIDATION_ERROR, message=message, resource=resource
    )
