"""
===============================================================================
TARJETA CRC — noteboard/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer repositorios y casos de uso siguiendo DIP.
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache) para los repositorios.
  - Centralizar decisiones runtime basadas en Settings:
      * APP_ENV de test => repositorios in-memory
      * VISIBILITY_MODE => modo de la policy en lecturas/listados

Colaboradores:
  - crosscutting.config.get_settings
  - domain.repositories.* (puertos)
  - infrastructure.repositories.* (implementaciones)
  - application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO depende de FastAPI (solo expone factories).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    AddCommentUseCase,
    CreateEventUseCase,
    CreateNoteUseCase,
    DeleteEventUseCase,
    DeleteNoteUseCase,
    GetEventUseCase,
    GetNoteUseCase,
    ListEventsUseCase,
    ListNotesUseCase,
    UpdateEventUseCase,
    UpdateNoteUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import EventRepository, NoteRepository, UserRepository
from .domain.visibility_policy import PolicyMode
from .infrastructure.repositories import (
    InMemoryEventRepository,
    InMemoryNoteRepository,
    InMemoryUserRepository,
    PostgresEventRepository,
    PostgresNoteRepository,
    PostgresUserRepository,
)

# =============================================================================
# Helpers internos
# =============================================================================


def _is_test_env() -> bool:
    """app_env ∈ {"test", "testing", "ci"} => in-memory adapters."""
    return get_settings().is_test()


def get_policy_mode() -> PolicyMode:
    """Modo global de la visibility policy (constante por proceso)."""
    return PolicyMode(get_settings().visibility_mode)


# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_note_repository() -> NoteRepository:
    """Repositorio de notas (in-memory en test; Postgres en runtime)."""
    if _is_test_env():
        return InMemoryNoteRepository()
    return PostgresNoteRepository()


@lru_cache(maxsize=1)
def get_event_repository() -> EventRepository:
    """Repositorio de eventos (in-memory en test; Postgres en runtime)."""
    if _is_test_env():
        return InMemoryEventRepository()
    return PostgresEventRepository()


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Repositorio de usuarios (in-memory en test; Postgres en runtime)."""
    if _is_test_env():
        return InMemoryUserRepository()
    return PostgresUserRepository()


# =============================================================================
# Casos de uso: Notas
# =============================================================================


def get_create_note_use_case() -> CreateNoteUseCase:
    return CreateNoteUseCase(note_repository=get_note_repository())


def get_get_note_use_case() -> GetNoteUseCase:
    return GetNoteUseCase(
        note_repository=get_note_repository(),
        mode=get_policy_mode(),
    )


def get_list_notes_use_case() -> ListNotesUseCase:
    return ListNotesUseCase(
        note_repository=get_note_repository(),
        mode=get_policy_mode(),
    )


def get_update_note_use_case() -> UpdateNoteUseCase:
    return UpdateNoteUseCase(note_repository=get_note_repository())


def get_delete_note_use_case() -> DeleteNoteUseCase:
    return DeleteNoteUseCase(note_repository=get_note_repository())


def get_add_comment_use_case() -> AddCommentUseCase:
    return AddCommentUseCase(note_repository=get_note_repository())


# =============================================================================
# Casos de uso: Eventos
# =============================================================================


def get_create_event_use_case() -> CreateEventUseCase:
    return CreateEventUseCase(event_repository=get_event_repository())


def get_get_event_use_case() -> GetEventUseCase:
    return GetEventUseCase(
        event_repository=get_event_repository(),
        mode=get_policy_mode(),
    )


def get_list_events_use_case() -> ListEventsUseCase:
    return ListEventsUseCase(
        event_repository=get_event_repository(),
        mode=get_policy_mode(),
    )


def get_update_event_use_case() -> UpdateEventUseCase:
    return UpdateEventUseCase(event_repository=get_event_repository())


def get_delete_event_use_case() -> DeleteEventUseCase:
    return DeleteEventUseCase(event_repository=get_event_repository())
