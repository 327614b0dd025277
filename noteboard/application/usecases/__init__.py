"""
Use Cases Layer (Business Operations)

This package exposes entry points for board business logic, organized by feature.

Structure
---------
usecases/
├── notes/           # Note CRUD, comments and version history
├── events/          # Calendar event CRUD
├── board_query.py   # List filters -> authorized BoardQuery
└── board_results.py # Shared result / error models

Usage
-----
Import from subpackages for clarity:

    from noteboard.application.usecases.notes import CreateNoteUseCase
    from noteboard.application.usecases.events import ListEventsUseCase

Or use the barrel exports from this module:

    from noteboard.application.usecases import CreateNoteUseCase, ListEventsUseCase
"""

# Shared
from .board_query import ListFilters, build_board_query
from .board_results import (
    BoardError,
    BoardErrorCode,
    CommentResult,
    DeleteResult,
    EventListResult,
    EventResult,
    NoteListResult,
    NoteResult,
)

# Events
from .events import (
    CreateEventInput,
    CreateEventUseCase,
    DeleteEventUseCase,
    GetEventUseCase,
    ListEventsUseCase,
    UpdateEventInput,
    UpdateEventUseCase,
)

# Notes
from .notes import (
    AddCommentUseCase,
    CreateNoteInput,
    CreateNoteUseCase,
    DeleteNoteUseCase,
    GetNoteUseCase,
    ListNotesUseCase,
    UpdateNoteInput,
    UpdateNoteUseCase,
)

__all__ = [
    # Shared
    "ListFilters",
    "build_board_query",
    "BoardError",
    "BoardErrorCode",
    "CommentResult",
    "DeleteResult",
    "EventListResult",
    "EventResult",
    "NoteListResult",
    "NoteResult",
    # Events
    "CreateEventInput",
    "CreateEventUseCase",
    "DeleteEventUseCase",
    "GetEventUseCase",
    "ListEventsUseCase",
    "UpdateEventInput",
    "UpdateEventUseCase",
    # Notes
    "AddCommentUseCase",
    "CreateNoteInput",
    "CreateNoteUseCase",
    "DeleteNoteUseCase",
    "GetNoteUseCase",
    "ListNotesUseCase",
    "UpdateNoteInput",
    "UpdateNoteUseCase",
]
