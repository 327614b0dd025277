"""
============================================================
TARJETA CRC
============================================================
Class: noteboard.infrastructure.repositories (Package exports)

Responsibilities:
- Exponer implementaciones concretas de repositorios (Postgres e InMemory)
  en un único punto de importación.

Collaborators:
- Repositorios Postgres (SQL crudo)
- Repositorios InMemory (tests / entornos volátiles)
============================================================
"""

# ---------------------------
# In-memory implementations
# No persisten datos tras reiniciar la app.
# ---------------------------
from .in_memory import (
    InMemoryEventRepository,
    InMemoryNoteRepository,
    InMemoryUserRepository,
)

# ---------------------------
# Postgres implementations
# ---------------------------
from .postgres import (
    PostgresEventRepository,
    PostgresNoteRepository,
    PostgresUserRepository,
)

__all__ = [
    # Postgres
    "PostgresNoteRepository",
    "PostgresEventRepository",
    "PostgresUserRepository",
    # In-memory
    "InMemoryNoteRepository",
    "InMemoryEventRepository",
    "InMemoryUserRepository",
]
