"""
PostgreSQL Repository Implementations.

Raw parameterised SQL over a psycopg connection pool.
"""

from .event import PostgresEventRepository
from .note import PostgresNoteRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresEventRepository",
    "PostgresNoteRepository",
    "PostgresUserRepository",
]
