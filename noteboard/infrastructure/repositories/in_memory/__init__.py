"""
In-Memory Repository Implementations.

For testing and APP_ENV=test. NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .event import InMemoryEventRepository
from .note import InMemoryNoteRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryNoteRepository",
    "InMemoryEventRepository",
    "InMemoryUserRepository",
]
