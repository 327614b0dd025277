"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Usuarios en memoria para tests / APP_ENV=test.
  - Email único (el caller lo envía normalizado).
  - Orden de listado alineado con Postgres: created_at DESC, id DESC.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID

from ....domain.repositories import UserRepository
from ....identity.users import User

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, User] = {}

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self._users.values() if u.email == email), None)

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def create_user(self, user: User) -> User:
        """User es inmutable: se guarda tal cual (con created_at si falta)."""
        with self._lock:
            if any(u.email == user.email for u in self._users.values()):
                raise ValueError(f"Email already exists: {user.email}")
            stored = user if user.created_at else replace(
                user, created_at=datetime.now(timezone.utc)
            )
            self._users[stored.id] = stored
            return stored

    def update_user_password(self, user_id: UUID, password_hash: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            updated = replace(user, password_hash=password_hash)
            self._users[user_id] = updated
            return updated

    def list_users(self, *, limit: int = 200, offset: int = 0) -> List[User]:
        if limit <= 0:
            return []
        offset = max(offset, 0)
        with self._lock:
            users = list(self._users.values())
        by_id = sorted(users, key=lambda u: str(u.id), reverse=True)
        ordered = sorted(by_id, key=lambda u: u.created_at or _EPOCH, reverse=True)
        return ordered[offset : offset + limit]
