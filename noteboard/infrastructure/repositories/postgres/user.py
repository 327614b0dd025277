"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
- Cuentas del tablero en PostgreSQL: lookup por email/id, alta,
  cambio de password y listado para administración.
- Mapear filas -> `User`; un rol fuera de catálogo es dato corrupto.

Collaborators:
- identity.users.User / UserRole
- crosscutting.exceptions.DatabaseError
- Tabla: users (uq_users_email)

Notes:
- El email llega normalizado desde identity.users.normalize_email.
- Email duplicado -> ValueError (mismo contrato que el repo in-memory);
  la capa HTTP lo traduce a 409.
============================================================
"""

from __future__ import annotations

from typing import Iterable, List, Optional
from uuid import UUID

from psycopg import errors as pg_errors
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....identity.users import User, UserRole


class PostgresUserRepository:
    """R: Implementación PostgreSQL del repositorio de usuarios."""

    _SELECT_COLUMNS = "id, email, name, password_hash, role, is_active, created_at"

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    @staticmethod
    def _row_to_user(row: tuple) -> User:
        user_id, email, name, password_hash, role, is_active, created_at = row
        try:
            parsed_role = UserRole(role)
        except ValueError as exc:
            raise DatabaseError(f"Unknown role stored for user {user_id}: {role}") from exc
        return User(
            id=user_id,
            email=email,
            name=name,
            password_hash=password_hash,
            role=parsed_role,
            is_active=is_active,
            created_at=created_at,
        )

    def _query(
        self,
        query: str,
        params: Iterable[object],
        *,
        context_msg: str,
        extra: dict,
    ) -> list[tuple]:
        try:
            with self._get_pool().connection() as conn:
                cursor = conn.execute(query, tuple(params))
                return cursor.fetchall() if cursor.description else []
        except pg_errors.UniqueViolation as exc:
            raise ValueError(f"Email already exists: {extra.get('email')}") from exc
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc

    def _one(self, query: str, params: Iterable[object], **kwargs) -> Optional[User]:
        rows = self._query(query, params, **kwargs)
        return self._row_to_user(rows[0]) if rows else None

    # =========================================================
    # Lookups
    # =========================================================
    def get_user_by_email(self, email: str) -> Optional[User]:
        return self._one(
            f"SELECT {self._SELECT_COLUMNS} FROM users WHERE email = %s",
            (email,),
            context_msg="PostgresUserRepository: lookup by email failed",
            extra={},
        )

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        return self._one(
            f"SELECT {self._SELECT_COLUMNS} FROM users WHERE id = %s",
            (user_id,),
            context_msg="PostgresUserRepository: lookup by id failed",
            extra={"user_id": str(user_id)},
        )

    def list_users(self, *, limit: int = 200, offset: int = 0) -> List[User]:
        if limit <= 0:
            return []
        rows = self._query(
            f"""
                SELECT {self._SELECT_COLUMNS}
                FROM users
                ORDER BY created_at DESC, id DESC
                LIMIT %s OFFSET %s
            """,
            (limit, max(offset, 0)),
            context_msg="PostgresUserRepository: list failed",
            extra={"limit": limit, "offset": offset},
        )
        return [self._row_to_user(r) for r in rows]

    # =========================================================
    # Writes
    # =========================================================
    def create_user(self, user: User) -> User:
        created = self._one(
            f"""
                INSERT INTO users (id, email, name, password_hash, role, is_active)
                VALUES (%s, %s, %s, %s, %s, %s)
                RETURNING {self._SELECT_COLUMNS}
            """,
            (
                user.id,
                user.email,
                user.name,
                user.password_hash,
                user.role.value,
                user.is_active,
            ),
            context_msg="PostgresUserRepository: Failed to create user",
            extra={"user_id": str(user.id), "email": user.email},
        )
        if created is None:  # pragma: no cover
            raise DatabaseError("Unexpected: RETURNING clause returned no rows")
        return created

    def update_user_password(self, user_id: UUID, password_hash: str) -> Optional[User]:
        return self._one(
            f"""
                UPDATE users SET password_hash = %s
                WHERE id = %s
                RETURNING {self._SELECT_COLUMNS}
            """,
            (password_hash, user_id),
            context_msg="PostgresUserRepository: Failed to update password",
            extra={"user_id": str(user_id)},
        )
