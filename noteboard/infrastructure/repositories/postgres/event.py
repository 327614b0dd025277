"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/event.py
============================================================
Class: PostgresEventRepository

Responsibilities:
- CRUD de eventos de calendario en PostgreSQL (SQL crudo).
- Listar con el predicado de BoardQuery (equipos, búsqueda, rango de fechas).
- Orden: event_date ASC, event_time ASC (sin hora primero).

Collaborators:
- domain.entities.Event / Team / NotificationType / EventType
- board_filters.board_where
- crosscutting.exceptions.DatabaseError
- Tabla: events
============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional
from uuid import UUID

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import Event, EventType, NotificationType, Team
from ....domain.value_objects import BoardQuery
from .board_filters import board_where


class PostgresEventRepository:
    """R: Implementación PostgreSQL del repositorio de Eventos."""

    _SELECT_COLUMNS = """
        id, title, description, event_date, event_time, notification_type,
        event_type, author_id, author_name, team, created_at, updated_at
    """

    _ORDER_BY = "ORDER BY event_date ASC, event_time ASC NULLS FIRST, id ASC"

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    # =========================================================
    # Mapping
    # =========================================================
    @staticmethod
    def _row_to_event(row: tuple) -> Event:
        (
            event_id,
            title,
            description,
            event_date,
            event_time,
            notification_type,
            event_type,
            author_id,
            author_name,
            team,
            created_at,
            updated_at,
        ) = row
        return Event(
            id=event_id,
            title=title,
            description=description,
            event_date=event_date,
            event_time=event_time,
            notification_type=NotificationType(notification_type),
            event_type=EventType(event_type),
            author_id=author_id,
            author_name=author_name,
            team=Team(team),
            created_at=created_at,
            updated_at=updated_at,
        )

    # =========================================================
    # Helpers de ejecución
    # =========================================================
    def _fetchall(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> list[tuple]:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc

    def _fetchone(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc

    # =========================================================
    # Public API
    # =========================================================
    def create_event(self, event: Event) -> Event:
        row = self._fetchone(
            query=f"""
                INSERT INTO events (
                    id, title, description, event_date, event_time,
                    notification_type, event_type, author_id, author_name, team,
                    created_at, updated_at
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING {self._SELECT_COLUMNS}
            """,
            params=[
                event.id,
                event.title,
                event.description,
                event.event_date,
                event.event_time,
                event.notification_type.value,
                event.event_type.value,
                event.author_id,
                event.author_name,
                event.team.value,
                event.created_at,
                event.updated_at,
            ],
            context_msg="PostgresEventRepository: Failed to create event",
            extra={"event_id": str(event.id)},
        )
        if row is None:  # pragma: no cover
            raise DatabaseError("Unexpected: RETURNING clause returned no rows")
        return self._row_to_event(row)

    def get_event(self, event_id: UUID) -> Optional[Event]:
        row = self._fetchone(
            query=f"SELECT {self._SELECT_COLUMNS} FROM events WHERE id = %s",
            params=[event_id],
            context_msg="PostgresEventRepository: Failed to get event",
            extra={"event_id": str(event_id)},
        )
        return self._row_to_event(row) if row else None

    def update_event(self, event: Event) -> Optional[Event]:
        row = self._fetchone(
            query=f"""
                UPDATE events
                SET title = %s,
                    description = %s,
                    event_date = %s,
                    event_time = %s,
                    notification_type = %s,
                    event_type = %s,
                    team = %s,
                    updated_at = %s
                WHERE id = %s
                RETURNING {self._SELECT_COLUMNS}
            """,
            params=[
                event.title,
                event.description,
                event.event_date,
                event.event_time,
                event.notification_type.value,
                event.event_type.value,
                event.team.value,
                event.updated_at,
                event.id,
            ],
            context_msg="PostgresEventRepository: Failed to update event",
            extra={"event_id": str(event.id)},
        )
        return self._row_to_event(row) if row else None

    def delete_event(self, event_id: UUID) -> bool:
        row = self._fetchone(
            query="DELETE FROM events WHERE id = %s RETURNING id",
            params=[event_id],
            context_msg="PostgresEventRepository: Failed to delete event",
            extra={"event_id": str(event_id)},
        )
        return row is not None

    def list_events(self, query: BoardQuery) -> list[Event]:
        where_sql, params = board_where(
            query,
            search_columns=("title", "description", "author_name"),
            date_column="event_date",
        )
        rows = self._fetchall(
            query=f"""
                SELECT {self._SELECT_COLUMNS}
                FROM events
                {where_sql}
                {self._ORDER_BY}
            """,
            params=params,
            context_msg="PostgresEventRepository: Failed to list events",
            extra={"where_sql": where_sql},
        )
        return [self._row_to_event(r) for r in rows]
