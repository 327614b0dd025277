"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/note.py
============================================================
Class: PostgresNoteRepository

Responsibilities:
- Persistir notas en PostgreSQL (SQL crudo) junto con su historial de
  versiones (note_versions) y comentarios (note_comments).
- Guardar nota + versiones nuevas + comentarios nuevos en UNA transacción.
- Listar con el predicado de BoardQuery y orden updated_at DESC.

Collaborators:
- domain.entities.Note / VersionEntry / Comment / Team
- board_filters.board_where
- crosscutting.exceptions.DatabaseError
- psycopg_pool.ConnectionPool
- Tablas: notes, note_versions, note_comments

Constraints / Notes:
- Sin lógica de negocio (la policy ya filtró antes de llegar acá).
- note_versions es append-only: solo se insertan las entradas que el
  agregado tiene de más respecto de lo persistido.
- Ordenamiento determinístico en listados.
============================================================
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional, Sequence
from uuid import UUID

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import Comment, Note, Team, VersionEntry
from ....domain.value_objects import BoardQuery
from .board_filters import board_where


class PostgresNoteRepository:
    """R: Implementación PostgreSQL del repositorio de Notas."""

    _SELECT_COLUMNS = """
        id, title, content, author_id, author_name, team, tags,
        created_at, updated_at
    """

    _ORDER_BY = "ORDER BY updated_at DESC, id ASC"

    _SQL_SELECT_VERSIONS = """
        SELECT note_id, content, edited_at, editor_id, editor_name
        FROM note_versions
        WHERE note_id = ANY(%s)
        ORDER BY note_id, position ASC
    """

    _SQL_SELECT_COMMENTS = """
        SELECT note_id, id, content, author_id, author_name, created_at
        FROM note_comments
        WHERE note_id = ANY(%s)
        ORDER BY note_id, created_at ASC, id ASC
    """

    _SQL_INSERT_VERSION = """
        INSERT INTO note_versions (note_id, content, edited_at, editor_id, editor_name)
        VALUES (%s, %s, %s, %s, %s)
    """

    _SQL_INSERT_COMMENT = """
        INSERT INTO note_comments (id, note_id, content, author_id, author_name, created_at)
        VALUES (%s, %s, %s, %s, %s, %s)
        ON CONFLICT (id) DO NOTHING
    """

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
    def _row_to_note(
        row: tuple,
        versions: list[VersionEntry],
        comments: list[Comment],
    ) -> Note:
        (
            note_id,
            title,
            content,
            author_id,
            author_name,
            team,
            tags,
            created_at,
            updated_at,
        ) = row
        return Note(
            id=note_id,
            title=title,
            content=content,
            author_id=author_id,
            author_name=author_name,
            team=Team(team),
            tags=list(tags or []),
            version_history=versions,
            comments=comments,
            created_at=created_at,
            updated_at=updated_at,
        )

    def _load_children(
        self, conn, note_ids: list[UUID]
    ) -> tuple[dict[UUID, list[VersionEntry]], dict[UUID, list[Comment]]]:
        versions: dict[UUID, list[VersionEntry]] = defaultdict(list)
        comments: dict[UUID, list[Comment]] = defaultdict(list)
        if not note_ids:
            return versions, comments

        for note_id, content, edited_at, editor_id, editor_name in conn.execute(
            self._SQL_SELECT_VERSIONS, (note_ids,)
        ).fetchall():
            versions[note_id].append(
                VersionEntry(
                    content=content,
                    edited_at=edited_at,
                    editor_id=editor_id,
                    editor_name=editor_name,
                )
            )

        for note_id, comment_id, content, author_id, author_name, created_at in conn.execute(
            self._SQL_SELECT_COMMENTS, (note_ids,)
        ).fetchall():
            comments[note_id].append(
                Comment(
                    id=comment_id,
                    content=content,
                    author_id=author_id,
                    author_name=author_name,
                    created_at=created_at,
                )
            )
        return versions, comments

    def _select_notes(
        self, *, where_sql: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> list[Note]:
        query = f"""
            SELECT {self._SELECT_COLUMNS}
            FROM notes
            {where_sql}
            {self._ORDER_BY}
        """
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                rows = conn.execute(query, tuple(params)).fetchall()
                versions, comments = self._load_children(conn, [r[0] for r in rows])
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc

        return [
            self._row_to_note(r, versions.get(r[0], []), comments.get(r[0], []))
            for r in rows
        ]

    @staticmethod
    def _insert_versions(conn, note: Note, entries: Sequence[VersionEntry]) -> None:
        for entry in entries:
            conn.execute(
                PostgresNoteRepository._SQL_INSERT_VERSION,
                (note.id, entry.content, entry.edited_at, entry.editor_id, entry.editor_name),
            )

    # =========================================================
    # Public API
    # =========================================================
    def create_note(self, note: Note) -> Note:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                with conn.transaction():
                    conn.execute(
                        """
                        INSERT INTO notes (
                            id, title, content, author_id, author_name, team, tags,
                            created_at, updated_at
                        )
                        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                        """,
                        (
                            note.id,
                            note.title,
                            note.content,
                            note.author_id,
                            note.author_name,
                            note.team.value,
                            list(note.tags),
                            note.created_at,
                            note.updated_at,
                        ),
                    )
                    self._insert_versions(conn, note, note.version_history)
        except Exception as exc:
            logger.exception(
                "PostgresNoteRepository: Failed to create note",
                extra={"note_id": str(note.id), "error": str(exc)},
            )
            raise DatabaseError(f"Failed to create note: {exc}") from exc

        created = self.get_note(note.id)
        if created is None:  # pragma: no cover
            raise DatabaseError("Unexpected: note not found after insert")
        return created

    def get_note(self, note_id: UUID) -> Optional[Note]:
        notes = self._select_notes(
            where_sql="WHERE id = %s",
            params=[note_id],
            context_msg="PostgresNoteRepository: Failed to get note",
            extra={"note_id": str(note_id)},
        )
        return notes[0] if notes else None

    def update_note(
        self, note: Note, *, new_versions: Sequence[VersionEntry] = ()
    ) -> Optional[Note]:
        """
        R: UPDATE + versiones nuevas + comentarios nuevos en una transacción.

        Se insertan exactamente `new_versions`: dos updates concurrentes
        archivan cada uno su propio snapshot.
        """
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                with conn.transaction():
                    row = conn.execute(
                        """
                        UPDATE notes
                        SET title = %s,
                            content = %s,
                            team = %s,
                            tags = %s,
                            updated_at = %s
                        WHERE id = %s
                        RETURNING id
                        """,
                        (
                            note.title,
                            note.content,
                            note.team.value,
                            list(note.tags),
                            note.updated_at,
                            note.id,
                        ),
                    ).fetchone()
                    if row is None:
                        return None

                    self._insert_versions(conn, note, new_versions)

                    for comment in note.comments:
                        conn.execute(
                            self._SQL_INSERT_COMMENT,
                            (
                                comment.id,
                                note.id,
                                comment.content,
                                comment.author_id,
                                comment.author_name,
                                comment.created_at,
                            ),
                        )
        except Exception as exc:
            logger.exception(
                "PostgresNoteRepository: Failed to update note",
                extra={"note_id": str(note.id), "error": str(exc)},
            )
            raise DatabaseError(f"Failed to update note: {exc}") from exc

        return self.get_note(note.id)

    def delete_note(self, note_id: UUID) -> bool:
        """R: Borrado definitivo (versiones y comentarios caen por ON DELETE CASCADE)."""
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                row = conn.execute(
                    "DELETE FROM notes WHERE id = %s RETURNING id", (note_id,)
                ).fetchone()
        except Exception as exc:
            logger.exception(
                "PostgresNoteRepository: Failed to delete note",
                extra={"note_id": str(note_id), "error": str(exc)},
            )
            raise DatabaseError(f"Failed to delete note: {exc}") from exc
        return row is not None

    def add_comment(self, note_id: UUID, comment: Comment) -> bool:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                with conn.transaction():
                    exists = conn.execute(
                        "SELECT 1 FROM notes WHERE id = %s FOR UPDATE", (note_id,)
                    ).fetchone()
                    if exists is None:
                        return False
                    conn.execute(
                        self._SQL_INSERT_COMMENT,
                        (
                            comment.id,
                            note_id,
                            comment.content,
                            comment.author_id,
                            comment.author_name,
                            comment.created_at,
                        ),
                    )
        except Exception as exc:
            logger.exception(
                "PostgresNoteRepository: Failed to add comment",
                extra={"note_id": str(note_id), "error": str(exc)},
            )
            raise DatabaseError(f"Failed to add comment: {exc}") from exc
        return True

    def list_notes(self, query: BoardQuery) -> list[Note]:
        where_sql, params = board_where(
            query,
            search_columns=("title", "content", "author_name"),
            search_tags=True,
        )
        return self._select_notes(
            where_sql=where_sql,
            params=params,
            context_msg="PostgresNoteRepository: Failed to list notes",
            extra={"where_sql": where_sql},
        )

    def ping(self) -> bool:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                conn.execute("SELECT 1").fetchone()
        except Exception as exc:
            logger.warning("PostgresNoteRepository: ping failed", extra={"error": str(exc)})
            return False
        return True
