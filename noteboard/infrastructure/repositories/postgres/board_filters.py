"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/board_filters.py
============================================================
Component: board_where (SQL builder)

Responsibilities:
  - Traducir un BoardQuery (ya autorizado) a un WHERE parametrizado.
  - Mantener la misma semántica que BoardQuery.matches_note/matches_event.

Constraints:
  - Las columnas se pasan desde el repositorio (nunca desde input de usuario).
  - El término de búsqueda se escapa para ILIKE (%, _ y \\ literales).
============================================================
"""

from __future__ import annotations

from typing import Sequence

from ....domain.value_objects import BoardQuery


def like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def board_where(
    query: BoardQuery,
    *,
    search_columns: Sequence[str],
    search_tags: bool = False,
    date_column: str | None = None,
) -> tuple[str, list[object]]:
    """
    Retorna (where_sql, params). where_sql es "" o empieza con "WHERE".
    """
    conditions: list[str] = []
    params: list[object] = []

    if query.teams is not None:
        conditions.append("team = ANY(%s)")
        params.append(sorted(team.value for team in query.teams))

    if query.search:
        pattern = like_pattern(query.search)
        parts = [f"{column} ILIKE %s" for column in search_columns]
        params.extend([pattern] * len(search_columns))
        if search_tags:
            parts.append("EXISTS (SELECT 1 FROM unnest(tags) AS t(tag) WHERE t.tag ILIKE %s)")
            params.append(pattern)
        conditions.append("(" + " OR ".join(parts) + ")")

    if query.tag and search_tags:
        conditions.append("%s = ANY(tags)")
        params.append(query.tag)

    if date_column is not None:
        if query.date_from is not None:
            conditions.append(f"{date_column} >= %s")
            params.append(query.date_from)
        if query.date_to is not None:
            conditions.append(f"{date_column} <= %s")
            params.append(query.date_to)

    where_sql = f"WHERE {' AND '.join(conditions)}" if conditions else ""
    return where_sql, params
