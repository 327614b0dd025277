"""
===============================================================================
CRC CARD — infrastructure/db/pool.py
===============================================================================

Componente:
  Pool de conexiones PostgreSQL (singleton)

Responsabilidades:
  - Inicializar, exponer y cerrar el pool de conexiones.
  - Configurar conexiones: statement_timeout.

Colaboradores:
  - psycopg_pool.ConnectionPool
  - crosscutting.config (timeout)

Principios:
  - Fail-fast (doble init, uso sin init)
  - Un único pool global por proceso
===============================================================================
"""

from __future__ import annotations

import threading
from typing import Optional

from psycopg_pool import ConnectionPool

from ...crosscutting.logger import logger
from .errors import PoolAlreadyInitializedError, PoolNotInitializedError

_pool: Optional[ConnectionPool] = None
_pool_lock = threading.Lock()


def _configure_connection(conn) -> None:
    """Se ejecuta por cada conexión nueva del pool."""
    from ...crosscutting.config import get_settings

    timeout_ms = int(get_settings().db_statement_timeout_ms)
    if timeout_ms > 0:
        conn.execute(f"SET statement_timeout = {timeout_ms}")
        conn.commit()


def init_pool(database_url: str, min_size: int, max_size: int) -> ConnectionPool:
    """Inicializa el pool (una vez por proceso)."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            raise PoolAlreadyInitializedError("El pool ya fue inicializado.")

        logger.info(
            "Inicializando pool DB",
            extra={"min_size": min_size, "max_size": max_size},
        )

        _pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            configure=_configure_connection,
            open=True,
        )

        logger.info(
            "Pool DB inicializado",
            extra={"min_size": min_size, "max_size": max_size},
        )
        return _pool


def get_pool() -> ConnectionPool:
    if _pool is None:
        raise PoolNotInitializedError(
            "Pool no inicializado. Llamar init_pool() primero."
        )
    return _pool


def close_pool() -> None:
    """Cierra el pool (idempotente)."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            logger.info("Cerrando pool DB")
            try:
                _pool.close()
            finally:
                _pool = None
            logger.info("Pool DB cerrado")
