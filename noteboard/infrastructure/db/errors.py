"""
===============================================================================
CRC CARD — infrastructure/db/errors.py
===============================================================================

Componente:
  Errores tipados del Pool/Conectividad

Responsabilidades:
  - Dar semántica clara al ciclo de vida del pool ("no inicializado",
    "ya inicializado") en lugar de RuntimeError genéricos.
===============================================================================
"""


class DatabasePoolError(Exception):
    """Base de errores de pool de base de datos."""


class PoolAlreadyInitializedError(DatabasePoolError):
    """init_pool() llamado dos veces en el mismo proceso."""


class PoolNotInitializedError(DatabasePoolError):
    """get_pool() antes de init_pool()."""
