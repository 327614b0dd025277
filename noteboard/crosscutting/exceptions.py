"""
===============================================================================
MÓDULO: Excepciones tipadas del backend (errores internos)
===============================================================================

Objetivo
--------
Excepciones de infraestructura coherentes, con:
- error_code estable
- error_id para correlación con logs
- message "humana" (sin filtrar secretos)

Los resultados de negocio (FORBIDDEN / NOT_FOUND / VALIDATION_ERROR) NO viajan
como excepciones: los use cases los devuelven tipados (board_results).

Colaboradores:
  - api/exception_handlers.py (mapea a AppHTTPException)
  - infrastructure/repositories/postgres/* (lanzan DatabaseError)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class NoteboardError(Exception):
    """Base para errores internos del sistema (error_code + error_id + message)."""

    error_code: str = "NOTEBOARD_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(NoteboardError):
    """Errores de DB (conexión, query, timeout, pool, datos corruptos)."""

    error_code: str = "DATABASE_ERROR"
