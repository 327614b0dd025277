"""
===============================================================================
TARJETA CRC — noteboard/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir excepciones de la aplicación a respuestas HTTP RFC7807.
  - Centralizar logging de errores con request_id + error_id.
  - Evitar filtrar detalles internos en errores no controlados.

Patrones aplicados:
  - Exception Mapping (Presentation Layer).
  - Fail-safe: cualquier excepción no tipada -> INTERNAL_ERROR (con logging).

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, handlers
  - crosscutting.exceptions: NoteboardError / DatabaseError
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    app_exception_handler,
    database_error,
    internal_error,
    request_validation_exception_handler,
)
from ..crosscutting.exceptions import DatabaseError, NoteboardError
from ..crosscutting.logger import logger


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


def _public_detail(exc: NoteboardError) -> str:
    """En producción no se expone el mensaje interno."""
    return exc.message if not get_settings().is_production() else "Error interno."


async def _handle_service_error(
    request: Request,
    *,
    exc: NoteboardError,
    app_exc: AppHTTPException,
) -> JSONResponse:
    """Helper común para errores tipados de infraestructura."""
    logger.error(
        "Error de servicio",
        extra={
            "error_code": exc.error_code,
            "error_id": exc.error_id,
            "detail": exc.message,
            "request_id": _request_id_from(request),
        },
    )

    app_exc.errors = [{"error_id": exc.error_id}]
    return await app_exception_handler(request, app_exc)


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    return await _handle_service_error(
        request, exc=exc, app_exc=database_error(_public_detail(exc))
    )


async def noteboard_error_handler(request: Request, exc: NoteboardError) -> JSONResponse:
    return await _handle_service_error(
        request, exc=exc, app_exc=internal_error(_public_detail(exc))
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler para excepciones no tipadas.

    - Log completo (stacktrace).
    - Respuesta genérica en producción.
    """
    request_id = _request_id_from(request)

    logger.error(
        "Excepción no controlada",
        exc_info=True,
        extra={"request_id": request_id, "error": str(exc)},
    )

    detail = str(exc) if not get_settings().is_production() else "Error interno."

    return await app_exception_handler(request, internal_error(detail))


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    - AppHTTPException / RequestValidationError => RFC7807.
    - Exception genérica al final como fallback.
    """
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(NoteboardError, noteboard_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
