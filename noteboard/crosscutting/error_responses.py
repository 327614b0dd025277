"""
===============================================================================
MÓDULO: Respuestas de error estándar (RFC 7807 / Problem Details)
===============================================================================

Objetivo
--------
Uniformar TODOS los errores HTTP para que:
- El frontend pueda manejar por "code"
- El backend pueda correlacionar por request_id / error_id

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  AppHTTPException + handlers

Responsabilidades:
  - Definir catálogo de códigos de error (ErrorCode)
  - Construir payload RFC7807 (ErrorDetail)
  - Proveer factories de errores frecuentes
  - Proveer handlers (FastAPI) para devolver JSON problem+json

Colaboradores:
  - crosscutting/middleware.py (request_id)
  - api/exception_handlers.py (mapea errores internos)
  - interfaces/api/http/error_mapping.py (BoardError -> factory)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorCode(str, Enum):
    # 4xx
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"

    # 5xx
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class ErrorDetail(BaseModel):
    """
    Modelo RFC 7807 (Problem Details).

    Campos extra:
    - code: error code estable para clientes
    - errors: lista opcional de detalles (ej: [{"field":"x","msg":"..."}])
    """

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"

_OPENAPI_ERROR_CONTENT = {
    PROBLEM_JSON_MEDIA_TYPE: {"schema": {"$ref": "#/components/schemas/ErrorDetail"}}
}


def _openapi_error(description: str) -> dict[str, Any]:
    return {
        "description": f"{description} (RFC7807)",
        "model": ErrorDetail,
        "content": _OPENAPI_ERROR_CONTENT,
    }


OPENAPI_ERROR_RESPONSES = {
    "400": _openapi_error("Bad Request"),
    "401": _openapi_error("Unauthorized"),
    "403": _openapi_error("Forbidden"),
    "404": _openapi_error("Not Found"),
    "409": _openapi_error("Conflict"),
    "413": _openapi_error("Payload Too Large"),
    "422": _openapi_error("Validation Error"),
    "default": _openapi_error("Error"),
}


class AppHTTPException(HTTPException):
    """
    HTTPException con ErrorCode estable y errores de validación opcionales.
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.errors = errors


# ---------------------------------------------------------------------------
# Factories de error (helpers)
# ---------------------------------------------------------------------------
def invalid_input(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    """Entrada inválida detectada por un caso de uso (400)."""
    return AppHTTPException(400, ErrorCode.VALIDATION_ERROR, detail, errors)


def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    """Body/query que no respeta el schema HTTP (422)."""
    return AppHTTPException(422, ErrorCode.VALIDATION_ERROR, detail, errors)


def not_found(resource: str, identifier: str) -> AppHTTPException:
    return AppHTTPException(
        404, ErrorCode.NOT_FOUND, f"{resource} '{identifier}' no encontrado"
    )


def conflict(detail: str) -> AppHTTPException:
    return AppHTTPException(409, ErrorCode.CONFLICT, detail)


def unauthorized(detail: str = "Autenticación requerida") -> AppHTTPException:
    return AppHTTPException(401, ErrorCode.UNAUTHORIZED, detail)


def forbidden(detail: str = "Acceso denegado") -> AppHTTPException:
    return AppHTTPException(403, ErrorCode.FORBIDDEN, detail)


def internal_error(detail: str = "Ocurrió un error inesperado") -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)


def database_error(
    detail: str = "Falla en operación de base de datos",
) -> AppHTTPException:
    return AppHTTPException(503, ErrorCode.DATABASE_ERROR, detail)


# ---------------------------------------------------------------------------
# Handlers FastAPI
# ---------------------------------------------------------------------------
def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


def problem_response(
    request: Request,
    *,
    status_code: int,
    code: ErrorCode,
    detail: str,
    errors: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Construye la respuesta problem+json (agrega request_id si existe)."""
    request_id = _request_id_from(request)
    all_errors = list(errors or [])
    if request_id:
        all_errors.append({"request_id": request_id})

    error = ErrorDetail(
        type=f"about:blank/{code.value.lower()}",
        title=code.value.replace("_", " ").title(),
        status=status_code,
        detail=detail,
        code=code,
        instance=str(request.url),
        errors=all_errors or None,
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(error.model_dump(exclude_none=True)),
        headers=headers,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """Handler para AppHTTPException (propaga headers opcionales)."""
    return problem_response(
        request,
        status_code=exc.status_code,
        code=exc.code,
        detail=str(exc.detail),
        errors=exc.errors,
        headers=getattr(exc, "headers", None),
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Errores de schema (body/query/path) de FastAPI -> 422 RFC7807."""
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "msg": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return await app_exception_handler(request, validation_error("Request inválido", errors))
