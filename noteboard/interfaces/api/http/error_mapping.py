"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCase Error -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir BoardError (casos de uso) a AppHTTPException RFC7807.
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener el dominio libre de HTTP.

Reglas:
  - VALIDATION_ERROR -> 400 (entrada inválida detectada por el caso de uso)
  - FORBIDDEN        -> 403
  - NOT_FOUND        -> 404
  - FORBIDDEN y NOT_FOUND nunca se mezclan.

Colaboradores:
  - application.usecases.board_results (BoardError / BoardErrorCode)
  - crosscutting.error_responses
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn
from uuid import UUID

from ....application.usecases import BoardError, BoardErrorCode
from ....crosscutting.error_responses import (
    forbidden,
    internal_error,
    invalid_input,
    not_found,
)


def raise_board_error(
    error: BoardError,
    *,
    resource_id: UUID | None = None,
) -> NoReturn:
    """Traduce BoardError -> HTTP (siempre lanza)."""
    if error.code == BoardErrorCode.VALIDATION_ERROR:
        raise invalid_input(error.message)

    if error.code == BoardErrorCode.FORBIDDEN:
        raise forbidden(error.message)

    if error.code == BoardErrorCode.NOT_FOUND:
        raise not_found(error.resource or "Resource", str(resource_id or "-"))

    raise internal_error(error.message)
