"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI con prefix="/v1".
  - Centralizar responses RFC7807 para OpenAPI.
  - Componer routers por recurso (notes / events).

Patrones aplicados:
  - Factory: build_router() para testear composición sin side-effects al importar.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers import events_router, notes_router


def build_router() -> APIRouter:
    """Construye el router raíz v1."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(notes_router)
    api_router.include_router(events_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
