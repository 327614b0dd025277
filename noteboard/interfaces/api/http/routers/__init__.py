"""
===============================================================================
TARJETA CRC — noteboard/interfaces/api/http/routers/__init__.py
===============================================================================

Name:
    Routers Package (HTTP)

Responsibilities:
    - Exponer routers por recurso (notes / events) para el router raíz.

Notas:
    - Este archivo NO define endpoints. Solo re-exporta routers.
===============================================================================
"""

from .events import router as events_router
from .notes import router as notes_router

__all__ = [
    "events_router",
    "notes_router",
]
