"""
===============================================================================
TARJETA CRC — schemas/__init__.py
===============================================================================

Módulo:
    Paquete de Schemas HTTP (DTOs Pydantic)

Reglas:
    - Schemas NO importan infraestructura ni ejecutan casos de uso.
    - Los campos viajan en camelCase (authorName, versionHistory, eventDate...).
    - Los catálogos (team, notificationType, eventType) llegan como string y se
      validan en los casos de uso.
===============================================================================
"""

__all__ = []
