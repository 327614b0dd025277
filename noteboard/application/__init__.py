"""
===============================================================================
APPLICATION LAYER
===============================================================================

Casos de uso del tablero (notas, eventos, comentarios) y el traductor de
filtros de listado.

Nota:
  - Los casos de uso se importan desde `usecases/` y sus subpaquetes.
===============================================================================
"""
