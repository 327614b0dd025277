"""
===============================================================================
TARJETA CRC — noteboard/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Guardar datos de correlación del request en ContextVars (async-safe):
    request_id, method, path y, una vez autenticado, actor_id / actor_role.
  - Exponerlos como dict plano para enriquecer cada línea de log.

Colaboradores:
  - crosscutting.middleware: abre y cierra el contexto de cada request.
  - identity.auth_users.current_user: agrega el actor autenticado.
  - crosscutting.logger: lee get_context_dict().

Restricciones:
  - Solo strings; "" significa "no disponible" y se omite del dict.
  - Es solo para logs. Policy y use cases reciben el actor como parámetro.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Final

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
http_method_var: ContextVar[str] = ContextVar("http_method", default="")
http_path_var: ContextVar[str] = ContextVar("http_path", default="")
actor_id_var: ContextVar[str] = ContextVar("actor_id", default="")
actor_role_var: ContextVar[str] = ContextVar("actor_role", default="")

_LOG_FIELDS: Final[tuple[tuple[str, ContextVar[str]], ...]] = (
    ("request_id", request_id_var),
    ("method", http_method_var),
    ("path", http_path_var),
    ("actor_id", actor_id_var),
    ("actor_role", actor_role_var),
)


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> None:
    request_id_var.set(request_id or "")
    http_method_var.set(method or "")
    http_path_var.set(path or "")


def bind_actor(*, actor_id: str = "", role: str = "") -> None:
    """Asocia el actor autenticado a los logs del request en curso."""
    actor_id_var.set(actor_id or "")
    actor_role_var.set(role or "")


def get_context_dict() -> dict[str, str]:
    return {key: value for key, var in _LOG_FIELDS if (value := var.get())}


def clear_context() -> None:
    """Se llama al final de cada request para no arrastrar datos al siguiente."""
    for _, var in _LOG_FIELDS:
        var.set("")
