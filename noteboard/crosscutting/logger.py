"""
===============================================================================
MÓDULO: Logger estructurado (JSON) con contexto de request
===============================================================================

Objetivo
--------
Loguear de forma parseable (una línea JSON por evento), correlacionable por
request_id y sin filtrar secretos (passwords, tokens, hashes).

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + setup_logger()

Responsabilidades:
  - Formatear logs como JSON
  - Enriquecer con contexto (request_id, method, path)
  - Redactar campos sensibles y limitar tamaños

Colaboradores:
  - noteboard/context.py (ContextVars)
  - crosscutting/config.py (nivel y formato)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

# Campos propios del LogRecord que no se copian como "extra".
_RESERVED_RECORD_KEYS: frozenset[str] = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "taskName",
    }
)


class _Redactor:
    """
    Sanitiza valores antes de serializarlos.

    - Claves sensibles => "***REDACTADO***"
    - Strings largos => recortados
    - Estructuras profundas => "***TRUNCADO***"
    """

    SENSITIVE_KEYS = frozenset(
        {
            "password",
            "current_password",
            "new_password",
            "password_hash",
            "secret",
            "jwt_secret",
            "token",
            "access_token",
            "authorization",
            "cookie",
            "database_url",
        }
    )

    def __init__(self, max_str: int = 4_000, max_depth: int = 4):
        self._max_str = max_str
        self._max_depth = max_depth

    def sanitize(self, value: Any, *, depth: int = 0, key: str | None = None) -> Any:
        if key and key.lower() in self.SENSITIVE_KEYS:
            return "***REDACTADO***"

        if depth > self._max_depth:
            return "***TRUNCADO***"

        if isinstance(value, str):
            if len(value) <= self._max_str:
                return value
            return value[: self._max_str] + "…(truncado)"

        if isinstance(value, dict):
            return {
                str(k): self.sanitize(v, depth=depth + 1, key=str(k))
                for k, v in value.items()
            }

        if isinstance(value, (list, tuple, set, frozenset)):
            return [self.sanitize(v, depth=depth + 1, key=key) for v in value]

        if value is None or isinstance(value, (int, float, bool)):
            return value

        return str(value)


class JSONFormatter(logging.Formatter):
    """LogRecord -> JSON (con contexto de request y stacktrace si hay excepción)."""

    def __init__(self):
        super().__init__()
        self._redactor = _Redactor()

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "pid": os.getpid(),
        }

        from ..context import get_context_dict

        payload.update(get_context_dict())

        for k, v in record.__dict__.items():
            if k in _RESERVED_RECORD_KEYS:
                continue
            payload[k] = self._redactor.sanitize(v, key=k)

        if record.exc_info:
            exc_type = record.exc_info[0].__name__ if record.exc_info[0] else None
            exc_msg = str(record.exc_info[1]) if record.exc_info[1] else None
            payload["exception"] = {
                "type": exc_type,
                "message": exc_msg,
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(
            payload, ensure_ascii=False, default=str, separators=(",", ":")
        )


def setup_logger(name: str = "noteboard") -> logging.Logger:
    """
    Crea y configura el logger del paquete.

    - Evita duplicación de handlers en reimport
    - Respeta log_level / log_json desde Settings cuando estén disponibles
      (sin DATABASE_URL los settings no cargan y se usan los defaults)
    """
    log = logging.getLogger(name)

    level = "INFO"
    use_json = True

    from pydantic import ValidationError

    from .config import get_settings

    try:
        s = get_settings()
        level = (s.log_level or "INFO").upper()
        use_json = s.log_json
    except ValidationError:
        pass

    log.setLevel(getattr(logging, level, logging.INFO))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter()
            if use_json
            else logging.Formatter("%(levelname)s %(name)s %(message)s")
        )
        log.addHandler(handler)

    return log


logger = setup_logger()
