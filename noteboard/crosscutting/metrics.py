"""
===============================================================================
MÓDULO: Métricas Prometheus (HTTP + policy)
===============================================================================

Responsabilidades:
  - Registrar métricas de requests (conteo + latencia) con baja cardinalidad.
  - Contar denegaciones de la policy de visibilidad por operación.
  - Exponer el payload de /metrics.

Colaboradores:
  - crosscutting/middleware.py (record_request_metrics)
  - application/usecases/* (record_policy_denial)
  - api/main.py (get_metrics_response)

Notas:
  - Registry propio (no el global) para que los tests puedan recrearlo.
===============================================================================
"""

from __future__ import annotations

import re

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

_requests_total = Counter(
    "noteboard_requests_total",
    "Total de requests HTTP",
    ["endpoint", "method", "status"],
    registry=_registry,
)

_request_latency = Histogram(
    "noteboard_request_latency_seconds",
    "Latencia de requests HTTP (segundos)",
    ["endpoint", "method"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
    registry=_registry,
)

_policy_denials_total = Counter(
    "noteboard_policy_denials_total",
    "Operaciones denegadas por la policy de visibilidad",
    ["operation"],
    registry=_registry,
)


def record_request_metrics(
    *,
    endpoint: str,
    method: str,
    status_code: int,
    latency_seconds: float,
) -> None:
    """Registra una request completada."""
    normalized = _normalize_endpoint(endpoint)
    _requests_total.labels(
        endpoint=normalized, method=method, status=_status_bucket(status_code)
    ).inc()
    _request_latency.labels(endpoint=normalized, method=method).observe(
        latency_seconds
    )


def record_policy_denial(operation: str) -> None:
    """Cuenta una denegación (ej: "note.update", "event.list")."""
    _policy_denials_total.labels(operation=operation).inc()


# -----------------------------------------------------------------------------
# Helpers internos
# -----------------------------------------------------------------------------


def _normalize_endpoint(path: str) -> str:
    """Reemplaza UUIDs e IDs numéricos por `{id}` para evitar cardinalidad alta."""
    path = re.sub(
        r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
        "{id}",
        path,
        flags=re.IGNORECASE,
    )
    return re.sub(r"/\d+", "/{id}", path)


def _status_bucket(code: int) -> str:
    if 200 <= code < 300:
        return "2xx"
    if 400 <= code < 500:
        return "4xx"
    if 500 <= code < 600:
        return "5xx"
    return "other"


def get_metrics_response() -> tuple[bytes, str]:
    """Genera el body y content-type para /metrics."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
