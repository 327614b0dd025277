"""
Name: Health and Metrics Endpoint Tests
"""

import pytest
from fastapi.testclient import TestClient

from noteboard.api import main as api_main
from noteboard.api.main import create_app

pytestmark = pytest.mark.unit


def test_healthz_reports_connected_with_in_memory_repository():
    response = TestClient(create_app()).get("/healthz", headers={"X-Request-Id": "hc-1"})

    assert response.status_code == 200
    assert response.json() == {"ok": True, "db": "connected", "request_id": "hc-1"}
    assert response.headers["X-Request-Id"] == "hc-1"


def test_metrics_exposes_request_counters():
    client = TestClient(create_app())
    client.get("/healthz")

    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "noteboard_requests_total" in response.text


def test_oversized_request_id_is_replaced():
    response = TestClient(create_app()).get("/healthz", headers={"X-Request-Id": "x" * 500})
    assert response.headers["X-Request-Id"] != "x" * 500
    assert len(response.headers["X-Request-Id"]) == 36


def test_body_limit_returns_413_problem_json(monkeypatch):
    settings = api_main.get_settings().model_copy(update={"max_body_bytes": 10})
    monkeypatch.setattr(api_main, "get_settings", lambda: settings)

    response = TestClient(create_app()).post(
        "/v1/notes",
        content=b"{" + b" " * 64 + b"}",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 413
    assert response.headers["content-type"].startswith("application/problem+json")
    assert response.json()["code"] == "PAYLOAD_TOO_LARGE"
