"""
Name: Request Context Tests
"""

import json
import logging

import pytest

from noteboard.context import (
    bind_actor,
    clear_context,
    get_context_dict,
    set_request_context,
)
from noteboard.crosscutting.logger import JSONFormatter

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _clean_context():
    clear_context()
    yield
    clear_context()


def test_empty_values_are_omitted():
    set_request_context(request_id="req-1", method="GET")
    assert get_context_dict() == {"request_id": "req-1", "method": "GET"}


def test_actor_is_added_and_cleared():
    set_request_context(request_id="req-1", method="PUT", path="/v1/notes/x")
    bind_actor(actor_id="u-1", role="Support TI")

    assert get_context_dict() == {
        "request_id": "req-1",
        "method": "PUT",
        "path": "/v1/notes/x",
        "actor_id": "u-1",
        "actor_role": "Support TI",
    }

    clear_context()
    assert get_context_dict() == {}


def test_json_formatter_merges_context_and_redacts_secrets():
    set_request_context(request_id="req-9")
    bind_actor(actor_id="u-9", role="Admin")
    record = logging.LogRecord(
        "noteboard", logging.INFO, __file__, 1, "Nota creada", None, None
    )
    record.note_id = "n-1"
    record.password = "hunter2"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "Nota creada"
    assert payload["request_id"] == "req-9"
    assert payload["actor_role"] == "Admin"
    assert payload["note_id"] == "n-1"
    assert payload["password"] == "***REDACTADO***"
