"""
Name: Events API Tests

Responsibilities:
  - HTTP contract for /v1/events (create/list/get/update/delete)
  - Month/year filtering and ordering over HTTP
"""

import pytest

from tests.unit.api.helpers import board_client

pytestmark = pytest.mark.unit


@pytest.fixture
def api():
    return board_client()


def _create(client, switch, actor, **overrides):
    switch.actor = actor
    body = {"title": "Release", "eventDate": "2026-03-10", "team": "Geral"}
    body.update(overrides)
    return client.post("/v1/events", json=body)


def test_create_event_defaults(api, support):
    client, switch = api

    response = _create(client, switch, support, eventTime="9:00", team="Support TI")

    assert response.status_code == 201
    body = response.json()
    assert body["eventTime"] == "09:00"
    assert body["notificationType"] == "none"
    assert body["eventType"] == "general"
    assert body["team"] == "Support TI"
    assert body["eventDate"].startswith("2026-03-10T00:00:00")
    assert body["authorName"] == support.name


def test_create_event_invalid_time_is_400(api, admin):
    client, switch = api
    response = _create(client, switch, admin, eventTime="25:00")
    assert response.status_code == 400


def test_list_events_by_month_sorted(api, admin):
    client, switch = api
    _create(client, switch, admin, title="late", eventDate="2026-03-10", eventTime="18:00")
    _create(client, switch, admin, title="early", eventDate="2026-03-10", eventTime="08:00")
    _create(client, switch, admin, title="first", eventDate="2026-03-02")
    _create(client, switch, admin, title="april", eventDate="2026-04-01")

    response = client.get("/v1/events", params={"month": 3, "year": 2026})

    assert response.status_code == 200
    assert [e["title"] for e in response.json()["events"]] == ["first", "early", "late"]


def test_list_events_requires_month_and_year_together(api, admin):
    client, switch = api
    switch.actor = admin
    assert client.get("/v1/events", params={"month": 3}).status_code == 400


def test_list_events_viewer_cannot_request_team(api, viewer):
    client, switch = api
    switch.actor = viewer
    response = client.get("/v1/events", params={"teamView": "Sistemas MV"})
    assert response.status_code == 403


def test_update_event_and_clear_time(api, admin):
    client, switch = api
    event_id = _create(client, switch, admin, eventTime="10:00").json()["id"]

    response = client.put(
        f"/v1/events/{event_id}",
        json={"eventTime": "", "eventType": "birthday", "team": "Sistemas MV"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["eventTime"] is None
    assert body["eventType"] == "birthday"
    assert body["team"] == "Sistemas MV"


def test_update_event_forbidden_for_sibling_team(api, admin, support):
    client, switch = api
    event_id = _create(client, switch, admin, team="Sistemas MV").json()["id"]

    switch.actor = support
    response = client.put(f"/v1/events/{event_id}", json={"title": "x"})

    assert response.status_code == 403


def test_get_and_delete_event(api, sistemas):
    client, switch = api
    event_id = _create(client, switch, sistemas, team="Sistemas MV").json()["id"]

    assert client.get(f"/v1/events/{event_id}").status_code == 200
    deleted = client.delete(f"/v1/events/{event_id}")
    assert deleted.json() == {"id": event_id, "deleted": True}
    assert client.get(f"/v1/events/{event_id}").status_code == 404
    assert client.delete("/v1/events/bad-id").status_code == 400
