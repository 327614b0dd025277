"""
Name: Notes API Tests

Responsibilities:
  - HTTP contract for /v1/notes (status codes, camelCase payloads)
  - BoardError -> RFC7807 mapping (400/403/404)
"""

import pytest
from fastapi.testclient import TestClient

from noteboard.api.main import create_app
from tests.factories import make_actor
from tests.unit.api.helpers import board_client

pytestmark = pytest.mark.unit


@pytest.fixture
def api():
    return board_client()


def _create(client, switch, actor, **overrides):
    switch.actor = actor
    body = {"title": "VPN", "content": "Steps", "team": "Geral", "tags": ["net"]}
    body.update(overrides)
    return client.post("/v1/notes", json=body)


def test_create_note_returns_camel_case_payload(api, support):
    client, switch = api

    response = _create(client, switch, support, team="Support TI")

    assert response.status_code == 201
    body = response.json()
    assert body["team"] == "Support TI"
    assert body["author"] == str(support.user_id)
    assert body["authorName"] == support.name
    assert body["tags"] == ["net"]
    assert len(body["versionHistory"]) == 1
    assert body["versionHistory"][0]["editorName"] == support.name
    assert body["comments"] == []
    assert "createdAt" in body and "updatedAt" in body


def test_create_note_forbidden_for_viewer(api, viewer):
    client, switch = api
    response = _create(client, switch, viewer)
    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"
    assert response.headers["content-type"].startswith("application/problem+json")


def test_create_note_missing_content_is_400(api, admin):
    client, switch = api
    response = _create(client, switch, admin, content="")
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_create_note_schema_violation_is_422(api, admin):
    client, switch = api
    switch.actor = admin
    response = client.post("/v1/notes", json={"title": "x", "tags": "not-a-list"})
    assert response.status_code == 422


def test_list_notes_with_team_view(api, admin, support):
    client, switch = api
    _create(client, switch, admin, title="geral")
    _create(client, switch, admin, title="support", team="Support TI")
    _create(client, switch, admin, title="sistemas", team="Sistemas MV")

    switch.actor = support
    default = client.get("/v1/notes").json()["notes"]
    only_team = client.get("/v1/notes", params={"teamView": "Support TI"}).json()["notes"]
    sibling = client.get("/v1/notes", params={"teamView": "Sistemas MV"})

    assert sorted(n["title"] for n in default) == ["geral", "support"]
    assert [n["title"] for n in only_team] == ["support"]
    assert sibling.status_code == 403


def test_list_notes_search_and_tag(api, admin):
    client, switch = api
    _create(client, switch, admin, title="Printer jam", tags=["hw"])
    _create(client, switch, admin, title="Printer toner", tags=["supplies"])

    notes = client.get("/v1/notes", params={"search": "PRINTER", "tag": "hw"}).json()[
        "notes"
    ]

    assert [n["title"] for n in notes] == ["Printer jam"]


def test_get_note_errors(api, admin, viewer):
    client, switch = api
    note_id = _create(client, switch, admin, team="Support TI").json()["id"]

    switch.actor = viewer
    assert client.get(f"/v1/notes/{note_id}").status_code == 403

    switch.actor = admin
    assert client.get(f"/v1/notes/{note_id}").status_code == 200
    missing = client.get("/v1/notes/00000000-0000-0000-0000-000000000000")
    assert missing.status_code == 404
    assert missing.json()["code"] == "NOT_FOUND"
    assert client.get("/v1/notes/not-a-uuid").status_code == 400


def test_update_note_appends_version(api, support):
    client, switch = api
    note_id = _create(client, switch, support, content="A").json()["id"]

    response = client.put(f"/v1/notes/{note_id}", json={"content": "B", "title": "New"})

    assert response.status_code == 200
    body = response.json()
    assert body["content"] == "B"
    assert body["title"] == "New"
    assert [v["content"] for v in body["versionHistory"]] == ["A", "A"]


def test_update_note_team_change_by_non_admin_is_403(api, support):
    client, switch = api
    note_id = _create(client, switch, support, team="Support TI").json()["id"]

    response = client.put(f"/v1/notes/{note_id}", json={"team": "Geral", "title": "x"})

    assert response.status_code == 403
    assert client.get(f"/v1/notes/{note_id}").json()["title"] == "VPN"


def test_delete_note(api, admin):
    client, switch = api
    note_id = _create(client, switch, admin).json()["id"]

    response = client.delete(f"/v1/notes/{note_id}")

    assert response.status_code == 200
    assert response.json() == {"id": note_id, "deleted": True}
    assert client.get(f"/v1/notes/{note_id}").status_code == 404


def test_add_comment(api, admin, sistemas):
    client, switch = api
    note_id = _create(client, switch, admin, team="Support TI").json()["id"]

    switch.actor = sistemas
    response = client.post(f"/v1/notes/{note_id}/comments", json={"content": "On it"})

    assert response.status_code == 201
    comment = response.json()
    assert comment["content"] == "On it"
    assert comment["authorId"] == str(sistemas.user_id)

    switch.actor = admin
    comments = client.get(f"/v1/notes/{note_id}").json()["comments"]
    assert [c["id"] for c in comments] == [comment["id"]]


def test_empty_comment_is_400_even_for_missing_note(api, admin):
    client, switch = api
    switch.actor = admin
    response = client.post(
        "/v1/notes/00000000-0000-0000-0000-000000000000/comments",
        json={"content": "  "},
    )
    assert response.status_code == 400


def test_unknown_role_actor_is_forbidden_everywhere(api):
    client, switch = api
    switch.actor = make_actor("Intern")
    assert client.get("/v1/notes").status_code == 403


def test_board_requires_authentication():
    client = TestClient(create_app())
    response = client.get("/v1/notes")

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"
