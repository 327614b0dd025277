"""
Name: User Authentication Route Tests

Responsibilities:
  - register/login/logout/me/change-password flows
  - Admin-only user management
  - Token (header and cookie) drives the board actor end to end
"""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from noteboard.api.main import create_app
from noteboard.container import get_user_repository
from noteboard.identity.auth_users import hash_password
from noteboard.identity.users import User, UserRole

pytestmark = pytest.mark.unit


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def _seed_user(role: UserRole, email: str, password: str = "secret") -> User:
    return get_user_repository().create_user(
        User(
            id=uuid4(),
            email=email,
            name=email.split("@")[0].title(),
            password_hash=hash_password(password),
            role=role,
        )
    )


def _login(client: TestClient, email: str, password: str = "secret") -> str:
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return response.json()["access_token"]


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_register_creates_viewer_and_logs_in(client):
    response = client.post(
        "/auth/register",
        json={"name": "Val", "email": " VAL@Example.com ", "password": "secret1"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["user"]["email"] == "val@example.com"
    assert body["user"]["role"] == "Viewer"
    assert body["user"]["name"] == "Val"
    assert body["access_token"]
    assert "access_token" in response.cookies


def test_register_duplicate_email_is_conflict(client):
    _seed_user(UserRole.VIEWER, "val@example.com")
    response = client.post(
        "/auth/register",
        json={"name": "Val", "email": "val@example.com", "password": "secret1"},
    )
    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"


def test_register_short_password_is_422(client):
    response = client.post(
        "/auth/register",
        json={"name": "Val", "email": "val@example.com", "password": "123"},
    )
    assert response.status_code == 422


def test_login_wrong_password(client):
    _seed_user(UserRole.VIEWER, "val@example.com")
    response = client.post(
        "/auth/login", json={"email": "val@example.com", "password": "wrong"}
    )
    assert response.status_code == 401
    assert "Credenciales" in response.json()["detail"]


def test_me_with_bearer_token(client):
    user = _seed_user(UserRole.SUPPORT_TI, "sam@example.com")
    token = _login(client, "sam@example.com")

    response = client.get("/auth/me", headers=_auth(token))

    assert response.status_code == 200
    assert response.json()["id"] == str(user.id)
    assert response.json()["role"] == "Support TI"


def test_me_requires_token():
    response = TestClient(create_app()).get("/auth/me")
    assert response.status_code == 401


def test_logout_clears_cookie(client):
    _seed_user(UserRole.VIEWER, "val@example.com")
    _login(client, "val@example.com")
    assert client.get("/auth/me").status_code == 200

    client.post("/auth/logout")

    assert client.get("/auth/me").status_code == 401


def test_change_password(client):
    _seed_user(UserRole.VIEWER, "val@example.com", password="old-pass")
    token = _login(client, "val@example.com", "old-pass")

    wrong = client.put(
        "/auth/change-password",
        json={"current_password": "nope", "new_password": "new-pass"},
        headers=_auth(token),
    )
    ok = client.put(
        "/auth/change-password",
        json={"current_password": "old-pass", "new_password": "new-pass"},
        headers=_auth(token),
    )

    assert wrong.status_code == 401
    assert ok.status_code == 200
    _login(client, "val@example.com", "new-pass")


def test_admin_manages_users(client):
    _seed_user(UserRole.ADMIN, "ada@example.com")
    token = _login(client, "ada@example.com")

    created = client.post(
        "/auth/users",
        json={
            "name": "Sol",
            "email": "sol@example.com",
            "password": "secret1",
            "role": "Sistemas MV",
        },
        headers=_auth(token),
    )
    listed = client.get("/auth/users", headers=_auth(token))

    assert created.status_code == 201
    assert created.json()["role"] == "Sistemas MV"
    assert {u["email"] for u in listed.json()} == {"ada@example.com", "sol@example.com"}


def test_non_admin_cannot_manage_users(client):
    _seed_user(UserRole.SUPPORT_TI, "sam@example.com")
    token = _login(client, "sam@example.com")

    assert client.get("/auth/users", headers=_auth(token)).status_code == 403


def test_token_drives_board_policy_end_to_end(client):
    _seed_user(UserRole.SUPPORT_TI, "sam@example.com")
    _seed_user(UserRole.VIEWER, "val@example.com")
    sam = _login(client, "sam@example.com")
    val = _login(client, "val@example.com")

    created = client.post(
        "/v1/notes",
        json={"title": "Patch", "content": "Tuesday", "team": "Support TI"},
        headers=_auth(sam),
    )
    note_id = created.json()["id"]

    assert created.status_code == 201
    assert created.json()["authorName"] == "Sam"
    assert client.get(f"/v1/notes/{note_id}", headers=_auth(val)).status_code == 403
