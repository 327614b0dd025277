"""
Name: API Test Helpers

Responsibilities:
  - Build a fresh app whose authenticated actor can be switched per request
"""

from fastapi.testclient import TestClient

from noteboard.api.main import create_app
from noteboard.domain.visibility_policy import BoardActor
from noteboard.interfaces.api.http.dependencies import get_current_actor


class ActorSwitch:
    """Dependency override: devuelve el actor activo."""

    def __init__(self) -> None:
        self.actor: BoardActor | None = None

    def __call__(self) -> BoardActor:
        assert self.actor is not None, "set switch.actor before calling the API"
        return self.actor


def board_client() -> tuple[TestClient, ActorSwitch]:
    app = create_app()
    switch = ActorSwitch()
    app.dependency_overrides[get_current_actor] = switch
    return TestClient(app), switch
