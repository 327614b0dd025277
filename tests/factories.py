"""
Name: Test Factories

Responsibilities:
  - Build actors, notes and events with sensible defaults for tests
"""

from datetime import datetime, timezone
from uuid import uuid4

from noteboard.domain.entities import Event, Note, Team, VersionEntry
from noteboard.domain.visibility_policy import BoardActor
from noteboard.identity.users import UserRole


def make_actor(role, name: str | None = None) -> BoardActor:
    label = role.value if isinstance(role, UserRole) else str(role)
    return BoardActor(user_id=uuid4(), name=name or f"{label} user", role=role)


def make_note(
    team: Team,
    *,
    author: BoardActor | None = None,
    title: str = "Runbook",
    content: str = "Initial content",
    tags: list[str] | None = None,
    updated_at: datetime | None = None,
) -> Note:
    author = author or make_actor(UserRole.ADMIN)
    now = updated_at or datetime.now(timezone.utc)
    return Note(
        id=uuid4(),
        title=title,
        content=content,
        author_id=author.user_id,
        author_name=author.name,
        team=team,
        tags=list(tags or []),
        version_history=[
            VersionEntry(
                content=content,
                edited_at=now,
                editor_id=author.user_id,
                editor_name=author.name,
            )
        ],
        comments=[],
        created_at=now,
        updated_at=now,
    )


def make_event(
    team: Team,
    *,
    author: BoardActor | None = None,
    title: str = "Deploy window",
    event_date: datetime | None = None,
    event_time: str | None = None,
    description: str | None = None,
) -> Event:
    author = author or make_actor(UserRole.ADMIN)
    now = datetime.now(timezone.utc)
    return Event(
        id=uuid4(),
        title=title,
        event_date=event_date or datetime(2026, 3, 10, tzinfo=timezone.utc),
        author_id=author.user_id,
        author_name=author.name,
        team=team,
        description=description,
        event_time=event_time,
        created_at=now,
        updated_at=now,
    )
