"""
Name: Postgres Note Repository Tests

Responsibilities:
  - Ensure update_note writes exactly the version rows it is given
  - Ensure a missing note short-circuits before touching children
"""

import copy
from unittest.mock import MagicMock

import pytest

from noteboard.domain.entities import Team
from noteboard.infrastructure.repositories.postgres.note import (
    PostgresNoteRepository,
)
from noteboard.identity.users import UserRole
from tests.factories import make_actor, make_note

pytestmark = pytest.mark.unit


def _repo_with_conn(update_row):
    mock_pool = MagicMock()
    mock_conn = MagicMock()
    mock_result = MagicMock()
    mock_result.fetchone.return_value = update_row
    mock_conn.execute.return_value = mock_result
    mock_pool.connection.return_value.__enter__.return_value = mock_conn
    return PostgresNoteRepository(pool=mock_pool), mock_conn


def _version_inserts(mock_conn) -> list[tuple]:
    return [
        call.args[1]
        for call in mock_conn.execute.call_args_list
        if call.args[0] == PostgresNoteRepository._SQL_INSERT_VERSION
    ]


def test_concurrent_updates_each_archive_their_snapshot(monkeypatch):
    editor = make_actor(UserRole.SUPPORT_TI)
    stored = make_note(Team.SUPPORT_TI, content="A")
    repo, mock_conn = _repo_with_conn((stored.id,))
    monkeypatch.setattr(repo, "get_note", lambda note_id: None)

    # Both writers read the same stored note before either saves.
    first = copy.deepcopy(stored)
    second = copy.deepcopy(stored)
    base = len(stored.version_history)
    first.change_content("B", editor_id=editor.user_id, editor_name=editor.name)
    second.change_content("C", editor_id=editor.user_id, editor_name=editor.name)

    repo.update_note(first, new_versions=first.version_history[base:])
    repo.update_note(second, new_versions=second.version_history[base:])

    inserted = _version_inserts(mock_conn)
    assert [params[1] for params in inserted] == ["A", "A"]
    assert all(params[0] == stored.id for params in inserted)
    assert all(params[3] == editor.user_id for params in inserted)


def test_update_without_new_versions_inserts_none(monkeypatch):
    note = make_note(Team.GERAL)
    repo, mock_conn = _repo_with_conn((note.id,))
    monkeypatch.setattr(repo, "get_note", lambda note_id: note)

    assert repo.update_note(note) is note
    assert _version_inserts(mock_conn) == []


def test_update_missing_note_returns_none_without_child_writes():
    note = make_note(Team.GERAL)
    editor = make_actor(UserRole.ADMIN)
    note.change_content("B", editor_id=editor.user_id, editor_name=editor.name)
    repo, mock_conn = _repo_with_conn(None)

    assert repo.update_note(note, new_versions=note.version_history[1:]) is None
    assert _version_inserts(mock_conn) == []
    mock_conn.execute.assert_called_once()
