"""
Name: Board Model Tests

Responsibilities:
  - Note.change_content version-history rules
  - BoardQuery in-memory predicate
  - month_range boundaries
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from noteboard.domain.entities import Team
from noteboard.domain.value_objects import BoardQuery, month_range
from tests.factories import make_event, make_note

pytestmark = pytest.mark.unit


# =============================================================================
# Note.change_content
# =============================================================================


def test_change_content_archives_prior_content_first():
    note = make_note(Team.GERAL, content="A")
    editor = uuid4()

    changed = note.change_content("B", editor_id=editor, editor_name="Editor")

    assert changed is True
    assert note.content == "B"
    assert [v.content for v in note.version_history] == ["A", "A"]
    assert note.version_history[-1].editor_id == editor
    assert note.version_history[-1].editor_name == "Editor"


def test_change_content_to_same_value_is_a_noop():
    note = make_note(Team.GERAL, content="A")
    note.change_content("B", editor_id=uuid4(), editor_name="x")

    changed = note.change_content("B", editor_id=uuid4(), editor_name="x")

    assert changed is False
    assert len(note.version_history) == 2


def test_touch_sets_updated_at():
    note = make_note(Team.GERAL)
    at = datetime(2030, 1, 1, tzinfo=timezone.utc)
    note.touch(at)
    assert note.updated_at == at


# =============================================================================
# BoardQuery
# =============================================================================


def test_empty_query_matches_everything():
    query = BoardQuery()
    assert query.matches_note(make_note(Team.SUPPORT_TI))
    assert query.matches_event(make_event(Team.SISTEMAS_MV))


def test_team_restriction():
    query = BoardQuery(teams=frozenset({Team.GERAL}))
    assert query.matches_note(make_note(Team.GERAL))
    assert not query.matches_note(make_note(Team.SUPPORT_TI))


def test_note_search_is_case_insensitive_across_fields():
    note = make_note(Team.GERAL, title="VPN Setup", content="steps", tags=["Network"])

    assert BoardQuery(search="vpn").matches_note(note)
    assert BoardQuery(search="STEPS").matches_note(note)
    assert BoardQuery(search="netw").matches_note(note)
    assert not BoardQuery(search="printer").matches_note(note)


def test_note_tag_filter_is_exact():
    note = make_note(Team.GERAL, tags=["infra", "urgent"])
    assert BoardQuery(tag="infra").matches_note(note)
    assert not BoardQuery(tag="inf").matches_note(note)


def test_event_search_includes_description():
    event = make_event(Team.GERAL, title="Sync", description="Quarterly planning")
    assert BoardQuery(search="quarterly").matches_event(event)
    assert not BoardQuery(search="retro").matches_event(event)


def test_event_date_range_is_inclusive():
    start, end = month_range(2026, 3)
    query = BoardQuery(date_from=start, date_to=end)

    assert query.matches_event(make_event(Team.GERAL, event_date=start))
    assert query.matches_event(make_event(Team.GERAL, event_date=end))
    assert not query.matches_event(
        make_event(Team.GERAL, event_date=start - timedelta(microseconds=1))
    )
    assert not query.matches_event(
        make_event(Team.GERAL, event_date=datetime(2026, 4, 1, tzinfo=timezone.utc))
    )


# =============================================================================
# month_range
# =============================================================================


def test_month_range_handles_leap_february():
    start, end = month_range(2028, 2)
    assert start == datetime(2028, 2, 1, tzinfo=timezone.utc)
    assert end == datetime(2028, 2, 29, 23, 59, 59, 999000, tzinfo=timezone.utc)


def test_month_range_december():
    _, end = month_range(2026, 12)
    assert end.day == 31


@pytest.mark.parametrize("month", [0, 13])
def test_month_range_rejects_invalid_month(month):
    with pytest.raises(ValueError):
        month_range(2026, month)
