"""
Name: Visibility Policy Tests

Responsibilities:
  - Cover the role x team x mode matrix for listing (resolve_allowed_teams)
  - Cover read/update/delete decisions on a single resource
  - Cover comment, retag and create-in rules
"""

import pytest

from noteboard.domain.entities import ALL_TEAMS, Team
from noteboard.domain.visibility_policy import (
    AccessAction,
    PolicyMode,
    can_access,
    can_comment,
    can_create_in,
    can_retag,
    home_team,
    parse_team,
    resolve_allowed_teams,
)
from noteboard.identity.users import UserRole
from tests.factories import make_actor, make_event, make_note

pytestmark = pytest.mark.unit

STRICT = PolicyMode.STRICT
OVERVIEW = PolicyMode.OVERVIEW


# =============================================================================
# Helpers
# =============================================================================


def test_parse_team_accepts_catalog_values_only():
    assert parse_team("Geral") == Team.GERAL
    assert parse_team(" Support TI ") == Team.SUPPORT_TI
    assert parse_team(Team.SISTEMAS_MV) == Team.SISTEMAS_MV
    assert parse_team("geral") is None
    assert parse_team("Marketing") is None
    assert parse_team(None) is None


def test_home_team_only_for_team_roles():
    assert home_team(UserRole.SUPPORT_TI) == Team.SUPPORT_TI
    assert home_team(UserRole.SISTEMAS_MV) == Team.SISTEMAS_MV
    assert home_team(UserRole.ADMIN) is None
    assert home_team(UserRole.VIEWER) is None
    assert home_team(None) is None


# =============================================================================
# resolve_allowed_teams
# =============================================================================


@pytest.mark.parametrize("mode", [STRICT, OVERVIEW])
def test_admin_sees_everything_or_exactly_what_was_requested(admin, mode):
    assert resolve_allowed_teams(admin, None, mode=mode) == ALL_TEAMS
    assert resolve_allowed_teams(admin, "Sistemas MV", mode=mode) == {Team.SISTEMAS_MV}


@pytest.mark.parametrize("mode", [STRICT, OVERVIEW])
def test_viewer_is_limited_to_geral(viewer, mode):
    assert resolve_allowed_teams(viewer, None, mode=mode) == {Team.GERAL}
    assert resolve_allowed_teams(viewer, "Geral", mode=mode) == {Team.GERAL}
    assert resolve_allowed_teams(viewer, "Support TI", mode=mode) is None
    assert resolve_allowed_teams(viewer, "Sistemas MV", mode=mode) is None


@pytest.mark.parametrize(
    "requested, expected",
    [
        (None, {Team.SUPPORT_TI, Team.GERAL}),
        ("Support TI", {Team.SUPPORT_TI}),
        ("Geral", {Team.GERAL}),
        ("Sistemas MV", None),
    ],
)
def test_team_role_strict(support, requested, expected):
    assert resolve_allowed_teams(support, requested, mode=STRICT) == expected


@pytest.mark.parametrize(
    "requested, expected",
    [
        (None, set(ALL_TEAMS)),
        ("Sistemas MV", {Team.SISTEMAS_MV}),
        ("Geral", {Team.SISTEMAS_MV, Team.GERAL}),
        ("Support TI", {Team.SUPPORT_TI}),
    ],
)
def test_team_role_overview(sistemas, requested, expected):
    assert resolve_allowed_teams(sistemas, requested, mode=OVERVIEW) == expected


@pytest.mark.parametrize("mode", [STRICT, OVERVIEW])
def test_unknown_team_value_is_forbidden_for_non_admins(support, viewer, mode):
    assert resolve_allowed_teams(support, "Marketing", mode=mode) is None
    assert resolve_allowed_teams(viewer, "Marketing", mode=mode) is None


def test_empty_request_behaves_as_no_filter(support):
    assert resolve_allowed_teams(support, "", mode=STRICT) == {
        Team.SUPPORT_TI,
        Team.GERAL,
    }


@pytest.mark.parametrize("role", [None, "Intern", "admin"])
def test_missing_or_unknown_role_is_denied(role):
    actor = make_actor(role)
    assert resolve_allowed_teams(actor, None) is None
    assert resolve_allowed_teams(None, None) is None


@pytest.mark.parametrize("mode", [STRICT, OVERVIEW])
@pytest.mark.parametrize("requested", [None, "", *Team, "Marketing"])
@pytest.mark.parametrize("role", list(UserRole))
def test_allowed_teams_are_stable_across_calls(role, requested, mode):
    actor = make_actor(role)
    first = resolve_allowed_teams(actor, requested, mode=mode)
    second = resolve_allowed_teams(actor, requested, mode=mode)
    assert first == second
    if first is not None:
        assert first <= ALL_TEAMS


def test_role_given_as_plain_string_is_understood():
    actor = make_actor("Support TI")
    assert resolve_allowed_teams(actor, None) == {Team.SUPPORT_TI, Team.GERAL}


# =============================================================================
# can_access
# =============================================================================


@pytest.mark.parametrize("action", list(AccessAction))
@pytest.mark.parametrize("team", list(Team))
def test_admin_can_do_anything(admin, action, team):
    assert can_access(admin, make_note(team), action) is True


@pytest.mark.parametrize("team", list(Team))
def test_viewer_reads_geral_only_and_never_writes(viewer, team):
    note = make_note(team)
    assert can_access(viewer, note, AccessAction.READ) is (team == Team.GERAL)
    assert can_access(viewer, note, AccessAction.UPDATE) is False
    assert can_access(viewer, note, AccessAction.DELETE) is False


@pytest.mark.parametrize("action", list(AccessAction))
def test_team_role_full_access_on_own_team_and_geral(support, action):
    assert can_access(support, make_note(Team.SUPPORT_TI), action) is True
    assert can_access(support, make_note(Team.GERAL), action) is True


@pytest.mark.parametrize("action", list(AccessAction))
def test_team_role_denied_on_sibling_team_in_strict(support, action):
    assert can_access(support, make_event(Team.SISTEMAS_MV), action) is False


def test_overview_widens_read_only(support):
    sibling = make_note(Team.SISTEMAS_MV)
    assert can_access(support, sibling, AccessAction.READ, mode=OVERVIEW) is True
    assert can_access(support, sibling, AccessAction.UPDATE, mode=OVERVIEW) is False
    assert can_access(support, sibling, AccessAction.DELETE, mode=OVERVIEW) is False


def test_author_keeps_access_after_note_moved_to_sibling_team(support):
    note = make_note(Team.SISTEMAS_MV, author=support)
    for action in AccessAction:
        assert can_access(support, note, action) is True


def test_unknown_role_cannot_access():
    actor = make_actor("Intern")
    assert can_access(actor, make_note(Team.GERAL), AccessAction.READ) is False
    assert can_access(None, make_note(Team.GERAL), AccessAction.READ) is False


# =============================================================================
# can_comment / can_retag / can_create_in
# =============================================================================


@pytest.mark.parametrize("team", list(Team))
def test_team_roles_comment_on_any_note(support, sistemas, team):
    note = make_note(team)
    assert can_comment(support, note) is True
    assert can_comment(sistemas, note) is True


def test_viewer_comments_on_geral_only(viewer):
    assert can_comment(viewer, make_note(Team.GERAL)) is True
    assert can_comment(viewer, make_note(Team.SUPPORT_TI)) is False


def test_unknown_role_cannot_comment():
    assert can_comment(make_actor("Intern"), make_note(Team.GERAL)) is False
    assert can_comment(None, make_note(Team.GERAL)) is False


def test_only_admin_can_retag(admin, support, sistemas, viewer):
    assert can_retag(admin) is True
    assert can_retag(support) is False
    assert can_retag(sistemas) is False
    assert can_retag(viewer) is False
    assert can_retag(None) is False


@pytest.mark.parametrize("team", list(Team))
def test_admin_creates_in_any_team(admin, team):
    assert can_create_in(admin, team) is True


def test_team_role_creates_in_own_team_or_geral(sistemas):
    assert can_create_in(sistemas, Team.SISTEMAS_MV) is True
    assert can_create_in(sistemas, Team.GERAL) is True
    assert can_create_in(sistemas, Team.SUPPORT_TI) is False


def test_viewer_creates_nowhere(viewer):
    assert all(can_create_in(viewer, team) is False for team in Team)
