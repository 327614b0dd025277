"""
Name: Board Query Translator Tests

Responsibilities:
  - Policy is consulted before anything else (FORBIDDEN fail-fast)
  - search/tag normalization ("all" sentinel)
  - month/year validation and range conversion
"""

from datetime import datetime, timezone

import pytest

from noteboard.application.usecases import (
    BoardErrorCode,
    ListFilters,
    build_board_query,
)
from noteboard.domain.entities import Team
from noteboard.domain.visibility_policy import PolicyMode

pytestmark = pytest.mark.unit


def test_admin_without_filter_has_no_team_restriction(admin):
    query, error = build_board_query(admin, ListFilters())
    assert error is None
    assert query.teams is None


def test_team_role_default_scope(support):
    query, error = build_board_query(support, ListFilters())
    assert error is None
    assert query.teams == {Team.SUPPORT_TI, Team.GERAL}


def test_overview_default_scope_is_unrestricted(support):
    query, error = build_board_query(support, ListFilters(), mode=PolicyMode.OVERVIEW)
    assert error is None
    assert query.teams is None


def test_requesting_forbidden_team_fails_fast(support):
    query, error = build_board_query(
        support, ListFilters(team_view="Sistemas MV"), resource="Note"
    )
    assert query is None
    assert error.code == BoardErrorCode.FORBIDDEN
    assert error.resource == "Note"


def test_viewer_requesting_team_is_forbidden(viewer):
    _, error = build_board_query(viewer, ListFilters(team_view="Support TI"))
    assert error.code == BoardErrorCode.FORBIDDEN


def test_admin_requesting_unknown_team_is_invalid_input(admin):
    _, error = build_board_query(admin, ListFilters(team_view="Marketing"))
    assert error.code == BoardErrorCode.VALIDATION_ERROR


def test_non_admin_requesting_unknown_team_is_forbidden(sistemas):
    _, error = build_board_query(sistemas, ListFilters(team_view="Marketing"))
    assert error.code == BoardErrorCode.FORBIDDEN


def test_blank_team_view_is_ignored(support):
    query, error = build_board_query(support, ListFilters(team_view="   "))
    assert error is None
    assert query.teams == {Team.SUPPORT_TI, Team.GERAL}


def test_search_and_tag_are_trimmed(admin):
    query, _ = build_board_query(admin, ListFilters(search="  vpn ", tag=" infra "))
    assert query.search == "vpn"
    assert query.tag == "infra"


@pytest.mark.parametrize("tag", ["all", "", "   ", None])
def test_all_sentinel_or_blank_tag_means_no_tag_filter(admin, tag):
    query, _ = build_board_query(admin, ListFilters(tag=tag))
    assert query.tag is None


def test_month_and_year_become_inclusive_range(admin):
    query, error = build_board_query(
        admin, ListFilters(month=2, year=2026), with_dates=True
    )
    assert error is None
    assert query.date_from == datetime(2026, 2, 1, tzinfo=timezone.utc)
    assert query.date_to == datetime(2026, 2, 28, 23, 59, 59, 999000, tzinfo=timezone.utc)


@pytest.mark.parametrize("filters", [ListFilters(month=3), ListFilters(year=2026)])
def test_partial_date_filter_is_invalid(admin, filters):
    _, error = build_board_query(admin, filters, with_dates=True)
    assert error.code == BoardErrorCode.VALIDATION_ERROR


def test_invalid_month_is_invalid_input(admin):
    _, error = build_board_query(admin, ListFilters(month=13, year=2026), with_dates=True)
    assert error.code == BoardErrorCode.VALIDATION_ERROR


def test_dates_are_ignored_when_not_requested(admin):
    query, error = build_board_query(admin, ListFilters(month=13), with_dates=False)
    assert error is None
    assert query.date_from is None
    assert query.date_to is None


def test_forbidden_wins_over_date_validation(viewer):
    _, error = build_board_query(
        viewer, ListFilters(team_view="Support TI", month=1), with_dates=True
    )
    assert error.code == BoardErrorCode.FORBIDDEN
