import pytest

from fplboard.models import Player
from fplboard.table import (
    FilterCriteria,
    SortState,
    compare_values,
    derive_rows,
    filter_players,
    format_stat,
    passes_criteria,
    sort_players,
)
from fplboard.config import get_stat_field


def _player(player_id: int, **kwargs) -> Player:
    return Player(id=player_id, **kwargs)


def _ids(players) -> list[int]:
    return [player.id for player in players]


def _squad() -> list[Player]:
    return [
        _player(1, first_name="Mohamed", second_name="Salah", team=12, element_type=3, total_points=210, now_cost=130),
        _player(2, first_name="Erling", second_name="Haaland", team=13, element_type=4, total_points=180, now_cost=145),
        _player(3, first_name="Jordan", second_name="Pickford", team=7, element_type=1, total_points=140, now_cost=50),
        _player(4, first_name="Bukayo", second_name="Saka", team=1, element_type=3, total_points=None, now_cost=100),
    ]


def test_empty_criteria_keeps_every_player_in_order():
    players = _squad()
    assert filter_players(players, FilterCriteria()) == players


def test_search_matches_full_name_case_insensitively():
    players = _squad()
    assert _ids(filter_players(players, FilterCriteria(search="SA"))) == [1, 4]
    # The separator between first and second name is part of the haystack.
    assert _ids(filter_players(players, FilterCriteria(search="d sal"))) == [1]


def test_team_filter_is_exact_string_match():
    players = _squad()
    assert _ids(filter_players(players, FilterCriteria(team="1"))) == [4]
    assert _ids(filter_players(players, FilterCriteria(team="12"))) == [1]


def test_position_filter_is_exact_string_match():
    players = _squad()
    assert _ids(filter_players(players, FilterCriteria(position="3"))) == [1, 4]


def test_cost_bound_applies_display_transform():
    cheap = _player(1, total_points=10, now_cost=50)
    pricey = _player(2, total_points=20, now_cost=70)
    criteria = FilterCriteria(bounds={"now_cost_min": "6"})

    assert not passes_criteria(cheap, criteria)
    assert passes_criteria(pricey, criteria)


def test_bounds_are_inclusive():
    player = _player(1, total_points=100)
    assert passes_criteria(player, FilterCriteria(bounds={"total_points_min": "100", "total_points_max": "100"}))
    assert not passes_criteria(player, FilterCriteria(bounds={"total_points_max": "99.5"}))


def test_null_value_passes_any_bound():
    player = _player(1, total_points=None, now_cost=None)
    criteria = FilterCriteria(bounds={"total_points_min": "1000", "now_cost_max": "0"})
    assert passes_criteria(player, criteria)


def test_non_numeric_bound_is_ignored_and_reported():
    players = _squad()
    criteria = FilterCriteria(bounds={"now_cost_min": "abc", "total_points_max": "nan", "minutes_min": ""})

    assert filter_players(players, criteria) == players
    assert criteria.invalid_bounds() == ["total_points_max", "now_cost_min"]


def test_sort_without_key_is_noop():
    players = _squad()
    assert sort_players(players, SortState()) == players


def test_sort_nulls_stay_last_in_both_directions():
    players = [
        _player(1, total_points=10, now_cost=50),
        _player(2, total_points=20, now_cost=None),
    ]

    assert _ids(sort_players(players, SortState("total_points", "asc"))) == [1, 2]
    assert _ids(sort_players(players, SortState("now_cost", "asc"))) == [1, 2]
    assert _ids(sort_players(players, SortState("now_cost", "desc"))) == [1, 2]


def test_descending_is_reverse_of_ascending_for_non_null_values():
    players = _squad()
    ascending = _ids(sort_players(players, SortState("total_points", "asc")))
    descending = _ids(sort_players(players, SortState("total_points", "desc")))

    assert ascending == [3, 2, 1, 4]
    assert descending == [1, 2, 3, 4]
    assert ascending[:-1] == list(reversed(descending[:-1]))


def test_sort_is_stable_for_equal_values():
    players = [
        _player(1, form=2.0),
        _player(2, form=5.0),
        _player(3, form=2.0),
        _player(4, form=None),
        _player(5, form=2.0),
        _player(6, form=None),
    ]

    assert _ids(sort_players(players, SortState("form", "asc"))) == [1, 3, 5, 2, 4, 6]
    assert _ids(sort_players(players, SortState("form", "desc"))) == [2, 1, 3, 5, 4, 6]


def test_sort_by_unknown_key_raises():
    with pytest.raises(KeyError):
        sort_players(_squad(), SortState("ict_index", "asc"))


def test_compare_values_null_branch_ignores_direction():
    assert compare_values(None, 1, "asc") == 1
    assert compare_values(None, 1, "desc") == 1
    assert compare_values(1, None, "desc") == -1
    assert compare_values(None, None, "asc") == 0
    assert compare_values(1, 2, "desc") == 1
    assert compare_values(2.5, 2.5, "asc") == 0


def test_sort_state_toggle():
    state = SortState()
    state = state.toggle("now_cost")
    assert state == SortState("now_cost", "asc")
    state = state.toggle("now_cost")
    assert state == SortState("now_cost", "desc")
    state = state.toggle("now_cost")
    assert state == SortState("now_cost", "asc")
    state = state.toggle("now_cost").toggle("minutes")
    assert state == SortState("minutes", "asc")


def test_derive_rows_filters_sorts_and_resolves_names():
    teams = {7: "Everton", 12: "Liverpool", 13: "Man City"}
    rows = derive_rows(
        _squad(),
        teams,
        FilterCriteria(bounds={"now_cost_max": "13"}),
        SortState("now_cost", "desc"),
    )

    assert [row.player.id for row in rows] == [1, 4, 3]
    assert rows[0].team_name == "Liverpool"
    assert rows[0].position_name == "Midfielder"
    # Team 1 is missing from the map and renders blank.
    assert rows[1].team_name == ""
    assert rows[2].position_name == "Goalkeeper"


def test_format_stat():
    cost = get_stat_field("now_cost")
    assert format_stat(55, cost) == "5.5"
    assert format_stat(50, cost) == "5"
    assert format_stat(None, cost) == "?"
    assert format_stat(0.62, get_stat_field("expected_goals_per_90")) == "0.62"
