import pytest

from fplboard.config import DEFAULT_METRICS
from fplboard.state import (
    AppState,
    clear_selection,
    decode_query,
    encode_query,
    select_player,
    set_bound,
    set_position_filter,
    set_search,
    set_team_filter,
    state_url,
    toggle_metric,
    toggle_sort,
)
from fplboard.table import SortState


def test_filter_transitions_return_new_state():
    state = AppState()
    updated = set_position_filter(set_team_filter(set_search(state, "salah"), "12"), "3")

    assert state.criteria.search == ""
    assert updated.criteria.search == "salah"
    assert updated.criteria.team == "12"
    assert updated.criteria.position == "3"


def test_set_bound_adds_and_clears():
    state = set_bound(AppState(), "now_cost", "min", "6")
    assert state.criteria.bounds == {"now_cost_min": "6"}

    state = set_bound(state, "now_cost", "min", "")
    assert state.criteria.bounds == {}

    with pytest.raises(KeyError):
        set_bound(state, "bogus", "max", "1")


def test_toggle_sort_flips_then_resets_for_new_key():
    state = toggle_sort(AppState(), "total_points")
    assert state.sort == SortState("total_points", "asc")
    state = toggle_sort(state, "total_points")
    assert state.sort == SortState("total_points", "desc")
    state = toggle_sort(state, "minutes")
    assert state.sort == SortState("minutes", "asc")


def test_toggle_metric():
    state = AppState()
    assert state.metrics == DEFAULT_METRICS

    state = toggle_metric(state, "bonus", True)
    assert state.metrics == ("total_points", "bonus")
    assert toggle_metric(state, "bonus", True) is state

    state = toggle_metric(toggle_metric(state, "total_points", False), "bonus", False)
    assert state.metrics == ()


def test_selection_transitions():
    state = select_player(AppState(), 7)
    assert state.selected_player_id == 7
    assert clear_selection(state).selected_player_id is None


def test_query_round_trip():
    state = AppState()
    state = set_search(state, "Sa")
    state = set_team_filter(state, "12")
    state = set_bound(state, "now_cost", "max", "8.5")
    state = toggle_sort(toggle_sort(state, "form"), "form")
    state = toggle_metric(state, "threat", True)

    assert decode_query(encode_query(state)) == state


def test_decode_query_ignores_unknown_values():
    state = decode_query(
        [("sort", "ict_index"), ("dir", "sideways"), ("metric", "bogus"), ("metric", "assists"), ("other", "1")]
    )

    assert state.sort == SortState()
    assert state.metrics == ("assists",)
    assert state.criteria.bounds == {}


def test_empty_metric_marker_means_no_metrics():
    state = toggle_metric(AppState(), "total_points", False)
    items = encode_query(state)

    assert items == [("metric", "")]
    assert decode_query(items).metrics == ()


def test_state_url():
    state = set_search(AppState(), "van dijk")
    assert state_url(AppState()) == "/ui"
    assert state_url(state) == "/ui?q=van+dijk"
    assert state_url(select_player(state, 5)) == "/ui/players/5?q=van+dijk"
