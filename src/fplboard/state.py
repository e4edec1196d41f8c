"""Explicit dashboard state and the pure transitions that update it.

The UI keeps no state between requests: every page is rendered from an
``AppState`` decoded from the query string, and every link or form on the
page encodes the state produced by one of the transitions below.
"""

from __future__ import annotations

import urllib.parse
from dataclasses import dataclass, field, replace
from typing import Iterable, Literal

from fplboard.config.fields import DEFAULT_METRICS, STAT_FIELDS, get_chart_metric, get_stat_field
from fplboard.table.filtering import FilterCriteria, SortState, bound_param


SEARCH_PARAM = "q"
TEAM_PARAM = "team"
POSITION_PARAM = "position"
SORT_PARAM = "sort"
DIRECTION_PARAM = "dir"
METRIC_PARAM = "metric"

_BOUND_PARAMS = {bound_param(stat.key, side) for stat in STAT_FIELDS for side in ("min", "max")}


@dataclass(frozen=True)
class AppState:
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    sort: SortState = field(default_factory=SortState)
    selected_player_id: int | None = None
    metrics: tuple[str, ...] = DEFAULT_METRICS


def set_search(state: AppState, term: str) -> AppState:
    return replace(state, criteria=replace(state.criteria, search=term))


def set_team_filter(state: AppState, team: str) -> AppState:
    return replace(state, criteria=replace(state.criteria, team=team))


def set_position_filter(state: AppState, position: str) -> AppState:
    return replace(state, criteria=replace(state.criteria, position=position))


def set_bound(state: AppState, key: str, side: Literal["min", "max"], raw: str) -> AppState:
    get_stat_field(key)
    bounds = dict(state.criteria.bounds)
    param = bound_param(key, side)
    if raw:
        bounds[param] = raw
    else:
        bounds.pop(param, None)
    return replace(state, criteria=replace(state.criteria, bounds=bounds))


def toggle_sort(state: AppState, key: str) -> AppState:
    get_stat_field(key)
    return replace(state, sort=state.sort.toggle(key))


def select_player(state: AppState, player_id: int) -> AppState:
    return replace(state, selected_player_id=player_id)


def clear_selection(state: AppState) -> AppState:
    return replace(state, selected_player_id=None)


def toggle_metric(state: AppState, key: str, checked: bool) -> AppState:
    get_chart_metric(key)
    if checked:
        if key in state.metrics:
            return state
        return replace(state, metrics=state.metrics + (key,))
    return replace(state, metrics=tuple(metric for metric in state.metrics if metric != key))


def encode_query(state: AppState) -> list[tuple[str, str]]:
    criteria = state.criteria
    items: list[tuple[str, str]] = []
    if criteria.search:
        items.append((SEARCH_PARAM, criteria.search))
    if criteria.team:
        items.append((TEAM_PARAM, criteria.team))
    if criteria.position:
        items.append((POSITION_PARAM, criteria.position))
    for stat in STAT_FIELDS:
        for side in ("min", "max"):
            param = bound_param(stat.key, side)
            raw = criteria.bounds.get(param, "")
            if raw:
                items.append((param, raw))
    if state.sort.key is not None:
        items.append((SORT_PARAM, state.sort.key))
        items.append((DIRECTION_PARAM, state.sort.direction))
    if state.metrics != DEFAULT_METRICS:
        # An empty marker keeps an explicitly empty selection distinct from the default.
        items.extend((METRIC_PARAM, metric) for metric in state.metrics or ("",))
    return items


def decode_query(items: Iterable[tuple[str, str]], *, selected_player_id: int | None = None) -> AppState:
    """Build state from query items, ignoring unknown keys and values."""

    search = team = position = ""
    bounds: dict[str, str] = {}
    sort_key: str | None = None
    direction = "asc"
    metrics: list[str] | None = None

    for name, value in items:
        if name == SEARCH_PARAM:
            search = value
        elif name == TEAM_PARAM:
            team = value
        elif name == POSITION_PARAM:
            position = value
        elif name in _BOUND_PARAMS:
            if value:
                bounds[name] = value
        elif name == SORT_PARAM:
            sort_key = value or None
        elif name == DIRECTION_PARAM:
            direction = value
        elif name == METRIC_PARAM:
            metrics = metrics if metrics is not None else []
            if value and value not in metrics:
                try:
                    get_chart_metric(value)
                except KeyError:
                    continue
                metrics.append(value)

    if sort_key is not None:
        try:
            get_stat_field(sort_key)
        except KeyError:
            sort_key = None
    if direction not in ("asc", "desc"):
        direction = "asc"

    return AppState(
        criteria=FilterCriteria(search=search, team=team, position=position, bounds=bounds),
        sort=SortState(key=sort_key, direction=direction) if sort_key else SortState(),
        selected_player_id=selected_player_id,
        metrics=DEFAULT_METRICS if metrics is None else tuple(metrics),
    )


def state_url(state: AppState) -> str:
    """Return the UI URL that renders ``state``."""

    path = "/ui" if state.selected_player_id is None else f"/ui/players/{state.selected_player_id}"
    query = urllib.parse.urlencode(encode_query(state))
    return f"{path}?{query}" if query else path


__all__ = [
    "AppState",
    "clear_selection",
    "decode_query",
    "encode_query",
    "select_player",
    "set_bound",
    "set_position_filter",
    "set_search",
    "set_team_filter",
    "state_url",
    "toggle_metric",
    "toggle_sort",
]
