"""Declarative stat field metadata for the player table, chart and history views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple


def tenths(value: float) -> float:
    """Convert a value stored in tenths (e.g. ``now_cost``) to display units."""

    return value / 10


@dataclass(frozen=True)
class StatField:
    key: str
    label: str
    transform: Optional[Callable[[Any], Any]] = None

    def apply(self, value: Any) -> Any:
        if value is None or self.transform is None:
            return value
        return self.transform(value)


STAT_FIELDS: Tuple[StatField, ...] = (
    StatField("total_points", "Points"),
    StatField("now_cost", "Cost (£)", tenths),
    StatField("minutes", "Minutes"),
    StatField("form", "Form"),
    StatField("points_per_game", "Points/Game"),
    StatField("goals_scored", "Goals"),
    StatField("assists", "Assists"),
    StatField("clean_sheets", "Clean Sheets"),
    StatField("starts_per_90", "Starts/90"),
    StatField("clean_sheets_per_90", "CS/90"),
    StatField("expected_goals_per_90", "xG/90"),
    StatField("expected_assists_per_90", "xA/90"),
    StatField("expected_goal_involvements_per_90", "xGI/90"),
    StatField("expected_goals_conceded_per_90", "xGC/90"),
    StatField("chance_of_playing_this_round", "Playing This"),
    StatField("chance_of_playing_next_round", "Playing Next"),
)

CHART_METRICS: Tuple[StatField, ...] = (
    StatField("total_points", "Points"),
    StatField("goals_scored", "Goals"),
    StatField("assists", "Assists"),
    StatField("bonus", "Bonus"),
    StatField("creativity", "Creativity"),
    StatField("threat", "Threat"),
    StatField("expected_goals", "xG"),
    StatField("expected_assists", "xA"),
    StatField("expected_goal_involvements", "xGI"),
    StatField("expected_goals_conceded", "xGC"),
    StatField("value", "Value (£)", tenths),
)

DEFAULT_METRICS: Tuple[str, ...] = ("total_points",)

# Per-gameweek table columns; ``round`` and the opponent column are rendered separately.
HISTORY_COLUMNS: Tuple[StatField, ...] = (
    StatField("total_points", "Points"),
    StatField("minutes", "Minutes"),
    StatField("goals_scored", "Goals"),
    StatField("assists", "Assists"),
    StatField("clean_sheets", "Clean Sheets"),
    StatField("goals_conceded", "Goals Conceded"),
    StatField("own_goals", "Own Goals"),
    StatField("bonus", "Bonus"),
    StatField("creativity", "Creativity"),
    StatField("threat", "Threat"),
    StatField("starts", "Starts"),
    StatField("expected_goals", "xG"),
    StatField("expected_assists", "xA"),
    StatField("expected_goal_involvements", "xGI"),
    StatField("expected_goals_conceded", "xGC"),
    StatField("value", "Value (£)", tenths),
    StatField("transfers_balance", "Transfers Balance"),
    StatField("selected", "Selected By (managers)"),
    StatField("transfers_in", "Transfers In"),
    StatField("transfers_out", "Transfers Out"),
)

POSITIONS: Mapping[int, str] = {
    1: "Goalkeeper",
    2: "Defender",
    3: "Midfielder",
    4: "Forward",
}

_STAT_FIELD_LOOKUP: Dict[str, StatField] = {field.key: field for field in STAT_FIELDS}
_CHART_METRIC_LOOKUP: Dict[str, StatField] = {field.key: field for field in CHART_METRICS}


def get_stat_field(key: str) -> StatField:
    """Fetch a table stat field by key, raising KeyError if it is not declared."""

    if key not in _STAT_FIELD_LOOKUP:
        raise KeyError(f"Unknown stat field {key!r}")
    return _STAT_FIELD_LOOKUP[key]


def get_chart_metric(key: str) -> StatField:
    """Fetch a chart metric by key, raising KeyError if it is not declared."""

    if key not in _CHART_METRIC_LOOKUP:
        raise KeyError(f"Unknown chart metric {key!r}")
    return _CHART_METRIC_LOOKUP[key]


def position_name(position_id: int | None) -> str:
    if position_id is None:
        return "Unknown"
    return POSITIONS.get(position_id, "Unknown")
