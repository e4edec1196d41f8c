"""Filter and sort helpers that derive the visible player table."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Any, Literal, Mapping, Sequence

from fplboard.config.fields import STAT_FIELDS, StatField, get_stat_field, position_name
from fplboard.models import Player


logger = logging.getLogger(__name__)

SortDirection = Literal["asc", "desc"]


def bound_param(key: str, side: Literal["min", "max"]) -> str:
    return f"{key}_{side}"


def parse_bound(raw: str | None) -> float | None:
    """Parse a bound input; empty and non-numeric strings yield ``None``."""

    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


@dataclass(frozen=True)
class FilterCriteria:
    """Filtering configuration for the player table.

    ``bounds`` maps ``"<stat>_min"`` / ``"<stat>_max"`` to the raw text the
    user typed; values are parsed when the predicate runs.
    """

    search: str = ""
    team: str = ""
    position: str = ""
    bounds: Mapping[str, str] = field(default_factory=dict)

    def bound_value(self, key: str, side: Literal["min", "max"]) -> float | None:
        return parse_bound(self.bounds.get(bound_param(key, side)))

    def invalid_bounds(self) -> list[str]:
        """Return bound parameters whose non-empty text is not a finite number."""

        invalid: list[str] = []
        for stat in STAT_FIELDS:
            for side in ("min", "max"):
                param = bound_param(stat.key, side)
                raw = self.bounds.get(param, "")
                if raw.strip() and parse_bound(raw) is None:
                    invalid.append(param)
        return invalid


@dataclass(frozen=True)
class SortState:
    key: str | None = None
    direction: SortDirection = "asc"

    def toggle(self, key: str) -> "SortState":
        """Flip direction when re-selecting the active key; a new key starts ascending."""

        if self.key == key and self.direction == "asc":
            return SortState(key=key, direction="desc")
        return SortState(key=key, direction="asc")


@dataclass(frozen=True)
class PlayerRow:
    """Display-ready table row."""

    player: Player
    team_name: str
    position_name: str

    def display(self, stat: StatField) -> str:
        return format_stat(getattr(self.player, stat.key), stat)


def _passes_bounds(player: Player, stat: StatField, criteria: FilterCriteria) -> bool:
    value = getattr(player, stat.key)
    if value is None:
        return True
    value = stat.apply(value)
    min_value = criteria.bound_value(stat.key, "min")
    max_value = criteria.bound_value(stat.key, "max")
    if min_value is not None and value < min_value:
        return False
    if max_value is not None and value > max_value:
        return False
    return True


def passes_criteria(player: Player, criteria: FilterCriteria) -> bool:
    if criteria.search and criteria.search.lower() not in player.full_name.lower():
        return False
    if criteria.team and ("" if player.team is None else str(player.team)) != criteria.team:
        return False
    if criteria.position and ("" if player.element_type is None else str(player.element_type)) != criteria.position:
        return False
    return all(_passes_bounds(player, stat, criteria) for stat in STAT_FIELDS)


def filter_players(players: Sequence[Player], criteria: FilterCriteria) -> list[Player]:
    """Return the players matching ``criteria`` in their original order."""

    invalid = criteria.invalid_bounds()
    if invalid:
        logger.warning("Ignoring non-numeric filter bounds: %s", ", ".join(invalid))
    return [player for player in players if passes_criteria(player, criteria)]


def compare_values(a: Any, b: Any, direction: SortDirection) -> int:
    """Order two transformed stat values.

    ``None`` sorts after every non-null value in both directions; it is not
    a mirrored "nulls last" rule.
    """

    if a is None and b is None:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1
    if a < b:
        return -1 if direction == "asc" else 1
    if a > b:
        return 1 if direction == "asc" else -1
    return 0


def sort_players(players: Sequence[Player], sort: SortState) -> list[Player]:
    """Return a stably sorted copy; without a sort key the order is unchanged."""

    if sort.key is None:
        return list(players)
    stat = get_stat_field(sort.key)

    def _compare(left: Player, right: Player) -> int:
        return compare_values(
            stat.apply(getattr(left, stat.key)),
            stat.apply(getattr(right, stat.key)),
            sort.direction,
        )

    return sorted(players, key=cmp_to_key(_compare))


def derive_rows(
    players: Sequence[Player],
    teams: Mapping[int, str],
    criteria: FilterCriteria,
    sort: SortState,
) -> list[PlayerRow]:
    ordered = sort_players(filter_players(players, criteria), sort)
    return [
        PlayerRow(
            player=player,
            team_name=teams.get(player.team, "") if player.team is not None else "",
            position_name=position_name(player.element_type),
        )
        for player in ordered
    ]


def format_number(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def format_stat(value: Any, stat: StatField) -> str:
    if value is None:
        return "?"
    return format_number(stat.apply(value))


__all__ = [
    "FilterCriteria",
    "PlayerRow",
    "SortDirection",
    "SortState",
    "bound_param",
    "compare_values",
    "derive_rows",
    "filter_players",
    "format_number",
    "format_stat",
    "parse_bound",
    "passes_criteria",
    "sort_players",
]
