"""Request and response models for the player table and history JSON endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from fplboard.config.fields import STAT_FIELDS, get_stat_field
from fplboard.table.filtering import FilterCriteria, PlayerRow, SortState, bound_param, parse_bound


_BOUND_PARAMS = {bound_param(stat.key, side) for stat in STAT_FIELDS for side in ("min", "max")}


class PlayerFilterRequest(BaseModel):
    search: str = ""
    team: str = ""
    position: str = ""
    bounds: Dict[str, str] = Field(default_factory=dict)
    sort_key: Optional[str] = None
    sort_direction: Literal["asc", "desc"] = "asc"

    @field_validator("bounds", mode="before")
    @classmethod
    def _bounds_as_text(cls, bounds: Any) -> Any:
        # Numbers arrive from JSON clients; the table parses bound text.
        if isinstance(bounds, dict):
            return {
                param: str(raw) if isinstance(raw, (int, float)) and not isinstance(raw, bool) else raw
                for param, raw in bounds.items()
            }
        return bounds

    @field_validator("bounds")
    @classmethod
    def _check_bounds(cls, bounds: Dict[str, str]) -> Dict[str, str]:
        for param, raw in bounds.items():
            if param not in _BOUND_PARAMS:
                raise ValueError(f"unknown bound {param!r}")
            if raw.strip() and parse_bound(raw) is None:
                raise ValueError(f"bound {param!r} must be a number, got {raw!r}")
        return bounds

    @field_validator("sort_key")
    @classmethod
    def _check_sort_key(cls, key: Optional[str]) -> Optional[str]:
        if key is not None:
            try:
                get_stat_field(key)
            except KeyError as exc:
                raise ValueError(f"unknown sort key {key!r}") from exc
        return key

    def to_criteria(self) -> FilterCriteria:
        return FilterCriteria(search=self.search, team=self.team, position=self.position, bounds=dict(self.bounds))

    def to_sort(self) -> SortState:
        if self.sort_key is None:
            return SortState()
        return SortState(key=self.sort_key, direction=self.sort_direction)


class PlayerRowResponse(BaseModel):
    id: int
    name: str
    team: Optional[int]
    team_name: str
    position: Optional[int]
    position_name: str
    stats: Dict[str, Optional[float]]

    @classmethod
    def from_row(cls, row: PlayerRow) -> "PlayerRowResponse":
        player = row.player
        return cls(
            id=player.id,
            name=player.full_name,
            team=player.team,
            team_name=row.team_name,
            position=player.element_type,
            position_name=row.position_name,
            stats={stat.key: stat.apply(getattr(player, stat.key)) for stat in STAT_FIELDS},
        )


class PlayerFilterResponse(BaseModel):
    total_players: int
    matched_players: int
    players: List[PlayerRowResponse]


class ChartSeriesResponse(BaseModel):
    key: str
    label: str
    color: str
    points: List[Tuple[int, Optional[float]]]


class PlayerHistoryResponse(BaseModel):
    player_id: int
    history: List[Dict[str, Any]]
    series: List[ChartSeriesResponse]
