"""Player, team and gameweek models parsed from the upstream gateway."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel
from pydantic.config import ConfigDict


_MODEL_CONFIG = ConfigDict(frozen=True, extra="ignore")


class Team(BaseModel):
    id: int
    name: str
    short_name: Optional[str] = None

    model_config = _MODEL_CONFIG


class Player(BaseModel):
    """A single element from the bootstrap snapshot.

    Statistic fields are nullable; the gateway ships several of them as
    decimal strings which are coerced to floats here.
    """

    id: int
    first_name: str = ""
    second_name: str = ""
    web_name: Optional[str] = None
    team: Optional[int] = None
    element_type: Optional[int] = None

    total_points: Optional[int] = None
    now_cost: Optional[int] = None
    minutes: Optional[int] = None
    form: Optional[float] = None
    points_per_game: Optional[float] = None
    goals_scored: Optional[int] = None
    assists: Optional[int] = None
    clean_sheets: Optional[int] = None
    starts_per_90: Optional[float] = None
    clean_sheets_per_90: Optional[float] = None
    expected_goals_per_90: Optional[float] = None
    expected_assists_per_90: Optional[float] = None
    expected_goal_involvements_per_90: Optional[float] = None
    expected_goals_conceded_per_90: Optional[float] = None
    chance_of_playing_this_round: Optional[int] = None
    chance_of_playing_next_round: Optional[int] = None

    model_config = _MODEL_CONFIG

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.second_name}"


class GameweekEntry(BaseModel):
    round: int
    opponent_team: Optional[int] = None
    was_home: Optional[bool] = None
    total_points: Optional[int] = None
    minutes: Optional[int] = None
    goals_scored: Optional[int] = None
    assists: Optional[int] = None
    clean_sheets: Optional[int] = None
    goals_conceded: Optional[int] = None
    own_goals: Optional[int] = None
    bonus: Optional[int] = None
    creativity: Optional[float] = None
    threat: Optional[float] = None
    starts: Optional[int] = None
    expected_goals: Optional[float] = None
    expected_assists: Optional[float] = None
    expected_goal_involvements: Optional[float] = None
    expected_goals_conceded: Optional[float] = None
    value: Optional[int] = None
    transfers_balance: Optional[int] = None
    selected: Optional[int] = None
    transfers_in: Optional[int] = None
    transfers_out: Optional[int] = None

    model_config = _MODEL_CONFIG


class BootstrapData(BaseModel):
    elements: List[Player]
    teams: List[Team]

    model_config = _MODEL_CONFIG

    def team_names(self) -> dict[int, str]:
        return {team.id: team.name for team in self.teams}


class ElementSummary(BaseModel):
    history: List[GameweekEntry]

    model_config = _MODEL_CONFIG
