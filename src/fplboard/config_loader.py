"""Persist and load table filter profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from fplboard.table.filtering import FilterCriteria, SortState


@dataclass
class FilterProfile:
    search: str = ""
    team: str = ""
    position: str = ""
    bounds: Dict[str, str] = field(default_factory=dict)
    sort_key: Optional[str] = None
    sort_direction: str = "asc"

    @classmethod
    def load(cls, path: Path) -> "FilterProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            search=data.get("search", ""),
            team=data.get("team", ""),
            position=data.get("position", ""),
            bounds=data.get("bounds", {}),
            sort_key=data.get("sort_key"),
            sort_direction=data.get("sort_direction", "asc"),
        )

    def save(self, path: Path) -> None:
        payload = {
            "search": self.search,
            "team": self.team,
            "position": self.position,
            "bounds": self.bounds,
            "sort_key": self.sort_key,
            "sort_direction": self.sort_direction,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def criteria(self) -> FilterCriteria:
        return FilterCriteria(search=self.search, team=self.team, position=self.position, bounds=dict(self.bounds))

    def sort(self) -> SortState:
        if not self.sort_key:
            return SortState()
        direction = "desc" if self.sort_direction == "desc" else "asc"
        return SortState(key=self.sort_key, direction=direction)
