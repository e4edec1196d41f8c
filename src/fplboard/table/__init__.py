"""Player table utilities (filtering, sorting, export)."""

from .filtering import (
    FilterCriteria,
    PlayerRow,
    SortState,
    compare_values,
    derive_rows,
    filter_players,
    format_stat,
    passes_criteria,
    sort_players,
)
from .export import export_rows_to_csv

__all__ = [
    "FilterCriteria",
    "PlayerRow",
    "SortState",
    "compare_values",
    "derive_rows",
    "filter_players",
    "format_stat",
    "passes_criteria",
    "sort_players",
    "export_rows_to_csv",
]
