"""CSV export helpers for the derived player table."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Sequence

from fplboard.config.fields import STAT_FIELDS, StatField

from .filtering import PlayerRow, format_number


def _raw_cell(row: PlayerRow, stat: StatField) -> str:
    value = getattr(row.player, stat.key)
    if value is None:
        return ""
    return format_number(stat.apply(value))


def export_rows_to_csv(rows: Sequence[PlayerRow], *, stats: Sequence[StatField] = STAT_FIELDS) -> str:
    """Convert table rows to CSV; unknown statistics are written as empty cells."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(["id", "name", "team", "position", *(stat.label for stat in stats)])
    for row in rows:
        writer.writerow([
            row.player.id,
            row.player.full_name,
            row.team_name,
            row.position_name,
            *(_raw_cell(row, stat) for stat in stats),
        ])
    return buffer.getvalue()


__all__ = ["export_rows_to_csv"]
