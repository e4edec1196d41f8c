"""Configuration helpers for stat fields and runtime settings."""

from .fields import (
    CHART_METRICS,
    DEFAULT_METRICS,
    HISTORY_COLUMNS,
    POSITIONS,
    STAT_FIELDS,
    StatField,
    get_chart_metric,
    get_stat_field,
    position_name,
)
from .settings import Settings

__all__ = [
    "CHART_METRICS",
    "DEFAULT_METRICS",
    "HISTORY_COLUMNS",
    "POSITIONS",
    "STAT_FIELDS",
    "Settings",
    "StatField",
    "get_chart_metric",
    "get_stat_field",
    "position_name",
]
