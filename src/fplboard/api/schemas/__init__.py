"""Pydantic models for API I/O."""

from .players import (
    ChartSeriesResponse,
    PlayerFilterRequest,
    PlayerFilterResponse,
    PlayerHistoryResponse,
    PlayerRowResponse,
)

__all__ = [
    "ChartSeriesResponse",
    "PlayerFilterRequest",
    "PlayerFilterResponse",
    "PlayerHistoryResponse",
    "PlayerRowResponse",
]
