"""Client for the public Fantasy Premier League gateway."""

from .client import (
    UpstreamClient,
    UpstreamError,
    UpstreamPayloadError,
    UpstreamResponse,
    UpstreamStatusError,
)

__all__ = [
    "UpstreamClient",
    "UpstreamError",
    "UpstreamPayloadError",
    "UpstreamResponse",
    "UpstreamStatusError",
]
