"""Runtime settings resolved from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass


logger = logging.getLogger(__name__)

DEFAULT_UPSTREAM_URL = "https://fantasy.premierleague.com/api"
DEFAULT_UPSTREAM_TIMEOUT = 10.0

_UPSTREAM_URL_ENV = "FPLBOARD_UPSTREAM_URL"
_UPSTREAM_TIMEOUT_ENV = "FPLBOARD_UPSTREAM_TIMEOUT"
_MASK_STATUS_ENV = "FPLBOARD_MASK_UPSTREAM_STATUS"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_flag(name: str) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return False
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    upstream_base_url: str = DEFAULT_UPSTREAM_URL
    upstream_timeout: float = DEFAULT_UPSTREAM_TIMEOUT
    # When False the proxies answer 200 for every upstream response.
    relay_upstream_status: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        base_url = os.getenv(_UPSTREAM_URL_ENV) or DEFAULT_UPSTREAM_URL
        return cls(
            upstream_base_url=base_url.rstrip("/"),
            upstream_timeout=_env_float(_UPSTREAM_TIMEOUT_ENV, DEFAULT_UPSTREAM_TIMEOUT, clamp_min=0.1),
            relay_upstream_status=not _env_flag(_MASK_STATUS_ENV),
        )
