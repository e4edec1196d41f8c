"""In-memory data store for bootstrap data and lazily fetched player history."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from fplboard.models import BootstrapData, ElementSummary, Player
from fplboard.upstream import UpstreamClient, UpstreamPayloadError, UpstreamResponse


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _validate(model: Type[ModelT], response: UpstreamResponse) -> ModelT:
    try:
        return model.model_validate(response.payload)
    except ValidationError as exc:
        raise UpstreamPayloadError(
            f"Upstream {response.resource} returned an unexpected payload: {exc.error_count()} validation errors"
        ) from exc


class DataStore:
    """Session store: bootstrap snapshot loaded once, detail cached per player.

    The detail cache only grows and is write-once per player id; a slower
    duplicate fetch for an id that is already cached is discarded. Failed
    fetches leave no entry behind.
    """

    def __init__(self, client: UpstreamClient):
        self._client = client
        self._bootstrap: Optional[BootstrapData] = None
        self._players_by_id: Dict[int, Player] = {}
        self._teams: Dict[int, str] = {}
        self._details: Dict[int, ElementSummary] = {}
        self._bootstrap_lock = asyncio.Lock()

    @property
    def loaded(self) -> bool:
        return self._bootstrap is not None

    @property
    def players(self) -> List[Player]:
        return list(self._bootstrap.elements) if self._bootstrap else []

    @property
    def teams(self) -> Dict[int, str]:
        return dict(self._teams)

    async def load_bootstrap(self) -> BootstrapData:
        if self._bootstrap is not None:
            return self._bootstrap
        async with self._bootstrap_lock:
            if self._bootstrap is None:
                response = (await self._client.bootstrap_static()).raise_for_status()
                bootstrap = _validate(BootstrapData, response)
                self._players_by_id = {player.id: player for player in bootstrap.elements}
                self._teams = bootstrap.team_names()
                self._bootstrap = bootstrap
                logger.info(
                    "Loaded bootstrap data: %s players, %s teams",
                    len(bootstrap.elements),
                    len(bootstrap.teams),
                )
        return self._bootstrap

    def get_player(self, player_id: int) -> Optional[Player]:
        return self._players_by_id.get(player_id)

    def cached_detail(self, player_id: int) -> Optional[ElementSummary]:
        return self._details.get(player_id)

    async def load_detail(self, player_id: int) -> ElementSummary:
        cached = self._details.get(player_id)
        if cached is not None:
            logger.debug("Detail cache hit for player %s", player_id)
            return cached
        response = (await self._client.element_summary(player_id)).raise_for_status()
        summary = _validate(ElementSummary, response)
        stored = self._details.setdefault(player_id, summary)
        if stored is summary:
            logger.info("Cached %s gameweeks for player %s", len(summary.history), player_id)
        return stored


__all__ = ["DataStore"]
