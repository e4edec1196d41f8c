"""Thin async wrapper around the upstream gateway's JSON resources."""

from __future__ import annotations

import logging
import urllib.parse
from dataclasses import dataclass
from typing import Any

import httpx

from fplboard.config.settings import DEFAULT_UPSTREAM_TIMEOUT, DEFAULT_UPSTREAM_URL, Settings


logger = logging.getLogger(__name__)


class UpstreamError(RuntimeError):
    """Raised when the gateway cannot be reached or answers with a non-JSON body."""


class UpstreamStatusError(UpstreamError):
    """Raised when a non-2xx gateway response cannot be used as data."""

    def __init__(self, resource: str, status_code: int, payload: Any):
        super().__init__(f"Upstream {resource} answered HTTP {status_code}")
        self.resource = resource
        self.status_code = status_code
        self.payload = payload


class UpstreamPayloadError(UpstreamError):
    """Raised when a gateway JSON body does not have the expected shape."""


@dataclass(frozen=True)
class UpstreamResponse:
    resource: str
    status_code: int
    payload: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def raise_for_status(self) -> "UpstreamResponse":
        if not self.ok:
            raise UpstreamStatusError(self.resource, self.status_code, self.payload)
        return self


class UpstreamClient:
    """Fetch bootstrap and element-summary resources from the gateway.

    Every call returns the decoded JSON together with the upstream status
    code; callers decide whether a non-2xx answer is an error.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_UPSTREAM_URL,
        *,
        timeout: float = DEFAULT_UPSTREAM_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "UpstreamClient":
        return cls(settings.upstream_base_url, timeout=settings.upstream_timeout, transport=transport)

    async def get_json(self, resource: str) -> UpstreamResponse:
        url = f"{self.base_url}/{resource}"
        logger.info("Fetching upstream %s", url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Upstream request to {url} failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError(
                f"Upstream {resource} answered HTTP {response.status_code} with a non-JSON body"
            ) from exc

        if response.is_error:
            logger.warning("Upstream %s answered HTTP %s", resource, response.status_code)
        return UpstreamResponse(resource=resource, status_code=response.status_code, payload=payload)

    async def bootstrap_static(self) -> UpstreamResponse:
        return await self.get_json("bootstrap-static/")

    async def element_summary(self, element_id: str | int) -> UpstreamResponse:
        # The id is forwarded as given; quoting keeps it inside a single path segment.
        segment = urllib.parse.quote(str(element_id), safe="")
        return await self.get_json(f"element-summary/{segment}/")
