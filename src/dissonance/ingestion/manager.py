"""Fetch orchestrator - concurrent provider fetches joined into one market list."""

from __future__ import annotations

import asyncio
import time
from typing import Any

import httpx
import structlog

from dissonance.config.settings import PROVIDER_NAMES, Settings
from dissonance.ingestion.base import ProviderConnector
from dissonance.ingestion.manifold.client import ManifoldConnector
from dissonance.ingestion.metaculus.client import MetaculusConnector
from dissonance.ingestion.polymarket.clob import PolymarketConnector
from dissonance.models import Market

log = structlog.get_logger(__name__)


def build_connector(name: str, settings: Settings) -> ProviderConnector:
    """Create the connector for a provider key ('polymarket', 'metaculus', 'manifold')."""
    common: dict[str, Any] = {
        "api_url": settings.provider_api_url(name),
        "limit": settings.provider_limit(name),
        "relay_prefix": settings.relay_prefix,
    }
    if name == "polymarket":
        return PolymarketConnector(drop_default_odds=settings.drop_default_odds, **common)
    if name == "metaculus":
        return MetaculusConnector(**common)
    if name == "manifold":
        return ManifoldConnector(**common)
    raise ValueError(f"Unknown provider: {name}. Choose from: {list(PROVIDER_NAMES)}")


def build_connectors(settings: Settings, names: list[str] | None = None) -> list[ProviderConnector]:
    """Connectors for the given provider keys (default: all enabled), in canonical order."""
    wanted = [n.lower() for n in names] if names else settings.enabled_providers
    for name in wanted:
        if name not in PROVIDER_NAMES:
            raise ValueError(f"Unknown provider: {name}. Choose from: {list(PROVIDER_NAMES)}")
    return [build_connector(name, settings) for name in PROVIDER_NAMES if name in wanted]


class FetchManager:
    """Runs every connector concurrently and concatenates results in connector order.

    The join waits for all providers; a provider that fails contributes
    nothing instead of failing the cycle.
    """

    def __init__(
        self,
        connectors: list[ProviderConnector],
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.connectors = connectors
        self.timeout = timeout
        self.transport = transport
        self._last_counts: dict[str, int] = {}
        self._last_elapsed: float | None = None

    async def fetch_all(self) -> list[Market]:
        start = time.monotonic()
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            results = await asyncio.gather(
                *(c.fetch_markets(client) for c in self.connectors),
                return_exceptions=True,
            )
        markets: list[Market] = []
        counts: dict[str, int] = {}
        for connector, result in zip(self.connectors, results):
            if isinstance(result, BaseException) and not isinstance(result, Exception):
                raise result
            if isinstance(result, Exception):
                log.error("provider_crashed", source=connector.source, error=repr(result))
                result = []
            counts[connector.source] = len(result)
            markets.extend(result)
        self._last_counts = counts
        self._last_elapsed = time.monotonic() - start
        log.info("fetch_complete", total_markets=len(markets), **counts)
        return markets

    def get_status(self) -> dict[str, Any]:
        """Per-source market counts and duration of the last fetch."""
        return {
            "counts": dict(self._last_counts),
            "elapsed_sec": round(self._last_elapsed, 2) if self._last_elapsed is not None else None,
        }
