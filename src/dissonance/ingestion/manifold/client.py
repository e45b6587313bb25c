"""Manifold API connector."""

from __future__ import annotations

from typing import Any

from dissonance.ingestion.base import ProviderConnector
from dissonance.ingestion.manifold.normalize import SOURCE, normalize_manifold
from dissonance.models import Market

MANIFOLD_MARKETS_URL = "https://api.manifold.markets/v0/markets"


class ManifoldConnector(ProviderConnector):
    source = SOURCE

    def __init__(
        self,
        api_url: str = MANIFOLD_MARKETS_URL,
        limit: int = 50,
        relay_prefix: str = "",
    ) -> None:
        super().__init__(api_url, limit=limit, relay_prefix=relay_prefix)

    def query_params(self) -> dict[str, Any]:
        return {"limit": self.limit}

    def normalize(self, payload: Any) -> list[Market]:
        return normalize_manifold(payload)
