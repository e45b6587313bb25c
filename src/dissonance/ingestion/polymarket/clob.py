"""Polymarket CLOB connector - public market list."""

from __future__ import annotations

from typing import Any

from dissonance.ingestion.base import ProviderConnector
from dissonance.ingestion.polymarket.normalize import SOURCE, normalize_polymarket
from dissonance.models import Market

CLOB_MARKETS_URL = "https://clob.polymarket.com/markets"


class PolymarketConnector(ProviderConnector):
    """The CLOB endpoint has no page-size parameter; the list is truncated client-side."""

    source = SOURCE

    def __init__(
        self,
        api_url: str = CLOB_MARKETS_URL,
        limit: int = 50,
        relay_prefix: str = "",
        drop_default_odds: bool = False,
    ) -> None:
        super().__init__(api_url, limit=limit, relay_prefix=relay_prefix)
        self.drop_default_odds = drop_default_odds

    def normalize(self, payload: Any) -> list[Market]:
        return normalize_polymarket(
            payload, limit=self.limit, drop_default_odds=self.drop_default_odds
        )
