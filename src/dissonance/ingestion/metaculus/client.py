"""Metaculus API connector - open questions."""

from __future__ import annotations

from typing import Any

from dissonance.ingestion.base import ProviderConnector
from dissonance.ingestion.metaculus.normalize import SOURCE, normalize_metaculus
from dissonance.models import Market

METACULUS_QUESTIONS_URL = "https://www.metaculus.com/api2/questions/"


class MetaculusConnector(ProviderConnector):
    source = SOURCE

    def __init__(
        self,
        api_url: str = METACULUS_QUESTIONS_URL,
        limit: int = 50,
        relay_prefix: str = "",
    ) -> None:
        super().__init__(api_url, limit=limit, relay_prefix=relay_prefix)

    def query_params(self) -> dict[str, Any]:
        return {"limit": self.limit, "status": "open"}

    def normalize(self, payload: Any) -> list[Market]:
        return normalize_metaculus(payload)
