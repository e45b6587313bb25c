"""Manifold market list -> canonical Market."""

from __future__ import annotations

from typing import Any

from dissonance.ingestion.base import build_market, to_float
from dissonance.ingestion.categorize import categorize
from dissonance.models import Market

SOURCE = "Manifold"
DEFAULT_PROB = 0.5


def parse_market(raw: dict[str, Any]) -> Market | None:
    prob = to_float(raw.get("probability") or DEFAULT_PROB, DEFAULT_PROB)
    question = raw.get("question") or ""
    close_time = raw.get("closeTime")
    return build_market(
        id=f"mani_{raw.get('id')}",
        question=question,
        source=SOURCE,
        category=categorize(question),
        yes_odds=prob,
        no_odds=1 - prob,
        volume=to_float(raw.get("volume24Hours") or 0, 0.0),
        url=raw.get("url") or "",
        end_date=str(close_time) if close_time is not None else None,
    )


def normalize_manifold(payload: Any) -> list[Market]:
    if not isinstance(payload, list):
        return []
    markets = []
    for row in payload:
        if not isinstance(row, dict):
            continue
        market = parse_market(row)
        if market is not None:
            markets.append(market)
    return markets
