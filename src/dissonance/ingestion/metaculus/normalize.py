"""Metaculus question list -> canonical Market (binary questions only)."""

from __future__ import annotations

from typing import Any

from dissonance.ingestion.base import build_market, to_float
from dissonance.ingestion.categorize import categorize
from dissonance.models import Market

SOURCE = "Metaculus"
DEFAULT_PROB = 0.5
QUESTION_URL = "https://www.metaculus.com/questions/{id}"


def community_probability(raw: dict[str, Any]) -> float:
    """Community median (full.q2), else mean, else 0.5."""
    cp = raw.get("community_prediction")
    if not isinstance(cp, dict):
        return DEFAULT_PROB
    full = cp.get("full") if isinstance(cp.get("full"), dict) else {}
    value = full.get("q2") or cp.get("mean") or DEFAULT_PROB
    return to_float(value, DEFAULT_PROB)


def parse_question(raw: dict[str, Any]) -> Market | None:
    """Non-binary questions have no yes/no reading and yield None."""
    if raw.get("possibility_type") != "binary":
        return None
    prob = community_probability(raw)
    title = raw.get("title") or ""
    qid = raw.get("id")
    return build_market(
        id=f"meta_{qid}",
        question=title,
        source=SOURCE,
        category=categorize(title),
        yes_odds=prob,
        no_odds=1 - prob,
        volume=None,
        url=QUESTION_URL.format(id=qid),
        end_date=raw.get("resolve_time"),
    )


def normalize_metaculus(payload: Any) -> list[Market]:
    results = payload.get("results") if isinstance(payload, dict) else None
    if not isinstance(results, list):
        return []
    markets = []
    for row in results:
        if not isinstance(row, dict):
            continue
        market = parse_question(row)
        if market is not None:
            markets.append(market)
    return markets
