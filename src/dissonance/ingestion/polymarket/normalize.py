"""Polymarket CLOB market list -> canonical Market."""

from __future__ import annotations

from typing import Any

import structlog

from dissonance.ingestion.base import build_market, to_float
from dissonance.ingestion.categorize import categorize
from dissonance.models import Market

log = structlog.get_logger(__name__)

SOURCE = "Polymarket"
DEFAULT_PRICE = 0.5
EVENT_URL = "https://polymarket.com/event/{condition_id}"


def _outcome_price(raw: dict[str, Any], index: int) -> Any:
    """Price of the index-th outcome, from 'outcomes' first, then 'tokens'. Falsy -> None."""
    for field in ("outcomes", "tokens"):
        entries = raw.get(field)
        if isinstance(entries, list) and len(entries) > index and isinstance(entries[index], dict):
            price = entries[index].get("price")
            if price:
                return price
    return None


def market_rows(payload: Any) -> list[dict[str, Any]]:
    """Accept a bare list or a paginated CLOB page ({'data': [...]})."""
    if isinstance(payload, dict):
        payload = payload.get("data")
    if not isinstance(payload, list):
        return []
    return [row for row in payload if isinstance(row, dict)]


def parse_market(raw: dict[str, Any], drop_default_odds: bool = False) -> Market | None:
    """Convert one CLOB market. First two outcome prices are yes/no, 0.5 when absent."""
    condition_id = str(raw.get("condition_id") or "")
    question = raw.get("question") or ""
    yes_raw = _outcome_price(raw, 0)
    no_raw = _outcome_price(raw, 1)
    if drop_default_odds and (yes_raw is None or no_raw is None):
        log.debug("skip_default_odds", condition_id=condition_id)
        return None
    return build_market(
        id=f"poly_{condition_id}",
        question=question,
        source=SOURCE,
        category=categorize(question),
        yes_odds=to_float(yes_raw if yes_raw is not None else DEFAULT_PRICE),
        no_odds=to_float(no_raw if no_raw is not None else DEFAULT_PRICE),
        volume=to_float(raw.get("volume") or 0, 0.0),
        url=EVENT_URL.format(condition_id=condition_id),
        end_date=raw.get("end_date_iso"),
    )


def normalize_polymarket(
    payload: Any,
    limit: int | None = None,
    drop_default_odds: bool = False,
) -> list[Market]:
    rows = market_rows(payload)
    if limit is not None:
        rows = rows[:limit]
    markets = []
    for row in rows:
        market = parse_market(row, drop_default_odds=drop_default_odds)
        if market is not None and market.has_odds:
            markets.append(market)
    return markets
