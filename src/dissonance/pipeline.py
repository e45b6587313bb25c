"""One refresh cycle: fetch -> normalize -> aggregate -> detect arbitrage."""

from __future__ import annotations

from typing import Iterable

import httpx
import structlog

from dissonance.aggregation import AlnumPrefixKey, QuestionKeyStrategy, aggregate
from dissonance.arbitrage import DEFAULT_THRESHOLD, detect_arbitrage
from dissonance.config.settings import Settings
from dissonance.ingestion.manager import FetchManager, build_connectors
from dissonance.models import CycleResult, Market

log = structlog.get_logger(__name__)


def run_cycle(
    markets: Iterable[Market],
    threshold: float = DEFAULT_THRESHOLD,
    exclude_same_source: bool = False,
    key_strategy: QuestionKeyStrategy | None = None,
) -> CycleResult:
    """Pure part of a cycle over an already-collected market list."""
    markets = list(markets)
    questions = aggregate(markets, key_strategy)
    opportunities = detect_arbitrage(
        questions, threshold=threshold, exclude_same_source=exclude_same_source
    )
    result = CycleResult(
        questions=questions,
        opportunities=opportunities,
        raw_market_count=len(markets),
    )
    log.info(
        "cycle_complete",
        raw_markets=len(markets),
        aggregated=len(questions),
        opportunities=len(opportunities),
        state=result.state,
    )
    return result


async def refresh(
    settings: Settings,
    providers: list[str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> CycleResult:
    """Fetch every enabled provider and run a full cycle with configured thresholds."""
    manager = FetchManager(
        build_connectors(settings, providers),
        timeout=settings.request_timeout_sec,
        transport=transport,
    )
    markets = await manager.fetch_all()
    return run_cycle(
        markets,
        threshold=settings.arb_threshold,
        exclude_same_source=settings.exclude_same_source,
        key_strategy=AlnumPrefixKey(settings.match_key_length),
    )
