"""Arbitrage detector - best yes + best no across providers below threshold."""

from __future__ import annotations

from typing import Iterable

import structlog

from dissonance.models import AggregatedQuestion, ArbitrageOpportunity

log = structlog.get_logger(__name__)

DEFAULT_THRESHOLD = 0.98


def find_best_prices(
    question: AggregatedQuestion,
) -> tuple[tuple[str, float] | None, tuple[str, float] | None]:
    """Return (best_yes, best_no) as (source, odds), scanning sources in insertion order.

    Strict '>' keeps the first maximum on ties. Maxima start unset rather
    than at 0, so a quote of exactly 0 is still selectable.
    """
    best_yes: tuple[str, float] | None = None
    best_no: tuple[str, float] | None = None
    for source, quote in question.sources.items():
        if best_yes is None or quote.yes_odds > best_yes[1]:
            best_yes = (source, quote.yes_odds)
        if best_no is None or quote.no_odds > best_no[1]:
            best_no = (source, quote.no_odds)
    return best_yes, best_no


def find_best_cross_pair(
    question: AggregatedQuestion,
) -> tuple[tuple[str, float] | None, tuple[str, float] | None]:
    """Best (yes, no) legs taken from two different providers.

    Pairs are scanned yes-source first, then no-source, both in insertion
    order; strict '>' on the summed price keeps the first pair on ties.
    """
    best: tuple[tuple[str, float], tuple[str, float]] | None = None
    for yes_source, yes_quote in question.sources.items():
        for no_source, no_quote in question.sources.items():
            if yes_source == no_source:
                continue
            total = yes_quote.yes_odds + no_quote.no_odds
            if best is None or total > best[0][1] + best[1][1]:
                best = ((yes_source, yes_quote.yes_odds), (no_source, no_quote.no_odds))
    if best is None:
        return None, None
    return best


def detect_arbitrage(
    questions: Iterable[AggregatedQuestion],
    threshold: float = DEFAULT_THRESHOLD,
    exclude_same_source: bool = False,
) -> list[ArbitrageOpportunity]:
    """Opportunities for questions quoted by >= 2 providers, sorted by edge descending.

    Both legs may come from the same provider. With exclude_same_source the
    legs are the best pair drawn from two different providers instead.
    """
    opportunities: list[ArbitrageOpportunity] = []
    for q in questions:
        if len(q.sources) < 2:
            continue
        if exclude_same_source:
            best_yes, best_no = find_best_cross_pair(q)
        else:
            best_yes, best_no = find_best_prices(q)
        if best_yes is None or best_no is None:
            continue
        implied = best_yes[1] + best_no[1]
        if implied >= threshold:
            continue
        opportunities.append(
            ArbitrageOpportunity(
                question=q.question,
                category=q.category,
                yes_source=best_yes[0],
                yes_odds=best_yes[1],
                no_source=best_no[0],
                no_odds=best_no[1],
                implied_prob=implied,
                edge=(1 - implied) * 100,
                sources=q.sources,
            )
        )
    # list.sort is stable: equal edges keep input order
    opportunities.sort(key=lambda o: o.edge, reverse=True)
    log.debug("arbitrage_scan", opportunities=len(opportunities), cross_only=exclude_same_source)
    return opportunities
