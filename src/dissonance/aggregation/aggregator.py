"""Question aggregator - folds normalized Markets into per-question groups."""

from __future__ import annotations

from typing import Iterable

from dissonance.aggregation.matching import QuestionKeyStrategy, question_key
from dissonance.models import AggregatedQuestion, Market, SourceQuote


class QuestionAggregator:
    """Holds one AggregatedQuestion per match key, in first-seen order."""

    def __init__(self, key_strategy: QuestionKeyStrategy | None = None) -> None:
        self.key_strategy = key_strategy or question_key
        self._groups: dict[str, AggregatedQuestion] = {}

    def _group(self, key: str, market: Market) -> AggregatedQuestion:
        if key not in self._groups:
            self._groups[key] = AggregatedQuestion(
                question=market.question,
                category=market.category,
                end_date=market.end_date,
            )
        return self._groups[key]

    def add(self, market: Market) -> None:
        """Merge one market; a later quote from the same provider replaces the earlier one."""
        if not market.has_odds:
            return
        group = self._group(self.key_strategy(market.question), market)
        group.sources[market.source] = SourceQuote(
            yes_odds=market.yes_odds,
            no_odds=market.no_odds,
            url=market.url,
            volume=market.volume,
        )

    def get_group(self, key: str) -> AggregatedQuestion | None:
        return self._groups.get(key)

    def groups(self) -> list[AggregatedQuestion]:
        return list(self._groups.values())


def aggregate(
    markets: Iterable[Market],
    key_strategy: QuestionKeyStrategy | None = None,
) -> list[AggregatedQuestion]:
    agg = QuestionAggregator(key_strategy)
    for market in markets:
        agg.add(market)
    return agg.groups()
