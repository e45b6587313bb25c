"""Cross-provider question grouping."""

from dissonance.aggregation.aggregator import QuestionAggregator, aggregate
from dissonance.aggregation.matching import AlnumPrefixKey, QuestionKeyStrategy

__all__ = ["QuestionAggregator", "aggregate", "AlnumPrefixKey", "QuestionKeyStrategy"]
