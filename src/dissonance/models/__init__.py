"""Canonical schema (Pydantic) - Market, AggregatedQuestion, ArbitrageOpportunity."""

from dissonance.models.market import (
    CATEGORIES,
    AggregatedQuestion,
    Category,
    Market,
    SourceName,
    SourceQuote,
)
from dissonance.models.opportunity import ArbitrageOpportunity, CycleResult, CycleSummary

__all__ = [
    "Market",
    "SourceQuote",
    "AggregatedQuestion",
    "ArbitrageOpportunity",
    "CycleResult",
    "CycleSummary",
    "Category",
    "SourceName",
    "CATEGORIES",
]
