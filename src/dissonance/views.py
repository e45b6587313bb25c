"""Helpers for renderers: filtering and number formatting."""

from __future__ import annotations

from dissonance.models import CATEGORIES, AggregatedQuestion, ArbitrageOpportunity

# Values accepted by category filters; "all" disables filtering.
CATEGORY_FILTERS: tuple[str, ...] = ("all", *CATEGORIES)


def filter_questions(
    questions: list[AggregatedQuestion],
    search: str | None = None,
    category: str | None = None,
) -> list[AggregatedQuestion]:
    """Case-insensitive substring search plus category filter ('all' or None = any)."""
    filtered = questions
    if search:
        term = search.lower()
        filtered = [q for q in filtered if term in q.question.lower()]
    if category and category != "all":
        filtered = [q for q in filtered if q.category == category]
    return filtered


def format_probability(prob: float) -> str:
    return f"{prob * 100:.1f}%"


def format_edge(edge: float | None) -> str:
    if edge is None:
        return "—"
    return f"+{edge:.1f}%"


def describe_opportunity(opp: ArbitrageOpportunity) -> str:
    """One-paragraph explanation: combined probability and stakes per $100."""
    return (
        f"Combined implied probability: {format_probability(opp.implied_prob)}. "
        f"Bet ${opp.yes_stake:.0f} on YES ({opp.yes_source}) and "
        f"${opp.no_stake:.0f} on NO ({opp.no_source}). "
        f"Nominal edge: {opp.edge:.1f}%"
    )
