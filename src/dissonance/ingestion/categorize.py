"""Keyword categorizer: question text -> topical tag."""

from __future__ import annotations

from dissonance.models.market import Category

# Checked in order; first set with a substring hit wins.
CATEGORY_KEYWORDS: tuple[tuple[Category, tuple[str, ...]], ...] = (
    ("politics", ("trump", "biden", "election", "president", "congress")),
    ("crypto", ("bitcoin", "ethereum", "crypto", "btc", "eth")),
    ("sports", ("nfl", "nba", "world cup", "championship", "game")),
    ("tech", ("ai", "openai", "google", "apple", "tech")),
)


def categorize(question: str) -> Category:
    """Return the first category whose keywords appear in the question, else 'other'.

    Matching is plain substring on the lower-cased text, so short keywords
    like 'ai' or 'eth' also hit inside longer words ('said', 'method').
    """
    q = (question or "").lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(k in q for k in keywords):
            return category
    return "other"
