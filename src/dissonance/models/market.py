"""Market, SourceQuote, AggregatedQuestion - canonical entities."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Category = Literal["politics", "crypto", "sports", "tech", "other"]
SourceName = Literal["Polymarket", "Metaculus", "Manifold"]

CATEGORIES: tuple[str, ...] = ("politics", "crypto", "sports", "tech", "other")


class Market(BaseModel):
    """One provider's view of one question, after normalization."""

    id: str
    question: str = Field(..., min_length=1)
    source: SourceName
    category: Category = "other"
    yes_odds: float | None = Field(None, ge=0, le=1)
    no_odds: float | None = Field(None, ge=0, le=1)
    volume: float | None = Field(None, ge=0)
    url: str = ""
    end_date: str | None = None

    @property
    def has_odds(self) -> bool:
        return self.yes_odds is not None and self.no_odds is not None


class SourceQuote(BaseModel):
    """Per-provider prices inside an aggregated question."""

    yes_odds: float = Field(..., ge=0, le=1)
    no_odds: float = Field(..., ge=0, le=1)
    url: str = ""
    volume: float | None = None


class AggregatedQuestion(BaseModel):
    """Equivalent questions from one or more providers, merged under one match key."""

    question: str
    category: Category = "other"
    end_date: str | None = None
    sources: dict[SourceName, SourceQuote] = Field(default_factory=dict)

    @property
    def has_multiple_sources(self) -> bool:
        return len(self.sources) >= 2
