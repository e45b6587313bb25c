"""ArbitrageOpportunity and per-cycle summary."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from dissonance.models.market import AggregatedQuestion, Category, SourceName, SourceQuote

CycleState = Literal["no_data", "efficient", "opportunities"]


class ArbitrageOpportunity(BaseModel):
    """Best yes + best no across a question's providers summing below threshold."""

    question: str
    category: Category = "other"
    yes_source: SourceName
    yes_odds: float = Field(..., ge=0, le=1)
    no_source: SourceName
    no_odds: float = Field(..., ge=0, le=1)
    implied_prob: float
    edge: float = Field(..., description="(1 - implied_prob) * 100, in percent")
    sources: dict[SourceName, SourceQuote] = Field(default_factory=dict)

    @property
    def same_source(self) -> bool:
        """True when both legs come from one provider (not a cross-market arb)."""
        return self.yes_source == self.no_source

    @property
    def yes_stake(self) -> float:
        """Dollars on YES per $100 notional."""
        return self.yes_odds * 100

    @property
    def no_stake(self) -> float:
        return self.no_odds * 100


class CycleSummary(BaseModel):
    market_count: int = 0
    opportunity_count: int = 0
    best_edge: float | None = None  # None when there is no opportunity


class CycleResult(BaseModel):
    """Everything one refresh cycle produces. Callers own storage of this value."""

    questions: list[AggregatedQuestion] = Field(default_factory=list)
    opportunities: list[ArbitrageOpportunity] = Field(default_factory=list)
    raw_market_count: int = 0

    @property
    def summary(self) -> CycleSummary:
        return CycleSummary(
            market_count=len(self.questions),
            opportunity_count=len(self.opportunities),
            best_edge=self.opportunities[0].edge if self.opportunities else None,
        )

    @property
    def state(self) -> CycleState:
        if not self.questions:
            return "no_data"
        if not self.opportunities:
            return "efficient"
        return "opportunities"

    def top_opportunities(self, n: int = 10) -> list[ArbitrageOpportunity]:
        return self.opportunities[:n]
