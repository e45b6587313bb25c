"""Pydantic schemas for API request/response consistency and OpenAPI docs."""

from __future__ import annotations

from pydantic import BaseModel, Field

from dissonance.models import AggregatedQuestion, ArbitrageOpportunity, CycleSummary
from dissonance.models.opportunity import CycleState


# --- Health ---
class HealthResponse(BaseModel):
    status: str = "ok"


# --- Error (consistent shape for 4xx/5xx) ---
class ErrorResponse(BaseModel):
    detail: str = Field(..., description="Human-readable message")
    code: str | None = Field(None, description="Machine-readable code, e.g. bad_provider")


# --- Markets ---
class MarketsListResponse(BaseModel):
    markets: list[AggregatedQuestion]
    total: int = Field(..., description="Matches after search/category filters")
    state: CycleState


# --- Arbitrage ---
class ArbitrageItem(ArbitrageOpportunity):
    cross_provider: bool = Field(True, description="False when both legs come from one provider")
    explanation: str = ""


class ArbitrageListResponse(BaseModel):
    opportunities: list[ArbitrageItem]
    total: int
    state: CycleState


# --- Stats ---
class StatsResponse(CycleSummary):
    raw_market_count: int = 0
    state: CycleState = "no_data"
    refreshed_at: float | None = Field(None, description="Unix time of the last completed cycle")
