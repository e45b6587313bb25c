"""Best-price arbitrage detection over aggregated questions."""

from dissonance.arbitrage.detector import (
    DEFAULT_THRESHOLD,
    detect_arbitrage,
    find_best_cross_pair,
    find_best_prices,
)

__all__ = ["DEFAULT_THRESHOLD", "detect_arbitrage", "find_best_cross_pair", "find_best_prices"]
