"""Pricing strategy protocol - one interface for cost-function and price-impact market makers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from predamm.models.market import Market
from predamm.models.trade import Quote


class PricingStrategy(ABC):
    """Base for pricing strategies. quote() is pure; apply() commits a quote to the market."""

    name: str = ""

    def validate_market(self, market: Market) -> None:
        """Called once when an engine is built. Optional: prepare or check strategy state."""
        pass

    @abstractmethod
    def quote(self, market: Market, index: int, side: str, amount: float) -> Quote:
        """Price a trade of `amount` notional on outcome `index`. Must not mutate market."""
        ...

    @abstractmethod
    def apply(self, market: Market, index: int, quote: Quote) -> None:
        """Write a quote computed on the current state into the market."""
        ...

    def describe(self) -> dict[str, float | str]:
        return {"name": self.name}


def _apply_position(market: Market, index: int, quote: Quote) -> None:
    """Shared bookkeeping: volume grows by the notional moved, position never goes below 0."""
    outcome = market.outcomes[index]
    outcome.volume += quote.cost
    if quote.side == "buy":
        outcome.user_position += quote.shares
    else:
        outcome.user_position = max(0.0, outcome.user_position - quote.shares)
