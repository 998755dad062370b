"""Linear price impact with proportional renormalization of the other outcomes."""

from __future__ import annotations

import sys

import structlog

from predamm.models.market import Market
from predamm.models.trade import Quote
from predamm.pricing.base import PricingStrategy, _apply_position
from predamm.pricing.errors import InvalidTradeError

log = structlog.get_logger(__name__)

# $1M notional moves the traded price by 1.0
DEFAULT_IMPACT_SCALE = 1_000_000.0
DEFAULT_MIN_PRICE = 0.01
DEFAULT_MAX_PRICE = 0.99
# Lower bound for a rescaled (non-traded) outcome price
PRICE_FLOOR = sys.float_info.epsilon


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def renormalize_others(prices: list[float], index: int, new_price: float) -> list[float]:
    """
    Return a new price vector with prices[index] = new_price and every other outcome scaled
    so the vector sums to 1, keeping their relative shares (pre-trade prices).
    If the other outcomes sum to 0 the remainder is split uniformly between them.
    Rescaled prices never drop below PRICE_FLOOR; the shortfall comes out of the largest other outcome.
    """
    remaining = 1.0 - new_price
    others = [j for j in range(len(prices)) if j != index]
    other_sum = sum(prices[j] for j in others)
    out = list(prices)
    out[index] = new_price
    if not others:
        return out
    if other_sum <= 0:
        log.warning("renormalize_degenerate", index=index, new_price=new_price, outcomes=len(prices))
        share = remaining / len(others)
        for j in others:
            out[j] = share
        return out
    shortfall = 0.0
    for j in others:
        out[j] = (prices[j] / other_sum) * remaining
        if out[j] < PRICE_FLOOR:
            shortfall += PRICE_FLOOR - out[j]
            out[j] = PRICE_FLOOR
    if shortfall:
        largest = max(others, key=lambda j: out[j])
        out[largest] -= shortfall
    return out


class LinearImpactStrategy(PricingStrategy):
    """Move the traded price by notional / impact_scale, clamp to [min_price, max_price], rescale the rest."""

    name = "linear"

    def __init__(
        self,
        impact_scale: float = DEFAULT_IMPACT_SCALE,
        min_price: float = DEFAULT_MIN_PRICE,
        max_price: float = DEFAULT_MAX_PRICE,
    ) -> None:
        if impact_scale <= 0:
            raise ValueError("impact_scale must be positive")
        if not 0 < min_price < max_price < 1:
            raise ValueError(f"need 0 < min_price < max_price < 1, got {min_price}, {max_price}")
        self.impact_scale = impact_scale
        self.min_price = min_price
        self.max_price = max_price

    def quote(self, market: Market, index: int, side: str, amount: float) -> Quote:
        outcome = market.outcomes[index]
        price = outcome.price
        if price <= 0:
            raise InvalidTradeError(f"{outcome.id} has no price to trade against", code="degenerate_price")
        if side == "buy":
            shares = amount / price
            cost = amount
            new_price = clamp(price + amount / self.impact_scale, self.min_price, self.max_price)
        else:
            shares = min(amount / price, outcome.user_position)
            cost = shares * price
            new_price = clamp(price - cost / self.impact_scale, self.min_price, self.max_price)
        if shares <= 0:
            raise InvalidTradeError(f"nothing to {side} on {outcome.id}", code="no_position")
        prices = renormalize_others(market.prices(), index, new_price)
        return Quote(
            outcome_id=outcome.id,
            side=side,
            amount=amount,
            shares=shares,
            cost=cost,
            price_before=price,
            price_after=new_price,
            prices=prices,
        )

    def apply(self, market: Market, index: int, quote: Quote) -> None:
        _apply_position(market, index, quote)
        for outcome, price in zip(market.outcomes, quote.prices):
            outcome.price = price

    def describe(self) -> dict[str, float | str]:
        return {
            "name": self.name,
            "impact_scale": self.impact_scale,
            "min_price": self.min_price,
            "max_price": self.max_price,
        }
