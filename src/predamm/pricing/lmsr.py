"""
LMSR (Logarithmic Market Scoring Rule) pricing for N outcomes.

Cost function: C(q) = b * log(sum_i exp(q_i / b))
Marginal price p_i = exp(q_i / b) / sum_j exp(q_j / b)
Everything goes through log-sum-exp (subtract the max exponent) so large q/b never overflows.
Prices are never clamped: a trade whose resulting prices round to 0 or 1 is rejected instead.
"""

from __future__ import annotations

import math
from typing import Sequence

import structlog

from predamm.models.market import Market
from predamm.models.trade import Quote
from predamm.pricing.base import PricingStrategy, _apply_position
from predamm.pricing.errors import InvalidTradeError

log = structlog.get_logger(__name__)

DEFAULT_LIQUIDITY_B = 100.0


def _logsumexp(values: Sequence[float]) -> float:
    m = max(values)
    return m + math.log(sum(math.exp(v - m) for v in values))


def price_vector(quantities: Sequence[float], b: float = DEFAULT_LIQUIDITY_B) -> list[float]:
    """Softmax of q/b. Each price in (0, 1) and the vector sums to 1 up to rounding."""
    if not quantities:
        return []
    scaled = [q / b for q in quantities]
    m = max(scaled)
    exp_scaled = [math.exp(x - m) for x in scaled]
    denom = sum(exp_scaled)
    return [x / denom for x in exp_scaled]


def log_price(quantities: Sequence[float], index: int, b: float = DEFAULT_LIQUIDITY_B) -> float:
    """log p_index without forming exp(q/b); stays finite where the price itself underflows."""
    scaled = [q / b for q in quantities]
    return scaled[index] - _logsumexp(scaled)


def cost_function(quantities: Sequence[float], b: float = DEFAULT_LIQUIDITY_B) -> float:
    if not quantities:
        return 0.0
    return b * _logsumexp([q / b for q in quantities])


def cost(quantities: Sequence[float], index: int, delta_shares: float, b: float = DEFAULT_LIQUIDITY_B) -> float:
    """Cost to move quantities[index] by delta_shares. Positive for buys, negative (refund) for sells."""
    new_quantities = list(quantities)
    new_quantities[index] += delta_shares
    return cost_function(new_quantities, b) - cost_function(quantities, b)


def shares_for_cost(quantities: Sequence[float], index: int, amount: float, b: float = DEFAULT_LIQUIDITY_B) -> float:
    """
    Shares of outcome `index` that `amount` buys: the delta with cost(q, index, delta) == amount.
    Closed form delta = b * log(1 + (exp(amount/b) - 1) / p), evaluated as
    b * (x - log p + log(p * exp(-x) - expm1(-x))) with x = amount / b.
    """
    x = amount / b
    lp = log_price(quantities, index, b)
    p = math.exp(lp)
    return b * (x - lp + math.log(p * math.exp(-x) - math.expm1(-x)))


def shares_for_refund(
    quantities: Sequence[float], index: int, amount: float, b: float = DEFAULT_LIQUIDITY_B
) -> float | None:
    """
    Shares of outcome `index` to sell for a refund of `amount`, or None when no finite
    sale refunds that much (amount >= -b * log(1 - p)).
    """
    p = math.exp(log_price(quantities, index, b))
    if p <= 0:
        return None
    arg = math.expm1(-amount / b) / p
    if arg <= -1:
        return None
    return -b * math.log1p(arg)


class LMSRStrategy(PricingStrategy):
    """Logarithmic cost-function market maker; state lives in Outcome.quantity."""

    name = "lmsr"

    def __init__(self, liquidity_b: float = DEFAULT_LIQUIDITY_B) -> None:
        if not liquidity_b > 0:
            raise ValueError("liquidity_b must be positive")
        self.b = liquidity_b

    def validate_market(self, market: Market) -> None:
        """Derive prices from quantities; seed quantities from prices when they carry no information."""
        quantities = market.quantities()
        prices = market.prices()
        if max(quantities) == min(quantities) and max(prices) - min(prices) > 1e-12:
            # q is defined up to a constant, so b * log(p) reproduces p exactly under softmax
            quantities = [self.b * math.log(p) for p in prices]
            for outcome, q in zip(market.outcomes, quantities):
                outcome.quantity = q
            log.debug("lmsr_seeded_quantities", market_id=market.id, quantities=quantities)
        for outcome, p in zip(market.outcomes, price_vector(quantities, self.b)):
            outcome.price = p

    def quote(self, market: Market, index: int, side: str, amount: float) -> Quote:
        outcome = market.outcomes[index]
        quantities = market.quantities()
        price_before = price_vector(quantities, self.b)[index]
        if side == "buy":
            shares = shares_for_cost(quantities, index, amount, self.b)
            paid = amount
            delta = shares
        else:
            position = outcome.user_position
            wanted = shares_for_refund(quantities, index, amount, self.b)
            shares = position if wanted is None else min(wanted, position)
            delta = -shares
            paid = max(0.0, -cost(quantities, index, delta, self.b))
        if not math.isfinite(shares) or shares <= 0:
            raise InvalidTradeError(f"cannot {side} {amount} of {outcome.id}", code="no_position")
        new_quantities = list(quantities)
        new_quantities[index] += delta
        prices = price_vector(new_quantities, self.b)
        if any(not 0.0 < p < 1.0 for p in prices):
            raise InvalidTradeError(
                f"{side} of {amount} on {outcome.id} would push a price to 0 or 1", code="saturated"
            )
        return Quote(
            outcome_id=outcome.id,
            side=side,
            amount=amount,
            shares=shares,
            cost=paid,
            price_before=price_before,
            price_after=prices[index],
            prices=prices,
        )

    def apply(self, market: Market, index: int, quote: Quote) -> None:
        _apply_position(market, index, quote)
        outcome = market.outcomes[index]
        outcome.quantity += quote.shares if quote.side == "buy" else -quote.shares
        for o, price in zip(market.outcomes, quote.prices):
            o.price = price

    def describe(self) -> dict[str, float | str]:
        return {"name": self.name, "liquidity_b": self.b}
