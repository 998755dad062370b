"""Pricing errors. Raised before any state is mutated."""

from __future__ import annotations


class PricingError(Exception):
    """Base for pricing-engine errors."""

    code = "pricing_error"


class InvalidTradeError(PricingError, ValueError):
    """Trade rejected: bad amount, unknown outcome, nothing to sell, saturation, closed market."""

    code = "invalid_trade"

    def __init__(self, message: str, code: str = "invalid_trade") -> None:
        super().__init__(message)
        self.code = code


class DegenerateMarketError(PricingError):
    """All non-traded prices are zero. Renormalization redistributes uniformly instead of raising."""

    code = "degenerate_market"
