"""Outcome pricing and rebalancing: strategies behind one interface, plus the engine."""

from predamm.pricing.base import PricingStrategy
from predamm.pricing.engine import PricingEngine, create_engine, create_strategy
from predamm.pricing.errors import DegenerateMarketError, InvalidTradeError, PricingError
from predamm.pricing.linear import LinearImpactStrategy, renormalize_others
from predamm.pricing.lmsr import LMSRStrategy, cost, price_vector

__all__ = [
    "PricingEngine",
    "PricingStrategy",
    "LinearImpactStrategy",
    "LMSRStrategy",
    "create_engine",
    "create_strategy",
    "renormalize_others",
    "price_vector",
    "cost",
    "PricingError",
    "InvalidTradeError",
    "DegenerateMarketError",
]
