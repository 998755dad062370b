"""Canonical schema (Pydantic) - Market, Outcome, TradeIntent, Quote, Trade."""

from predamm.models.market import Market, MarketStatus, Outcome
from predamm.models.trade import Quote, Trade, TradeIntent

__all__ = [
    "Market",
    "MarketStatus",
    "Outcome",
    "TradeIntent",
    "Quote",
    "Trade",
]
