"""TradeIntent, Quote, Trade - order in, priced result out."""

from __future__ import annotations

from pydantic import BaseModel, Field

SIDE_PATTERN = "^(buy|sell)$"


class TradeIntent(BaseModel):
    """Order to buy or sell an outcome for a notional amount. Ephemeral."""

    outcome_id: str
    side: str = Field(..., pattern=SIDE_PATTERN)
    amount: float = Field(..., description="Notional (dollars), must be positive and finite")


class Quote(BaseModel):
    """Priced, not yet executed trade. cost is paid (buy) or refunded (sell), never negative."""

    outcome_id: str
    side: str = Field(..., pattern=SIDE_PATTERN)
    amount: float
    shares: float = Field(..., ge=0)
    cost: float = Field(..., ge=0)
    price_before: float
    price_after: float
    prices: list[float]  # full post-trade price vector, market order


class Trade(BaseModel):
    """Executed trade as recorded in the engine's trade log."""

    id: str
    market_id: str
    outcome_id: str
    side: str = Field(..., pattern=SIDE_PATTERN)
    amount: float
    shares: float = Field(..., ge=0)
    cost: float = Field(..., ge=0)
    resulting_price: float
    timestamp: str  # ISO-8601 UTC
