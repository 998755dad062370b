"""Pydantic schemas for API request/response consistency and OpenAPI docs."""

from __future__ import annotations

from pydantic import BaseModel, Field

from predamm.models import Market, Trade


# --- Health ---
class HealthResponse(BaseModel):
    status: str = "ok"


# --- Error (consistent shape for 4xx/5xx) ---
class ErrorResponse(BaseModel):
    detail: str = Field(..., description="Human-readable message")
    code: str | None = Field(None, description="Machine-readable code, e.g. not_found, invalid_amount")


# --- Markets ---
class OutcomePrice(BaseModel):
    id: str
    label: str
    price: float


class MarketSummary(BaseModel):
    market_id: str
    title: str
    category: str | None = None
    status: str
    strategy: str
    total_volume: float
    outcomes: list[OutcomePrice]


class MarketsListResponse(BaseModel):
    markets: list[MarketSummary]
    total: int


# --- Trades ---
class TradeResponse(BaseModel):
    market: Market
    trade: Trade


class TradesListResponse(BaseModel):
    market_id: str
    trades: list[Trade]
    total: int


# --- Price history ---
class HistoryPoint(BaseModel):
    t: str
    price: float


class HistoryResponse(BaseModel):
    market_id: str
    outcome_id: str
    price_change_pct: float | None
    volatility: float | None
    series: list[HistoryPoint]
