"""FastAPI backend: quote and execute trades against in-memory demo markets."""

from __future__ import annotations

import threading
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

import structlog
from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from predamm.api.schemas import (
    ErrorResponse,
    HealthResponse,
    HistoryPoint,
    HistoryResponse,
    MarketsListResponse,
    MarketSummary,
    OutcomePrice,
    TradeResponse,
    TradesListResponse,
)
from predamm.config import get_settings
from predamm.fixtures import demo_markets
from predamm.metrics.history import PriceHistory
from predamm.models import Market, Quote, TradeIntent
from predamm.pricing.engine import PricingEngine, create_engine
from predamm.pricing.errors import InvalidTradeError

log = structlog.get_logger(__name__)

_NOT_FOUND = {404: {"description": "Market not found", "model": ErrorResponse}}
_TRADE_ERRORS = {
    **_NOT_FOUND,
    409: {"description": "Market is not trading", "model": ErrorResponse},
    422: {"description": "Invalid trade (code says why)", "model": ErrorResponse},
}

# Set by run_api() so the lifespan loads the requested config profile and directory.
_config_profile: str | None = None
_config_dir: Path | None = None


@dataclass
class _MarketEntry:
    """Engine + history for one market; lock serializes quote/execute across request threads."""

    engine: PricingEngine
    history: PriceHistory
    lock: threading.Lock


_registry: dict[str, _MarketEntry] = {}


class MarketNotFound(Exception):
    def __init__(self, market_id: str) -> None:
        super().__init__(f"Market not found: {market_id}")
        self.market_id = market_id


def load_markets(profile: str | None = None, config_dir: Path | None = None) -> None:
    """(Re)build the registry from the demo catalogue with the configured strategy."""
    settings = get_settings(profile, config_dir)
    _registry.clear()
    for market_id, market in demo_markets().items():
        engine = create_engine(market, settings)
        _registry[market_id] = _MarketEntry(
            engine=engine,
            history=PriceHistory.for_market(engine.market, maxlen=settings.history_size),
            lock=threading.Lock(),
        )
    log.info("markets_loaded", count=len(_registry), strategy=settings.pricing_strategy)


def _entry(market_id: str) -> _MarketEntry:
    entry = _registry.get(market_id)
    if entry is None:
        raise MarketNotFound(market_id)
    return entry


@asynccontextmanager
async def lifespan(app: FastAPI):
    load_markets(_config_profile, _config_dir)
    yield
    _registry.clear()


app = FastAPI(title="PredAMM API", version="0.1.0", lifespan=lifespan)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


def _error_json(code: str, message: str, status_code: int = 404) -> JSONResponse:
    """Return consistent error JSON: { detail, code }."""
    return JSONResponse(
        status_code=status_code,
        content={"detail": message, "code": code},
    )


@app.exception_handler(MarketNotFound)
async def _market_not_found(request: Request, exc: MarketNotFound) -> JSONResponse:
    return _error_json("not_found", str(exc), 404)


@app.exception_handler(InvalidTradeError)
async def _invalid_trade(request: Request, exc: InvalidTradeError) -> JSONResponse:
    status_code = 409 if exc.code == "market_not_trading" else 422
    return _error_json(exc.code, str(exc), status_code)


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok")


@app.get("/markets", response_model=MarketsListResponse)
def markets_list(
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> MarketsListResponse:
    """List markets with current prices."""
    summaries = []
    for entry in _registry.values():
        with entry.lock:
            market = entry.engine.market
            summaries.append(
                MarketSummary(
                    market_id=market.id,
                    title=market.title,
                    category=market.category,
                    status=market.status,
                    strategy=entry.engine.strategy.name,
                    total_volume=market.total_volume,
                    outcomes=[OutcomePrice(id=o.id, label=o.label, price=o.price) for o in market.outcomes],
                )
            )
    return MarketsListResponse(markets=summaries[offset : offset + limit], total=len(summaries))


@app.get("/markets/{market_id}", response_model=Market, responses=_NOT_FOUND)
def market_detail(market_id: str) -> Market:
    entry = _entry(market_id)
    with entry.lock:
        return entry.engine.snapshot()


@app.post("/markets/{market_id}/quote", response_model=Quote, responses=_TRADE_ERRORS)
def market_quote(market_id: str, intent: TradeIntent) -> Quote:
    """Price a trade without executing it."""
    entry = _entry(market_id)
    with entry.lock:
        return entry.engine.quote(intent.outcome_id, intent.side, intent.amount)


@app.post("/markets/{market_id}/trades", response_model=TradeResponse, responses=_TRADE_ERRORS)
def market_trade(market_id: str, intent: TradeIntent) -> TradeResponse:
    """Execute a trade; the whole update happens under the market's lock."""
    entry = _entry(market_id)
    with entry.lock:
        market, trade = entry.engine.execute(intent.outcome_id, intent.side, intent.amount)
        entry.history.push(trade.timestamp, market.prices())
    return TradeResponse(market=market, trade=trade)


@app.get("/markets/{market_id}/trades", response_model=TradesListResponse, responses=_NOT_FOUND)
def market_trades(
    market_id: str,
    limit: int = Query(20, ge=1, le=500),
) -> TradesListResponse:
    """Most recent trades first."""
    entry = _entry(market_id)
    with entry.lock:
        trades = entry.engine.trades
    return TradesListResponse(market_id=market_id, trades=trades[:limit], total=len(trades))


@app.get(
    "/markets/{market_id}/history",
    response_model=HistoryResponse,
    responses={404: {"description": "Unknown market or outcome", "model": ErrorResponse}},
)
def market_history(
    market_id: str,
    outcome_id: str = Query(..., description="Outcome ID within this market"),
) -> HistoryResponse | JSONResponse:
    """Price samples for one outcome (one per executed trade), with change and volatility."""
    entry = _entry(market_id)
    with entry.lock:
        try:
            series = entry.history.series(outcome_id)
        except KeyError:
            return _error_json("unknown_outcome", f"Unknown outcome {outcome_id} in {market_id}", 404)
        return HistoryResponse(
            market_id=market_id,
            outcome_id=outcome_id,
            price_change_pct=entry.history.price_change_pct(outcome_id),
            volatility=entry.history.volatility_proxy(outcome_id),
            series=[HistoryPoint(t=t, price=p) for t, p in series],
        )


def run_api(
    host: str = "127.0.0.1",
    port: int = 8000,
    profile: str | None = None,
    config_dir: Path | None = None,
) -> None:
    global _config_profile, _config_dir
    _config_profile = profile
    _config_dir = config_dir
    import uvicorn
    uvicorn.run("predamm.api.main:app", host=host, port=port, reload=False)
