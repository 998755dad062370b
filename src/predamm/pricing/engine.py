"""Pricing engine - validate a trade intent, price it with a strategy, commit it, log it."""

from __future__ import annotations

import math
import uuid
from collections import deque
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable

import structlog

from predamm.models.market import Market
from predamm.models.trade import Quote, Trade
from predamm.pricing.base import PricingStrategy
from predamm.pricing.errors import InvalidTradeError
from predamm.pricing.linear import LinearImpactStrategy
from predamm.pricing.lmsr import LMSRStrategy

if TYPE_CHECKING:
    from predamm.config.settings import Settings

log = structlog.get_logger(__name__)

DEFAULT_TRADE_LOG_SIZE = 50
SIDES = ("buy", "sell")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def create_strategy(name: str | None = None, settings: Settings | None = None) -> PricingStrategy:
    """Build a strategy by name ("linear" or "lmsr"); name defaults to settings, then "linear"."""
    if name is None:
        name = settings.pricing_strategy if settings is not None else "linear"
    name = name.lower()
    if name == "linear":
        if settings is None:
            return LinearImpactStrategy()
        return LinearImpactStrategy(
            impact_scale=settings.impact_scale,
            min_price=settings.min_price,
            max_price=settings.max_price,
        )
    if name == "lmsr":
        if settings is None:
            return LMSRStrategy()
        return LMSRStrategy(liquidity_b=settings.liquidity_b)
    raise ValueError(f"Unknown pricing strategy: {name}. Choose from: ['linear', 'lmsr']")


def create_engine(
    market: Market,
    settings: Settings | None = None,
    strategy: str | PricingStrategy | None = None,
) -> PricingEngine:
    """Engine for market with the given (or configured) strategy and trade log size."""
    if not isinstance(strategy, PricingStrategy):
        strategy = create_strategy(strategy, settings)
    log_size = settings.trade_log_size if settings is not None else DEFAULT_TRADE_LOG_SIZE
    return PricingEngine(market, strategy, trade_log_size=log_size)


class PricingEngine:
    """
    Owns one market's price state. quote() is pure; execute() validates first, then
    applies the trade, renormalizes, and appends to a bounded most-recent-first log.
    Synchronous and never yields: callers sharing an engine across threads hold a lock.
    """

    __slots__ = ("market", "strategy", "_trades", "_clock")

    def __init__(
        self,
        market: Market,
        strategy: PricingStrategy,
        trade_log_size: int = DEFAULT_TRADE_LOG_SIZE,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if trade_log_size < 1:
            raise ValueError("trade_log_size must be at least 1")
        strategy.validate_market(market)
        self.market = market
        self.strategy = strategy
        self._trades: deque[Trade] = deque(maxlen=trade_log_size)
        self._clock = clock or _utc_now

    def _validate(self, outcome_id: str, side: str, amount: float) -> int:
        """Return the outcome index or raise InvalidTradeError. Reads only."""
        if not self.market.is_trading:
            raise InvalidTradeError(
                f"market {self.market.id} is {self.market.status}", code="market_not_trading"
            )
        if side not in SIDES:
            raise InvalidTradeError(f"side must be 'buy' or 'sell', got {side!r}", code="invalid_side")
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise InvalidTradeError(f"amount must be a number, got {amount!r}", code="invalid_amount")
        if not math.isfinite(amount) or amount <= 0:
            raise InvalidTradeError(f"amount must be positive and finite, got {amount}", code="invalid_amount")
        index = self.market.outcome_index(outcome_id)
        if index is None:
            raise InvalidTradeError(
                f"unknown outcome {outcome_id!r} in market {self.market.id}", code="unknown_outcome"
            )
        if side == "sell" and self.market.outcomes[index].user_position <= 0:
            raise InvalidTradeError(f"no position to sell in {outcome_id}", code="no_position")
        return index

    def quote(self, outcome_id: str, side: str, amount: float) -> Quote:
        """Price a trade without touching state. Same inputs, same quote."""
        index = self._validate(outcome_id, side, amount)
        return self.strategy.quote(self.market, index, side, float(amount))

    def execute(self, outcome_id: str, side: str, amount: float) -> tuple[Market, Trade]:
        """Apply a trade. On InvalidTradeError the market is left exactly as it was."""
        index = self._validate(outcome_id, side, amount)
        quote = self.strategy.quote(self.market, index, side, float(amount))
        self.strategy.apply(self.market, index, quote)
        self.market.total_volume += quote.cost
        trade = Trade(
            id=str(uuid.uuid4())[:8],
            market_id=self.market.id,
            outcome_id=outcome_id,
            side=side,
            amount=float(amount),
            shares=quote.shares,
            cost=quote.cost,
            resulting_price=quote.price_after,
            timestamp=self._clock().isoformat(),
        )
        self._trades.appendleft(trade)
        log.info(
            "trade_executed",
            market_id=self.market.id,
            outcome_id=outcome_id,
            side=side,
            amount=trade.amount,
            shares=round(trade.shares, 6),
            price_before=round(quote.price_before, 6),
            price_after=round(quote.price_after, 6),
            strategy=self.strategy.name,
        )
        return self.snapshot(), trade

    def snapshot(self) -> Market:
        """Deep copy of the current market state."""
        return self.market.model_copy(deep=True)

    @property
    def trades(self) -> list[Trade]:
        """Trade log, most recent first."""
        return list(self._trades)

    @property
    def trade_log_size(self) -> int:
        return self._trades.maxlen or DEFAULT_TRADE_LOG_SIZE

    @property
    def prices(self) -> list[float]:
        return self.market.prices()
