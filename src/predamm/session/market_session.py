"""Market session - the trade button: wallet gate, fee, engine execute, price history."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog

from predamm.metrics.history import PriceHistory
from predamm.models.market import Market
from predamm.models.trade import Quote, Trade
from predamm.pricing.base import PricingStrategy
from predamm.pricing.engine import PricingEngine, create_engine
from predamm.session.errors import InsufficientBalanceError, WalletNotConnectedError
from predamm.session.signer import Signer

if TYPE_CHECKING:
    from predamm.config.settings import Settings

log = structlog.get_logger(__name__)

DEFAULT_FEE_RATE = 0.02


@dataclass
class TradePreview:
    """Quote plus fee. total is what a buy debits (amount + fee), or what a sell credits (cost, no fee)."""

    quote: Quote
    fee: float
    total: float


class MarketSession:
    """One user's view of one market: engine + wallet + price history."""

    def __init__(
        self,
        engine: PricingEngine,
        signer: Signer,
        fee_rate: float = DEFAULT_FEE_RATE,
        history_size: int = 200,
    ) -> None:
        if not 0 <= fee_rate < 1:
            raise ValueError("fee_rate must be in [0, 1)")
        self.engine = engine
        self.signer = signer
        self.fee_rate = fee_rate
        self.history = PriceHistory.for_market(
            engine.market, maxlen=history_size, timestamp=datetime.now(timezone.utc).isoformat()
        )

    @classmethod
    def from_settings(
        cls,
        market: Market,
        signer: Signer,
        settings: Settings,
        strategy: str | PricingStrategy | None = None,
    ) -> MarketSession:
        engine = create_engine(market, settings, strategy=strategy)
        return cls(engine, signer, fee_rate=settings.fee_rate, history_size=settings.history_size)

    @property
    def market(self) -> Market:
        return self.engine.snapshot()

    @property
    def trades(self) -> list[Trade]:
        return self.engine.trades

    def preview(self, outcome_id: str, side: str, amount: float) -> TradePreview:
        """Price a trade and its fee. Raises InvalidTradeError like the engine."""
        quote = self.engine.quote(outcome_id, side, amount)
        if side == "buy":
            fee = amount * self.fee_rate
            total = amount + fee
        else:
            fee = 0.0
            total = quote.cost
        return TradePreview(quote=quote, fee=fee, total=total)

    def submit(self, outcome_id: str, side: str, amount: float) -> Trade:
        """Execute a trade for the connected wallet. Nothing changes if any check fails."""
        if not self.signer.is_connected:
            raise WalletNotConnectedError("connect a wallet before trading")
        preview = self.preview(outcome_id, side, amount)
        if side == "buy" and preview.total > self.signer.balance:
            raise InsufficientBalanceError(preview.total, self.signer.balance)
        _, trade = self.engine.execute(outcome_id, side, amount)
        # Wallets that only expose the Signer view are gated but not charged
        if side == "buy" and hasattr(self.signer, "debit"):
            self.signer.debit(preview.total)
        elif side == "sell" and hasattr(self.signer, "credit"):
            self.signer.credit(trade.cost)
        self.history.push(trade.timestamp, self.engine.prices)
        log.debug(
            "session_trade",
            market_id=trade.market_id,
            address=self.signer.address,
            fee=round(preview.fee, 6),
            balance=round(self.signer.balance, 2),
        )
        return trade
