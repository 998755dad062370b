"""Seeded liveness simulator: random trades through the same execute() the trade button uses."""

from __future__ import annotations

import random
import uuid
from dataclasses import dataclass, field

import structlog

from predamm.models.trade import Trade
from predamm.pricing.engine import PricingEngine
from predamm.pricing.errors import InvalidTradeError

log = structlog.get_logger(__name__)


@dataclass
class TickResult:
    """Outcome of one tick: the trade, or the reason it was rejected."""

    seed: int
    outcome_id: str
    side: str
    amount: float
    trade: Trade | None = None
    rejected: str | None = None  # InvalidTradeError code


@dataclass
class SimulationResult:
    """Result of a simulation run."""

    run_id: str
    market_id: str
    strategy_name: str
    ticks: int
    trades_executed: int
    trades_rejected: int
    final_prices: dict[str, float] = field(default_factory=dict)
    total_volume: float = 0.0


class LivenessSimulator:
    """Drive an engine with random buys/sells. Same seed -> same trade intent, so runs replay exactly."""

    def __init__(self, engine: PricingEngine, max_trade: float = 5000.0, sell_probability: float = 0.3) -> None:
        if max_trade < 1:
            raise ValueError("max_trade must be at least 1")
        if not 0 <= sell_probability <= 1:
            raise ValueError("sell_probability must be in [0, 1]")
        self.engine = engine
        self.max_trade = max_trade
        self.sell_probability = sell_probability

    def tick(self, seed: int) -> TickResult:
        """One random trade intent drawn from `seed`, executed against the engine."""
        rng = random.Random(seed)
        outcome = rng.choice(self.engine.market.outcomes)
        side = "sell" if outcome.user_position > 0 and rng.random() < self.sell_probability else "buy"
        amount = round(rng.uniform(1.0, self.max_trade), 2)
        result = TickResult(seed=seed, outcome_id=outcome.id, side=side, amount=amount)
        try:
            _, result.trade = self.engine.execute(outcome.id, side, amount)
        except InvalidTradeError as e:
            result.rejected = e.code
            log.debug("tick_rejected", market_id=self.engine.market.id, seed=seed, code=e.code, reason=str(e))
        return result

    def run(self, ticks: int, seed: int = 0) -> SimulationResult:
        """Run `ticks` ticks with per-tick seeds derived from `seed`."""
        master = random.Random(seed)
        executed = 0
        rejected = 0
        for _ in range(ticks):
            result = self.tick(master.getrandbits(32))
            if result.trade is not None:
                executed += 1
            else:
                rejected += 1
        market = self.engine.market
        run = SimulationResult(
            run_id=str(uuid.uuid4())[:8],
            market_id=market.id,
            strategy_name=self.engine.strategy.name,
            ticks=ticks,
            trades_executed=executed,
            trades_rejected=rejected,
            final_prices={o.id: o.price for o in market.outcomes},
            total_volume=market.total_volume,
        )
        log.info(
            "simulation_finished",
            run_id=run.run_id,
            market_id=run.market_id,
            strategy=run.strategy_name,
            ticks=ticks,
            executed=executed,
            rejected=rejected,
        )
        return run
