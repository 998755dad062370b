"""Seeded liveness simulation is deterministic and keeps the invariants."""

from predamm.fixtures import get_demo_market
from predamm.pricing.engine import PricingEngine
from predamm.pricing.linear import LinearImpactStrategy
from predamm.pricing.lmsr import LMSRStrategy
from predamm.simulation import LivenessSimulator


def _engine(strategy=None) -> PricingEngine:
    return PricingEngine(get_demo_market("us-election-2024"), strategy or LinearImpactStrategy(), trade_log_size=500)


def test_same_seed_same_run():
    e1, e2 = _engine(), _engine()
    r1 = LivenessSimulator(e1).run(200, seed=7)
    r2 = LivenessSimulator(e2).run(200, seed=7)
    assert r1.final_prices == r2.final_prices
    assert r1.trades_executed == r2.trades_executed
    assert [(t.outcome_id, t.side, t.amount) for t in e1.trades] == [
        (t.outcome_id, t.side, t.amount) for t in e2.trades
    ]


def test_tick_is_driven_by_seed():
    a = LivenessSimulator(_engine()).tick(12345)
    b = LivenessSimulator(_engine()).tick(12345)
    assert (a.outcome_id, a.side, a.amount) == (b.outcome_id, b.side, b.amount)
    assert a.side == "buy"  # no position yet, nothing to sell
    assert a.trade is not None and a.rejected is None


def test_run_keeps_invariants():
    for strategy in (LinearImpactStrategy(), LMSRStrategy(100)):
        engine = _engine(strategy)
        result = LivenessSimulator(engine, max_trade=500.0).run(150, seed=3)
        assert result.ticks == 150
        assert result.trades_executed + result.trades_rejected == 150
        prices = list(result.final_prices.values())
        assert abs(sum(prices) - 1.0) < 1e-9
        assert all(0.0 < p < 1.0 for p in prices)
        assert all(o.user_position >= 0 for o in engine.market.outcomes)
