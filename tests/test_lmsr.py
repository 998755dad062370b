"""LMSR cost function, closed-form share inversion, and the strategy behind the engine."""

import math

import pytest

from predamm.models import Market
from predamm.pricing.engine import PricingEngine
from predamm.pricing.errors import InvalidTradeError
from predamm.pricing.lmsr import (
    LMSRStrategy,
    cost,
    cost_function,
    price_vector,
    shares_for_cost,
    shares_for_refund,
)


def test_uniform_quantities_give_uniform_prices():
    prices = price_vector([0.0, 0.0, 0.0], 100)
    assert all(abs(p - 1 / 3) < 1e-12 for p in prices)
    assert abs(sum(prices) - 1.0) < 1e-12


def test_buying_fifty_shares():
    c = cost([0.0, 0.0, 0.0], 0, 50, 100)
    expected = 100 * math.log(math.exp(50 / 100) + 2) - 100 * math.log(3)
    assert abs(c - expected) < 1e-9
    prices = price_vector([50.0, 0.0, 0.0], 100)
    assert prices[0] > 1 / 3
    assert prices[1] < 1 / 3 and prices[2] < 1 / 3
    assert abs(sum(prices) - 1.0) < 1e-12


def test_sell_cost_is_negative():
    assert cost([50.0, 0.0], 0, -20, 100) < 0


def test_large_quantities_do_not_overflow():
    prices = price_vector([100_000.0, 0.0], 100)
    assert prices[0] == 1.0
    assert prices[1] >= 0.0
    assert abs(cost_function([100_000.0, 0.0], 100) - 100_000.0) < 1e-6


def test_shares_for_cost_inverts_cost():
    q = [10.0, -5.0, 0.0]
    shares = shares_for_cost(q, 0, 37.5, 100)
    assert shares > 0
    assert abs(cost(q, 0, shares, 100) - 37.5) < 1e-9


def test_shares_for_refund_inverts_cost():
    q = [200.0, 0.0]
    shares = shares_for_refund(q, 0, 10.0, 100)
    assert shares is not None and shares > 0
    assert abs(-cost(q, 0, -shares, 100) - 10.0) < 1e-9


def test_refund_beyond_maximum_is_none():
    # max refund for p = 1/(1+e^-2) is -100 * ln(1 - p) ~ 212.7
    assert shares_for_refund([200.0, 0.0], 0, 500.0, 100) is None


def test_engine_buy_then_sell_round_trip(three_way):
    engine = PricingEngine(three_way, LMSRStrategy(100))
    snap, buy = engine.execute("a", "buy", 100.0)
    assert buy.cost == 100.0
    assert snap.outcomes[0].price > 1 / 3
    assert abs(sum(snap.prices()) - 1.0) < 1e-9
    assert abs(snap.outcomes[0].quantity - buy.shares) < 1e-9
    assert abs(snap.outcomes[0].user_position - buy.shares) < 1e-9

    # Ask for more than can be refunded: the whole position is sold
    snap, sell = engine.execute("a", "sell", 1e9)
    assert abs(sell.shares - buy.shares) < 1e-9
    assert abs(sell.cost - 100.0) < 1e-6
    assert snap.outcomes[0].user_position == 0.0
    assert all(abs(p - 1 / 3) < 1e-9 for p in snap.prices())
    assert abs(snap.outcomes[0].volume - 200.0) < 1e-6


def test_prices_stay_strictly_inside_unit_interval(three_way):
    engine = PricingEngine(three_way, LMSRStrategy(100))
    for _ in range(20):
        snap, _ = engine.execute("b", "buy", 25.0)
        assert all(0.0 < p < 1.0 for p in snap.prices())
        assert abs(sum(snap.prices()) - 1.0) < 1e-9


def test_saturating_trade_rejected_without_change():
    market = Market.uniform("m", "Binary", ["Yes", "No"])
    engine = PricingEngine(market, LMSRStrategy(1.0))
    before = engine.snapshot()
    with pytest.raises(InvalidTradeError) as exc:
        engine.execute("yes", "buy", 1000.0)
    assert exc.value.code == "saturated"
    assert engine.snapshot() == before


def test_quantities_seeded_from_prices(election):
    engine = PricingEngine(election, LMSRStrategy(100))
    prices = engine.market.prices()
    for p, expected in zip(prices, [0.45, 0.42, 0.13]):
        assert abs(p - expected) < 1e-12
    assert abs(engine.market.outcomes[0].quantity - 100 * math.log(0.45)) < 1e-9


def test_liquidity_must_be_positive():
    with pytest.raises(ValueError):
        LMSRStrategy(0)
