"""Market/Outcome construction and validation."""

import pytest
from pydantic import ValidationError

from predamm.models import Market, Outcome


def test_explicit_outcomes_must_sum_to_one():
    with pytest.raises(ValidationError):
        Market(
            id="m",
            outcomes=[Outcome(id="a", price=0.5), Outcome(id="b", price=0.6)],
        )


def test_small_sum_error_is_rescaled():
    market = Market(
        id="m",
        outcomes=[Outcome(id="a", price=0.5), Outcome(id="b", price=0.3), Outcome(id="c", price=0.2 + 5e-7)],
    )
    assert abs(sum(market.prices()) - 1.0) < 1e-12
    assert abs(market.outcomes[0].price / market.outcomes[1].price - 0.5 / 0.3) < 1e-12


def test_exact_prices_are_kept(election):
    assert election.prices() == [0.45, 0.42, 0.13]


def test_prices_must_be_inside_open_interval():
    with pytest.raises(ValidationError):
        Outcome(id="a", price=1.0)
    with pytest.raises(ValidationError):
        Outcome(id="a", price=0.0)


def test_market_needs_two_unique_outcomes():
    with pytest.raises(ValidationError):
        Market(id="m", outcomes=[Outcome(id="a", price=0.5)])
    with pytest.raises(ValidationError):
        Market(id="m", outcomes=[Outcome(id="a", price=0.5), Outcome(id="a", price=0.5)])


def test_uniform_market():
    m = Market.uniform("m", "Three", ["A", "B", "C"])
    assert [o.id for o in m.outcomes] == ["a", "b", "c"]
    assert abs(sum(m.prices()) - 1.0) < 1e-12
    assert all(abs(p - 1 / 3) < 1e-12 for p in m.prices())
    assert m.is_trading


def test_binary_market_expands_to_yes_no():
    m = Market.binary("btc", "BTC 100k?", yes_percentage=68, current_price=0.68, price_change=2.3)
    assert [o.id for o in m.outcomes] == ["yes", "no"]
    assert m.outcomes[0].price == 0.68
    assert abs(m.outcomes[1].price - 0.32) < 1e-12
    assert m.outcomes[0].price_change == 2.3
    assert m.outcomes[1].price_change == -2.3
    assert m.extra["yes_percentage"] == 68


def test_binary_market_rejects_boundary_price():
    with pytest.raises(ValueError):
        Market.binary("btc", "BTC 100k?", yes_percentage=100, current_price=1.0)


def test_outcome_index(election):
    assert election.outcome_index("biden") == 1
    assert election.outcome_index("nobody") is None
