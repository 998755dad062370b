"""Market session: wallet gate, fee, balance bookkeeping, price history."""

import pytest

from predamm.config.settings import Settings
from predamm.pricing.engine import PricingEngine
from predamm.pricing.linear import LinearImpactStrategy
from predamm.session import (
    InsufficientBalanceError,
    MarketSession,
    MockSigner,
    WalletNotConnectedError,
)


class ReadOnlySigner:
    """Signer view only: no debit/credit."""

    is_connected = True
    address = "0xabc"
    balance = 500.0


@pytest.fixture
def session(election):
    signer = MockSigner(seed=1)
    return MarketSession(PricingEngine(election, LinearImpactStrategy()), signer, fee_rate=0.02)


def test_mock_signer_connect_and_disconnect():
    signer = MockSigner(seed=7)
    assert not signer.is_connected
    address = signer.connect()
    assert signer.is_connected
    assert address.startswith("0x") and len(address) == 42
    assert 1000 <= signer.balance < 6000
    signer.disconnect()
    assert not signer.is_connected
    assert signer.address is None
    assert signer.balance == 0.0


def test_mock_signer_is_deterministic_with_seed():
    a, b = MockSigner(seed=3), MockSigner(seed=3)
    assert a.connect() == b.connect()
    assert a.balance == b.balance


def test_submit_requires_connected_wallet(session):
    before = session.market
    with pytest.raises(WalletNotConnectedError):
        session.submit("trump", "buy", 100)
    assert session.market == before
    assert session.trades == []


def test_buy_debits_amount_plus_fee(session):
    session.signer.connect()
    balance = session.signer.balance
    preview = session.preview("trump", "buy", 100)
    assert abs(preview.fee - 2.0) < 1e-12
    assert abs(preview.total - 102.0) < 1e-12
    trade = session.submit("trump", "buy", 100)
    assert trade.outcome_id == "trump"
    assert abs(session.signer.balance - (balance - 102.0)) < 1e-9
    assert len(session.history) == 2
    assert session.history.price_change_pct("trump") > 0
    assert session.history.price_change_pct("biden") < 0


def test_buy_over_balance_rejected(session):
    session.signer.connect()
    balance = session.signer.balance
    before = session.market
    with pytest.raises(InsufficientBalanceError):
        session.submit("trump", "buy", 10_000)
    assert session.signer.balance == balance
    assert session.market == before


def test_sell_credits_proceeds_without_fee(session):
    session.signer.connect()
    session.submit("trump", "buy", 100)
    balance = session.signer.balance
    preview = session.preview("trump", "sell", 50)
    assert preview.fee == 0.0
    assert abs(preview.total - 50.0) < 1e-9
    trade = session.submit("trump", "sell", 50)
    assert abs(trade.cost - 50.0) < 1e-9
    assert abs(session.signer.balance - (balance + trade.cost)) < 1e-9
    assert session.market.outcomes[0].user_position > 0


def test_read_only_signer_is_gated_but_not_charged(election):
    signer = ReadOnlySigner()
    s = MarketSession(PricingEngine(election, LinearImpactStrategy()), signer)
    s.submit("biden", "buy", 100)
    assert signer.balance == 500.0
    with pytest.raises(InsufficientBalanceError):
        s.submit("biden", "buy", 499)


def test_from_settings(election):
    settings = Settings(pricing={"strategy": "lmsr"}, session={"fee_rate": 0.05, "history_size": 3})
    s = MarketSession.from_settings(election, MockSigner(seed=1), settings)
    assert s.engine.strategy.name == "lmsr"
    assert s.fee_rate == 0.05
    s.signer.connect()
    for _ in range(5):
        s.submit("other", "buy", 1)
    assert len(s.history) == 3
