"""Shared fixtures: markets are mutable, so every test gets fresh ones."""

import pytest

from predamm.models import Market, Outcome


@pytest.fixture
def election() -> Market:
    return Market(
        id="election",
        title="Who wins?",
        outcomes=[
            Outcome(id="trump", label="Donald Trump", price=0.45),
            Outcome(id="biden", label="Joe Biden", price=0.42),
            Outcome(id="other", label="Other Candidate", price=0.13),
        ],
    )


@pytest.fixture
def three_way() -> Market:
    return Market.uniform("three", "Three-way", ["A", "B", "C"])
