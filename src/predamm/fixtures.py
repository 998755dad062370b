"""Demo market catalogue. Each call builds fresh Market objects (markets are mutable state)."""

from __future__ import annotations

from predamm.models.market import Market, Outcome


def _election() -> Market:
    return Market(
        id="us-election-2024",
        title="Who will win the 2024 US Presidential Election?",
        description=(
            "Resolves to the candidate who wins the 2024 United States Presidential Election, "
            "based on the results certified by the Electoral College."
        ),
        category="Politics",
        end_time="2024-11-05T23:59:59Z",
        total_volume=15_420_000.0,
        participants=28_394,
        outcomes=[
            Outcome(id="trump", label="Donald Trump", price=0.45, volume=6_500_000.0, price_change=-2.1, color="#FF3D5A"),
            Outcome(id="biden", label="Joe Biden", price=0.42, volume=5_800_000.0, price_change=1.8, color="#4285F4"),
            Outcome(id="other", label="Other Candidate", price=0.13, volume=3_120_000.0, price_change=0.3, color="#9CA3AF"),
        ],
    )


def _btc_100k() -> Market:
    return Market.binary(
        "btc-100k-2024",
        "Will Bitcoin reach $100,000 by end of 2024?",
        yes_percentage=68,
        current_price=0.68,
        price_change=2.3,
        description=(
            'Resolves "Yes" if Bitcoin (BTC) reaches or exceeds $100,000 USD on any major '
            "exchange by December 31, 2024, 11:59 PM UTC."
        ),
        category="Crypto",
        end_time="2024-12-31T23:59:59Z",
        total_volume=128_500.0,
        participants=1247,
    )


def _eth_etf() -> Market:
    return Market.binary(
        "eth-etf-approval",
        "Will a spot Ethereum ETF be approved this year?",
        yes_percentage=41,
        current_price=0.41,
        price_change=-1.2,
        category="Crypto",
        end_time="2024-12-31T23:59:59Z",
        participants=862,
    )


def _world_cup() -> Market:
    return Market.uniform(
        "world-cup-winner",
        "Which region will the next World Cup winner come from?",
        ["Europe", "South America", "Rest of World"],
        category="Sports",
        end_time="2026-07-19T23:59:59Z",
    )


_BUILDERS = {
    "us-election-2024": _election,
    "btc-100k-2024": _btc_100k,
    "eth-etf-approval": _eth_etf,
    "world-cup-winner": _world_cup,
}


def demo_market_ids() -> list[str]:
    return list(_BUILDERS)


def demo_markets() -> dict[str, Market]:
    """market_id -> fresh Market for every demo market."""
    return {market_id: build() for market_id, build in _BUILDERS.items()}


def get_demo_market(market_id: str) -> Market | None:
    build = _BUILDERS.get(market_id)
    return build() if build else None
