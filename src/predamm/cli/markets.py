"""Markets subcommand: list, show."""

from __future__ import annotations

import typer

from predamm.fixtures import demo_markets, get_demo_market
from predamm.models import Market
from predamm.pricing.engine import PricingEngine, create_engine

app = typer.Typer(help="Demo market catalogue")


def load_market(market_id: str) -> Market:
    """Fresh demo market or exit 1 with the known ids."""
    market = get_demo_market(market_id)
    if market is None:
        typer.echo(f"Unknown market: {market_id}. Choose from: {list(demo_markets())}")
        raise typer.Exit(1)
    return market


def echo_prices(market: Market) -> None:
    for o in market.outcomes:
        typer.echo(f"  {o.id:<16} {o.price:8.4f}  vol {o.volume:>14,.2f}  pos {o.user_position:,.4f}  {o.label}")


@app.command("list")
def list_markets() -> None:
    """List demo markets."""
    markets = demo_markets()
    for market_id, market in markets.items():
        prices = " / ".join(f"{o.label} {o.price:.2f}" for o in market.outcomes)
        typer.echo(f"  {market_id:<20} [{market.category or '-'}] {market.title[:50]}  ({prices})")
    typer.echo(f"Total: {len(markets)} markets")


@app.command("show")
def show(market_id: str = typer.Argument(..., help="Market ID")) -> None:
    """Show a market's outcomes and prices."""
    market = load_market(market_id)
    typer.echo(f"{market.title}")
    typer.echo(f"Status: {market.status}  Category: {market.category or '-'}  Ends: {market.end_time or '-'}")
    typer.echo(f"Total volume: {market.total_volume:,.2f}")
    echo_prices(market)


def build_engine(ctx: typer.Context, market_id: str, strategy: str | None) -> PricingEngine:
    """Engine over a fresh demo market, or exit 1 on an unknown market/strategy."""
    settings = ctx.obj["settings"]
    market = load_market(market_id)
    try:
        return create_engine(market, settings, strategy=strategy)
    except ValueError as e:
        typer.echo(str(e))
        raise typer.Exit(1)
