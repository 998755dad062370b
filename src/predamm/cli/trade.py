"""Trade subcommand: quote, run (on a fresh in-memory copy of a demo market)."""

from __future__ import annotations

import typer

from predamm.cli.markets import build_engine, echo_prices
from predamm.pricing.errors import InvalidTradeError

app = typer.Typer(help="Quote and execute trades")


def _side(value: str) -> str:
    side = value.lower()
    if side not in ("buy", "sell"):
        raise typer.BadParameter("side must be 'buy' or 'sell'")
    return side


@app.command("quote")
def quote(
    ctx: typer.Context,
    market_id: str = typer.Argument(..., help="Market ID"),
    outcome: str = typer.Argument(..., help="Outcome ID"),
    side: str = typer.Option("buy", "--side", "-s", callback=_side, help="buy or sell"),
    amount: float = typer.Option(..., "--amount", "-a", help="Notional amount"),
    strategy: str | None = typer.Option(None, "--strategy", help="linear or lmsr (default from config)"),
) -> None:
    """Price a trade without executing it."""
    engine = build_engine(ctx, market_id, strategy)
    try:
        q = engine.quote(outcome, side, amount)
    except InvalidTradeError as e:
        typer.echo(f"Rejected ({e.code}): {e}")
        raise typer.Exit(1)
    typer.echo(f"Strategy: {engine.strategy.name}  {q.side} {q.amount:,.2f} of {q.outcome_id}")
    typer.echo(f"Shares: {q.shares:,.4f}  Cost: {q.cost:,.2f}")
    typer.echo(f"Price: {q.price_before:.4f} -> {q.price_after:.4f}")
    for o, p in zip(engine.market.outcomes, q.prices):
        typer.echo(f"  {o.id:<16} {o.price:.4f} -> {p:.4f}")


@app.command("run")
def run_trade(
    ctx: typer.Context,
    market_id: str = typer.Argument(..., help="Market ID"),
    outcome: str = typer.Argument(..., help="Outcome ID"),
    side: str = typer.Option("buy", "--side", "-s", callback=_side, help="buy or sell"),
    amount: float = typer.Option(..., "--amount", "-a", help="Notional amount"),
    strategy: str | None = typer.Option(None, "--strategy", help="linear or lmsr (default from config)"),
) -> None:
    """Execute a trade and print the renormalized market."""
    engine = build_engine(ctx, market_id, strategy)
    try:
        market, trade = engine.execute(outcome, side, amount)
    except InvalidTradeError as e:
        typer.echo(f"Rejected ({e.code}): {e}")
        raise typer.Exit(1)
    typer.echo(f"Trade {trade.id}: {trade.side} {trade.amount:,.2f} of {trade.outcome_id} @ {trade.resulting_price:.4f}")
    echo_prices(market)
    typer.echo(f"Sum of prices: {sum(market.prices()):.12f}")
