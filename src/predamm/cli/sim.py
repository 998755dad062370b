"""Sim subcommand: run."""

from __future__ import annotations

import typer

from predamm.cli.markets import build_engine, echo_prices
from predamm.simulation.ticker import LivenessSimulator

app = typer.Typer(help="Seeded liveness simulation")


@app.command("run")
def run_sim(
    ctx: typer.Context,
    market_id: str = typer.Argument(..., help="Market ID"),
    ticks: int = typer.Option(100, "--ticks", "-n", min=1, help="Number of random trades"),
    seed: int = typer.Option(0, "--seed", help="Seed (same seed -> same run)"),
    strategy: str | None = typer.Option(None, "--strategy", help="linear or lmsr (default from config)"),
    show_trades: int = typer.Option(5, "--show-trades", help="Print the last N trades"),
) -> None:
    """Drive a demo market with seeded random trades."""
    settings = ctx.obj["settings"]
    engine = build_engine(ctx, market_id, strategy)
    simulator = LivenessSimulator(
        engine, max_trade=settings.sim_max_trade, sell_probability=settings.sim_sell_probability
    )
    result = simulator.run(ticks, seed=seed)
    typer.echo(f"Run id: {result.run_id}")
    typer.echo(f"Strategy: {result.strategy_name}  Market: {result.market_id}")
    typer.echo(f"Ticks: {result.ticks}  Executed: {result.trades_executed}  Rejected: {result.trades_rejected}")
    typer.echo(f"Total volume: {result.total_volume:,.2f}")
    echo_prices(engine.market)
    for trade in engine.trades[:show_trades]:
        typer.echo(f"  {trade.timestamp}  {trade.side:<4} {trade.amount:>10,.2f}  {trade.outcome_id} @ {trade.resulting_price:.4f}")
