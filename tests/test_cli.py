"""CLI commands against the demo catalogue."""

import pytest
from typer.testing import CliRunner

from predamm.cli.app import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch):
    monkeypatch.setattr("predamm.cli.app.configure_logging", lambda settings: None)


def test_markets_list():
    result = runner.invoke(app, ["markets", "list"])
    assert result.exit_code == 0
    assert "Total: 4 markets" in result.output


def test_markets_show_unknown():
    result = runner.invoke(app, ["markets", "show", "nope"])
    assert result.exit_code == 1
    assert "Unknown market" in result.output


def test_trade_run_clamps():
    result = runner.invoke(
        app, ["trade", "run", "us-election-2024", "trump", "--amount", "1000000", "--strategy", "linear"]
    )
    assert result.exit_code == 0
    assert "0.9900" in result.output
    assert "Sum of prices: 1.000000000000" in result.output


def test_trade_rejected_exits_1():
    result = runner.invoke(app, ["trade", "quote", "btc-100k-2024", "yes", "-s", "sell", "-a", "10"])
    assert result.exit_code == 1
    assert "Rejected (no_position)" in result.output


def test_unknown_strategy_exits_1():
    result = runner.invoke(app, ["trade", "quote", "btc-100k-2024", "yes", "-a", "10", "--strategy", "orderbook"])
    assert result.exit_code == 1


def test_sim_run():
    result = runner.invoke(app, ["sim", "run", "world-cup-winner", "-n", "20", "--seed", "4", "--strategy", "lmsr"])
    assert result.exit_code == 0
    assert "Ticks: 20" in result.output


def test_api_passes_config_dir_and_profile(monkeypatch, tmp_path):
    calls = []
    monkeypatch.setattr("predamm.cli.api_cmd.run_api", lambda **kwargs: calls.append(kwargs))
    result = runner.invoke(app, ["-C", str(tmp_path), "-p", "dev", "api", "--port", "9000"])
    assert result.exit_code == 0
    assert calls == [{"host": "127.0.0.1", "port": 9000, "profile": "dev", "config_dir": tmp_path}]
