"""TOML config loading and profiles."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

# Default config search path (project root or cwd)
_CONFIG_DIR = Path(__file__).resolve().parent.parent.parent.parent / "config"
_CWD_CONFIG = Path.cwd() / "config"


def _load_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base. Override values take precedence."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _find_config_dir(config_dir: Path | None = None) -> Path:
    if config_dir is not None:
        return config_dir
    if _CWD_CONFIG.exists():
        return _CWD_CONFIG
    return _CONFIG_DIR


def load_config(profile: str | None = None, config_dir: Path | None = None) -> dict[str, Any]:
    """Load merged config from default.toml and optional profile overlay."""
    directory = _find_config_dir(config_dir)
    default_path = directory / "default.toml"
    if not default_path.exists():
        return {}
    base = _load_toml(default_path)
    if profile:
        profile_path = directory / f"{profile}.toml"
        if profile_path.exists():
            overlay = _load_toml(profile_path)
            base = _deep_merge(base, overlay)
    return base


def get_settings(profile: str | None = None, config_dir: Path | None = None) -> Settings:
    """Return Settings instance from merged config."""
    raw = load_config(profile, config_dir)
    return Settings.from_dict(raw)


class Settings:
    """Application settings from TOML config."""

    def __init__(
        self,
        *,
        pricing: dict[str, Any] | None = None,
        trades: dict[str, Any] | None = None,
        session: dict[str, Any] | None = None,
        simulation: dict[str, Any] | None = None,
        logging: dict[str, Any] | None = None,
    ):
        self.pricing = pricing or {}
        self.trades = trades or {}
        self.session = session or {}
        self.simulation = simulation or {}
        self.logging = logging or {}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Settings:
        return cls(
            pricing=raw.get("pricing"),
            trades=raw.get("trades"),
            session=raw.get("session"),
            simulation=raw.get("simulation"),
            logging=raw.get("logging"),
        )

    # Convenience accessors with defaults
    @property
    def pricing_strategy(self) -> str:
        return str(self.pricing.get("strategy", "linear")).lower()

    @property
    def liquidity_b(self) -> float:
        return float(self.pricing.get("liquidity_b", 100.0))

    @property
    def impact_scale(self) -> float:
        return float(self.pricing.get("impact_scale", 1_000_000.0))

    @property
    def min_price(self) -> float:
        return float(self.pricing.get("min_price", 0.01))

    @property
    def max_price(self) -> float:
        return float(self.pricing.get("max_price", 0.99))

    @property
    def trade_log_size(self) -> int:
        return int(self.trades.get("log_size", 50))

    @property
    def fee_rate(self) -> float:
        return float(self.session.get("fee_rate", 0.02))

    @property
    def history_size(self) -> int:
        return int(self.session.get("history_size", 200))

    @property
    def sim_max_trade(self) -> float:
        return float(self.simulation.get("max_trade", 5000.0))

    @property
    def sim_sell_probability(self) -> float:
        return float(self.simulation.get("sell_probability", 0.3))

    @property
    def logging_level(self) -> str:
        return self.logging.get("level", "INFO").upper()

    @property
    def logging_format(self) -> str:
        return self.logging.get("format", "console")

    @property
    def logging_level_num(self) -> int:
        return getattr(logging, self.logging_level, logging.INFO)


def configure_logging(settings: Settings) -> None:
    """Configure structlog with settings. Call once at application entry."""
    import structlog

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.logging_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(settings.logging_level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
