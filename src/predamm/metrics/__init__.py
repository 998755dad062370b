"""Derived metrics over executed trades."""

from predamm.metrics.history import PriceHistory

__all__ = ["PriceHistory"]
