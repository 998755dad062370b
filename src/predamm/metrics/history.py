"""Rolling per-outcome price history - price change and volatility for the chart and cards."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from predamm.models.market import Market


class PriceHistory:
    """Price vector samples for one market, oldest first, bounded to maxlen samples."""

    def __init__(self, outcome_ids: list[str], maxlen: int = 200) -> None:
        self._ids = list(outcome_ids)
        self._times: deque[str] = deque(maxlen=maxlen)
        self._prices: deque[tuple[float, ...]] = deque(maxlen=maxlen)

    @classmethod
    def for_market(cls, market: Market, maxlen: int = 200, timestamp: str = "") -> PriceHistory:
        """History seeded with the market's current prices as the first sample."""
        history = cls([o.id for o in market.outcomes], maxlen=maxlen)
        history.push(timestamp, market.prices())
        return history

    def push(self, ts: str, prices: list[float]) -> None:
        if len(prices) != len(self._ids):
            raise ValueError(f"expected {len(self._ids)} prices, got {len(prices)}")
        self._times.append(ts)
        self._prices.append(tuple(prices))

    def __len__(self) -> int:
        return len(self._prices)

    def _column(self, outcome_id: str) -> list[float]:
        try:
            i = self._ids.index(outcome_id)
        except ValueError:
            raise KeyError(outcome_id) from None
        return [row[i] for row in self._prices]

    def series(self, outcome_id: str) -> list[tuple[str, float]]:
        return list(zip(self._times, self._column(outcome_id)))

    def price_change_pct(self, outcome_id: str) -> float | None:
        """Percent change of the outcome price from the oldest retained sample to the latest."""
        column = self._column(outcome_id)
        if len(column) < 2 or column[0] <= 0:
            return None
        return (column[-1] - column[0]) / column[0] * 100.0

    def volatility_proxy(self, outcome_id: str, window: int = 20) -> float | None:
        """Std dev of the outcome price over the last `window` samples (if enough points)."""
        prices = self._column(outcome_id)[-window:]
        if len(prices) < 2:
            return None
        mean = sum(prices) / len(prices)
        var = sum((p - mean) ** 2 for p in prices) / (len(prices) - 1)
        return var ** 0.5
