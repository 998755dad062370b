"""Market, Outcome - the priced state of one prediction market."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

MarketStatus = Literal["trading", "closed", "resolved"]

# Tolerance for the sum-to-one check on externally supplied prices
PRICE_SUM_TOLERANCE = 1e-6
# Sums further than this from 1 are rescaled on construction
PRICE_SUM_EPSILON = 1e-9


class Outcome(BaseModel):
    """Single mutually-exclusive outcome (e.g. Yes/No, a candidate) in a market."""

    id: str
    label: str = ""
    price: float = Field(..., gt=0, lt=1, description="Probability/price in (0, 1)")
    quantity: float = 0.0  # net shares issued (LMSR only)
    volume: float = Field(0.0, ge=0)
    user_position: float = Field(0.0, ge=0)
    price_change: float = 0.0  # display %, not used by pricing
    color: str | None = None


class Market(BaseModel):
    """One market: an ordered, fixed set of outcomes whose prices sum to 1."""

    id: str
    title: str = ""
    description: str = ""
    category: str | None = None
    status: MarketStatus = "trading"
    end_time: str | None = None  # ISO-8601
    image_url: str | None = None
    total_volume: float = 0.0
    participants: int = 0
    outcomes: list[Outcome]
    extra: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_outcomes(self) -> Market:
        if len(self.outcomes) < 2:
            raise ValueError("a market needs at least two outcomes")
        ids = [o.id for o in self.outcomes]
        if len(set(ids)) != len(ids):
            raise ValueError(f"duplicate outcome ids: {ids}")
        total = sum(o.price for o in self.outcomes)
        if abs(total - 1.0) > PRICE_SUM_TOLERANCE:
            raise ValueError(f"outcome prices must sum to 1, got {total:.6f}")
        if abs(total - 1.0) > PRICE_SUM_EPSILON:
            for o in self.outcomes:
                o.price = o.price / total
        return self

    @classmethod
    def uniform(cls, market_id: str, title: str, labels: list[str], **kwargs: Any) -> Market:
        """Market with equal prices 1/n; outcome ids are the lower-cased labels."""
        n = len(labels)
        if n < 2:
            raise ValueError("a market needs at least two outcomes")
        outcomes = [
            Outcome(id=label.strip().lower().replace(" ", "-"), label=label, price=1.0 / n)
            for label in labels
        ]
        return cls(id=market_id, title=title, outcomes=outcomes, **kwargs)

    @classmethod
    def binary(
        cls,
        market_id: str,
        title: str,
        yes_percentage: float,
        current_price: float,
        price_change: float = 0.0,
        **kwargs: Any,
    ) -> Market:
        """
        Yes/No market from the card triple (yes_percentage, current_price, price_change).
        Yes is priced at current_price and No at 1 - current_price; yes_percentage is
        display-only and kept in extra.
        """
        if not 0 < current_price < 1:
            raise ValueError(f"current_price must be in (0, 1), got {current_price}")
        extra = dict(kwargs.pop("extra", None) or {})
        extra["yes_percentage"] = yes_percentage
        outcomes = [
            Outcome(id="yes", label="Yes", price=current_price, price_change=price_change, color="#00FFAE"),
            Outcome(id="no", label="No", price=1.0 - current_price, price_change=-price_change, color="#FF3D5A"),
        ]
        return cls(id=market_id, title=title, outcomes=outcomes, extra=extra, **kwargs)

    def outcome_index(self, outcome_id: str) -> int | None:
        for i, o in enumerate(self.outcomes):
            if o.id == outcome_id:
                return i
        return None

    def prices(self) -> list[float]:
        return [o.price for o in self.outcomes]

    def quantities(self) -> list[float]:
        return [o.quantity for o in self.outcomes]

    @property
    def is_trading(self) -> bool:
        return self.status == "trading"
