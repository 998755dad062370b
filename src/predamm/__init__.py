"""PredAMM - outcome pricing and rebalancing engine for prediction markets."""

__version__ = "0.1.0"
