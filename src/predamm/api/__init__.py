"""HTTP API over the pricing engine."""
