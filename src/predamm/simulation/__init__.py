"""Deterministic market liveness simulation."""

from predamm.simulation.ticker import LivenessSimulator, SimulationResult, TickResult

__all__ = ["LivenessSimulator", "SimulationResult", "TickResult"]
