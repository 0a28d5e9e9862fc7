"""
Application layer: construction helpers and call-trace simulation.
"""

from .factory import create, debounced
from .simulation import CallOutcome, Execution, SimulationReport, simulate

__all__ = [
    "create",
    "debounced",
    "CallOutcome",
    "Execution",
    "SimulationReport",
    "simulate",
]
