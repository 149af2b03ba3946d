"""Orchestrator module for driving the remote simulation."""

from .models import ActionResult, ActionStatus
from .simulation_controller import SimulationController

__all__ = [
    "ActionResult",
    "ActionStatus",
    "SimulationController",
]
