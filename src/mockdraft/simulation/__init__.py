"""Timed reveal simulator."""

from .service import OrderProvider, RevealSimulator, SimulationStatus, season_order
from .state import (
    Clock,
    SimulatedPick,
    SimulationKey,
    SimulationPhase,
    SimulationState,
    advance,
    order_from_season,
    revealed_results,
    start_state,
    system_clock_ms,
)
from .store import InMemorySimulationStore, SimulationStateStore

__all__ = [
    "Clock",
    "InMemorySimulationStore",
    "OrderProvider",
    "RevealSimulator",
    "SimulatedPick",
    "SimulationKey",
    "SimulationPhase",
    "SimulationState",
    "SimulationStateStore",
    "SimulationStatus",
    "advance",
    "order_from_season",
    "revealed_results",
    "season_order",
    "start_state",
    "system_clock_ms",
]
