"""Persistence contract for simulation state plus an in-process implementation."""

from __future__ import annotations

import threading
from typing import Dict, Optional, Protocol

from .state import SimulationKey, SimulationState


class SimulationStateStore(Protocol):
    def load_simulation_state(self, key: SimulationKey) -> Optional[SimulationState]:
        ...

    def save_simulation_state(self, key: SimulationKey, state: SimulationState) -> None:
        """Insert or replace the state for ``key``."""

    def advance_simulation_state(self, key: SimulationKey, state: SimulationState) -> bool:
        """Write ``state`` only if the stored run has a lower ``revealed_count``.

        The stored run must share ``started_at_ms`` with ``state``; a run that
        was reset or restarted in the meantime is left untouched. Returns
        whether the write happened.
        """

    def delete_simulation_state(self, key: SimulationKey) -> None:
        ...


class InMemorySimulationStore:
    def __init__(self) -> None:
        self._states: Dict[SimulationKey, SimulationState] = {}
        self._lock = threading.Lock()

    def load_simulation_state(self, key: SimulationKey) -> Optional[SimulationState]:
        with self._lock:
            return self._states.get(key)

    def save_simulation_state(self, key: SimulationKey, state: SimulationState) -> None:
        with self._lock:
            self._states[key] = state

    def advance_simulation_state(self, key: SimulationKey, state: SimulationState) -> bool:
        with self._lock:
            current = self._states.get(key)
            if current is None or current.started_at_ms != state.started_at_ms:
                return False
            if current.revealed_count >= state.revealed_count:
                return False
            self._states[key] = state
            return True

    def delete_simulation_state(self, key: SimulationKey) -> None:
        with self._lock:
            self._states.pop(key, None)
