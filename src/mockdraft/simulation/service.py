"""Reveal simulator bound to a state store and a clock."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from mockdraft.config.season import get_season
from mockdraft.config.settings import DEFAULT_REVEAL_INTERVAL_SECONDS

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
from .store import SimulationStateStore


logger = logging.getLogger("uvicorn.error")

OrderProvider = Callable[[SimulationKey], Sequence[SimulatedPick]]


def season_order(key: SimulationKey) -> Tuple[SimulatedPick, ...]:
    return order_from_season(get_season(key.year).simulated_order)


@dataclass(frozen=True)
class SimulationStatus:
    key: SimulationKey
    phase: SimulationPhase
    state: Optional[SimulationState] = None

    @property
    def active(self) -> bool:
        return self.phase is not SimulationPhase.IDLE

    @property
    def revealed_count(self) -> int:
        return self.state.revealed_count if self.state and self.state.active else 0

    @property
    def total(self) -> int:
        return self.state.total if self.state else 0

    @property
    def next_reveal_at_ms(self) -> Optional[int]:
        if self.phase is not SimulationPhase.RUNNING or self.state is None:
            return None
        return self.state.next_reveal_at_ms

    def revealed(self) -> List[Tuple[int, SimulatedPick]]:
        if self.state is None:
            return []
        return list(enumerate(self.state.ordered_picks[: self.revealed_count], start=1))


class RevealSimulator:
    """Start, advance, reset and read timed reveal runs.

    Every read loads the persisted state, applies the reveals that came due
    since it was written and persists the result with a compare-and-set, so
    concurrent readers never move ``revealed_count`` backwards and a restarted
    process catches up instead of starting over.
    """

    def __init__(
        self,
        store: SimulationStateStore,
        *,
        interval_ms: int = int(DEFAULT_REVEAL_INTERVAL_SECONDS * 1000),
        clock: Clock = system_clock_ms,
        order_provider: OrderProvider = season_order,
    ):
        if interval_ms <= 0:
            raise ValueError(f"Reveal interval must be positive, got {interval_ms!r}")
        self.store = store
        self.interval_ms = interval_ms
        self.clock = clock
        self.order_provider = order_provider

    def start(self, key: SimulationKey) -> SimulationStatus:
        existing = self.store.load_simulation_state(key)
        if existing is not None and existing.active:
            logger.info("Simulation for %s %s already running; start ignored", key.competition, key.year)
            return self.status(key)
        order = tuple(self.order_provider(key))
        if not order:
            raise ValueError(f"No simulated draft order configured for {key.year}")
        state = start_state(order, self.clock(), self.interval_ms)
        self.store.save_simulation_state(key, state)
        logger.info(
            "Simulation started for %s %s (%d picks, every %d ms)",
            key.competition,
            key.year,
            state.total,
            self.interval_ms,
        )
        return SimulationStatus(key=key, phase=state.phase, state=state)

    def reset(self, key: SimulationKey) -> SimulationStatus:
        if self.store.load_simulation_state(key) is not None:
            self.store.delete_simulation_state(key)
            logger.info("Simulation reset for %s %s", key.competition, key.year)
        return SimulationStatus(key=key, phase=SimulationPhase.IDLE)

    def status(self, key: SimulationKey) -> SimulationStatus:
        stored = self.store.load_simulation_state(key)
        if stored is None or not stored.active:
            return SimulationStatus(key=key, phase=SimulationPhase.IDLE)
        advanced = advance(stored, self.clock(), self.interval_ms)
        if advanced.revealed_count > stored.revealed_count:
            if self.store.advance_simulation_state(key, advanced):
                logger.info(
                    "Simulation %s %s revealed %d -> %d",
                    key.competition,
                    key.year,
                    stored.revealed_count,
                    advanced.revealed_count,
                )
            else:
                # lost the race: a reset, a restart or a further advance won
                current = self.store.load_simulation_state(key)
                if current is None or not current.active:
                    return SimulationStatus(key=key, phase=SimulationPhase.IDLE)
                if current.started_at_ms != advanced.started_at_ms or current.revealed_count > advanced.revealed_count:
                    advanced = current
        return SimulationStatus(key=key, phase=advanced.phase, state=advanced)

    def official_results(self, key: SimulationKey) -> Dict[int, Optional[str]]:
        return revealed_results(self.status(key).state)

    def results_override(self, key: SimulationKey) -> Optional[Dict[int, Optional[str]]]:
        """Revealed results while a run is active, otherwise ``None``."""

        status = self.status(key)
        if not status.active:
            return None
        return revealed_results(status.state)
