"""Timed reveal state and its pure transitions.

A simulation reveals a fixed mock order one slot per interval. The state only
stores when the next reveal is due; every read computes how many interval
boundaries have passed since then and applies them all at once, so a process
that sat idle for five intervals catches up five reveals instead of dropping
them.
"""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, Optional, Tuple

from mockdraft.config.season import TOTAL_PICKS

Clock = Callable[[], int]


def system_clock_ms() -> int:
    return int(time.time() * 1000)


class SimulationPhase(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"


@dataclass(frozen=True)
class SimulationKey:
    competition: str
    year: int


@dataclass(frozen=True)
class SimulatedPick:
    player_name: str
    team_name: Optional[str] = None
    position: Optional[str] = None


@dataclass(frozen=True)
class SimulationState:
    active: bool
    revealed_count: int
    next_reveal_at_ms: int
    started_at_ms: int
    ordered_picks: Tuple[SimulatedPick, ...]

    @property
    def total(self) -> int:
        return min(len(self.ordered_picks), TOTAL_PICKS)

    @property
    def phase(self) -> SimulationPhase:
        if not self.active:
            return SimulationPhase.IDLE
        if self.revealed_count >= self.total:
            return SimulationPhase.COMPLETE
        return SimulationPhase.RUNNING


def _check_interval(interval_ms: int) -> None:
    if interval_ms <= 0:
        raise ValueError(f"Reveal interval must be positive, got {interval_ms!r}")


def start_state(order: Iterable[SimulatedPick], now_ms: int, interval_ms: int) -> SimulationState:
    _check_interval(interval_ms)
    picks = tuple(order)[:TOTAL_PICKS]
    return SimulationState(
        active=True,
        revealed_count=0,
        next_reveal_at_ms=now_ms + interval_ms,
        started_at_ms=now_ms,
        ordered_picks=picks,
    )


def advance(state: SimulationState, now_ms: int, interval_ms: int) -> SimulationState:
    """Apply every reveal that has come due by ``now_ms``.

    Returns ``state`` itself when nothing is due. ``revealed_count`` never
    decreases and never passes the length of the order.
    """

    _check_interval(interval_ms)
    if not state.active or state.revealed_count >= state.total or now_ms < state.next_reveal_at_ms:
        return state
    due = (now_ms - state.next_reveal_at_ms) // interval_ms + 1
    applied = min(due, state.total - state.revealed_count)
    return replace(
        state,
        revealed_count=state.revealed_count + applied,
        next_reveal_at_ms=state.next_reveal_at_ms + applied * interval_ms,
    )


def revealed_results(state: Optional[SimulationState]) -> Dict[int, Optional[str]]:
    """The revealed prefix as a slot -> player name map."""

    if state is None or not state.active:
        return {}
    return {
        slot: pick.player_name
        for slot, pick in enumerate(state.ordered_picks[: state.revealed_count], start=1)
    }


def order_from_season(simulated_order: Iterable[Tuple[str, str, str]]) -> Tuple[SimulatedPick, ...]:
    return tuple(
        SimulatedPick(player_name=name, team_name=team or None, position=position or None)
        for name, team, position in simulated_order
    )
