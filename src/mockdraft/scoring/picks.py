"""Slate repair and proximity scoring of picks against official results."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Hashable, List, Mapping, Optional, Sequence

from mockdraft.config.season import TOTAL_PICKS
from mockdraft.identity import record_key
from mockdraft.models import Pick, ProspectRecord


logger = logging.getLogger(__name__)

DOUBLE_SCORE_MIN_SLOT = 12
DOUBLE_SCORE_MULTIPLIER = 2
POINTS_BY_DISTANCE: Mapping[int, int] = {0: 3, 1: 2, 2: 1}

_SUFFIX_TOKENS = {"jr", "sr", "ii", "iii", "iv", "v"}

OfficialResultsMap = Mapping[int, Optional[str]]


def normalize_player_name(name: str) -> str:
    """Matching form of a name: lowercase, no periods, single spaces, no suffix."""

    tokens = name.lower().replace(".", "").split()
    while len(tokens) > 1 and tokens[-1] in _SUFFIX_TOKENS:
        tokens.pop()
    return " ".join(tokens)


def is_complete_slate(picks: Sequence[Pick]) -> bool:
    filled = {
        pick.slot_number
        for pick in picks
        if pick.player_name and 1 <= pick.slot_number <= TOTAL_PICKS
    }
    return len(filled) == TOTAL_PICKS


def _cleared(pick: Pick) -> Pick:
    return pick.model_copy(update={"player_name": None, "position": None, "double_score_pick": False})


class _IdentityResolver:
    def __init__(self, prospects: Sequence[ProspectRecord] | None):
        self._by_name: Dict[str, List[ProspectRecord]] = {}
        for record in prospects or ():
            self._by_name.setdefault(normalize_player_name(record.name), []).append(record)

    def key_for(self, pick: Pick) -> Hashable:
        normalized = normalize_player_name(pick.player_name or "")
        candidates = self._by_name.get(normalized)
        if not candidates:
            return ("name", normalized)
        if pick.position:
            for record in candidates:
                if record.position.upper() == pick.position.upper():
                    return record_key(record)
        return record_key(candidates[0])


def sanitize_picks(
    picks: Sequence[Pick],
    *,
    prospects: Sequence[ProspectRecord] | None = None,
    teams: Mapping[int, str] | None = None,
) -> List[Pick]:
    """Repair a submitted slate into a valid one.

    Out-of-range slots are dropped and the first pick per slot wins. A player
    may only be picked once: later slots resolving to an already-picked
    identity are cleared. Only slots 12-32 may carry the double-score flag,
    and only the lowest flagged slot with a player keeps it.
    """

    by_slot: Dict[int, Pick] = {}
    for pick in picks:
        if not 1 <= pick.slot_number <= TOTAL_PICKS:
            logger.debug("Dropping pick for out-of-range slot %s", pick.slot_number)
            continue
        if pick.slot_number in by_slot:
            logger.debug("Dropping repeated pick for slot %s", pick.slot_number)
            continue
        by_slot[pick.slot_number] = pick

    resolver = _IdentityResolver(prospects)
    seen: Dict[Hashable, int] = {}
    repaired: List[Pick] = []
    double_slot: Optional[int] = None
    for slot in sorted(by_slot):
        pick = by_slot[slot]
        if teams and slot in teams and pick.team_name != teams[slot]:
            pick = pick.model_copy(update={"team_name": teams[slot]})
        if pick.player_name:
            key = resolver.key_for(pick)
            if key in seen:
                logger.debug(
                    "Clearing slot %s: %r already picked at slot %s",
                    slot,
                    pick.player_name,
                    seen[key],
                )
                pick = _cleared(pick)
            else:
                seen[key] = slot
        if pick.double_score_pick:
            if not pick.player_name or slot < DOUBLE_SCORE_MIN_SLOT or double_slot is not None:
                pick = pick.model_copy(update={"double_score_pick": False})
            else:
                double_slot = slot
        repaired.append(pick)
    return repaired


def _official_slots_by_name(official: OfficialResultsMap) -> Dict[str, int]:
    lookup: Dict[str, int] = {}
    for slot in sorted(official):
        name = official[slot]
        if name:
            lookup.setdefault(normalize_player_name(name), slot)
    return lookup


def points_for_distance(distance: int) -> int:
    return POINTS_BY_DISTANCE.get(distance, 0)


@dataclass(frozen=True)
class PickScore:
    slot_number: int
    player_name: Optional[str]
    official_slot: Optional[int]
    points: int
    doubled: bool


def _is_doubled(pick: Pick) -> bool:
    return pick.double_score_pick and pick.slot_number >= DOUBLE_SCORE_MIN_SLOT


def score_breakdown(picks: Sequence[Pick], official: OfficialResultsMap) -> List[PickScore]:
    lookup = _official_slots_by_name(official)
    breakdown: List[PickScore] = []
    for pick in picks:
        official_slot = lookup.get(normalize_player_name(pick.player_name)) if pick.player_name else None
        points = 0
        doubled = _is_doubled(pick)
        if official_slot is not None:
            points = points_for_distance(abs(pick.slot_number - official_slot))
            if doubled:
                points *= DOUBLE_SCORE_MULTIPLIER
        breakdown.append(
            PickScore(
                slot_number=pick.slot_number,
                player_name=pick.player_name,
                official_slot=official_slot,
                points=points,
                doubled=doubled,
            )
        )
    return breakdown


def score_picks(picks: Sequence[Pick], official: OfficialResultsMap) -> int:
    """Total points for a slate: 3/2/1 for 0/1/2 slots off, doubled on the double pick."""

    return sum(item.points for item in score_breakdown(picks, official))
