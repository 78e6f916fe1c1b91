"""Standings across participants for one draft."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from mockdraft.models import Participant

from .picks import OfficialResultsMap, is_complete_slate, score_picks


@dataclass(frozen=True)
class LeaderboardEntry:
    position: int
    rank: int
    participant_id: str
    display_name: str
    score: int
    picks_scored: int


@dataclass(frozen=True)
class Standings:
    entries: List[LeaderboardEntry] = field(default_factory=list)
    pending: bool = True


def has_results(official: OfficialResultsMap) -> bool:
    return any(name for name in official.values())


def build_leaderboard(
    participants: Sequence[Participant],
    official: OfficialResultsMap,
    *,
    override: Optional[OfficialResultsMap] = None,
) -> List[LeaderboardEntry]:
    """Score every complete slate and order the result.

    ``override`` replaces ``official`` for this call only (the simulator uses it
    to score against revealed picks). Equal scores keep the order in which the
    participants were supplied and share a competition rank (1, 1, 3).
    """

    results = official if override is None else override
    scored = []
    for participant in participants:
        if not is_complete_slate(participant.picks):
            continue
        scored.append((participant, score_picks(participant.picks, results)))
    scored.sort(key=lambda item: -item[1])

    entries: List[LeaderboardEntry] = []
    rank = 0
    previous: Optional[int] = None
    for index, (participant, score) in enumerate(scored, start=1):
        if score != previous:
            rank = index
            previous = score
        entries.append(
            LeaderboardEntry(
                position=index,
                rank=rank,
                participant_id=participant.participant_id,
                display_name=participant.display_name or participant.participant_id,
                score=score,
                picks_scored=sum(1 for pick in participant.picks if pick.player_name),
            )
        )
    return entries


def build_standings(
    participants: Sequence[Participant],
    official: OfficialResultsMap,
    *,
    override: Optional[OfficialResultsMap] = None,
) -> Standings:
    results = official if override is None else override
    return Standings(
        entries=build_leaderboard(participants, official, override=override),
        pending=not has_results(results),
    )
