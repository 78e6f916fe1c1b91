from __future__ import annotations

from typing import List

from pydantic import BaseModel


class BoardEntryResponse(BaseModel):
    rank: int
    name: str
    school: str
    position: str
    score: float
    appearances: int


class BoardResponse(BaseModel):
    year: int
    source: str
    position: str | None = None
    players: List[BoardEntryResponse]


class LeaderboardEntryResponse(BaseModel):
    position: int
    rank: int
    participant_id: str
    display_name: str
    score: int | None
    picks_scored: int


class LeaderboardResponse(BaseModel):
    year: int
    mode: str
    pending: bool
    simulated: bool
    entries: List[LeaderboardEntryResponse]


class PickScoreResponse(BaseModel):
    slot_number: int
    player_name: str | None
    official_slot: int | None
    points: int
    doubled: bool


class ResultsResponse(BaseModel):
    year: int
    simulated: bool
    official: dict[int, str | None]
    standings: LeaderboardResponse
    breakdown: List[PickScoreResponse] | None = None
