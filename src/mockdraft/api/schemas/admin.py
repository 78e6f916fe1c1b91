from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class OfficialResultPayload(BaseModel):
    player_name: str | None = None
    team_name: str | None = None


class OfficialResultEntry(OfficialResultPayload):
    slot_number: int = Field(..., ge=1, le=32)


class OfficialResultsRequest(BaseModel):
    results: List[OfficialResultEntry] = Field(default_factory=list)


class SimulatedPickResponse(BaseModel):
    slot_number: int
    player_name: str
    team_name: str | None
    position: str | None


class SimulationStatusResponse(BaseModel):
    year: int
    phase: str
    active: bool
    revealed_count: int
    total: int
    next_reveal_at_ms: int | None
    revealed: List[SimulatedPickResponse]


class DraftStartResponse(BaseModel):
    year: int
    draft_started_at: datetime


class SyncResponse(BaseModel):
    year: int
    synced: int
    error: str | None = None


class RefreshPlayersResponse(BaseModel):
    year: int
    players: int


class HistoricalWinnerRequest(BaseModel):
    place: int = Field(..., ge=1, le=3)
    display_name: str = Field(..., min_length=1)
    score: int | None = Field(default=None, ge=0)


class HistoricalWinnerResponse(BaseModel):
    winner_id: str
    year: int
    place: int
    display_name: str
    score: int | None
