from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class PickPayload(BaseModel):
    slot_number: int
    player_name: str | None = None
    position: str | None = None
    double_score_pick: bool = False


class PicksSubmitRequest(BaseModel):
    picks: List[PickPayload] = Field(default_factory=list)
    display_name: str | None = None


class PickResponse(BaseModel):
    slot_number: int
    player_name: str | None
    position: str | None
    team_name: str | None
    double_score_pick: bool


class PicksResponse(BaseModel):
    year: int
    participant_id: str
    locked: bool
    complete: bool
    picks: List[PickResponse]


class SubmittedSlateResponse(BaseModel):
    participant_id: str
    display_name: str
    picks: List[PickResponse]
