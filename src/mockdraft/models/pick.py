"""Participant picks, official results and participants."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class Pick(BaseModel):
    """A participant's prediction for one first-round slot."""

    slot_number: int
    player_name: Optional[str] = None
    position: Optional[str] = None
    team_name: Optional[str] = None
    double_score_pick: bool = False

    model_config = ConfigDict(frozen=True)

    @field_validator("player_name", "position", "team_name", mode="before")
    @classmethod
    def _strip_blank(cls, value: Optional[str]) -> Optional[str]:
        return _blank_to_none(value)


class OfficialResult(BaseModel):
    """Ground-truth selection for one slot, real or simulated."""

    slot_number: int = Field(..., ge=1, le=32)
    player_name: Optional[str] = None
    team_name: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("player_name", "team_name", mode="before")
    @classmethod
    def _strip_blank(cls, value: Optional[str]) -> Optional[str]:
        return _blank_to_none(value)


class Participant(BaseModel):
    participant_id: str = Field(..., min_length=1)
    display_name: str = ""
    picks: List[Pick] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
