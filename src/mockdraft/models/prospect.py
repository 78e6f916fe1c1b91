"""Canonical prospect models shared across ranking sources and fusion output."""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class ProspectRecord(BaseModel):
    """One ranked prospect as published by a single source."""

    rank: int = Field(..., ge=1)
    name: str = Field(..., min_length=1)
    school: str = ""
    position: str = ""

    model_config = ConfigDict(frozen=True)


class ConsensusEntry(BaseModel):
    """A prospect's place in a derived (fused) ordering.

    ``rank`` is the 1-based position in the derived ordering, never the
    original source rank. ``score`` holds the RRF score or the mean source
    rank, depending on which algorithm produced the entry.
    """

    rank: int = Field(..., ge=1)
    name: str
    school: str = ""
    position: str = ""
    score: float = 0.0
    appearances: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)
