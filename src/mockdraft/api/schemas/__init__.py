"""Pydantic models for API I/O."""

from .admin import (
    DraftStartResponse,
    HistoricalWinnerRequest,
    HistoricalWinnerResponse,
    OfficialResultEntry,
    OfficialResultPayload,
    OfficialResultsRequest,
    RefreshPlayersResponse,
    SimulatedPickResponse,
    SimulationStatusResponse,
    SyncResponse,
)
from .board import (
    BoardEntryResponse,
    BoardResponse,
    LeaderboardEntryResponse,
    LeaderboardResponse,
    PickScoreResponse,
    ResultsResponse,
)
from .picks import PickPayload, PickResponse, PicksResponse, PicksSubmitRequest, SubmittedSlateResponse

__all__ = [
    "BoardEntryResponse",
    "BoardResponse",
    "DraftStartResponse",
    "HistoricalWinnerRequest",
    "HistoricalWinnerResponse",
    "LeaderboardEntryResponse",
    "LeaderboardResponse",
    "OfficialResultEntry",
    "OfficialResultPayload",
    "OfficialResultsRequest",
    "PickPayload",
    "PickResponse",
    "PickScoreResponse",
    "PicksResponse",
    "PicksSubmitRequest",
    "RefreshPlayersResponse",
    "ResultsResponse",
    "SimulatedPickResponse",
    "SimulationStatusResponse",
    "SubmittedSlateResponse",
    "SyncResponse",
]
