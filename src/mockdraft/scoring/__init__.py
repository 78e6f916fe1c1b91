"""Pick sanitizing, scoring and standings."""

from .leaderboard import LeaderboardEntry, Standings, build_leaderboard, build_standings, has_results
from .picks import (
    DOUBLE_SCORE_MIN_SLOT,
    DOUBLE_SCORE_MULTIPLIER,
    POINTS_BY_DISTANCE,
    OfficialResultsMap,
    PickScore,
    is_complete_slate,
    normalize_player_name,
    points_for_distance,
    sanitize_picks,
    score_breakdown,
    score_picks,
)

__all__ = [
    "DOUBLE_SCORE_MIN_SLOT",
    "DOUBLE_SCORE_MULTIPLIER",
    "POINTS_BY_DISTANCE",
    "LeaderboardEntry",
    "OfficialResultsMap",
    "PickScore",
    "Standings",
    "build_leaderboard",
    "build_standings",
    "has_results",
    "is_complete_slate",
    "normalize_player_name",
    "points_for_distance",
    "sanitize_picks",
    "score_breakdown",
    "score_picks",
]
