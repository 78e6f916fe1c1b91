"""Configuration helpers for draft seasons and runtime settings."""

from .season import TOTAL_PICKS, DraftSeason, get_season, has_season, iter_seasons
from .settings import (
    DEFAULT_COMPARISON_SOURCES,
    DEFAULT_RRF_K,
    PRIMARY_SOURCE,
    GameSettings,
    parse_source_ids,
)

__all__ = [
    "DEFAULT_COMPARISON_SOURCES",
    "DEFAULT_RRF_K",
    "DraftSeason",
    "GameSettings",
    "PRIMARY_SOURCE",
    "TOTAL_PICKS",
    "get_season",
    "has_season",
    "iter_seasons",
    "parse_source_ids",
]
