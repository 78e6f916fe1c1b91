"""Environment-driven runtime settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

_DB_PATH_ENV = "MOCKDRAFT_DB_PATH"
_CURRENT_YEAR_ENV = "MOCKDRAFT_CURRENT_YEAR"
_COMPETITION_ENV = "MOCKDRAFT_COMPETITION"
_REVEAL_INTERVAL_ENV = "MOCKDRAFT_REVEAL_INTERVAL_SECONDS"
_RRF_K_ENV = "MOCKDRAFT_RRF_K"
_SOURCES_ENV = "MOCKDRAFT_COMPARISON_SOURCES"
_SOURCES_DIR_ENV = "MOCKDRAFT_SOURCES_DIR"
_ADMIN_SECRET_ENV = "MOCKDRAFT_ADMIN_SECRET"
_LIVE_RESULTS_URL_ENV = "MOCKDRAFT_LIVE_RESULTS_URL"

DEFAULT_CURRENT_YEAR = 2026
DEFAULT_COMPETITION = "nfl-draft"
DEFAULT_REVEAL_INTERVAL_SECONDS = 30.0
DEFAULT_RRF_K = 60.0
PRIMARY_SOURCE = "cbs"
DEFAULT_COMPARISON_SOURCES: Tuple[str, ...] = ("pff", "espn", "nfl", "fox")
DEFAULT_LIVE_RESULTS_URL = (
    "https://sports.core.api.espn.com/v2/sports/football/leagues/nfl/seasons/{year}/draft/picks?limit=100"
)
PACKAGE_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def _env_float(name: str, default: float, *, clamp_min: float | None = None, clamp_max: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    if clamp_max is not None:
        value = min(clamp_max, value)
    return value


def _env_int(name: str, default: int, *, min_value: int | None = None, max_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("%s=%d below minimum %d; using default %d", name, value, min_value, default)
        return default
    if max_value is not None and value > max_value:
        logger.warning("%s=%d above maximum %d; using default %d", name, value, max_value, default)
        return default
    return value


def parse_source_ids(raw: str | None) -> Tuple[str, ...]:
    if not raw:
        return ()
    seen: list[str] = []
    for token in raw.split(","):
        source = token.strip().lower()
        if source and source != PRIMARY_SOURCE and source not in seen:
            seen.append(source)
    return tuple(seen)


@dataclass(frozen=True)
class GameSettings:
    current_year: int = DEFAULT_CURRENT_YEAR
    competition: str = DEFAULT_COMPETITION
    reveal_interval_seconds: float = DEFAULT_REVEAL_INTERVAL_SECONDS
    rrf_k: float = DEFAULT_RRF_K
    comparison_sources: Tuple[str, ...] = DEFAULT_COMPARISON_SOURCES
    sources_dir: Path = PACKAGE_DATA_DIR
    db_path: Optional[str] = None
    admin_secret: Optional[str] = None
    live_results_url: str = DEFAULT_LIVE_RESULTS_URL

    @property
    def reveal_interval_ms(self) -> int:
        return int(round(self.reveal_interval_seconds * 1000))

    @classmethod
    def from_env(cls) -> "GameSettings":
        sources = parse_source_ids(os.getenv(_SOURCES_ENV)) or DEFAULT_COMPARISON_SOURCES
        sources_dir = os.getenv(_SOURCES_DIR_ENV)
        return cls(
            current_year=_env_int(_CURRENT_YEAR_ENV, DEFAULT_CURRENT_YEAR, min_value=2020, max_value=2040),
            competition=os.getenv(_COMPETITION_ENV, DEFAULT_COMPETITION).strip() or DEFAULT_COMPETITION,
            reveal_interval_seconds=_env_float(
                _REVEAL_INTERVAL_ENV, DEFAULT_REVEAL_INTERVAL_SECONDS, clamp_min=0.001
            ),
            rrf_k=_env_float(_RRF_K_ENV, DEFAULT_RRF_K, clamp_min=0.001),
            comparison_sources=sources,
            sources_dir=Path(sources_dir) if sources_dir else PACKAGE_DATA_DIR,
            db_path=os.getenv(_DB_PATH_ENV) or None,
            admin_secret=os.getenv(_ADMIN_SECRET_ENV) or None,
            live_results_url=os.getenv(_LIVE_RESULTS_URL_ENV) or DEFAULT_LIVE_RESULTS_URL,
        )
