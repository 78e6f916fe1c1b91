"""CSV loaders for participant slates and official results."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Dict, List, Optional

from mockdraft.models import Pick


logger = logging.getLogger(__name__)

_TRUE_TOKENS = {"1", "true", "t", "yes", "y", "x", "2x"}


def _parse_slot(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    text = raw.strip().lstrip("#")
    try:
        return int(text)
    except ValueError:
        return None


def _parse_flag(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUE_TOKENS


def load_picks_csv(path: Path) -> List[Pick]:
    """Read ``slot,player_name[,position][,double_score]`` rows."""

    picks: List[Pick] = []
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for line_no, row in enumerate(reader, start=2):
            slot = _parse_slot(row.get("slot") or row.get("pick"))
            if slot is None:
                logger.debug("Skipping %s:%d without a numeric slot", path, line_no)
                continue
            picks.append(
                Pick(
                    slot_number=slot,
                    player_name=row.get("player_name") or row.get("player"),
                    position=row.get("position"),
                    double_score_pick=_parse_flag(row.get("double_score")),
                )
            )
    return picks


def load_official_results_csv(path: Path) -> Dict[int, Optional[str]]:
    """Read ``slot,player_name`` rows into a results map."""

    results: Dict[int, Optional[str]] = {}
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for row in reader:
            slot = _parse_slot(row.get("slot") or row.get("pick"))
            if slot is None:
                continue
            name = (row.get("player_name") or row.get("player") or "").strip()
            results[slot] = name or None
    return results
