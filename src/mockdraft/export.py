"""CSV export helpers for consensus boards and standings."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Sequence

from mockdraft.models import ConsensusEntry
from mockdraft.scoring import LeaderboardEntry


BOARD_HEADERS = ("rank", "name", "school", "position", "score", "appearances")
STANDINGS_HEADERS = ("position", "rank", "participant_id", "display_name", "score", "picks_scored")


def _format_score(value: float) -> str:
    return f"{value:.6f}".rstrip("0").rstrip(".")


def export_board_to_csv(entries: Sequence[ConsensusEntry]) -> str:
    """Render a consensus board with the same columns the loaders read back."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(BOARD_HEADERS)
    for entry in entries:
        writer.writerow(
            [
                entry.rank,
                entry.name,
                entry.school,
                entry.position,
                _format_score(entry.score),
                entry.appearances,
            ]
        )
    return buffer.getvalue()


def export_standings_to_csv(entries: Sequence[LeaderboardEntry]) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(STANDINGS_HEADERS)
    for entry in entries:
        writer.writerow(
            [
                entry.position,
                entry.rank,
                entry.participant_id,
                entry.display_name,
                entry.score,
                entry.picks_scored,
            ]
        )
    return buffer.getvalue()


__all__ = [
    "export_board_to_csv",
    "export_standings_to_csv",
]
