"""Persistence layer for prospects, slates, official results and simulations."""

from __future__ import annotations

import json
import logging
import os
import sqlite3
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional
from uuid import uuid4

from mockdraft.models import OfficialResult, Participant, Pick, ProspectRecord
from mockdraft.simulation import SimulatedPick, SimulationKey, SimulationState


logger = logging.getLogger(__name__)

DB_PATH_ENV = "MOCKDRAFT_DB_PATH"
DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent / "mockdraft.sqlite"


@dataclass
class HistoricalWinner:
    winner_id: str
    competition: str
    year: int
    place: int
    display_name: str
    score: Optional[int]
    created_at: datetime


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class DraftStore:
    """Simple SQLite-backed store for one or more draft competitions."""

    def __init__(self, db_path: Path | str | None = None):
        self._use_uri = False
        target = db_path if db_path is not None else os.getenv(DB_PATH_ENV)
        if target is None:
            self.db_path: Path | str = DEFAULT_DB_PATH
        elif str(target).startswith("file:"):
            self.db_path = str(target)
            self._use_uri = True
        else:
            self.db_path = Path(target)
        self._ensure_schema()

    def _fallback_connect(self) -> sqlite3.Connection:
        fallback_dir = Path(tempfile.gettempdir()) / "mockdraft-runtime"
        fallback_dir.mkdir(parents=True, exist_ok=True)
        fallback = fallback_dir / "mockdraft.sqlite"
        logger.warning("Could not open %s; falling back to %s", self.db_path, fallback)
        conn = sqlite3.connect(fallback)
        self.db_path = fallback
        self._use_uri = False
        self._create_schema(conn)
        return conn

    def _connect(self) -> sqlite3.Connection:
        try:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                conn = sqlite3.connect(self.db_path)
            else:
                conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        except (sqlite3.OperationalError, OSError):
            conn = self._fallback_connect()
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS prospects (
                competition TEXT NOT NULL,
                year INTEGER NOT NULL,
                rank INTEGER NOT NULL,
                name TEXT NOT NULL,
                school TEXT NOT NULL DEFAULT '',
                position TEXT NOT NULL DEFAULT '',
                PRIMARY KEY (competition, year, rank)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS participants (
                competition TEXT NOT NULL,
                year INTEGER NOT NULL,
                participant_id TEXT NOT NULL,
                display_name TEXT NOT NULL DEFAULT '',
                first_submitted_at TEXT NOT NULL,
                PRIMARY KEY (competition, year, participant_id)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS picks (
                competition TEXT NOT NULL,
                year INTEGER NOT NULL,
                participant_id TEXT NOT NULL,
                slot_number INTEGER NOT NULL,
                player_name TEXT NOT NULL,
                position TEXT,
                team_name TEXT,
                double_score INTEGER NOT NULL DEFAULT 0,
                updated_at TEXT NOT NULL,
                PRIMARY KEY (competition, year, participant_id, slot_number)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS official_results (
                competition TEXT NOT NULL,
                year INTEGER NOT NULL,
                slot_number INTEGER NOT NULL,
                player_name TEXT,
                team_name TEXT,
                updated_at TEXT NOT NULL,
                PRIMARY KEY (competition, year, slot_number)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS draft_settings (
                competition TEXT NOT NULL,
                year INTEGER NOT NULL,
                draft_started_at TEXT,
                PRIMARY KEY (competition, year)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS simulations (
                competition TEXT NOT NULL,
                year INTEGER NOT NULL,
                active INTEGER NOT NULL,
                revealed_count INTEGER NOT NULL,
                next_reveal_at_ms INTEGER NOT NULL,
                started_at_ms INTEGER NOT NULL,
                ordered_picks_json TEXT NOT NULL,
                PRIMARY KEY (competition, year)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS historical_winners (
                id TEXT PRIMARY KEY,
                competition TEXT NOT NULL,
                year INTEGER NOT NULL,
                place INTEGER NOT NULL,
                display_name TEXT NOT NULL,
                score INTEGER,
                created_at TEXT NOT NULL
            )
            """
        )
        conn.commit()

    # prospects

    def list_prospects(self, competition: str, year: int) -> List[ProspectRecord]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM prospects WHERE competition = ? AND year = ? ORDER BY rank",
                (competition, year),
            ).fetchall()
        return [
            ProspectRecord(rank=row["rank"], name=row["name"], school=row["school"], position=row["position"])
            for row in rows
        ]

    def replace_prospects(self, competition: str, year: int, records: Iterable[ProspectRecord]) -> int:
        rows = [(competition, year, r.rank, r.name, r.school, r.position) for r in records]
        with self._connect() as conn:
            conn.execute("DELETE FROM prospects WHERE competition = ? AND year = ?", (competition, year))
            conn.executemany(
                "INSERT OR REPLACE INTO prospects (competition, year, rank, name, school, position)"
                " VALUES (?, ?, ?, ?, ?, ?)",
                rows,
            )
            conn.commit()
        logger.info("Stored %d prospects for %s %s", len(rows), competition, year)
        return len(rows)

    # participant slates

    def load_picks(self, competition: str, year: int, participant_id: str) -> List[Pick]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT * FROM picks
                WHERE competition = ? AND year = ? AND participant_id = ?
                ORDER BY slot_number
                """,
                (competition, year, participant_id),
            ).fetchall()
        return [self._row_to_pick(row) for row in rows]

    def save_picks(
        self,
        competition: str,
        year: int,
        participant_id: str,
        picks: Iterable[Pick],
        *,
        display_name: str = "",
    ) -> List[Pick]:
        """Replace a participant's slate; picks without a player are not stored."""

        now = _now_iso()
        rows = [
            (
                competition,
                year,
                participant_id,
                pick.slot_number,
                pick.player_name,
                pick.position,
                pick.team_name,
                int(pick.double_score_pick),
                now,
            )
            for pick in picks
            if pick.player_name
        ]
        with self._connect() as conn:
            self._touch_participant(conn, competition, year, participant_id, display_name, now)
            conn.execute(
                "DELETE FROM picks WHERE competition = ? AND year = ? AND participant_id = ?",
                (competition, year, participant_id),
            )
            conn.executemany(
                """
                INSERT INTO picks (
                    competition, year, participant_id, slot_number, player_name,
                    position, team_name, double_score, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                rows,
            )
            conn.commit()
        return self.load_picks(competition, year, participant_id)

    def delete_pick(self, competition: str, year: int, participant_id: str, slot_number: int) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                """
                DELETE FROM picks
                WHERE competition = ? AND year = ? AND participant_id = ? AND slot_number = ?
                """,
                (competition, year, participant_id, slot_number),
            )
            conn.commit()
            return cursor.rowcount > 0

    def list_participants(self, competition: str, year: int) -> List[Participant]:
        """Participants in first-submission order, each with their stored picks."""

        with self._connect() as conn:
            people = conn.execute(
                """
                SELECT * FROM participants
                WHERE competition = ? AND year = ?
                ORDER BY first_submitted_at, rowid
                """,
                (competition, year),
            ).fetchall()
            pick_rows = conn.execute(
                "SELECT * FROM picks WHERE competition = ? AND year = ? ORDER BY slot_number",
                (competition, year),
            ).fetchall()
        by_participant: Dict[str, List[Pick]] = {}
        for row in pick_rows:
            by_participant.setdefault(row["participant_id"], []).append(self._row_to_pick(row))
        return [
            Participant(
                participant_id=row["participant_id"],
                display_name=row["display_name"],
                picks=by_participant.get(row["participant_id"], []),
            )
            for row in people
        ]

    def _touch_participant(
        self,
        conn: sqlite3.Connection,
        competition: str,
        year: int,
        participant_id: str,
        display_name: str,
        now: str,
    ) -> None:
        conn.execute(
            """
            INSERT INTO participants (competition, year, participant_id, display_name, first_submitted_at)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT (competition, year, participant_id) DO NOTHING
            """,
            (competition, year, participant_id, display_name, now),
        )
        if display_name:
            conn.execute(
                """
                UPDATE participants SET display_name = ?
                WHERE competition = ? AND year = ? AND participant_id = ?
                """,
                (display_name, competition, year, participant_id),
            )

    # official results

    def list_official_results(self, competition: str, year: int) -> List[OfficialResult]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM official_results WHERE competition = ? AND year = ? ORDER BY slot_number",
                (competition, year),
            ).fetchall()
        return [
            OfficialResult(slot_number=row["slot_number"], player_name=row["player_name"], team_name=row["team_name"])
            for row in rows
        ]

    def get_official_results(self, competition: str, year: int) -> Dict[int, Optional[str]]:
        return {
            result.slot_number: result.player_name
            for result in self.list_official_results(competition, year)
        }

    def replace_official_results(self, competition: str, year: int, results: Iterable[OfficialResult]) -> int:
        now = _now_iso()
        rows = [
            (competition, year, result.slot_number, result.player_name, result.team_name, now)
            for result in results
        ]
        with self._connect() as conn:
            conn.execute("DELETE FROM official_results WHERE competition = ? AND year = ?", (competition, year))
            conn.executemany(
                """
                INSERT OR REPLACE INTO official_results (
                    competition, year, slot_number, player_name, team_name, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                rows,
            )
            conn.commit()
        return len(rows)

    def upsert_official_result(self, competition: str, year: int, result: OfficialResult) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO official_results (competition, year, slot_number, player_name, team_name, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT (competition, year, slot_number) DO UPDATE SET
                    player_name = excluded.player_name,
                    team_name = excluded.team_name,
                    updated_at = excluded.updated_at
                """,
                (competition, year, result.slot_number, result.player_name, result.team_name, _now_iso()),
            )
            conn.commit()

    def clear_official_result(self, competition: str, year: int, slot_number: int) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM official_results WHERE competition = ? AND year = ? AND slot_number = ?",
                (competition, year, slot_number),
            )
            conn.commit()
            return cursor.rowcount > 0

    # draft lock

    def get_draft_started_at(self, competition: str, year: int) -> Optional[datetime]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT draft_started_at FROM draft_settings WHERE competition = ? AND year = ?",
                (competition, year),
            ).fetchone()
        if row is None or not row["draft_started_at"]:
            return None
        return datetime.fromisoformat(row["draft_started_at"])

    def is_draft_locked(self, competition: str, year: int) -> bool:
        return self.get_draft_started_at(competition, year) is not None

    def start_draft(self, competition: str, year: int) -> datetime:
        """Lock pick writes and drop any simulation for the same draft."""

        existing = self.get_draft_started_at(competition, year)
        if existing is not None:
            return existing
        started = datetime.now(timezone.utc)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO draft_settings (competition, year, draft_started_at) VALUES (?, ?, ?)
                ON CONFLICT (competition, year) DO UPDATE SET draft_started_at = excluded.draft_started_at
                """,
                (competition, year, started.isoformat()),
            )
            conn.execute("DELETE FROM simulations WHERE competition = ? AND year = ?", (competition, year))
            conn.commit()
        logger.info("Draft %s %s started; picks locked", competition, year)
        return started

    # simulation state

    def load_simulation_state(self, key: SimulationKey) -> Optional[SimulationState]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM simulations WHERE competition = ? AND year = ?",
                (key.competition, key.year),
            ).fetchone()
        if row is None:
            return None
        return SimulationState(
            active=bool(row["active"]),
            revealed_count=row["revealed_count"],
            next_reveal_at_ms=row["next_reveal_at_ms"],
            started_at_ms=row["started_at_ms"],
            ordered_picks=tuple(SimulatedPick(**item) for item in json.loads(row["ordered_picks_json"])),
        )

    def save_simulation_state(self, key: SimulationKey, state: SimulationState) -> None:
        picks_json = json.dumps(
            [
                {"player_name": pick.player_name, "team_name": pick.team_name, "position": pick.position}
                for pick in state.ordered_picks
            ]
        )
        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO simulations (
                    competition, year, active, revealed_count, next_reveal_at_ms,
                    started_at_ms, ordered_picks_json
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    key.competition,
                    key.year,
                    int(state.active),
                    state.revealed_count,
                    state.next_reveal_at_ms,
                    state.started_at_ms,
                    picks_json,
                ),
            )
            conn.commit()

    def advance_simulation_state(self, key: SimulationKey, state: SimulationState) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                """
                UPDATE simulations
                SET revealed_count = ?, next_reveal_at_ms = ?
                WHERE competition = ? AND year = ? AND started_at_ms = ? AND revealed_count < ?
                """,
                (
                    state.revealed_count,
                    state.next_reveal_at_ms,
                    key.competition,
                    key.year,
                    state.started_at_ms,
                    state.revealed_count,
                ),
            )
            conn.commit()
            return cursor.rowcount > 0

    def delete_simulation_state(self, key: SimulationKey) -> None:
        with self._connect() as conn:
            conn.execute(
                "DELETE FROM simulations WHERE competition = ? AND year = ?",
                (key.competition, key.year),
            )
            conn.commit()

    # historical winners

    def list_historical_winners(self, competition: str, year: int) -> List[HistoricalWinner]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT * FROM historical_winners
                WHERE competition = ? AND year = ?
                ORDER BY place, datetime(created_at)
                """,
                (competition, year),
            ).fetchall()
        return [self._row_to_winner(row) for row in rows]

    def add_historical_winner(
        self,
        competition: str,
        year: int,
        *,
        place: int,
        display_name: str,
        score: Optional[int] = None,
    ) -> HistoricalWinner:
        winner_id = uuid4().hex
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO historical_winners (id, competition, year, place, display_name, score, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (winner_id, competition, year, place, display_name, score, _now_iso()),
            )
            conn.commit()
            row = conn.execute("SELECT * FROM historical_winners WHERE id = ?", (winner_id,)).fetchone()
        if row is None:  # pragma: no cover
            raise KeyError(f"Historical winner {winner_id} not found after insert")
        return self._row_to_winner(row)

    def delete_historical_winner(self, winner_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM historical_winners WHERE id = ?", (winner_id,))
            conn.commit()
            return cursor.rowcount > 0

    def _row_to_pick(self, row: sqlite3.Row) -> Pick:
        return Pick(
            slot_number=row["slot_number"],
            player_name=row["player_name"],
            position=row["position"],
            team_name=row["team_name"],
            double_score_pick=bool(row["double_score"]),
        )

    def _row_to_winner(self, row: sqlite3.Row) -> HistoricalWinner:
        return HistoricalWinner(
            winner_id=row["id"],
            competition=row["competition"],
            year=row["year"],
            place=row["place"],
            display_name=row["display_name"],
            score=row["score"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )


__all__ = ["DEFAULT_DB_PATH", "DraftStore", "HistoricalWinner"]
