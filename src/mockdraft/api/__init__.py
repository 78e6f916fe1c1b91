"""FastAPI application exposing boards, slates, standings and the simulator."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import httpx
from fastapi import FastAPI, Header, HTTPException, Query
from fastapi.responses import Response

from mockdraft.api.schemas import (
    BoardEntryResponse,
    BoardResponse,
    DraftStartResponse,
    HistoricalWinnerRequest,
    HistoricalWinnerResponse,
    LeaderboardEntryResponse,
    LeaderboardResponse,
    OfficialResultPayload,
    OfficialResultsRequest,
    PickResponse,
    PickScoreResponse,
    PicksResponse,
    PicksSubmitRequest,
    RefreshPlayersResponse,
    ResultsResponse,
    SimulatedPickResponse,
    SimulationStatusResponse,
    SubmittedSlateResponse,
    SyncResponse,
)
from mockdraft.config import TOTAL_PICKS, GameSettings, get_season
from mockdraft.export import export_board_to_csv, export_standings_to_csv
from mockdraft.ingest import fetch_live_official_results, load_packaged_prospects
from mockdraft.models import ConsensusEntry, OfficialResult, Pick, ProspectRecord
from mockdraft.persistence import DraftStore, HistoricalWinner
from mockdraft.rankings import CsvSourceCatalog, SourceCatalog, rank_sources
from mockdraft.scoring import (
    LeaderboardEntry,
    Standings,
    build_standings,
    is_complete_slate,
    sanitize_picks,
    score_breakdown,
)
from mockdraft.simulation import Clock, RevealSimulator, SimulationKey, SimulationStatus, system_clock_ms


logger = logging.getLogger("uvicorn.error")

MIN_YEAR = 2020
MAX_YEAR = 2040


def _pick_to_response(pick: Pick) -> PickResponse:
    return PickResponse(
        slot_number=pick.slot_number,
        player_name=pick.player_name,
        position=pick.position,
        team_name=pick.team_name,
        double_score_pick=pick.double_score_pick,
    )


def _board_entry(entry: ConsensusEntry) -> BoardEntryResponse:
    return BoardEntryResponse(
        rank=entry.rank,
        name=entry.name,
        school=entry.school,
        position=entry.position,
        score=entry.score,
        appearances=entry.appearances,
    )


def _leaderboard_entry(entry: LeaderboardEntry) -> LeaderboardEntryResponse:
    return LeaderboardEntryResponse(
        position=entry.position,
        rank=entry.rank,
        participant_id=entry.participant_id,
        display_name=entry.display_name,
        score=entry.score,
        picks_scored=entry.picks_scored,
    )


def _winner_to_response(winner: HistoricalWinner) -> HistoricalWinnerResponse:
    return HistoricalWinnerResponse(
        winner_id=winner.winner_id,
        year=winner.year,
        place=winner.place,
        display_name=winner.display_name,
        score=winner.score,
    )


def _status_to_response(year: int, status: SimulationStatus) -> SimulationStatusResponse:
    return SimulationStatusResponse(
        year=year,
        phase=status.phase.value,
        active=status.active,
        revealed_count=status.revealed_count,
        total=status.total,
        next_reveal_at_ms=status.next_reveal_at_ms,
        revealed=[
            SimulatedPickResponse(
                slot_number=slot,
                player_name=pick.player_name,
                team_name=pick.team_name,
                position=pick.position,
            )
            for slot, pick in status.revealed()
        ],
    )


def _standings_response(year: int, standings: Standings, *, simulated: bool) -> LeaderboardResponse:
    return LeaderboardResponse(
        year=year,
        mode="scored",
        pending=standings.pending,
        simulated=simulated,
        entries=[_leaderboard_entry(entry) for entry in standings.entries],
    )


def create_app(
    store: DraftStore | None = None,
    *,
    settings: GameSettings | None = None,
    clock: Clock | None = None,
    catalog: SourceCatalog | None = None,
    live_client: httpx.Client | None = None,
) -> FastAPI:
    settings = settings or GameSettings.from_env()
    store = store or DraftStore(settings.db_path)
    catalog = catalog or CsvSourceCatalog(settings.sources_dir)
    simulator = RevealSimulator(
        store,
        interval_ms=settings.reveal_interval_ms,
        clock=clock or system_clock_ms,
    )
    competition = settings.competition

    app = FastAPI(title="mockdraft")
    app.state.draft_store = store
    app.state.simulator = simulator
    app.state.settings = settings

    def _check_year(year: int) -> None:
        if not MIN_YEAR <= year <= MAX_YEAR:
            raise HTTPException(status_code=404, detail="Draft year not found")

    def _check_slot(slot: int) -> None:
        if not 1 <= slot <= TOTAL_PICKS:
            raise HTTPException(status_code=404, detail="Slot not found")

    def _require_participant(participant_id: Optional[str]) -> str:
        if not participant_id or not participant_id.strip():
            raise HTTPException(status_code=401, detail="X-Participant-Id header required")
        return participant_id.strip()

    def _require_admin(secret: Optional[str]) -> None:
        if settings.admin_secret and secret != settings.admin_secret:
            raise HTTPException(status_code=403, detail="Admin secret required")

    def _ensure_unlocked(year: int) -> None:
        if store.is_draft_locked(competition, year):
            raise HTTPException(status_code=403, detail="Draft has started; picks are locked")

    def _sim_key(year: int) -> SimulationKey:
        return SimulationKey(competition=competition, year=year)

    def _seed_prospects(year: int) -> List[ProspectRecord]:
        records = load_packaged_prospects(year, data_dir=settings.sources_dir)
        if not records:
            records = load_packaged_prospects(year)
        return records

    def _prospects(year: int) -> List[ProspectRecord]:
        records = store.list_prospects(competition, year)
        if records:
            return records
        seeded = _seed_prospects(year)
        if seeded:
            store.replace_prospects(competition, year, seeded)
        return seeded

    def _results_for(year: int, simulated: Optional[bool]):
        official = store.get_official_results(competition, year)
        override = None
        if simulated is not False:
            override = simulator.results_override(_sim_key(year))
        return official, override

    def _board(year: int, source: str, position: Optional[str]) -> List[ConsensusEntry]:
        try:
            entries = rank_sources(
                source,
                _prospects(year),
                catalog,
                year,
                source_ids=settings.comparison_sources,
                k=settings.rrf_k,
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        if position:
            wanted = position.strip().upper()
            entries = [entry for entry in entries if entry.position.upper() == wanted]
        return entries

    def _picks_response(year: int, participant_id: str, picks: List[Pick]) -> PicksResponse:
        return PicksResponse(
            year=year,
            participant_id=participant_id,
            locked=store.is_draft_locked(competition, year),
            complete=is_complete_slate(picks),
            picks=[_pick_to_response(pick) for pick in picks],
        )

    def _default_team(year: int, slot: int, team_name: Optional[str]) -> Optional[str]:
        return team_name or get_season(year).team_for_slot(slot)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/draft/{year}/players", response_model=BoardResponse)
    async def players(year: int, source: str = Query("cbs"), position: Optional[str] = None):
        _check_year(year)
        entries = _board(year, source, position)
        return BoardResponse(
            year=year,
            source=source.lower(),
            position=position.upper() if position else None,
            players=[_board_entry(entry) for entry in entries],
        )

    @app.get("/draft/{year}/players/export.csv")
    async def players_csv(year: int, source: str = Query("rrf"), position: Optional[str] = None):
        _check_year(year)
        csv_text = export_board_to_csv(_board(year, source, position))
        return Response(
            content=csv_text,
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={source.lower()}_{year}.csv"},
        )

    @app.get("/draft/{year}/picks", response_model=PicksResponse)
    async def get_picks(year: int, x_participant_id: Optional[str] = Header(None)):
        _check_year(year)
        participant_id = _require_participant(x_participant_id)
        return _picks_response(year, participant_id, store.load_picks(competition, year, participant_id))

    @app.post("/draft/{year}/picks", response_model=PicksResponse)
    async def submit_picks(
        year: int,
        payload: PicksSubmitRequest,
        x_participant_id: Optional[str] = Header(None),
        x_participant_name: Optional[str] = Header(None),
    ):
        _check_year(year)
        participant_id = _require_participant(x_participant_id)
        _ensure_unlocked(year)
        submitted = [
            Pick(
                slot_number=item.slot_number,
                player_name=item.player_name,
                position=item.position,
                double_score_pick=item.double_score_pick,
            )
            for item in payload.picks
        ]
        sanitized = sanitize_picks(
            submitted,
            prospects=_prospects(year),
            teams=get_season(year).first_round_teams,
        )
        saved = store.save_picks(
            competition,
            year,
            participant_id,
            sanitized,
            display_name=(payload.display_name or x_participant_name or "").strip(),
        )
        logger.info("Saved %d picks for %s (%s)", len(saved), participant_id, year)
        return _picks_response(year, participant_id, saved)

    @app.delete("/draft/{year}/picks/{slot}", response_model=PicksResponse)
    async def clear_pick(year: int, slot: int, x_participant_id: Optional[str] = Header(None)):
        _check_year(year)
        _check_slot(slot)
        participant_id = _require_participant(x_participant_id)
        _ensure_unlocked(year)
        if not store.delete_pick(competition, year, participant_id, slot):
            raise HTTPException(status_code=404, detail="Pick not found")
        return _picks_response(year, participant_id, store.load_picks(competition, year, participant_id))

    @app.get("/draft/{year}/leaderboard", response_model=LeaderboardResponse)
    async def leaderboard(year: int, simulated: Optional[bool] = None):
        _check_year(year)
        if year < settings.current_year:
            winners = store.list_historical_winners(competition, year)
            if winners:
                return LeaderboardResponse(
                    year=year,
                    mode="historical",
                    pending=False,
                    simulated=False,
                    entries=[
                        LeaderboardEntryResponse(
                            position=index,
                            rank=winner.place,
                            participant_id=winner.winner_id,
                            display_name=winner.display_name,
                            score=winner.score,
                            picks_scored=0,
                        )
                        for index, winner in enumerate(winners, start=1)
                    ],
                )
        participants = store.list_participants(competition, year)
        official, override = _results_for(year, simulated)
        if (
            override is None
            and year == settings.current_year
            and not store.is_draft_locked(competition, year)
        ):
            return LeaderboardResponse(
                year=year,
                mode="roster",
                pending=True,
                simulated=False,
                entries=[
                    LeaderboardEntryResponse(
                        position=index,
                        rank=index,
                        participant_id=participant.participant_id,
                        display_name=participant.display_name or participant.participant_id,
                        score=None,
                        picks_scored=sum(1 for pick in participant.picks if pick.player_name),
                    )
                    for index, participant in enumerate(participants, start=1)
                ],
            )
        standings = build_standings(participants, official, override=override)
        return _standings_response(year, standings, simulated=override is not None)

    @app.get("/draft/{year}/leaderboard/export.csv")
    async def leaderboard_csv(year: int, simulated: Optional[bool] = None):
        _check_year(year)
        official, override = _results_for(year, simulated)
        standings = build_standings(store.list_participants(competition, year), official, override=override)
        return Response(
            content=export_standings_to_csv(standings.entries),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename=standings_{year}.csv"},
        )

    @app.get("/draft/{year}/results", response_model=ResultsResponse)
    async def results(
        year: int,
        simulated: Optional[bool] = None,
        x_participant_id: Optional[str] = Header(None),
    ):
        _check_year(year)
        official, override = _results_for(year, simulated)
        active = override if override is not None else official
        standings = build_standings(store.list_participants(competition, year), official, override=override)
        breakdown = None
        if x_participant_id:
            picks = store.load_picks(competition, year, x_participant_id.strip())
            breakdown = [
                PickScoreResponse(
                    slot_number=item.slot_number,
                    player_name=item.player_name,
                    official_slot=item.official_slot,
                    points=item.points,
                    doubled=item.doubled,
                )
                for item in score_breakdown(picks, active)
            ]
        return ResultsResponse(
            year=year,
            simulated=override is not None,
            official=dict(sorted(active.items())),
            standings=_standings_response(year, standings, simulated=override is not None),
            breakdown=breakdown,
        )

    @app.get("/draft/{year}/submitted", response_model=List[SubmittedSlateResponse])
    async def submitted(year: int):
        _check_year(year)
        return [
            SubmittedSlateResponse(
                participant_id=participant.participant_id,
                display_name=participant.display_name or participant.participant_id,
                picks=[_pick_to_response(pick) for pick in participant.picks],
            )
            for participant in store.list_participants(competition, year)
            if is_complete_slate(participant.picks)
        ]

    @app.get("/draft/{year}/simulation", response_model=SimulationStatusResponse)
    async def simulation_status(year: int):
        _check_year(year)
        return _status_to_response(year, simulator.status(_sim_key(year)))

    @app.post("/admin/draft/{year}/simulation/start", response_model=SimulationStatusResponse)
    async def simulation_start(year: int, x_admin_secret: Optional[str] = Header(None)):
        _check_year(year)
        _require_admin(x_admin_secret)
        try:
            status = simulator.start(_sim_key(year))
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return _status_to_response(year, status)

    @app.post("/admin/draft/{year}/simulation/reset", response_model=SimulationStatusResponse)
    async def simulation_reset(year: int, x_admin_secret: Optional[str] = Header(None)):
        _check_year(year)
        _require_admin(x_admin_secret)
        return _status_to_response(year, simulator.reset(_sim_key(year)))

    @app.post("/admin/draft/{year}/start", response_model=DraftStartResponse)
    async def start_draft(year: int, x_admin_secret: Optional[str] = Header(None)):
        _check_year(year)
        _require_admin(x_admin_secret)
        started = store.start_draft(competition, year)
        return DraftStartResponse(year=year, draft_started_at=started)

    @app.post("/admin/draft/{year}/sync", response_model=SyncResponse)
    async def sync_results(year: int, x_admin_secret: Optional[str] = Header(None)):
        _check_year(year)
        _require_admin(x_admin_secret)
        fetch = fetch_live_official_results(year, url_template=settings.live_results_url, client=live_client)
        if not fetch.ok:
            return SyncResponse(year=year, synced=0, error=fetch.error)
        synced = 0
        for slot, name in sorted(fetch.results.items()):
            if not name:
                continue
            store.upsert_official_result(
                competition,
                year,
                OfficialResult(
                    slot_number=slot,
                    player_name=name,
                    team_name=_default_team(year, slot, fetch.teams.get(slot)),
                ),
            )
            synced += 1
        logger.info("Synced %d official results for %s", synced, year)
        return SyncResponse(year=year, synced=synced)

    @app.put("/admin/draft/{year}/official-results")
    async def replace_official_results(
        year: int,
        payload: OfficialResultsRequest,
        x_admin_secret: Optional[str] = Header(None),
    ) -> Dict[int, Optional[str]]:
        _check_year(year)
        _require_admin(x_admin_secret)
        results = {}
        for entry in payload.results:
            results.setdefault(
                entry.slot_number,
                OfficialResult(
                    slot_number=entry.slot_number,
                    player_name=entry.player_name,
                    team_name=_default_team(year, entry.slot_number, entry.team_name),
                ),
            )
        store.replace_official_results(competition, year, results.values())
        return store.get_official_results(competition, year)

    @app.post("/admin/draft/{year}/official-results/{slot}")
    async def upsert_official_result(
        year: int,
        slot: int,
        payload: OfficialResultPayload,
        x_admin_secret: Optional[str] = Header(None),
    ) -> Dict[int, Optional[str]]:
        _check_year(year)
        _check_slot(slot)
        _require_admin(x_admin_secret)
        store.upsert_official_result(
            competition,
            year,
            OfficialResult(
                slot_number=slot,
                player_name=payload.player_name,
                team_name=_default_team(year, slot, payload.team_name),
            ),
        )
        return store.get_official_results(competition, year)

    @app.delete("/admin/draft/{year}/official-results/{slot}")
    async def clear_official_result(
        year: int,
        slot: int,
        x_admin_secret: Optional[str] = Header(None),
    ) -> Dict[int, Optional[str]]:
        _check_year(year)
        _check_slot(slot)
        _require_admin(x_admin_secret)
        if not store.clear_official_result(competition, year, slot):
            raise HTTPException(status_code=404, detail="Official result not found")
        return store.get_official_results(competition, year)

    @app.post("/admin/draft/{year}/refresh-players", response_model=RefreshPlayersResponse)
    async def refresh_players(year: int, x_admin_secret: Optional[str] = Header(None)):
        _check_year(year)
        _require_admin(x_admin_secret)
        records = _seed_prospects(year)
        if not records:
            raise HTTPException(status_code=404, detail=f"No packaged player list for {year}")
        count = store.replace_prospects(competition, year, records)
        return RefreshPlayersResponse(year=year, players=count)

    @app.get("/admin/draft/{year}/historical-winners", response_model=List[HistoricalWinnerResponse])
    async def list_winners(year: int, x_admin_secret: Optional[str] = Header(None)):
        _check_year(year)
        _require_admin(x_admin_secret)
        return [_winner_to_response(winner) for winner in store.list_historical_winners(competition, year)]

    @app.post("/admin/draft/{year}/historical-winners", response_model=HistoricalWinnerResponse)
    async def add_winner(
        year: int,
        payload: HistoricalWinnerRequest,
        x_admin_secret: Optional[str] = Header(None),
    ):
        _check_year(year)
        _require_admin(x_admin_secret)
        winner = store.add_historical_winner(
            competition,
            year,
            place=payload.place,
            display_name=payload.display_name.strip(),
            score=payload.score,
        )
        return _winner_to_response(winner)

    @app.delete("/admin/draft/{year}/historical-winners/{winner_id}")
    async def delete_winner(year: int, winner_id: str, x_admin_secret: Optional[str] = Header(None)):
        _check_year(year)
        _require_admin(x_admin_secret)
        if not store.delete_historical_winner(winner_id):
            raise HTTPException(status_code=404, detail="Historical winner not found")
        return {"deleted": winner_id}

    return app


__all__ = ["create_app"]
