"""Command-line interface for consensus boards and slate scoring."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from mockdraft.config import GameSettings, get_season, parse_source_ids
from mockdraft.config_loader import RankingProfile
from mockdraft.export import export_board_to_csv
from mockdraft.ingest import (
    load_official_results_csv,
    load_packaged_prospects,
    load_picks_csv,
    load_prospect_csv,
)
from mockdraft.rankings import CsvSourceCatalog, rank_sources
from mockdraft.scoring import is_complete_slate, sanitize_picks, score_breakdown
from mockdraft.simulation import advance, order_from_season, revealed_results, start_state


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mockdraft", description="Mock draft boards and scoring")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    rank = subparsers.add_parser("rank", help="Build a consensus board")
    rank.add_argument("--year", type=int, default=None, help="Draft year (default: current year)")
    rank.add_argument("--algorithm", default="rrf", help="rrf, avg or a single source id (e.g., cbs, espn)")
    rank.add_argument("--primary", type=Path, default=None, help="Authoritative rankings CSV")
    rank.add_argument("--sources-dir", type=Path, default=None, help="Directory of <source>_<year>.csv files")
    rank.add_argument("--sources", default=None, help="Comparison source ids, comma separated")
    rank.add_argument("--k", type=float, default=None, help="RRF constant")
    rank.add_argument("--top", type=int, default=32, help="Rows to print when no output file is given")
    rank.add_argument("--output", type=Path, default=None, help="Write the full board to CSV")
    rank.add_argument("--load-profile", type=Path, help="Load ranking profile JSON", default=None)
    rank.add_argument("--save-profile", type=Path, help="Save ranking profile JSON", default=None)

    score = subparsers.add_parser("score", help="Score a slate against official results")
    score.add_argument("--picks", type=Path, required=True, help="Slate CSV (slot,player_name,...)")
    score.add_argument("--results", type=Path, default=None, help="Official results CSV (slot,player_name)")
    score.add_argument("--year", type=int, default=None, help="Draft year (default: current year)")
    score.add_argument("--simulate", action="store_true", help="Score against the simulated mock order")
    score.add_argument("--elapsed", type=float, default=None, help="Seconds since the simulation started")
    score.add_argument("--interval", type=float, default=None, help="Seconds between simulated reveals")
    score.add_argument("--detail", action="store_true", help="Print per-slot points")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve.add_argument("--port", type=int, default=8000, help="Bind port")
    return parser


def _run_rank(args: argparse.Namespace, settings: GameSettings) -> int:
    year = args.year or settings.current_year
    profile = RankingProfile(source_ids=list(settings.comparison_sources), rrf_k=settings.rrf_k)
    if args.load_profile:
        profile = RankingProfile.load(args.load_profile)
    if args.sources:
        profile.source_ids = list(parse_source_ids(args.sources))
    if args.k is not None:
        profile.rrf_k = args.k
    if args.save_profile:
        profile.save(args.save_profile)
        print(f"Saved ranking profile to {args.save_profile}")

    sources_dir = args.sources_dir or settings.sources_dir
    if args.primary:
        primary = load_prospect_csv(args.primary)
    else:
        primary = load_packaged_prospects(year, data_dir=sources_dir) or load_packaged_prospects(year)
    if not primary:
        print(f"No authoritative rankings available for {year}")
        return 1

    try:
        board = rank_sources(
            args.algorithm,
            primary,
            CsvSourceCatalog(sources_dir),
            year,
            source_ids=profile.source_ids,
            k=profile.rrf_k,
        )
    except ValueError as exc:
        print(f"Error: {exc}")
        return 2

    if args.output:
        args.output.write_text(export_board_to_csv(board), encoding="utf-8")
        print(f"Wrote {len(board)} players to {args.output}")
    else:
        for entry in board[: max(0, args.top)]:
            print(f"{entry.rank:>3}  {entry.name:<28} {entry.position:<5} {entry.school:<22} {entry.score:.4f}")
    return 0


def _run_score(args: argparse.Namespace, settings: GameSettings) -> int:
    year = args.year or settings.current_year
    if args.simulate:
        interval_ms = int(round((args.interval or settings.reveal_interval_seconds) * 1000))
        elapsed_ms = int(round((args.elapsed or 0.0) * 1000))
        order = order_from_season(get_season(year).simulated_order)
        if not order:
            print(f"No simulated draft order for {year}")
            return 1
        state = advance(start_state(order, 0, interval_ms), elapsed_ms, interval_ms)
        official = revealed_results(state)
        print(f"Simulated reveals: {state.revealed_count}/{state.total}")
    elif args.results:
        official = load_official_results_csv(args.results)
    else:
        print("Either --results or --simulate is required")
        return 2

    picks = sanitize_picks(
        load_picks_csv(args.picks),
        prospects=load_packaged_prospects(year),
        teams=get_season(year).first_round_teams,
    )
    breakdown = score_breakdown(picks, official)
    if args.detail:
        for item in breakdown:
            marker = " x2" if item.doubled else ""
            official_slot = item.official_slot if item.official_slot is not None else "-"
            print(f"{item.slot_number:>2}  {item.player_name or '':<28} {official_slot!s:>3}  {item.points}{marker}")
    if not is_complete_slate(picks):
        print(f"Slate is incomplete ({sum(1 for p in picks if p.player_name)}/32); it would not rank")
    print(f"Score: {sum(item.points for item in breakdown)}")
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from mockdraft.api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    settings = GameSettings.from_env()
    if args.command == "rank":
        return _run_rank(args, settings)
    if args.command == "serve":
        return _run_serve(args)
    return _run_score(args, settings)


if __name__ == "__main__":
    raise SystemExit(main())
