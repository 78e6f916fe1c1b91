"""Lightweight REST client for the mockdraft API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx

from mockdraft.ingest import load_picks_csv


def _print(resp: httpx.Response) -> None:
    if resp.status_code == 404:
        raise SystemExit(resp.json().get("detail", "not found"))
    resp.raise_for_status()
    print(json.dumps(resp.json(), indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the mockdraft REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--year", type=int, default=2026, help="Draft year")
    parser.add_argument("--participant", default=None, help="Participant id sent as X-Participant-Id")
    parser.add_argument("--name", default=None, help="Display name sent with a submitted slate")
    parser.add_argument("--admin-secret", default=None, help="Value for X-Admin-Secret")
    parser.add_argument("--board", metavar="SOURCE", help="Print a board (cbs, rrf, avg, espn, ...)")
    parser.add_argument("--submit", type=Path, help="Submit a slate CSV (slot,player_name,position,double_score)")
    parser.add_argument("--leaderboard", action="store_true", help="Print standings")
    parser.add_argument("--simulation", choices=["status", "start", "reset"], help="Inspect or control the simulator")
    parser.add_argument("--sync", action="store_true", help="Pull live official results")
    parser.add_argument("--export-board", metavar="SOURCE", help="Download a board CSV")
    parser.add_argument("--export-path", type=Path, help="Destination path for exported CSV")
    args = parser.parse_args()

    headers: dict[str, str] = {}
    if args.participant:
        headers["X-Participant-Id"] = args.participant
    if args.admin_secret:
        headers["X-Admin-Secret"] = args.admin_secret

    with httpx.Client(base_url=args.base_url, headers=headers) as client:
        if args.board:
            _print(client.get(f"/draft/{args.year}/players", params={"source": args.board}))
        if args.submit:
            if not args.participant:
                raise SystemExit("--participant is required to submit a slate")
            picks = [
                {
                    "slot_number": pick.slot_number,
                    "player_name": pick.player_name,
                    "position": pick.position,
                    "double_score_pick": pick.double_score_pick,
                }
                for pick in load_picks_csv(args.submit)
            ]
            _print(client.post(f"/draft/{args.year}/picks", json={"picks": picks, "display_name": args.name}))
        if args.simulation == "status":
            _print(client.get(f"/draft/{args.year}/simulation"))
        elif args.simulation:
            _print(client.post(f"/admin/draft/{args.year}/simulation/{args.simulation}"))
        if args.sync:
            _print(client.post(f"/admin/draft/{args.year}/sync"))
        if args.leaderboard:
            _print(client.get(f"/draft/{args.year}/leaderboard"))
        if args.export_board:
            resp = client.get(f"/draft/{args.year}/players/export.csv", params={"source": args.export_board})
            resp.raise_for_status()
            if args.export_path:
                args.export_path.write_text(resp.text)
                print(f"CSV export saved to {args.export_path}")
            else:
                print(resp.text)


if __name__ == "__main__":
    main()
