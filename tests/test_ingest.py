from pathlib import Path

import pytest

from mockdraft.export import export_board_to_csv, export_standings_to_csv
from mockdraft.ingest import (
    ProspectRow,
    load_official_results_csv,
    load_packaged_prospects,
    load_picks_csv,
    load_prospect_csv,
    rows_to_prospects,
)
from mockdraft.models import ConsensusEntry
from mockdraft.scoring import LeaderboardEntry


def test_packaged_2026_list_is_complete():
    records = load_packaged_prospects(2026)
    assert len(records) == 200
    assert records[0].name == "Fernando Mendoza"
    assert [record.rank for record in records] == list(range(1, 201))


def test_missing_packaged_list_is_empty(tmp_path: Path):
    assert load_packaged_prospects(2026, source_id="espn", data_dir=tmp_path) == []


def test_prospect_csv_with_combined_name_columns(tmp_path: Path):
    path = tmp_path / "board.csv"
    path.write_text(
        "Rk,First,Last,College,Pos\n#1,Fernando,Mendoza,Indiana,qb\n,Arvell,Reese,Ohio State,lb\n",
        encoding="utf-8",
    )
    mapping = {"rank": "Rk", "name": "First|Last", "school": "College", "position": "Pos"}

    records = load_prospect_csv(path, mapping=mapping)

    assert [(r.rank, r.name, r.school, r.position) for r in records] == [
        (1, "Fernando Mendoza", "Indiana", "QB"),
        (2, "Arvell Reese", "Ohio State", "LB"),
    ]


def test_rows_without_names_are_skipped():
    mapping = {"rank": "rank", "name": "name"}
    rows = [
        ProspectRow.from_mapping({"rank": "1", "name": "  "}, mapping),
        ProspectRow.from_mapping({"rank": "2", "name": "Rueben  Bain Jr."}, mapping),
    ]
    records = rows_to_prospects(rows)
    assert [(r.rank, r.name) for r in records] == [(2, "Rueben Bain Jr.")]


def test_non_numeric_rank_raises():
    row = ProspectRow.from_mapping({"rank": "first", "name": "Fernando Mendoza"}, {})
    with pytest.raises(ValueError):
        rows_to_prospects([row])


def test_load_picks_csv(tmp_path: Path):
    path = tmp_path / "picks.csv"
    path.write_text(
        "slot,player_name,position,double_score\n"
        "1,Fernando Mendoza,QB,\n"
        "#14,Sonny Styles,LB,yes\n"
        "x,Bad Slot,WR,\n",
        encoding="utf-8",
    )
    picks = load_picks_csv(path)

    assert [(p.slot_number, p.player_name, p.double_score_pick) for p in picks] == [
        (1, "Fernando Mendoza", False),
        (14, "Sonny Styles", True),
    ]


def test_load_official_results_csv(tmp_path: Path):
    path = tmp_path / "results.csv"
    path.write_text("pick,player\n1,Fernando Mendoza\n2,\n", encoding="utf-8")
    assert load_official_results_csv(path) == {1: "Fernando Mendoza", 2: None}


def test_export_board_round_trips_through_loader(tmp_path: Path):
    entries = [
        ConsensusEntry(rank=1, name="Fernando Mendoza", school="Indiana", position="QB", score=0.08, appearances=5),
        ConsensusEntry(rank=2, name="Arvell Reese", school="Ohio State", position="LB", score=0.0791, appearances=5),
    ]
    path = tmp_path / "board.csv"
    path.write_text(export_board_to_csv(entries), encoding="utf-8")

    assert [(r.rank, r.name) for r in load_prospect_csv(path)] == [(1, "Fernando Mendoza"), (2, "Arvell Reese")]
    assert path.read_text(encoding="utf-8").splitlines()[1] == "1,Fernando Mendoza,Indiana,QB,0.08,5"


def test_export_standings():
    csv_text = export_standings_to_csv(
        [LeaderboardEntry(position=1, rank=1, participant_id="alice", display_name="Alice", score=12, picks_scored=32)]
    )
    assert csv_text.splitlines() == [
        "position,rank,participant_id,display_name,score,picks_scored",
        "1,1,alice,Alice,12,32",
    ]
