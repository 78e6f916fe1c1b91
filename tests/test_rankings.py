from pathlib import Path

import pytest

from mockdraft.models import ProspectRecord
from mockdraft.rankings import (
    CsvSourceCatalog,
    StaticSourceCatalog,
    average_rank_fuse,
    build_source_lists,
    compute_average_position_ranking,
    compute_consensus_ranking,
    extend_with_primary,
    rank_sources,
    rrf_fuse,
)


def _record(rank: int, name: str, school: str = "State", position: str = "WR") -> ProspectRecord:
    return ProspectRecord(rank=rank, name=name, school=school, position=position)


PRIMARY = [
    _record(1, "Alpha One"),
    _record(2, "Bravo Two"),
    _record(3, "Charlie Three"),
    _record(4, "Delta Four"),
    _record(5, "Echo Five"),
]


def test_extend_with_primary_appends_remaining_primary_order():
    top_n = [_record(1, "Charlie Three"), _record(2, "Alpha One")]
    extended = extend_with_primary(top_n, PRIMARY)
    assert [(r.rank, r.name) for r in extended] == [
        (1, "Charlie Three"),
        (2, "Alpha One"),
        (3, "Bravo Two"),
        (4, "Delta Four"),
        (5, "Echo Five"),
    ]


def test_extend_with_primary_truncates_to_depth():
    extended = extend_with_primary([_record(1, "Echo Five")], PRIMARY, depth=3)
    assert [r.name for r in extended] == ["Echo Five", "Alpha One", "Bravo Two"]


def test_extend_with_primary_empty_source_copies_primary():
    extended = extend_with_primary([], PRIMARY)
    assert [(r.rank, r.name) for r in extended] == [(r.rank, r.name) for r in PRIMARY]


def test_build_source_lists_normalizes_and_pads():
    catalog = StaticSourceCatalog(
        {"espn": [_record(1, "Charles Three"), _record(2, "Alpha One")]}
    )
    lists = build_source_lists(PRIMARY, catalog, 2026, source_ids=("espn", "nfl"))

    assert len(lists) == 3
    assert [r.name for r in lists[1]][:3] == ["Charlie Three", "Alpha One", "Bravo Two"]
    assert [r.name for r in lists[2]] == [r.name for r in PRIMARY]


def test_build_source_lists_skips_primary_source_id():
    lists = build_source_lists(PRIMARY, StaticSourceCatalog(), 2026, source_ids=("cbs", "espn"))
    assert len(lists) == 2


def test_rrf_scores_and_orders_descending():
    lists = [
        [_record(1, "A"), _record(2, "B")],
        [_record(1, "B"), _record(2, "A"), _record(3, "C")],
    ]
    board = rrf_fuse(lists, k=60)

    assert [entry.name for entry in board] == ["A", "B", "C"]
    assert board[0].score == pytest.approx(1 / 61 + 1 / 62)
    assert board[1].score == pytest.approx(board[0].score)
    assert board[2].score == pytest.approx(1 / 63)
    assert [entry.rank for entry in board] == [1, 2, 3]
    assert board[2].appearances == 1


def test_rrf_monotonic_when_better_everywhere():
    lists = [
        [_record(3, "A"), _record(7, "B")],
        [_record(1, "A"), _record(2, "B")],
        [_record(40, "A"), _record(41, "B")],
    ]
    board = {entry.name: entry.score for entry in rrf_fuse(lists)}
    assert board["A"] >= board["B"]


def test_rrf_rejects_non_positive_k():
    with pytest.raises(ValueError):
        rrf_fuse([PRIMARY], k=0)


def test_average_prefers_consistent_player_over_single_outlier():
    lists = [[_record(1, "X"), _record(10, "Y")]] + [
        [_record(10, "Y"), _record(50, "X")] for _ in range(4)
    ]
    board = average_rank_fuse(lists)

    assert [entry.name for entry in board] == ["Y", "X"]
    assert board[0].score == pytest.approx(10.0)
    assert board[1].score == pytest.approx(201 / 5)


def test_rrf_and_average_can_disagree():
    lists = [[_record(1, "X"), _record(10, "Y")]] + [
        [_record(10, "Y"), _record(13, "X")] for _ in range(4)
    ]
    assert rrf_fuse(lists, k=1)[0].name == "X"
    assert average_rank_fuse(lists)[0].name == "Y"


def test_compute_rankings_use_catalog_and_primary():
    catalog = StaticSourceCatalog({"espn": [_record(1, "Echo Five")]})
    rrf = compute_consensus_ranking(PRIMARY, catalog, 2026, source_ids=("espn",))
    avg = compute_average_position_ranking(PRIMARY, catalog, 2026, source_ids=("espn",))

    assert {entry.name for entry in rrf} == {r.name for r in PRIMARY}
    assert avg[0].name == "Alpha One"
    assert next(entry for entry in avg if entry.name == "Echo Five").score == pytest.approx(3.0)


def test_rank_sources_dispatch():
    catalog = StaticSourceCatalog({"espn": [_record(1, "Delta Four")]})
    assert rank_sources("cbs", PRIMARY, catalog, 2026)[0].name == "Alpha One"
    assert rank_sources("ESPN", PRIMARY, catalog, 2026, source_ids=("espn",))[0].name == "Delta Four"
    assert len(rank_sources("avg", PRIMARY, catalog, 2026, source_ids=("espn",))) == 5
    assert len(rank_sources("rrf", PRIMARY, catalog, 2026, source_ids=("espn",))) == 5
    with pytest.raises(ValueError):
        rank_sources("unknown", PRIMARY, catalog, 2026, source_ids=("espn",))


def test_csv_catalog_reads_year_files(tmp_path: Path):
    (tmp_path / "espn_2026.csv").write_text(
        "rank,name,school,position\n1,Echo Five,State,wr\n2,Alpha One,State,WR\n",
        encoding="utf-8",
    )
    catalog = CsvSourceCatalog(tmp_path)

    records = catalog.get_comparison_source_list("espn", 2026)
    assert [(r.rank, r.name, r.position) for r in records] == [(1, "Echo Five", "WR"), (2, "Alpha One", "WR")]
    assert catalog.get_comparison_source_list("fox", 2026) == []
