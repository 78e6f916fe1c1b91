from mockdraft.identity import (
    build_canonical_name_map,
    extract_last_name,
    identity_key,
    normalize_names,
)
from mockdraft.models import ProspectRecord


def _record(rank: int, name: str, school: str, position: str) -> ProspectRecord:
    return ProspectRecord(rank=rank, name=name, school=school, position=position)


PRIMARY = [
    _record(1, "Fernando Mendoza", "Indiana", "QB"),
    _record(2, "Rueben Bain Jr.", "Miami (FL)", "EDGE"),
    _record(3, "KC Concepcion", "Texas A&M", "WR"),
]


def test_extract_last_name_skips_generational_suffixes():
    assert extract_last_name("Rueben Bain Jr.") == "bain"
    assert extract_last_name("Omar Cooper Jr") == "cooper"
    assert extract_last_name("Trey Zuhn III") == "zuhn"
    assert extract_last_name("Fernando Mendoza") == "mendoza"


def test_extract_last_name_falls_back_to_full_name():
    assert extract_last_name("Jr.") == "jr."


def test_identity_key_lowercases_school_but_keeps_position():
    assert identity_key("KC Concepcion", "WR", "Texas A&M") == ("concepcion", "WR", "texas a&m")


def test_canonical_map_first_record_wins():
    duplicate = [
        _record(1, "KC Concepcion", "Texas A&M", "WR"),
        _record(2, "Kevin Concepcion", "Texas A&M", "WR"),
    ]
    canonical = build_canonical_name_map(duplicate)
    assert canonical == {("concepcion", "WR", "texas a&m"): "KC Concepcion"}


def test_normalize_names_rewrites_alternate_spellings():
    canonical = build_canonical_name_map(PRIMARY)
    source = [
        _record(1, "Kevin Concepcion", "Texas A&M", "WR"),
        _record(2, "Rueben Bain", "Miami (FL)", "EDGE"),
        _record(3, "Jeremiyah Love", "Notre Dame", "RB"),
    ]

    normalized = normalize_names(source, canonical)

    assert [record.name for record in normalized] == ["KC Concepcion", "Rueben Bain Jr.", "Jeremiyah Love"]
    assert [record.rank for record in normalized] == [1, 2, 3]
    assert normalized[2] is source[2]


def test_normalize_names_requires_matching_position_and_school():
    canonical = build_canonical_name_map(PRIMARY)
    source = [
        _record(1, "Kevin Concepcion", "Texas A&M", "RB"),
        _record(2, "Kevin Concepcion", "Texas", "WR"),
    ]
    assert [record.name for record in normalize_names(source, canonical)] == [
        "Kevin Concepcion",
        "Kevin Concepcion",
    ]


def test_normalize_names_is_idempotent():
    canonical = build_canonical_name_map(PRIMARY)
    source = [
        _record(1, "Kevin Concepcion", "Texas A&M", "WR"),
        _record(2, "Fernando Mendoza", "Indiana", "QB"),
    ]
    once = normalize_names(source, canonical)
    assert normalize_names(once, canonical) == once


def test_normalize_names_handles_empty_inputs():
    assert normalize_names([], {}) == []
    assert normalize_names(PRIMARY, {}) == PRIMARY
