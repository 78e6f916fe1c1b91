from mockdraft.models import Participant, Pick
from mockdraft.scoring import build_leaderboard, build_standings


NAMES = [f"Prospect {slot}" for slot in range(1, 33)]
OFFICIAL = {slot: name for slot, name in enumerate(NAMES, start=1)}


def _slate(names, *, double_slot: int | None = None) -> list[Pick]:
    return [
        Pick(slot_number=slot, player_name=name, double_score_pick=slot == double_slot)
        for slot, name in enumerate(names, start=1)
    ]


def _participant(participant_id: str, picks: list[Pick]) -> Participant:
    return Participant(participant_id=participant_id, display_name=participant_id.title(), picks=picks)


def test_partial_slate_is_excluded_until_complete():
    partial = _participant("casey", _slate(NAMES[:31]))
    assert build_leaderboard([partial], OFFICIAL) == []

    complete = _participant("casey", _slate(NAMES))
    entries = build_leaderboard([complete], OFFICIAL)
    assert [(entry.participant_id, entry.score) for entry in entries] == [("casey", 96)]
    assert entries[0].picks_scored == 32


def test_sorted_by_score_with_stable_ties_and_competition_rank():
    swapped = NAMES[:]
    swapped[0], swapped[1] = swapped[1], swapped[0]
    misses = [f"Other {slot}" for slot in range(1, 33)]

    participants = [
        _participant("first", _slate(swapped)),
        _participant("second", _slate(swapped)),
        _participant("leader", _slate(NAMES)),
        _participant("last", _slate(misses)),
    ]
    entries = build_leaderboard(participants, OFFICIAL)

    assert [entry.participant_id for entry in entries] == ["leader", "first", "second", "last"]
    assert [entry.score for entry in entries] == [96, 94, 94, 0]
    assert [entry.rank for entry in entries] == [1, 2, 2, 4]
    assert [entry.position for entry in entries] == [1, 2, 3, 4]


def test_double_score_counts_in_standings():
    entries = build_leaderboard([_participant("dana", _slate(NAMES, double_slot=20))], OFFICIAL)
    assert entries[0].score == 99


def test_override_replaces_official_for_the_call():
    participant = _participant("erin", _slate(NAMES))
    override = {1: "Prospect 1", 2: "Prospect 2"}

    assert build_leaderboard([participant], {}, override=override)[0].score == 6
    assert build_leaderboard([participant], OFFICIAL, override={})[0].score == 0
    assert build_leaderboard([participant], OFFICIAL)[0].score == 96


def test_standings_pending_without_results():
    participant = _participant("frank", _slate(NAMES))

    pending = build_standings([participant], {})
    assert pending.pending is True
    assert [entry.score for entry in pending.entries] == [0]

    scored = build_standings([participant], {1: "Prospect 1"})
    assert scored.pending is False
    assert scored.entries[0].score == 3


def test_display_name_falls_back_to_id():
    participant = Participant(participant_id="anon", picks=_slate(NAMES))
    assert build_leaderboard([participant], OFFICIAL)[0].display_name == "anon"
