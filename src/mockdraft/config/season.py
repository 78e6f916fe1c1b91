"""Static per-season draft data (first-round order, needs, simulated mock)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Tuple

TOTAL_PICKS = 32


@dataclass(frozen=True)
class DraftSeason:
    year: int
    first_round_teams: Mapping[int, str]
    team_needs: Mapping[int, str] = field(default_factory=dict)
    # (player name, team name, position) in reveal order
    simulated_order: Tuple[Tuple[str, str, str], ...] = ()

    def team_for_slot(self, slot_number: int) -> str | None:
        return self.first_round_teams.get(slot_number)


_FIRST_ROUND_TEAMS_2026: Dict[int, str] = {
    1: "Las Vegas Raiders",
    2: "New York Jets",
    3: "Arizona Cardinals",
    4: "Tennessee Titans",
    5: "New York Giants",
    6: "Cleveland Browns",
    7: "Washington Commanders",
    8: "New Orleans Saints",
    9: "Kansas City Chiefs",
    10: "Cincinnati Bengals",
    11: "Miami Dolphins",
    12: "Dallas Cowboys",
    13: "Los Angeles Rams",
    14: "Baltimore Ravens",
    15: "Tampa Bay Buccaneers",
    16: "New York Jets",
    17: "Detroit Lions",
    18: "Minnesota Vikings",
    19: "Carolina Panthers",
    20: "Dallas Cowboys",
    21: "Pittsburgh Steelers",
    22: "Los Angeles Chargers",
    23: "Philadelphia Eagles",
    24: "Cleveland Browns",
    25: "Chicago Bears",
    26: "Buffalo Bills",
    27: "San Francisco 49ers",
    28: "Houston Texans",
    29: "Los Angeles Rams",
    30: "Denver Broncos",
    31: "New England Patriots",
    32: "Seattle Seahawks",
}

_TEAM_NEEDS_2026: Dict[int, str] = {
    1: "QB, LG, LB, DT, C, RT, WR, EDGE",
    2: "QB, OG, DT, EDGE, CB",
    3: "QB, RT, RB, FS, LB, DT, RG",
    4: "EDGE, WR, RG, CB",
    5: "RT, RG, WR, CB, LB, DT",
    6: "QB, RT, RG, LG, C, Slot CB, WR, LB",
    7: "WR, EDGE, LB, Slot WR, LG",
    8: "LG, DT, EDGE, WR, Slot CB, LB, RB",
    9: "CB, FS, RB, EDGE, X WR",
    10: "DT, FS, RG, CB, LB, EDGE",
    11: "QB, EDGE, WR, CB, Slot CB, RG",
    12: "CB, WR, EDGE, RB, LB, FS",
    13: "CB, FS, WR, RT, C",
    14: "DT, C, EDGE, FS, WR, TE, CB",
    15: "EDGE, DT, TE, LB, X WR, CB",
    16: "QB, OG, DT, EDGE, CB",
    17: "EDGE, DT, LB, Slot CB, LT, C/RG",
    18: "QB, FS, CB, LB, Slot WR",
    19: "C, LB, FS, EDGE, Slot CB, DT",
    20: "CB, WR, EDGE, RB, LB, FS",
    21: "QB, LG, CB, WR, DT",
    22: "EDGE, LG, C, RG, DT, FS",
    23: "RG, CB, TE, RT, LG, FS",
    24: "QB, RT, RG, LG, C, Slot CB, WR, LB",
    25: "CB, EDGE, DT, FS, SS, LB",
    26: "EDGE, LG, C, WR, DT, Slot CB, LB",
    27: "WR, LG, DT, C, CB",
    28: "RG, DT, RB, SS, RT, C",
    29: "CB, FS, WR, RT, C",
    30: "DT, LB, TE, RB, Slot WR",
    31: "EDGE, FS, RT, C, TE, NT",
    32: "CB, EDGE, RB, FS, RG",
}

_SIMULATED_PLAYERS_2026: Tuple[Tuple[str, str], ...] = (
    ("Fernando Mendoza", "QB"),
    ("Arvell Reese", "LB"),
    ("Rueben Bain Jr.", "EDGE"),
    ("David Bailey", "EDGE"),
    ("Spencer Fano", "OT"),
    ("Carnell Tate", "WR"),
    ("Jordyn Tyson", "WR"),
    ("Caleb Downs", "S"),
    ("Jermod McCoy", "CB"),
    ("Peter Woods", "DT"),
    ("Ty Simpson", "QB"),
    ("Mansoor Delane", "CB"),
    ("Avieon Terrell", "CB"),
    ("Kayden McDonald", "DT"),
    ("Sonny Styles", "LB"),
    ("Kadyn Proctor", "OT"),
    ("Keldric Faulk", "EDGE"),
    ("Dillon Thieneman", "S"),
    ("Olaivavega Ioane", "IOL"),
    ("Cashius Howell", "EDGE"),
    ("Makai Lemon", "WR"),
    ("Francis Mauigoa", "OT"),
    ("Kenyon Sadiq", "TE"),
    ("Caleb Lomu", "OT"),
    ("Lee Hunter", "DT"),
    ("Denzel Boston", "WR"),
    ("KC Concepcion", "WR"),
    ("Blake Miller", "OT"),
    ("Colton Hood", "CB"),
    ("Jeremiyah Love", "RB"),
    ("Akheem Mesidor", "DT"),
    ("Emmanuel McNeil-Warren", "S"),
)


_SEASONS: Dict[int, DraftSeason] = {
    2026: DraftSeason(
        year=2026,
        first_round_teams=_FIRST_ROUND_TEAMS_2026,
        team_needs=_TEAM_NEEDS_2026,
        simulated_order=tuple(
            (name, _FIRST_ROUND_TEAMS_2026[slot], position)
            for slot, (name, position) in enumerate(_SIMULATED_PLAYERS_2026, start=1)
        ),
    ),
}


def iter_seasons() -> Iterable[DraftSeason]:
    """Return an iterator of all configured seasons."""

    return _SEASONS.values()


def get_season(year: int) -> DraftSeason:
    """Fetch static data for a year; unknown years get an empty season."""

    season = _SEASONS.get(int(year))
    if season is None:
        return DraftSeason(year=int(year), first_round_teams={})
    return season


def has_season(year: int) -> bool:
    return int(year) in _SEASONS
