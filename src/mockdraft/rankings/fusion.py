"""Consensus orderings fused from several ranking sources.

Two independent algorithms are exposed:

* Reciprocal rank fusion (RRF): every appearance adds ``1 / (k + rank)``.
  A single very high ranking moves a prospect a long way.
* Average position: the arithmetic mean of the raw rank numbers. Broad,
  consistent agreement beats one outlier board.

Both consume already-normalized source lists; ties keep the order in which a
prospect was first seen (primary list first).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Sequence

from mockdraft.config.settings import DEFAULT_COMPARISON_SOURCES, DEFAULT_RRF_K, PRIMARY_SOURCE
from mockdraft.models import ConsensusEntry, ProspectRecord

from .sources import DEFAULT_SOURCE_DEPTH, SourceCatalog, build_source_lists, source_view

RRF_VIEWS = {"rrf", "all"}
AVERAGE_VIEWS = {"avg", "average"}


@dataclass
class _Tally:
    school: str
    position: str
    total: float = 0.0
    appearances: int = 0


def _tally(
    source_lists: Sequence[Sequence[ProspectRecord]],
    weight: Callable[[int], float],
) -> Dict[str, _Tally]:
    tallies: Dict[str, _Tally] = {}
    for records in source_lists:
        for record in records:
            tally = tallies.get(record.name)
            if tally is None:
                tally = tallies[record.name] = _Tally(school=record.school, position=record.position)
            tally.total += weight(record.rank)
            tally.appearances += 1
    return tallies


def rrf_fuse(
    source_lists: Sequence[Sequence[ProspectRecord]],
    *,
    k: float = DEFAULT_RRF_K,
) -> List[ConsensusEntry]:
    if k <= 0:
        raise ValueError(f"RRF constant k must be positive, got {k!r}")
    tallies = _tally(source_lists, lambda rank: 1.0 / (k + rank))
    ordered = sorted(tallies.items(), key=lambda item: -item[1].total)
    return [
        ConsensusEntry(
            rank=index,
            name=name,
            school=tally.school,
            position=tally.position,
            score=tally.total,
            appearances=tally.appearances,
        )
        for index, (name, tally) in enumerate(ordered, start=1)
    ]


def average_rank_fuse(source_lists: Sequence[Sequence[ProspectRecord]]) -> List[ConsensusEntry]:
    tallies = _tally(source_lists, float)
    ordered = sorted(tallies.items(), key=lambda item: item[1].total / item[1].appearances)
    return [
        ConsensusEntry(
            rank=index,
            name=name,
            school=tally.school,
            position=tally.position,
            score=tally.total / tally.appearances,
            appearances=tally.appearances,
        )
        for index, (name, tally) in enumerate(ordered, start=1)
    ]


def compute_consensus_ranking(
    primary: Sequence[ProspectRecord],
    catalog: SourceCatalog,
    year: int,
    *,
    source_ids: Iterable[str] = DEFAULT_COMPARISON_SOURCES,
    k: float = DEFAULT_RRF_K,
    depth: int = DEFAULT_SOURCE_DEPTH,
) -> List[ConsensusEntry]:
    """RRF consensus across the primary list and every comparison source."""

    lists = build_source_lists(primary, catalog, year, source_ids=source_ids, depth=depth)
    return rrf_fuse(lists, k=k)


def compute_average_position_ranking(
    primary: Sequence[ProspectRecord],
    catalog: SourceCatalog,
    year: int,
    *,
    source_ids: Iterable[str] = DEFAULT_COMPARISON_SOURCES,
    depth: int = DEFAULT_SOURCE_DEPTH,
) -> List[ConsensusEntry]:
    """Mean-rank consensus across the primary list and every comparison source."""

    lists = build_source_lists(primary, catalog, year, source_ids=source_ids, depth=depth)
    return average_rank_fuse(lists)


def _as_entries(records: Sequence[ProspectRecord]) -> List[ConsensusEntry]:
    return [
        ConsensusEntry(
            rank=record.rank,
            name=record.name,
            school=record.school,
            position=record.position,
            score=float(record.rank),
            appearances=1,
        )
        for record in records
    ]


def rank_sources(
    view: str,
    primary: Sequence[ProspectRecord],
    catalog: SourceCatalog,
    year: int,
    *,
    source_ids: Iterable[str] = DEFAULT_COMPARISON_SOURCES,
    k: float = DEFAULT_RRF_K,
) -> List[ConsensusEntry]:
    """Dispatch a board request: ``rrf``/``all``, ``avg`` or a single source id."""

    key = view.strip().lower()
    source_ids = tuple(source_ids)
    if key in RRF_VIEWS:
        return compute_consensus_ranking(primary, catalog, year, source_ids=source_ids, k=k)
    if key in AVERAGE_VIEWS:
        return compute_average_position_ranking(primary, catalog, year, source_ids=source_ids)
    if key == PRIMARY_SOURCE or key in source_ids:
        return _as_entries(source_view(key, primary, catalog, year))
    raise ValueError(f"Unknown ranking source {view!r}")
