"""Ranking source catalog and per-source list assembly."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Protocol, Sequence, Tuple

from mockdraft.config.settings import DEFAULT_COMPARISON_SOURCES, PRIMARY_SOURCE
from mockdraft.identity import build_canonical_name_map, normalize_names
from mockdraft.ingest.prospects import load_packaged_prospects
from mockdraft.models import ProspectRecord


logger = logging.getLogger(__name__)

DEFAULT_SOURCE_DEPTH = 200


class SourceCatalog(Protocol):
    def get_comparison_source_list(self, source_id: str, year: int) -> List[ProspectRecord]:
        """Return the source's own top-N for ``year`` (possibly empty)."""


class StaticSourceCatalog:
    """In-memory catalog keyed by source id (optionally per year)."""

    def __init__(
        self,
        lists: Mapping[str, Sequence[ProspectRecord]] | None = None,
        *,
        by_year: Mapping[Tuple[str, int], Sequence[ProspectRecord]] | None = None,
    ):
        self._lists = {key.lower(): tuple(value) for key, value in (lists or {}).items()}
        self._by_year = {(key.lower(), int(year)): tuple(value) for (key, year), value in (by_year or {}).items()}

    def get_comparison_source_list(self, source_id: str, year: int) -> List[ProspectRecord]:
        key = source_id.lower()
        if (key, int(year)) in self._by_year:
            return list(self._by_year[(key, int(year))])
        return list(self._lists.get(key, ()))


class CsvSourceCatalog:
    """Reads ``<data_dir>/<source>_<year>.csv`` files, caching each parsed list."""

    def __init__(self, data_dir: Path | None = None):
        self.data_dir = data_dir
        self._cache: Dict[Tuple[str, int], Tuple[ProspectRecord, ...]] = {}

    def get_comparison_source_list(self, source_id: str, year: int) -> List[ProspectRecord]:
        key = (source_id.lower(), int(year))
        if key not in self._cache:
            self._cache[key] = tuple(
                load_packaged_prospects(key[1], source_id=key[0], data_dir=self.data_dir)
            )
        return list(self._cache[key])


def extend_with_primary(
    top_n: Sequence[ProspectRecord],
    primary: Sequence[ProspectRecord],
    *,
    depth: int = DEFAULT_SOURCE_DEPTH,
) -> List[ProspectRecord]:
    """Pad a source's top-N with the primary list's remaining prospects.

    Primary records already named in ``top_n`` are skipped; the rest keep their
    primary order and are re-ranked directly after the source's last rank.
    """

    named = {record.name for record in top_n}
    base = max((record.rank for record in top_n), default=0)
    extended = list(top_n)
    next_rank = base
    for record in primary:
        if record.name in named:
            continue
        next_rank += 1
        extended.append(record.model_copy(update={"rank": next_rank}))
    return extended[:depth]


def build_source_lists(
    primary: Sequence[ProspectRecord],
    catalog: SourceCatalog,
    year: int,
    *,
    source_ids: Iterable[str] = DEFAULT_COMPARISON_SOURCES,
    depth: int = DEFAULT_SOURCE_DEPTH,
) -> List[List[ProspectRecord]]:
    """Return ``[primary, *comparison lists]``, each normalized to primary spellings."""

    canonical = build_canonical_name_map(primary)
    lists: List[List[ProspectRecord]] = [list(primary)]
    for source_id in source_ids:
        if source_id.lower() == PRIMARY_SOURCE:
            continue
        top_n = normalize_names(catalog.get_comparison_source_list(source_id, year), canonical)
        if not top_n:
            logger.debug("Source %s has no %s list; falling back to primary order", source_id, year)
        lists.append(extend_with_primary(top_n, primary, depth=depth))
    return lists


def source_view(
    source_id: str,
    primary: Sequence[ProspectRecord],
    catalog: SourceCatalog,
    year: int,
    *,
    depth: int = DEFAULT_SOURCE_DEPTH,
) -> List[ProspectRecord]:
    """A single source's board as players see it (primary for the primary source)."""

    if source_id.lower() == PRIMARY_SOURCE:
        return list(primary)
    canonical = build_canonical_name_map(primary)
    top_n = normalize_names(catalog.get_comparison_source_list(source_id, year), canonical)
    return extend_with_primary(top_n, primary, depth=depth)
