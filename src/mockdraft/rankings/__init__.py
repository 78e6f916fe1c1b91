"""Ranking sources and consensus fusion."""

from .fusion import (
    average_rank_fuse,
    compute_average_position_ranking,
    compute_consensus_ranking,
    rank_sources,
    rrf_fuse,
)
from .sources import (
    DEFAULT_SOURCE_DEPTH,
    CsvSourceCatalog,
    SourceCatalog,
    StaticSourceCatalog,
    build_source_lists,
    extend_with_primary,
    source_view,
)

__all__ = [
    "DEFAULT_SOURCE_DEPTH",
    "CsvSourceCatalog",
    "SourceCatalog",
    "StaticSourceCatalog",
    "average_rank_fuse",
    "build_source_lists",
    "compute_average_position_ranking",
    "compute_consensus_ranking",
    "extend_with_primary",
    "rank_sources",
    "rrf_fuse",
    "source_view",
]
