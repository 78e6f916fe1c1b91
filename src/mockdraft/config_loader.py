"""Persist and load CLI ranking profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from mockdraft.config.settings import DEFAULT_COMPARISON_SOURCES, DEFAULT_RRF_K, parse_source_ids


@dataclass
class RankingProfile:
    source_ids: List[str] = field(default_factory=lambda: list(DEFAULT_COMPARISON_SOURCES))
    rrf_k: float = DEFAULT_RRF_K

    @classmethod
    def load(cls, path: Path) -> "RankingProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        sources = data.get("source_ids")
        if isinstance(sources, str):
            sources = parse_source_ids(sources)
        return cls(
            source_ids=list(sources) if sources else list(DEFAULT_COMPARISON_SOURCES),
            rrf_k=float(data.get("rrf_k", DEFAULT_RRF_K)),
        )

    def save(self, path: Path) -> None:
        payload = {
            "source_ids": self.source_ids,
            "rrf_k": self.rrf_k,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
