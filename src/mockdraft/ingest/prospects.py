"""Helpers to load prospect ranking CSVs and emit canonical records."""

from __future__ import annotations

import csv
import logging
import re
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from pydantic import BaseModel

from mockdraft.config.settings import PACKAGE_DATA_DIR
from mockdraft.models import ProspectRecord


logger = logging.getLogger(__name__)

DEFAULT_PROSPECT_MAPPING = {
    "rank": "rank",
    "name": "name",
    "school": "school",
    "position": "position",
}


class ProspectRow(BaseModel):
    raw_rank: Optional[str] = None
    raw_name: str
    raw_school: str = ""
    raw_position: str = ""

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "ProspectRow":
        def extract(spec: Optional[str | Sequence[str]], *, default: Optional[str] = None) -> Optional[str]:
            if spec is None:
                return default
            if isinstance(spec, str):
                value = row.get(spec)
                return value.strip() if value is not None else default
            parts = [row.get(col, "").strip() for col in spec if row.get(col)]
            return " ".join(parts) if parts else default

        def parse_spec(key: str) -> Optional[str | Sequence[str]]:
            spec = mapping.get(key, DEFAULT_PROSPECT_MAPPING.get(key))
            if isinstance(spec, str) and "|" in spec:
                return tuple(part.strip() for part in spec.split("|"))
            return spec

        return cls(
            raw_rank=extract(parse_spec("rank")),
            raw_name=extract(parse_spec("name"), default="") or "",
            raw_school=extract(parse_spec("school"), default="") or "",
            raw_position=extract(parse_spec("position"), default="") or "",
        )


def _parse_rank(raw_rank: Optional[str], *, default: int) -> int:
    if raw_rank is None or not raw_rank.strip():
        return default
    digits = re.sub(r"[^0-9]", "", raw_rank)
    if not digits:
        raise ValueError(f"rank '{raw_rank}' is not numeric")
    return int(digits)


def rows_to_prospects(rows: Sequence[ProspectRow]) -> List[ProspectRecord]:
    records: List[ProspectRecord] = []
    for index, row in enumerate(rows, start=1):
        name = " ".join(row.raw_name.split())
        if not name:
            logger.debug("Skipping prospect row %d without a name", index)
            continue
        records.append(
            ProspectRecord(
                rank=_parse_rank(row.raw_rank, default=index),
                name=name,
                school=row.raw_school.strip(),
                position=row.raw_position.strip().upper(),
            )
        )
    return records


def load_prospect_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[ProspectRecord]:
    mapping = mapping or DEFAULT_PROSPECT_MAPPING
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = [ProspectRow.from_mapping(row, mapping) for row in reader]
    return rows_to_prospects(rows)


def packaged_prospects_path(source_id: str, year: int, *, data_dir: Path | None = None) -> Path:
    return (data_dir or PACKAGE_DATA_DIR) / f"{source_id.lower()}_{int(year)}.csv"


def load_packaged_prospects(year: int, *, source_id: str = "cbs", data_dir: Path | None = None) -> List[ProspectRecord]:
    """Load a shipped (or configured-directory) source list; missing files yield ``[]``."""

    path = packaged_prospects_path(source_id, year, data_dir=data_dir)
    if not path.exists():
        logger.info("No %s prospect list for %s at %s", source_id, year, path)
        return []
    return load_prospect_csv(path)
