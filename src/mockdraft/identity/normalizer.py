"""Cross-source player identity resolution.

Sources disagree on how a prospect's name is written ("KC Concepcion" vs
"Kevin Concepcion", "Omar Cooper Jr." vs "Omar Cooper"). A prospect is
identified by the triple (last name, position, school) instead, and the
authoritative source's spelling becomes the canonical display name.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence, Tuple

from mockdraft.models import ProspectRecord


logger = logging.getLogger(__name__)

GENERATIONAL_SUFFIXES = frozenset({"jr", "jr.", "sr", "sr.", "ii", "iii", "iv", "v"})

IdentityKey = Tuple[str, str, str]
CanonicalNameMap = Dict[IdentityKey, str]


def extract_last_name(full_name: str) -> str:
    """Lowercase final name token, ignoring generational suffixes."""

    lowered = full_name.lower()
    parts = [part for part in lowered.split() if part not in GENERATIONAL_SUFFIXES]
    if not parts:
        return lowered.strip()
    return parts[-1]


def identity_key(name: str, position: str, school: str) -> IdentityKey:
    return (extract_last_name(name), position, school.lower())


def record_key(record: ProspectRecord) -> IdentityKey:
    return identity_key(record.name, record.position, record.school)


def build_canonical_name_map(authoritative: Iterable[ProspectRecord]) -> CanonicalNameMap:
    """Map each identity key to the first name the authoritative list uses for it."""

    canonical: CanonicalNameMap = {}
    for record in authoritative:
        key = record_key(record)
        if key in canonical:
            if canonical[key] != record.name:
                logger.debug(
                    "Duplicate identity %s in authoritative list: keeping %r over %r",
                    key,
                    canonical[key],
                    record.name,
                )
            continue
        canonical[key] = record.name
    return canonical


def normalize_names(
    records: Sequence[ProspectRecord],
    canonical_map: CanonicalNameMap,
) -> List[ProspectRecord]:
    """Rewrite names to their canonical spelling; everything else is untouched."""

    normalized: List[ProspectRecord] = []
    for record in records:
        canonical = canonical_map.get(record_key(record))
        if canonical and canonical != record.name:
            normalized.append(record.model_copy(update={"name": canonical}))
        else:
            normalized.append(record)
    return normalized
