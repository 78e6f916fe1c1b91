"""Identity normalization across ranking sources."""

from .normalizer import (
    GENERATIONAL_SUFFIXES,
    CanonicalNameMap,
    IdentityKey,
    build_canonical_name_map,
    extract_last_name,
    identity_key,
    normalize_names,
    record_key,
)

__all__ = [
    "GENERATIONAL_SUFFIXES",
    "CanonicalNameMap",
    "IdentityKey",
    "build_canonical_name_map",
    "extract_last_name",
    "identity_key",
    "normalize_names",
    "record_key",
]
