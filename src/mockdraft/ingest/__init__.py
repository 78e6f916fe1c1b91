"""Input adapters for rankings, slates and live results."""

from .live_results import LiveResultsFetch, fetch_live_official_results, parse_live_results
from .picks import load_official_results_csv, load_picks_csv
from .prospects import (
    ProspectRow,
    load_packaged_prospects,
    load_prospect_csv,
    packaged_prospects_path,
    rows_to_prospects,
)

__all__ = [
    "LiveResultsFetch",
    "ProspectRow",
    "fetch_live_official_results",
    "load_official_results_csv",
    "load_packaged_prospects",
    "load_picks_csv",
    "load_prospect_csv",
    "packaged_prospects_path",
    "parse_live_results",
    "rows_to_prospects",
]
