"""Client for the third-party live draft results feed."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import httpx

from mockdraft.config.season import TOTAL_PICKS
from mockdraft.config.settings import DEFAULT_LIVE_RESULTS_URL


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class LiveResultsFetch:
    """Outcome of one poll. ``error`` set means "no official results yet"."""

    results: Dict[int, Optional[str]] = field(default_factory=dict)
    teams: Dict[int, Optional[str]] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _first_round_items(payload: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    items = payload.get("items") or []
    if not isinstance(items, list):
        return []
    return [
        item
        for item in items
        if isinstance(item, Mapping) and (item.get("round") in (None, 1))
    ]


def parse_live_results(payload: Mapping[str, Any]) -> LiveResultsFetch:
    items = _first_round_items(payload)
    if not items:
        return LiveResultsFetch(
            error="No first-round picks available from the live feed yet.",
        )

    results: Dict[int, Optional[str]] = {}
    teams: Dict[int, Optional[str]] = {}
    for item in items:
        pick_number = item.get("pick")
        if not isinstance(pick_number, int) or not 1 <= pick_number <= TOTAL_PICKS:
            continue
        athlete = item.get("athlete") or {}
        team = item.get("team") or {}
        player_name = athlete.get("displayName") or athlete.get("shortName") or None
        results[pick_number] = player_name
        teams[pick_number] = team.get("displayName") or None
    return LiveResultsFetch(results=results, teams=teams)


def fetch_live_official_results(
    year: int,
    *,
    url_template: str = DEFAULT_LIVE_RESULTS_URL,
    client: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> LiveResultsFetch:
    """Poll the live feed for first-round picks; failures come back as ``error``."""

    url = url_template.format(year=int(year))
    try:
        if client is None:
            with httpx.Client(timeout=timeout) as owned:
                response = owned.get(url)
        else:
            response = client.get(url, timeout=timeout)
        if response.status_code >= 400:
            message = f"Live results feed responded with {response.status_code}"
            logger.warning("%s for %s", message, url)
            return LiveResultsFetch(error=message)
        payload = response.json()
    except httpx.HTTPError as exc:
        logger.warning("Live results fetch failed for %s: %s", url, exc)
        return LiveResultsFetch(error=str(exc) or exc.__class__.__name__)
    except ValueError as exc:
        logger.warning("Live results feed returned invalid JSON for %s: %s", url, exc)
        return LiveResultsFetch(error="Live results feed returned invalid JSON")

    if not isinstance(payload, Mapping):
        return LiveResultsFetch(error="Live results feed returned an unexpected payload")
    fetched = parse_live_results(payload)
    if fetched.ok:
        logger.info("Fetched %d live first-round picks for %s", len(fetched.results), year)
    return fetched
