"""
Place search client (OpenStreetMap Nominatim).

Turns a free-text query ("Edinburgh", "Mount Fuji") into an ordered list of candidate
origins. Nominatim returns coordinates as strings; every candidate is parsed through
`parse_geo_point` and dropped (with a warning) if it is non-numeric or out of range,
so callers only ever see valid `GeoPoint`s.

Nominatim usage policy expects a descriptive User-Agent and roughly one request per
second; this client never retries on its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from neverbeen.config.settings import Settings
from neverbeen.core.errors import InvalidCoordinate
from neverbeen.core.geo import GeoPoint, parse_geo_point
from neverbeen.core.http import get_json

logger = logging.getLogger(__name__)


class PlaceSearchError(RuntimeError):
    """The search service could not be reached or returned an unusable payload."""


@dataclass(frozen=True)
class PlaceCandidate:
    """One search hit, already validated."""

    display_name: str
    point: GeoPoint


def parse_candidates(payload: Any) -> list[PlaceCandidate]:
    """Parse a Nominatim `jsonv2` result list, keeping order and skipping bad rows."""
    if not isinstance(payload, list):
        raise PlaceSearchError(f"Unexpected search payload type: {type(payload).__name__}")

    out: list[PlaceCandidate] = []
    for row in payload:
        if not isinstance(row, dict):
            continue
        name = str(row.get("display_name") or "").strip()
        try:
            point = parse_geo_point(row.get("lat"), row.get("lon"))
        except InvalidCoordinate as e:
            logger.warning("Skipping search result %r: %s", name or row, e)
            continue
        out.append(PlaceCandidate(display_name=name or f"{point.lat:.5f}, {point.lon:.5f}", point=point))
    return out


class PlaceSearchClient:
    """Free-text place lookup backed by a Nominatim instance."""

    def __init__(self, settings: Settings):
        self._settings = settings

    def _fetch(self, query: str, limit: int) -> Any:
        cfg = self._settings.place_search
        params = {"q": query, "format": "jsonv2", "limit": limit}
        return get_json(
            f"{cfg.base_url.rstrip('/')}/search",
            params=params,
            headers={"User-Agent": cfg.user_agent},
            timeout_seconds=cfg.timeout_seconds or self._settings.app.http_timeout_seconds,
        )

    def search(self, query: str, *, limit: int | None = None) -> list[PlaceCandidate]:
        """Return validated candidates for `query` (empty list for a blank query).

        Raises:
            PlaceSearchError: On transport errors, non-2xx responses or non-JSON bodies.
        """
        query = query.strip()
        if not query:
            return []
        limit = int(limit or self._settings.place_search.limit)

        logger.info("Searching places for %r (limit=%d)", query, limit)
        try:
            payload = self._fetch(query, limit)
        except (httpx.HTTPError, ValueError) as e:
            raise PlaceSearchError(f"Place search failed: {type(e).__name__}: {e}") from e
        return parse_candidates(payload)[:limit]
