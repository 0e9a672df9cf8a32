"""
Explorer session: the state behind the "find a random place" screen.

The session owns:
- the current origin (defaults to the configured origin),
- the radius slider (`RadiusControl`, canonical miles + selected unit),
- the latest `SampleResult`, or `None` before the first sample.

Input rules:
- Manual entry is validated before anything changes; an invalid entry raises and the
  previous origin stays in place.
- Geolocation and place-search failures are soft: the origin is kept, a warning is
  logged and the method returns `False` (or an empty list) instead of raising.
- Changing the origin discards the previous result, since it no longer belongs to it.

Nothing here retries automatically; "try again" is an explicit `sample()` call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from neverbeen.config.settings import Settings
from neverbeen.core.dms import format_point_dms
from neverbeen.core.errors import InvalidCoordinate
from neverbeen.core.geo import GeoPoint, parse_geo_point
from neverbeen.core.sampler import RandomPointSampler, SampleResult
from neverbeen.core.units import DistanceUnit, RadiusControl, format_distance
from neverbeen.ingestion.place_search import PlaceCandidate, PlaceSearchClient, PlaceSearchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionView:
    """Display-ready snapshot of the session."""

    origin: GeoPoint
    origin_dms: tuple[str, str]
    radius_value: int
    radius_unit: str
    radius_bounds: tuple[int, int]
    radius_m: float
    destination: GeoPoint | None
    destination_dms: tuple[str, str] | None
    distance: str | None


class ExplorerSession:
    def __init__(
        self,
        settings: Settings,
        *,
        sampler: RandomPointSampler | None = None,
        search_client: PlaceSearchClient | None = None,
    ):
        self._settings = settings
        default = settings.geo.default_origin
        self._origin = GeoPoint(lat=default.lat, lon=default.lon)
        self.radius = RadiusControl(
            settings.radius.default_miles,
            DistanceUnit(settings.radius.default_unit),
            min_value=settings.radius.min,
            max_miles=settings.radius.max_miles,
            max_km=settings.radius.max_km,
        )
        self._sampler = sampler or RandomPointSampler(
            seed=settings.sampling.seed,
            mode=settings.sampling.mode,
            earth_radius_km=settings.geo.earth_radius_km,
        )
        self._search_client = search_client
        self._result: SampleResult | None = None

    @property
    def origin(self) -> GeoPoint:
        return self._origin

    @property
    def result(self) -> SampleResult | None:
        return self._result

    def _set_origin(self, point: GeoPoint, source: str) -> None:
        if point != self._origin:
            self._result = None
        self._origin = point
        logger.debug("Origin set from %s: (%.6f, %.6f)", source, point.lat, point.lon)

    def set_origin_manual(self, lat_text: str, lon_text: str) -> GeoPoint:
        """Accept a manually typed origin.

        Raises:
            InvalidCoordinate: If either value is non-numeric or out of range. The
                current origin is left untouched.
        """
        point = parse_geo_point(lat_text, lon_text)
        self._set_origin(point, "manual entry")
        return point

    def apply_geolocation(self, position: GeoPoint | None) -> bool:
        """Apply a geolocation callback result; `None` means the provider failed."""
        if position is None:
            logger.warning("Geolocation unavailable; keeping origin (%.6f, %.6f)", self._origin.lat, self._origin.lon)
            return False
        try:
            point = parse_geo_point(position.lat, position.lon)
        except InvalidCoordinate as e:
            logger.warning("Ignoring invalid geolocation fix: %s", e)
            return False
        self._set_origin(point, "geolocation")
        return True

    def search_places(self, query: str) -> list[PlaceCandidate]:
        """Look up origin candidates; returns `[]` when search is unavailable or fails."""
        if self._search_client is None:
            logger.warning("Place search is not configured")
            return []
        try:
            return self._search_client.search(query)
        except PlaceSearchError as e:
            logger.warning("%s", e)
            return []

    def select_place(self, candidate: PlaceCandidate) -> GeoPoint:
        self._set_origin(candidate.point, f"search '{candidate.display_name}'")
        return candidate.point

    def set_unit(self, unit: DistanceUnit | str) -> int:
        return self.radius.set_unit(DistanceUnit(unit))

    def set_radius(self, value: str | float | int) -> int:
        """Set the radius in the selected unit (clamped to slider bounds)."""
        return self.radius.set_display_value(value)

    def sample(self) -> SampleResult:
        """Generate a new destination, replacing any previous result."""
        result = self._sampler.sample_result(self._origin, self.radius.radius_km)
        self._result = result
        logger.info(
            "Sampled destination (%.6f, %.6f) %.3f km from origin",
            result.point.lat,
            result.point.lon,
            result.distance_km,
        )
        return result

    def view(self) -> SessionView:
        display = self._settings.display
        result = self._result
        lo, hi = self.radius.bounds
        return SessionView(
            origin=self._origin,
            origin_dms=format_point_dms(self._origin, seconds_decimals=display.seconds_decimals),
            radius_value=self.radius.display_value,
            radius_unit=self.radius.unit.value,
            radius_bounds=(lo, hi),
            radius_m=self.radius.radius_m,
            destination=result.point if result else None,
            destination_dms=(
                format_point_dms(result.point, seconds_decimals=display.seconds_decimals) if result else None
            ),
            distance=(
                format_distance(result.distance_km, self.radius.unit, decimals=display.distance_decimals)
                if result
                else None
            ),
        )
