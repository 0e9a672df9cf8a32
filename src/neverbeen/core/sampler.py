"""
Random destination sampling.

A destination is produced by drawing a distance and a bearing, then projecting the
origin forward along that great circle (`neverbeen.core.geo.destination_point`).

Sampling modes:
- `distance` (default): distance uniform in [0, R). Points cluster towards the origin
  because the ring at distance r has circumference proportional to r.
- `area`: distance = R * sqrt(U), which spreads points evenly over the disc. Opt-in
  only; it changes the distribution of generated destinations.

The random source is injected as a zero-argument callable returning floats in [0, 1)
so runs are reproducible with a seed.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from math import isfinite, pi, sqrt
from typing import Callable, Literal

from neverbeen.core.errors import InvalidRadius, SamplingFailure
from neverbeen.core.geo import (
    EARTH_RADIUS_KM,
    GeoPoint,
    destination_point,
    haversine_km,
    normalize_longitude,
    validate_latitude,
)

SamplingMode = Literal["distance", "area"]
Rng = Callable[[], float]


@dataclass(frozen=True)
class SampleResult:
    """One generated destination and how far it is from the origin (km)."""

    origin: GeoPoint
    point: GeoPoint
    distance_km: float
    sampled_distance_km: float
    bearing_rad: float


def _check_inputs(origin: GeoPoint, radius_km: float) -> None:
    if not isfinite(radius_km) or radius_km < 0:
        raise InvalidRadius(f"radius_km must be a finite number >= 0, got {radius_km!r}")
    validate_latitude(origin.lat)


def _draw(radius_km: float, rng: Rng, mode: SamplingMode) -> tuple[float, float]:
    u1 = rng()
    u2 = rng()
    distance_km = radius_km * (sqrt(u1) if mode == "area" else u1)
    return distance_km, u2 * 2 * pi


def _project(origin: GeoPoint, distance_km: float, bearing_rad: float, radius_km: float) -> GeoPoint:
    if distance_km == 0:
        lon = origin.lon if -180.0 <= origin.lon <= 180.0 else normalize_longitude(origin.lon)
        return GeoPoint(lat=origin.lat, lon=lon)
    point = destination_point(origin, distance_km, bearing_rad, radius_km=radius_km)
    if not (isfinite(point.lat) and isfinite(point.lon)):
        raise SamplingFailure(
            f"projection from ({origin.lat}, {origin.lon}) produced a non-finite point"
        )
    return point


def sample(
    origin: GeoPoint,
    radius_km: float,
    rng: Rng,
    *,
    mode: SamplingMode = "distance",
    earth_radius_km: float = EARTH_RADIUS_KM,
) -> GeoPoint:
    """Return a random point within `radius_km` of `origin`.

    `rng` is called exactly twice: first for the distance, then for the bearing.

    Raises:
        InvalidRadius: If `radius_km` is negative or not finite.
        InvalidCoordinate: If the origin latitude is outside [-90, 90].
        SamplingFailure: If the projection yields a non-finite coordinate.
    """
    _check_inputs(origin, radius_km)
    distance_km, bearing_rad = _draw(radius_km, rng, mode)
    return _project(origin, distance_km, bearing_rad, earth_radius_km)


class RandomPointSampler:
    """Seedable sampler producing complete `SampleResult`s."""

    def __init__(
        self,
        rng: Rng | None = None,
        *,
        seed: int | None = None,
        mode: SamplingMode = "distance",
        earth_radius_km: float = EARTH_RADIUS_KM,
    ):
        if rng is None:
            rng = random.Random(seed).random
        self._rng = rng
        self.mode: SamplingMode = mode
        self.earth_radius_km = earth_radius_km

    def sample(self, origin: GeoPoint, radius_km: float) -> GeoPoint:
        return self.sample_result(origin, radius_km).point

    def sample_result(self, origin: GeoPoint, radius_km: float) -> SampleResult:
        _check_inputs(origin, radius_km)
        distance_km, bearing_rad = _draw(radius_km, self._rng, self.mode)
        point = _project(origin, distance_km, bearing_rad, self.earth_radius_km)
        return SampleResult(
            origin=origin,
            point=point,
            distance_km=haversine_km(origin, point, radius_km=self.earth_radius_km),
            sampled_distance_km=distance_km,
            bearing_rad=bearing_rad,
        )
