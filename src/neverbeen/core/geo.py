from __future__ import annotations
from dataclasses import dataclass
from math import asin, atan2, cos, degrees, isfinite, radians, sin, sqrt

from neverbeen.core.errors import InvalidCoordinate

"""
Spherical geometry helpers.

Everything here works on a sphere of radius `EARTH_RADIUS_KM` (the same constant the
sampler projects on), so the haversine distance and the forward projection agree with
each other up to floating-point error.
"""

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lon: float


def normalize_longitude(lon: float) -> float:
    """Wrap a longitude in degrees into [-180, 180)."""
    return ((lon + 540.0) % 360.0) - 180.0


def validate_latitude(lat: float) -> float:
    if not isfinite(lat) or not -90.0 <= lat <= 90.0:
        raise InvalidCoordinate(f"latitude must be within [-90, 90], got {lat!r}")
    return lat


def validate_longitude(lon: float) -> float:
    if not isfinite(lon) or not -180.0 <= lon <= 180.0:
        raise InvalidCoordinate(f"longitude must be within [-180, 180], got {lon!r}")
    return lon


def _parse_number(text: str | float | int, name: str) -> float:
    try:
        value = float(str(text).strip())
    except ValueError:
        raise InvalidCoordinate(f"{name} is not a number: {text!r}") from None
    if not isfinite(value):
        raise InvalidCoordinate(f"{name} is not a finite number: {text!r}")
    return value


def parse_latitude(text: str | float | int) -> float:
    return validate_latitude(_parse_number(text, "latitude"))


def parse_longitude(text: str | float | int) -> float:
    return validate_longitude(_parse_number(text, "longitude"))


def parse_geo_point(lat_text: str | float | int, lon_text: str | float | int) -> GeoPoint:
    """Parse and validate a point from user/search input (numeric strings accepted).

    Raises:
        InvalidCoordinate: If either value is non-numeric or out of range.
    """
    return GeoPoint(lat=parse_latitude(lat_text), lon=parse_longitude(lon_text))


def haversine_km(a: GeoPoint, b: GeoPoint, *, radius_km: float = EARTH_RADIUS_KM) -> float:
    """Compute great-circle distance in kilometers between two points."""
    lat1 = radians(a.lat)
    lon1 = radians(a.lon)
    lat2 = radians(b.lat)
    lon2 = radians(b.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push h a hair past 1 for antipodal points.
    h = min(1.0, max(0.0, h))
    return 2 * radius_km * atan2(sqrt(h), sqrt(1 - h))


def haversine_m(a: GeoPoint, b: GeoPoint) -> float:
    """Compute great-circle distance in meters between two points."""
    return haversine_km(a, b) * 1000.0


def initial_bearing_deg(a: GeoPoint, b: GeoPoint) -> float:
    """Forward azimuth from `a` towards `b`, degrees clockwise from north in [0, 360)."""
    lat1 = radians(a.lat)
    lat2 = radians(b.lat)
    dlon = radians(b.lon - a.lon)
    y = sin(dlon) * cos(lat2)
    x = cos(lat1) * sin(lat2) - sin(lat1) * cos(lat2) * cos(dlon)
    return (degrees(atan2(y, x)) + 360.0) % 360.0


def destination_point(
    origin: GeoPoint,
    distance_km: float,
    bearing_rad: float,
    *,
    radius_km: float = EARTH_RADIUS_KM,
) -> GeoPoint:
    """Solve the forward geodesic problem on a sphere.

    Travels `distance_km` from `origin` along the great circle leaving at `bearing_rad`
    (radians clockwise from north). The result's longitude is wrapped into [-180, 180).
    """
    lat1 = radians(origin.lat)
    lon1 = radians(origin.lon)
    delta = distance_km / radius_km

    s = sin(lat1) * cos(delta) + cos(lat1) * sin(delta) * cos(bearing_rad)
    lat2 = asin(min(1.0, max(-1.0, s)))
    lon2 = lon1 + atan2(
        sin(bearing_rad) * sin(delta) * cos(lat1),
        cos(delta) - sin(lat1) * sin(lat2),
    )
    return GeoPoint(lat=degrees(lat2), lon=normalize_longitude(degrees(lon2)))
