"""
Degrees-minutes-seconds conversion.

The hemisphere letter depends on which axis a value belongs to (a negative latitude
is "S", a negative longitude is "W"), so every conversion takes an explicit `Axis`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from math import floor, isfinite

from neverbeen.core.errors import InvalidCoordinate
from neverbeen.core.geo import GeoPoint


class Axis(str, Enum):
    LATITUDE = "lat"
    LONGITUDE = "lon"


_HEMISPHERES: dict[Axis, tuple[str, str]] = {
    Axis.LATITUDE: ("N", "S"),
    Axis.LONGITUDE: ("E", "W"),
}
_LIMITS: dict[Axis, float] = {Axis.LATITUDE: 90.0, Axis.LONGITUDE: 180.0}
_MAX_SECONDS = 60.0 - 1e-9


@dataclass(frozen=True)
class DMS:
    """An unsigned angle split into degrees/minutes/seconds plus a hemisphere letter."""

    degrees: int
    minutes: int
    seconds: float
    hemisphere: str


def to_dms(decimal_degrees: float, axis: Axis) -> DMS:
    """Split a signed decimal angle into DMS parts for the given axis."""
    if not isfinite(decimal_degrees):
        raise InvalidCoordinate(f"{axis.value} is not a finite number: {decimal_degrees!r}")

    x = abs(decimal_degrees)
    deg = floor(x)
    minutes = floor((x - deg) * 60)
    seconds = (x - deg - minutes / 60) * 3600
    # (x - deg - m/60) can land a few ulps outside [0, 60).
    seconds = min(max(0.0, seconds), _MAX_SECONDS)

    positive, negative = _HEMISPHERES[axis]
    hemisphere = positive if decimal_degrees >= 0 else negative
    return DMS(degrees=int(deg), minutes=int(minutes), seconds=seconds, hemisphere=hemisphere)


def to_decimal(dms: DMS) -> float:
    """Inverse of `to_dms`: S and W hemispheres give negative values."""
    value = dms.degrees + dms.minutes / 60 + dms.seconds / 3600
    return -value if dms.hemisphere in ("S", "W") else value


def round_dms(dms: DMS, seconds_decimals: int = 2) -> DMS:
    """Round seconds to display precision, carrying 60s into minutes and 60' into degrees."""
    degrees, minutes = dms.degrees, dms.minutes
    seconds = round(dms.seconds, seconds_decimals)
    if seconds >= 60:
        seconds -= 60
        minutes += 1
    if minutes >= 60:
        minutes -= 60
        degrees += 1
    return DMS(degrees=degrees, minutes=minutes, seconds=max(0.0, seconds), hemisphere=dms.hemisphere)


def format_dms(dms: DMS, *, seconds_decimals: int = 2) -> str:
    """Render as e.g. `55°46'27.00"N`."""
    dms = round_dms(dms, seconds_decimals)
    return f"{dms.degrees}°{dms.minutes}'{dms.seconds:.{seconds_decimals}f}\"{dms.hemisphere}"


def format_point_dms(point: GeoPoint, *, seconds_decimals: int = 2) -> tuple[str, str]:
    """Return `(latitude, longitude)` DMS strings for a point."""
    return (
        format_dms(to_dms(point.lat, Axis.LATITUDE), seconds_decimals=seconds_decimals),
        format_dms(to_dms(point.lon, Axis.LONGITUDE), seconds_decimals=seconds_decimals),
    )


_DMS_RE = re.compile(
    r"""^\s*
    (?P<deg>\d+(?:\.\d+)?)\s*(?:°|d|\s)\s*
    (?:(?P<min>\d+(?:\.\d+)?)\s*(?:'|′|m|\s)\s*)?
    (?:(?P<sec>\d+(?:\.\d+)?)\s*(?:"|″|''|s)?\s*)?
    (?P<hem>[NSEWnsew])\s*$""",
    re.VERBOSE,
)


def parse_dms(text: str, axis: Axis) -> DMS:
    """Parse strings like `55°46'27.00"N` or `3 55 6 W` back into a `DMS`.

    Raises:
        InvalidCoordinate: On malformed text, a hemisphere letter from the other axis,
            minutes/seconds outside [0, 60), or a magnitude beyond the axis limit.
    """
    m = _DMS_RE.match(text)
    if not m:
        raise InvalidCoordinate(f"Unrecognized DMS value: {text!r}")

    hemisphere = m.group("hem").upper()
    if hemisphere not in _HEMISPHERES[axis]:
        raise InvalidCoordinate(f"Hemisphere '{hemisphere}' is not valid for {axis.value}")

    deg_f = float(m.group("deg"))
    min_f = float(m.group("min") or 0)
    sec_f = float(m.group("sec") or 0)
    if deg_f != int(deg_f) or min_f != int(min_f):
        raise InvalidCoordinate(f"Degrees and minutes must be whole numbers: {text!r}")
    if min_f >= 60 or sec_f >= 60:
        raise InvalidCoordinate(f"Minutes and seconds must be below 60: {text!r}")

    dms = DMS(degrees=int(deg_f), minutes=int(min_f), seconds=sec_f, hemisphere=hemisphere)
    if abs(to_decimal(dms)) > _LIMITS[axis]:
        raise InvalidCoordinate(f"{axis.value} out of range: {text!r}")
    return dms
