"""
Distance units and the radius control.

The radius is stored canonically in miles (the slider's native unit). Kilometers are
derived for display. When the user switches units, the canonical value is recomputed
from the *rounded* number currently on screen, never from the previous canonical
value: the slider therefore always shows exactly what the user last set, at the cost
of a little drift if the unit is toggled back and forth many times.
"""

from __future__ import annotations

from enum import Enum
from math import isfinite

from neverbeen.core.errors import InvalidRadius

KM_PER_MILE = 1.60934


class DistanceUnit(str, Enum):
    MILES = "miles"
    KILOMETERS = "km"


def miles_to_km(miles: float) -> float:
    return miles * KM_PER_MILE


def km_to_miles(km: float) -> float:
    return km / KM_PER_MILE


def to_display(canonical_miles: float, unit: DistanceUnit) -> float:
    """Convert a canonical (miles) value into the given display unit."""
    if unit is DistanceUnit.KILOMETERS:
        return miles_to_km(canonical_miles)
    return canonical_miles


def to_canonical(display_value: float, unit: DistanceUnit) -> float:
    """Convert a value shown in `unit` back into canonical miles."""
    if unit is DistanceUnit.KILOMETERS:
        return km_to_miles(display_value)
    return display_value


def km_to_unit(distance_km: float, unit: DistanceUnit) -> float:
    return distance_km if unit is DistanceUnit.KILOMETERS else km_to_miles(distance_km)


def format_distance(distance_km: float, unit: DistanceUnit, *, decimals: int = 1) -> str:
    """Render a distance as e.g. `50.0 miles` or `80.5 km`."""
    return f"{km_to_unit(distance_km, unit):.{decimals}f} {unit.value}"


def parse_radius(value: str | float | int) -> float:
    """Parse a user-supplied radius; it must be a finite number > 0.

    Raises:
        InvalidRadius: If the value is non-numeric, non-finite, or <= 0.
    """
    try:
        radius = float(str(value).strip())
    except ValueError:
        raise InvalidRadius(f"radius is not a number: {value!r}") from None
    if not isfinite(radius) or radius <= 0:
        raise InvalidRadius(f"radius must be a positive number, got {value!r}")
    return radius


class RadiusControl:
    """Slider state for the search radius: canonical miles plus the selected unit."""

    def __init__(
        self,
        miles: float = 100,
        unit: DistanceUnit = DistanceUnit.MILES,
        *,
        min_value: int = 1,
        max_miles: int = 400,
        max_km: int = 644,
    ):
        self._min = int(min_value)
        self._max = {DistanceUnit.MILES: int(max_miles), DistanceUnit.KILOMETERS: int(max_km)}
        self._unit = unit
        lo, hi = self.bounds
        self._miles = min(max(parse_radius(miles), to_canonical(lo, unit)), to_canonical(hi, unit))

    @property
    def unit(self) -> DistanceUnit:
        return self._unit

    @property
    def miles(self) -> float:
        """Canonical radius in miles."""
        return self._miles

    @property
    def radius_km(self) -> float:
        return miles_to_km(self._miles)

    @property
    def radius_m(self) -> float:
        """Radius in meters, for drawing the map circle."""
        return self.radius_km * 1000.0

    @property
    def bounds(self) -> tuple[int, int]:
        """Slider `(min, max)` in the currently selected unit."""
        return self._min, self._max[self._unit]

    @property
    def display_value(self) -> int:
        """The integer the slider shows in the selected unit."""
        return round(to_display(self._miles, self._unit))

    def set_display_value(self, value: str | float | int) -> int:
        """Set the radius from a slider/text value in the selected unit.

        The value is rounded to a whole slider step and clamped into `bounds`.

        Raises:
            InvalidRadius: If the value is non-numeric or not positive.
        """
        lo, hi = self.bounds
        shown = min(max(round(parse_radius(value)), lo), hi)
        self._miles = to_canonical(shown, self._unit)
        return self.display_value

    def set_unit(self, unit: DistanceUnit) -> int:
        """Switch the display unit, re-deriving the canonical value from the rounded display."""
        if unit is self._unit:
            return self.display_value
        shown = round(to_display(self._miles, unit))
        self._unit = unit
        self._miles = to_canonical(shown, unit)
        return self.display_value
