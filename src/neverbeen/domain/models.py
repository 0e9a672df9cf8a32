"""
Domain models (Pydantic).

These types are the JSON contract shared by the API and the CLI `--json` output:
- inputs (`SampleRequest`)
- outputs (`SampleResponse`, `DistanceResponse`, `DMSResponse`, `PlaceSearchResponse`)

The geometry itself works on the plain dataclasses in `neverbeen.core`; these models
only validate at the edge and serialize results.
"""

from __future__ import annotations

from math import degrees
from typing import Literal

from pydantic import BaseModel, Field

from neverbeen.core.dms import DMS, format_dms, round_dms
from neverbeen.core.geo import GeoPoint as CoreGeoPoint
from neverbeen.core.sampler import SampleResult
from neverbeen.core.units import DistanceUnit, km_to_unit, miles_to_km


class GeoPoint(BaseModel):
    """A geographic point in decimal degrees."""

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)

    def to_core(self) -> CoreGeoPoint:
        return CoreGeoPoint(lat=self.lat, lon=self.lon)

    @classmethod
    def from_core(cls, point: CoreGeoPoint) -> "GeoPoint":
        return cls(lat=point.lat, lon=point.lon)


class DMSParts(BaseModel):
    degrees: int = Field(..., ge=0)
    minutes: int = Field(..., ge=0, lt=60)
    seconds: float = Field(..., ge=0, lt=60)
    hemisphere: Literal["N", "S", "E", "W"]
    text: str

    @classmethod
    def from_dms(cls, dms: DMS, *, seconds_decimals: int = 2) -> "DMSParts":
        shown = round_dms(dms, seconds_decimals)
        return cls(
            degrees=shown.degrees,
            minutes=shown.minutes,
            seconds=shown.seconds,
            hemisphere=dms.hemisphere,  # type: ignore[arg-type]
            text=format_dms(dms, seconds_decimals=seconds_decimals),
        )


class SampleRequest(BaseModel):
    """Request payload for one random destination."""

    origin: GeoPoint
    radius: float = Field(..., gt=0)
    unit: DistanceUnit = DistanceUnit.MILES
    seed: int | None = None
    mode: Literal["distance", "area"] | None = None

    @property
    def radius_km(self) -> float:
        return self.radius if self.unit is DistanceUnit.KILOMETERS else miles_to_km(self.radius)


class SampleResponse(BaseModel):
    origin: GeoPoint
    destination: GeoPoint
    origin_dms: tuple[str, str]
    destination_dms: tuple[str, str]
    distance_km: float
    distance: float
    unit: DistanceUnit
    distance_text: str
    bearing_deg: float = Field(..., ge=0, lt=360)
    mode: Literal["distance", "area"]

    @classmethod
    def from_result(
        cls,
        result: SampleResult,
        *,
        unit: DistanceUnit,
        mode: Literal["distance", "area"],
        origin_dms: tuple[str, str],
        destination_dms: tuple[str, str],
        distance_text: str,
    ) -> "SampleResponse":
        return cls(
            origin=GeoPoint.from_core(result.origin),
            destination=GeoPoint.from_core(result.point),
            origin_dms=origin_dms,
            destination_dms=destination_dms,
            distance_km=result.distance_km,
            distance=km_to_unit(result.distance_km, unit),
            unit=unit,
            distance_text=distance_text,
            bearing_deg=degrees(result.bearing_rad) % 360.0,
            mode=mode,
        )


class DistanceResponse(BaseModel):
    a: GeoPoint
    b: GeoPoint
    distance_km: float
    distance: float
    unit: DistanceUnit
    distance_text: str
    initial_bearing_deg: float


class DMSResponse(BaseModel):
    value: float
    axis: Literal["lat", "lon"]
    dms: DMSParts


class PlaceCandidateOut(BaseModel):
    display_name: str
    location: GeoPoint
    location_dms: tuple[str, str]


class PlaceSearchResponse(BaseModel):
    query: str
    results: list[PlaceCandidateOut]
