"""
API routes.

Endpoints:
- POST `/api/sample`: one random destination around an origin.
- GET  `/api/distance`: great-circle distance between two points.
- GET  `/api/dms`: decimal degrees -> DMS parts for an axis.
- GET  `/api/search`: place-name lookup for choosing an origin.
- GET  `/api/settings`: public settings for the frontend (radius bounds, defaults).
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from fastapi import APIRouter, Query

from neverbeen.config.settings import get_settings
from neverbeen.core.dms import Axis, format_point_dms, to_dms
from neverbeen.core.geo import haversine_km, initial_bearing_deg, parse_geo_point, parse_latitude, parse_longitude
from neverbeen.core.sampler import RandomPointSampler
from neverbeen.core.units import DistanceUnit, format_distance, km_to_unit
from neverbeen.domain.models import (
    DistanceResponse,
    DMSParts,
    DMSResponse,
    GeoPoint,
    PlaceCandidateOut,
    PlaceSearchResponse,
    SampleRequest,
    SampleResponse,
)
from neverbeen.ingestion.place_search import PlaceSearchClient

router = APIRouter()


@lru_cache
def _search_client() -> PlaceSearchClient:
    return PlaceSearchClient(get_settings())


@router.get("/api/settings")
def get_public_settings() -> dict:
    """Return the settings the frontend needs to render its controls."""
    settings = get_settings()
    return {
        "default_origin": settings.geo.default_origin.model_dump(),
        "radius": settings.radius.model_dump(),
        "units": [u.value for u in DistanceUnit],
        "sampling_mode": settings.sampling.mode,
        "display": settings.display.model_dump(),
    }


@router.post("/api/sample", response_model=SampleResponse)
def post_sample(request: SampleRequest) -> SampleResponse:
    """Generate one random destination; a fresh sampler per request keeps requests isolated."""
    settings = get_settings()
    mode = request.mode or settings.sampling.mode
    seed = request.seed if request.seed is not None else settings.sampling.seed
    sampler = RandomPointSampler(seed=seed, mode=mode, earth_radius_km=settings.geo.earth_radius_km)
    result = sampler.sample_result(request.origin.to_core(), request.radius_km)

    decimals = settings.display.seconds_decimals
    return SampleResponse.from_result(
        result,
        unit=request.unit,
        mode=mode,
        origin_dms=format_point_dms(result.origin, seconds_decimals=decimals),
        destination_dms=format_point_dms(result.point, seconds_decimals=decimals),
        distance_text=format_distance(
            result.distance_km, request.unit, decimals=settings.display.distance_decimals
        ),
    )


@router.get("/api/distance", response_model=DistanceResponse)
def get_distance(
    lat1: str,
    lon1: str,
    lat2: str,
    lon2: str,
    unit: DistanceUnit = DistanceUnit.MILES,
) -> DistanceResponse:
    settings = get_settings()
    a = parse_geo_point(lat1, lon1)
    b = parse_geo_point(lat2, lon2)
    km = haversine_km(a, b, radius_km=settings.geo.earth_radius_km)
    return DistanceResponse(
        a=GeoPoint.from_core(a),
        b=GeoPoint.from_core(b),
        distance_km=km,
        distance=km_to_unit(km, unit),
        unit=unit,
        distance_text=format_distance(km, unit, decimals=settings.display.distance_decimals),
        initial_bearing_deg=initial_bearing_deg(a, b),
    )


@router.get("/api/dms", response_model=DMSResponse)
def get_dms(value: str, axis: Literal["lat", "lon"]) -> DMSResponse:
    settings = get_settings()
    ax = Axis(axis)
    decimal = parse_latitude(value) if ax is Axis.LATITUDE else parse_longitude(value)
    return DMSResponse(
        value=decimal,
        axis=axis,
        dms=DMSParts.from_dms(to_dms(decimal, ax), seconds_decimals=settings.display.seconds_decimals),
    )


@router.get("/api/search", response_model=PlaceSearchResponse)
def get_search(q: str = Query(..., min_length=1), limit: int | None = Query(None, ge=1, le=40)) -> PlaceSearchResponse:
    """Search origin candidates by name. Upstream failures surface as 502."""
    settings = get_settings()
    candidates = _search_client().search(q, limit=limit)
    decimals = settings.display.seconds_decimals
    return PlaceSearchResponse(
        query=q,
        results=[
            PlaceCandidateOut(
                display_name=c.display_name,
                location=GeoPoint.from_core(c.point),
                location_dms=format_point_dms(c.point, seconds_decimals=decimals),
            )
            for c in candidates
        ],
    )
