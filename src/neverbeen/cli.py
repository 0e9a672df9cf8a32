"""
NeverBeen CLI entrypoint.

This CLI is intended for quick local demos and debugging without the web UI:
- `sample`: generate random destination(s) around an origin
- `distance`: great-circle distance between two points
- `dms`: convert decimal degrees to DMS (or back with `--parse`)
- `search`: look up origin candidates by place name
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from neverbeen.config.settings import Settings, get_settings
from neverbeen.core.dms import Axis, format_dms, format_point_dms, parse_dms, to_decimal, to_dms
from neverbeen.core.errors import NeverBeenError
from neverbeen.core.geo import haversine_km, initial_bearing_deg, parse_geo_point, parse_latitude, parse_longitude
from neverbeen.core.logging import configure_logging
from neverbeen.core.sampler import RandomPointSampler, SampleResult
from neverbeen.core.units import DistanceUnit, format_distance, km_to_unit, miles_to_km, parse_radius, to_canonical
from neverbeen.domain.models import SampleResponse
from neverbeen.ingestion.place_search import PlaceSearchClient, PlaceSearchError

_AXES = {"lat": Axis.LATITUDE, "lon": Axis.LONGITUDE}


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {n}")
    return n


def _sample_response(result: SampleResult, *, unit: DistanceUnit, mode: str, settings: Settings) -> SampleResponse:
    decimals = settings.display.seconds_decimals
    return SampleResponse.from_result(
        result,
        unit=unit,
        mode=mode,  # type: ignore[arg-type]
        origin_dms=format_point_dms(result.origin, seconds_decimals=decimals),
        destination_dms=format_point_dms(result.point, seconds_decimals=decimals),
        distance_text=format_distance(result.distance_km, unit, decimals=settings.display.distance_decimals),
    )


def _cmd_sample(args: argparse.Namespace) -> int:
    """Handle the `sample` subcommand."""
    settings = get_settings()
    origin = parse_geo_point(args.lat, args.lon)
    unit = DistanceUnit(args.unit or settings.radius.default_unit)
    if args.radius is None:
        radius_km = miles_to_km(settings.radius.default_miles)
    else:
        radius_km = miles_to_km(to_canonical(parse_radius(args.radius), unit))

    mode = args.mode or settings.sampling.mode
    seed = args.seed if args.seed is not None else settings.sampling.seed
    sampler = RandomPointSampler(seed=seed, mode=mode, earth_radius_km=settings.geo.earth_radius_km)

    responses = [
        _sample_response(sampler.sample_result(origin, radius_km), unit=unit, mode=mode, settings=settings)
        for _ in range(args.count)
    ]

    if args.json:
        payload: Any = [r.model_dump(mode="json") for r in responses]
        print(json.dumps(payload if len(payload) > 1 else payload[0], ensure_ascii=False, indent=2))
        return 0

    o_lat, o_lon = responses[0].origin_dms
    print(f"Origin: {o_lat} {o_lon}")
    for i, r in enumerate(responses, start=1):
        d_lat, d_lon = r.destination_dms
        print(
            f"{i:>2}. {d_lat} {d_lon}  ({r.destination.lat:.6f}, {r.destination.lon:.6f})  "
            f"{r.distance_text} at {r.bearing_deg:.0f}°"
        )
    return 0


def _cmd_distance(args: argparse.Namespace) -> int:
    settings = get_settings()
    a = parse_geo_point(args.lat1, args.lon1)
    b = parse_geo_point(args.lat2, args.lon2)
    unit = DistanceUnit(args.unit)
    km = haversine_km(a, b, radius_km=settings.geo.earth_radius_km)
    if args.json:
        print(
            json.dumps(
                {
                    "distance_km": km,
                    "distance": km_to_unit(km, unit),
                    "unit": unit.value,
                    "initial_bearing_deg": initial_bearing_deg(a, b),
                },
                indent=2,
            )
        )
        return 0
    print(format_distance(km, unit, decimals=settings.display.distance_decimals))
    return 0


def _cmd_dms(args: argparse.Namespace) -> int:
    settings = get_settings()
    axis = _AXES[args.axis]
    if args.parse:
        print(f"{to_decimal(parse_dms(args.parse, axis)):.6f}")
        return 0
    if args.value is None:
        raise NeverBeenError("dms needs a VALUE or --parse TEXT")
    value = parse_latitude(args.value) if axis is Axis.LATITUDE else parse_longitude(args.value)
    print(format_dms(to_dms(value, axis), seconds_decimals=settings.display.seconds_decimals))
    return 0


def _cmd_search(args: argparse.Namespace) -> int:
    settings = get_settings()
    client = PlaceSearchClient(settings)
    candidates = client.search(args.query, limit=args.limit)
    if not candidates:
        print("No results.")
        return 1
    for i, c in enumerate(candidates, start=1):
        lat, lon = format_point_dms(c.point, seconds_decimals=settings.display.seconds_decimals)
        print(f"{i:>2}. {c.display_name}")
        print(f"    {c.point.lat:.6f}, {c.point.lon:.6f}  ({lat} {lon})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the NeverBeen CLI."""
    parser = argparse.ArgumentParser(prog="neverbeen")
    sub = parser.add_subparsers(dest="command", required=True)

    s = sub.add_parser("sample", help="Generate random destination(s) within a radius of an origin.")
    s.add_argument("--lat", required=True, type=str)
    s.add_argument("--lon", required=True, type=str)
    s.add_argument("--radius", type=str, default=None, help="Radius in --unit (default from config, in miles)")
    s.add_argument("--unit", choices=[u.value for u in DistanceUnit], default=None)
    s.add_argument("--seed", type=int, default=None, help="Seed for reproducible draws")
    s.add_argument(
        "--mode",
        choices=["distance", "area"],
        default=None,
        help="distance: uniform distance (default); area: uniform over the disc",
    )
    s.add_argument("--count", type=_positive_int, default=1)
    s.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    s.set_defaults(func=_cmd_sample)

    d = sub.add_parser("distance", help="Great-circle distance between two points.")
    d.add_argument("lat1", type=str)
    d.add_argument("lon1", type=str)
    d.add_argument("lat2", type=str)
    d.add_argument("lon2", type=str)
    d.add_argument("--unit", choices=[u.value for u in DistanceUnit], default=DistanceUnit.MILES.value)
    d.add_argument("--json", action="store_true")
    d.set_defaults(func=_cmd_distance)

    m = sub.add_parser("dms", help="Convert decimal degrees to DMS, or DMS text back with --parse.")
    m.add_argument("value", nargs="?", default=None, type=str)
    m.add_argument("--axis", choices=sorted(_AXES), required=True)
    m.add_argument("--parse", type=str, default=None, help="DMS text, e.g. 55°46'27\"N")
    m.set_defaults(func=_cmd_dms)

    q = sub.add_parser("search", help="Search places by name (OpenStreetMap Nominatim).")
    q.add_argument("query", type=str)
    q.add_argument("--limit", type=int, default=None)
    q.set_defaults(func=_cmd_search)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m neverbeen.cli`."""
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    try:
        configure_logging()
        return int(func(args))
    except NeverBeenError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except PlaceSearchError as e:
        print(f"error: {e}", file=sys.stderr)
        return 3


if __name__ == "__main__":
    raise SystemExit(main())
