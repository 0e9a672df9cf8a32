import pytest

from neverbeen.core.dms import DMS, Axis, format_dms, format_point_dms, parse_dms, to_decimal, to_dms
from neverbeen.core.errors import InvalidCoordinate
from neverbeen.core.geo import GeoPoint


@pytest.mark.parametrize("axis", [Axis.LATITUDE, Axis.LONGITUDE])
@pytest.mark.parametrize("value", [0.0, 45.5, -33.333, 89.9999, -179.9999])
def test_dms_round_trip(axis, value):
    assert to_decimal(to_dms(value, axis)) == pytest.approx(value, abs=1e-4)


def test_hemisphere_depends_on_axis():
    assert to_dms(-3.918333, Axis.LONGITUDE).hemisphere == "W"
    assert to_dms(-3.918333, Axis.LATITUDE).hemisphere == "S"
    assert to_dms(55.774167, Axis.LATITUDE).hemisphere == "N"
    assert to_dms(55.774167, Axis.LONGITUDE).hemisphere == "E"
    assert to_dms(0.0, Axis.LATITUDE).hemisphere == "N"
    assert to_dms(0.0, Axis.LONGITUDE).hemisphere == "E"


def test_to_dms_parts():
    dms = to_dms(55.774167, Axis.LATITUDE)
    assert (dms.degrees, dms.minutes) == (55, 46)
    assert dms.seconds == pytest.approx(27.0012, abs=1e-3)
    assert 0 <= dms.seconds < 60


def test_to_decimal_signs_south_and_west():
    assert to_decimal(DMS(degrees=3, minutes=55, seconds=6, hemisphere="W")) == pytest.approx(-3.918333, abs=1e-6)
    assert to_decimal(DMS(degrees=33, minutes=30, seconds=0, hemisphere="S")) == pytest.approx(-33.5)
    assert to_decimal(DMS(degrees=33, minutes=30, seconds=0, hemisphere="E")) == pytest.approx(33.5)


def test_format_matches_display_style():
    lat, lon = format_point_dms(GeoPoint(lat=55.774167, lon=-3.918333))
    assert lat == "55°46'27.00\"N"
    assert lon == "3°55'6.00\"W"
    assert format_dms(to_dms(45.5, Axis.LONGITUDE), seconds_decimals=0) == "45°30'0\"E"


@pytest.mark.parametrize(
    ("text", "axis", "expected"),
    [
        ("55°46'27.00\"N", Axis.LATITUDE, 55.774167),
        ("3°55'6\"W", Axis.LONGITUDE, -3.918333),
        ("3 55 6 W", Axis.LONGITUDE, -3.918333),
        ("33°S", Axis.LATITUDE, -33.0),
        ("179 59 59.64 e", Axis.LONGITUDE, 179.9999),
    ],
)
def test_parse_dms(text, axis, expected):
    assert to_decimal(parse_dms(text, axis)) == pytest.approx(expected, abs=1e-4)


def test_parse_dms_round_trips_formatted_text():
    for value, axis in [(-33.333, Axis.LATITUDE), (151.2093, Axis.LONGITUDE)]:
        text = format_dms(to_dms(value, axis), seconds_decimals=4)
        assert to_decimal(parse_dms(text, axis)) == pytest.approx(value, abs=1e-6)


@pytest.mark.parametrize(
    ("text", "axis", "match"),
    [
        ("55°46'27\"E", Axis.LATITUDE, "not valid for lat"),
        ("3°55'6\"N", Axis.LONGITUDE, "not valid for lon"),
        ("91°0'0\"N", Axis.LATITUDE, "out of range"),
        ("10°61'0\"N", Axis.LATITUDE, "below 60"),
        ("north", Axis.LATITUDE, "Unrecognized"),
        ("", Axis.LONGITUDE, "Unrecognized"),
    ],
)
def test_parse_dms_rejects_bad_text(text, axis, match):
    with pytest.raises(InvalidCoordinate, match=match):
        parse_dms(text, axis)


def test_to_dms_rejects_non_finite():
    with pytest.raises(InvalidCoordinate):
        to_dms(float("nan"), Axis.LATITUDE)


@pytest.mark.parametrize("axis", [Axis.LATITUDE, Axis.LONGITUDE])
@pytest.mark.parametrize("value", [10.1, 45.1, -0.2, 0.3, -33.7, 12.9999999])
def test_formatted_seconds_carry_and_parse_back(axis, value):
    text = format_dms(to_dms(value, axis))
    parsed = parse_dms(text, axis)
    assert 0 <= parsed.seconds < 60
    assert to_decimal(parsed) == pytest.approx(value, abs=1e-5)


def test_seconds_rounding_carries_into_minutes_and_degrees():
    assert format_dms(to_dms(10.1, Axis.LATITUDE)) == "10°6'0.00\"N"
    assert format_dms(to_dms(-0.2, Axis.LONGITUDE)) == "0°12'0.00\"W"
    assert format_dms(to_dms(12.9999999, Axis.LATITUDE)) == "13°0'0.00\"N"
