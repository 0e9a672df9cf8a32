from starlette.testclient import TestClient

from neverbeen.api.app import app
from neverbeen.core.geo import GeoPoint
from neverbeen.ingestion.place_search import PlaceCandidate, PlaceSearchError


class _StubSearchClient:
    def __init__(self, error: Exception | None = None):
        self._error = error

    def search(self, query: str, *, limit: int | None = None):
        if self._error is not None:
            raise self._error
        return [PlaceCandidate(display_name=f"{query}, Scotland", point=GeoPoint(lat=55.9533, lon=-3.1883))]


def test_sample_endpoint_is_reproducible_with_seed():
    payload = {"origin": {"lat": 55.774167, "lon": -3.918333}, "radius": 100, "unit": "miles", "seed": 11}

    with TestClient(app) as c:
        first = c.post("/api/sample", json=payload)
        second = c.post("/api/sample", json=payload)

    assert first.status_code == 200
    data = first.json()
    assert data == second.json()
    assert data["unit"] == "miles"
    assert data["mode"] == "distance"
    assert 0 <= data["distance"] <= 100 + 1e-6
    assert data["distance_text"].endswith(" miles")
    assert data["origin_dms"] == ["55°46'27.00\"N", "3°55'6.00\"W"]
    assert -90 <= data["destination"]["lat"] <= 90
    assert -180 <= data["destination"]["lon"] <= 180


def test_sample_endpoint_rejects_bad_input():
    with TestClient(app) as c:
        bad_radius = c.post("/api/sample", json={"origin": {"lat": 0, "lon": 0}, "radius": 0})
        bad_origin = c.post("/api/sample", json={"origin": {"lat": 91, "lon": 0}, "radius": 5})
    assert bad_radius.status_code == 422
    assert bad_origin.status_code == 422


def test_distance_endpoint():
    with TestClient(app) as c:
        resp = c.get("/api/distance", params={"lat1": 0, "lon1": 0, "lat2": 1, "lon2": 0, "unit": "km"})
    assert resp.status_code == 200
    data = resp.json()
    assert abs(data["distance_km"] - 111.19492664) < 1e-6
    assert data["distance_text"] == "111.2 km"
    assert abs(data["initial_bearing_deg"]) < 1e-9


def test_distance_endpoint_maps_invalid_coordinate_to_422():
    with TestClient(app) as c:
        resp = c.get("/api/distance", params={"lat1": "abc", "lon1": 0, "lat2": 1, "lon2": 0})
    assert resp.status_code == 422
    assert resp.json()["error"] == "invalid_coordinate"


def test_dms_endpoint():
    with TestClient(app) as c:
        resp = c.get("/api/dms", params={"value": "-3.918333", "axis": "lon"})
    assert resp.status_code == 200
    dms = resp.json()["dms"]
    assert (dms["degrees"], dms["minutes"], dms["hemisphere"]) == (3, 55, "W")
    assert dms["text"] == "3°55'6.00\"W"


def test_dms_endpoint_parts_agree_with_rounded_text():
    with TestClient(app) as c:
        resp = c.get("/api/dms", params={"value": "10.1", "axis": "lat"})
    assert resp.status_code == 200
    dms = resp.json()["dms"]
    assert (dms["degrees"], dms["minutes"], dms["seconds"]) == (10, 6, 0.0)
    assert dms["text"] == "10°6'0.00\"N"


def test_search_endpoint(monkeypatch):
    import neverbeen.api.routes as routes

    monkeypatch.setattr(routes, "_search_client", lambda: _StubSearchClient())
    with TestClient(app) as c:
        resp = c.get("/api/search", params={"q": "Edinburgh"})
    assert resp.status_code == 200
    [hit] = resp.json()["results"]
    assert hit["display_name"] == "Edinburgh, Scotland"
    assert hit["location"] == {"lat": 55.9533, "lon": -3.1883}


def test_search_endpoint_upstream_failure_is_502(monkeypatch):
    import neverbeen.api.routes as routes

    monkeypatch.setattr(routes, "_search_client", lambda: _StubSearchClient(PlaceSearchError("down")))
    with TestClient(app) as c:
        resp = c.get("/api/search", params={"q": "Edinburgh"})
    assert resp.status_code == 502
    assert resp.json()["error"] == "place_search_unavailable"


def test_public_settings():
    with TestClient(app) as c:
        data = c.get("/api/settings").json()
    assert data["radius"]["max_km"] == 644
    assert data["units"] == ["miles", "km"]
