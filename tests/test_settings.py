from __future__ import annotations

import pytest

from neverbeen.config.settings import Settings, get_settings
from neverbeen.core.errors import InvalidConfig


@pytest.fixture
def fresh_settings():
    # `get_settings` is cached; clear it so env changes are picked up, and again afterwards
    # so other tests see the packaged defaults.
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()


def test_packaged_defaults(fresh_settings):
    settings = fresh_settings()
    assert settings.geo.earth_radius_km == 6371.0
    assert (settings.geo.default_origin.lat, settings.geo.default_origin.lon) == (55.774167, -3.918333)
    assert settings.sampling.mode == "distance"
    assert (settings.radius.min, settings.radius.max_miles, settings.radius.max_km) == (1, 400, 644)
    assert settings.radius.default_miles == 100
    assert settings.display.seconds_decimals == 2


def test_env_overrides(monkeypatch, fresh_settings):
    monkeypatch.setenv("NEVERBEEN_LOG_LEVEL", "debug")
    monkeypatch.setenv("NEVERBEEN_SEED", "17")
    monkeypatch.setenv("NEVERBEEN_SAMPLING_MODE", "AREA")
    monkeypatch.setenv("NEVERBEEN_NOMINATIM_URL", "https://nominatim.example.test")

    settings = fresh_settings()
    assert settings.app.log_level == "debug"
    assert settings.sampling.seed == 17
    assert settings.sampling.mode == "area"
    assert settings.place_search.base_url == "https://nominatim.example.test"


def test_external_config_file(monkeypatch, tmp_path, fresh_settings):
    path = tmp_path / "neverbeen.yaml"
    path.write_text("radius:\n  default_miles: 25\n  default_unit: km\n", encoding="utf-8")
    monkeypatch.setenv("NEVERBEEN_CONFIG_PATH", str(path))

    settings = fresh_settings()
    assert settings.radius.default_miles == 25
    assert settings.radius.default_unit == "km"
    # Sections missing from the file fall back to model defaults.
    assert settings.geo.earth_radius_km == 6371.0


def test_invalid_values_are_rejected():
    with pytest.raises(ValueError):
        Settings.model_validate({"sampling": {"mode": "spiral"}})
    with pytest.raises(ValueError, match="max_miles"):
        Settings.model_validate({"radius": {"min": 10, "max_miles": 5}})


def test_default_radius_must_fit_slider_bounds():
    with pytest.raises(ValueError, match="default_miles"):
        Settings.model_validate({"radius": {"default_miles": 1000}})


def test_non_integer_seed_names_the_variable(monkeypatch, fresh_settings):
    monkeypatch.setenv("NEVERBEEN_SEED", "abc")
    with pytest.raises(InvalidConfig, match="NEVERBEEN_SEED"):
        fresh_settings()
