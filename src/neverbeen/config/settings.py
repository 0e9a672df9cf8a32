# src/neverbeen/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/neverbeen/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `NEVERBEEN_LOG_LEVEL`, `NEVERBEEN_SEED`)
- an external YAML file via `NEVERBEEN_CONFIG_PATH`

Design rule:
- Tuning knobs (radius bounds, display precision, sampling mode) live in YAML, not in
  the geometry code.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Literal
from neverbeen.core.env import load_dotenv_if_present
from neverbeen.core.errors import InvalidConfig

import yaml
from pydantic import BaseModel, Field, model_validator


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `neverbeen.config`."""
    text = resources.files("neverbeen.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "NeverBeen"
    http_timeout_seconds: float = 15
    log_level: str = "INFO"


class OriginSettings(BaseModel):
    lat: float = Field(55.774167, ge=-90, le=90)
    lon: float = Field(-3.918333, ge=-180, le=180)


class GeoSettings(BaseModel):
    earth_radius_km: float = Field(6371.0, gt=0)
    default_origin: OriginSettings = Field(default_factory=OriginSettings)


class SamplingSettings(BaseModel):
    mode: Literal["distance", "area"] = "distance"
    seed: int | None = None


class RadiusSettings(BaseModel):
    default_miles: float = Field(100, gt=0)
    default_unit: Literal["miles", "km"] = "miles"
    min: int = Field(1, ge=1)
    max_miles: int = Field(400, ge=1)
    max_km: int = Field(644, ge=1)

    @model_validator(mode="after")
    def _validate_bounds(self) -> "RadiusSettings":
        if self.max_miles < self.min or self.max_km < self.min:
            raise ValueError("radius.max_miles and radius.max_km must be >= radius.min")
        if not self.min <= self.default_miles <= self.max_miles:
            raise ValueError(
                f"radius.default_miles must be within [{self.min}, {self.max_miles}], got {self.default_miles}"
            )
        return self


class DisplaySettings(BaseModel):
    seconds_decimals: int = Field(2, ge=0, le=6)
    distance_decimals: int = Field(1, ge=0, le=6)


class PlaceSearchSettings(BaseModel):
    base_url: str = "https://nominatim.openstreetmap.org"
    user_agent: str = "NeverBeen/0.1 (set NEVERBEEN_USER_AGENT to include a contact)"
    limit: int = Field(5, ge=1, le=40)
    timeout_seconds: float | None = None


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    geo: GeoSettings = Field(default_factory=GeoSettings)
    sampling: SamplingSettings = Field(default_factory=SamplingSettings)
    radius: RadiusSettings = Field(default_factory=RadiusSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    place_search: PlaceSearchSettings = Field(default_factory=PlaceSearchSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("NEVERBEEN_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    seed = os.getenv("NEVERBEEN_SEED")
    if seed:
        try:
            data.setdefault("sampling", {})["seed"] = int(seed)
        except ValueError:
            raise InvalidConfig(f"NEVERBEEN_SEED must be an integer, got {seed!r}") from None

    mode = os.getenv("NEVERBEEN_SAMPLING_MODE")
    if mode:
        data.setdefault("sampling", {})["mode"] = mode.strip().lower()

    base_url = os.getenv("NEVERBEEN_NOMINATIM_URL")
    if base_url:
        data.setdefault("place_search", {})["base_url"] = base_url

    user_agent = os.getenv("NEVERBEEN_USER_AGENT")
    if user_agent:
        data.setdefault("place_search", {})["user_agent"] = user_agent

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("NEVERBEEN_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
