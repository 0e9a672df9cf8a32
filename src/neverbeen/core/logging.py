"""
Logging configuration.

We use a YAML logging config (`src/neverbeen/config/logging.yaml`) and then apply
runtime overrides from settings (e.g., `NEVERBEEN_LOG_LEVEL`).
"""

from __future__ import annotations

import logging.config

from neverbeen.config.settings import get_logging_config, get_settings


def configure_logging() -> None:
    """Configure the Python logging system based on packaged YAML config + settings."""
    settings = get_settings()
    # dictConfig mutates nested dicts; keep the cached copy pristine.
    config = {k: (dict(v) if isinstance(v, dict) else v) for k, v in get_logging_config().items()}
    config["handlers"] = {name: dict(h) for name, h in config.get("handlers", {}).items()}

    level = settings.app.log_level.upper()
    config["root"] = {**config.get("root", {}), "level": level}
    for handler in config["handlers"].values():
        if "level" in handler:
            handler["level"] = level

    logging.config.dictConfig(config)
