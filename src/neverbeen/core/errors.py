"""
Error taxonomy.

Every validation failure raised by the core derives from `NeverBeenError`, which is a
`ValueError` so callers that only care about "bad input" can catch the builtin.

The API maps these to HTTP 422 and the CLI to exit code 2; see `kind` for the stable
machine-readable tag.
"""

from __future__ import annotations


class NeverBeenError(ValueError):
    """Base class for input/validation errors raised by the core."""

    kind = "error"


class InvalidCoordinate(NeverBeenError):
    """Latitude/longitude is non-numeric or out of range."""

    kind = "invalid_coordinate"


class InvalidRadius(NeverBeenError):
    """Radius is negative, non-finite or (for user input) not strictly positive."""

    kind = "invalid_radius"


class SamplingFailure(NeverBeenError):
    """Projection produced a non-finite coordinate (should not happen for valid input)."""

    kind = "sampling_failure"


class InvalidConfig(NeverBeenError):
    """A configuration value (YAML or environment override) cannot be used."""

    kind = "invalid_config"
