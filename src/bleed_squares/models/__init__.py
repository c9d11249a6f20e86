"""Core data models for bleed test generation.

This package contains the geometry, telemetry and settings dataclasses.
"""

from bleed_squares.models.extrusion import ExtrusionProfile
from bleed_squares.models.geometry import Rect, Square
from bleed_squares.models.settings import (
    DEFAULT_INPUTS,
    MSF_VERSION,
    FilamentInput,
    GenerationSettings,
)
from bleed_squares.models.telemetry import Ping, Splice

__all__ = [
    "Rect",
    "Square",
    "Splice",
    "Ping",
    "ExtrusionProfile",
    "FilamentInput",
    "GenerationSettings",
    "DEFAULT_INPUTS",
    "MSF_VERSION",
]
