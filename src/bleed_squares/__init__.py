"""Splicer bleed test generation for multi-material 3D printers."""

from .config import SlicerConfig
from .generator import BleedTestGenerator
from .models import ExtrusionProfile, GenerationSettings, Ping, Splice
from .tracker import ExtrusionTracker

__all__ = [
    "BleedTestGenerator",
    "SlicerConfig",
    "ExtrusionProfile",
    "GenerationSettings",
    "ExtrusionTracker",
    "Splice",
    "Ping",
]
