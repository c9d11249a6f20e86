"""Shared plumbing for the G-code emitters."""

from typing import TextIO

from bleed_squares.encoding import float_to_hex
from bleed_squares.filament import filament_cross_section, line_cross_section
from bleed_squares.models import ExtrusionProfile, GenerationSettings
from bleed_squares.tracker import ExtrusionTracker


def write_ping(out: TextIO, tracker: ExtrusionTracker) -> None:
    """Record a ping and write the firmware command carrying its position."""
    ping = tracker.ping()
    out.write("; -- ping! -- \n")
    out.write("G4 S0\n")
    out.write(f"O31 {float_to_hex(ping.position)}\n")
    out.write("; -- /ping -- \n")


def write_retract(out: TextIO, profile: ExtrusionProfile, prime: bool = False) -> None:
    """Retract (or prime, undoing a retract) by the configured length.

    Retract/prime pairs cancel out and are not passed through the tracker.
    """
    sign = "" if prime else "-"
    out.write(f"G1 E{sign}{profile.retract_length:.3f} F{profile.retract_feed:.2f}\n")


class GCodeEmitter:
    """Base class holding the geometry every emitter derives its moves from.

    Args:
        profile: Extrusion geometry and splicer thresholds
        settings: Generation constants (line volume, feed rates)
    """

    def __init__(self, profile: ExtrusionProfile, settings: GenerationSettings) -> None:
        self.profile = profile
        self.settings = settings
        self.line_xsection = line_cross_section(profile.extrusion_width, profile.layer_height)
        self.filament_xsection = filament_cross_section(profile.filament_diameter)

    def _extrude(self, out: TextIO, tracker: ExtrusionTracker, length: float) -> float:
        """Account for the next extruding line, pinging first if one is due."""
        if tracker.ping_due(self.profile.linear_ping):
            write_ping(out, tracker)
        return tracker.extrude(length)

    def _feed(self, feed: float) -> str:
        return f"F{feed:g}"
