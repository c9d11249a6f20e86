"""Conversions between linear and volumetric filament quantities.

Accounting uses full double precision; rounding happens only when values are
formatted into G-code text.
"""

import math


def line_cross_section(extrusion_width: float, layer_height: float) -> float:
    """Cross-section area of a printed line in mm².

    Examples:
        >>> line_cross_section(0.4, 0.2)
        0.08000000000000002
    """
    return extrusion_width * layer_height


def filament_cross_section(filament_diameter: float) -> float:
    """Cross-section area of the raw filament in mm².

    Examples:
        >>> round(filament_cross_section(1.75), 4)
        2.4053
    """
    return math.pi * (filament_diameter / 2) ** 2


def length_for_volume(volume: float, cross_section: float) -> float:
    """Filament length (mm) holding ``volume`` mm³ at the given cross-section."""
    return volume / cross_section


def volume_for_length(length: float, cross_section: float) -> float:
    """Volume (mm³) of ``length`` mm of filament at the given cross-section."""
    return length * cross_section
