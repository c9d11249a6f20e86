"""Splicer input presets for the header color table."""

from enum import Enum
from typing import Tuple

from bleed_squares.models.settings import DEFAULT_INPUTS, FilamentInput


class InputPreset(Enum):
    """Common sets of four filaments loaded into the splicer."""

    DEFAULT = "default"  # White, DodgerBlue, Khaki, Black PLA
    PRIMARY = "primary"  # High-contrast primaries, easiest to read bleed
    GRAYSCALE = "grayscale"  # Neutral shades for judging residual tint


def create_inputs(preset: InputPreset) -> Tuple[FilamentInput, ...]:
    """
    Create the splicer input table for a preset.

    Args:
        preset: Input preset to use

    Returns:
        Tuple of four FilamentInput entries, tool 0 first

    Examples:
        >>> inputs = create_inputs(InputPreset.DEFAULT)
        >>> inputs[1].encode()
        'D10F80FFDodgerBlue_PLA'
    """
    if preset == InputPreset.DEFAULT:
        return DEFAULT_INPUTS
    elif preset == InputPreset.PRIMARY:
        return (
            FilamentInput(color="FFFFFF", name="White"),
            FilamentInput(color="FF0000", name="Red"),
            FilamentInput(color="0000FF", name="Blue"),
            FilamentInput(color="FFFF00", name="Yellow"),
        )
    elif preset == InputPreset.GRAYSCALE:
        return (
            FilamentInput(color="FFFFFF", name="White"),
            FilamentInput(color="C0C0C0", name="Silver"),
            FilamentInput(color="808080", name="Gray"),
            FilamentInput(color="000000", name="Black"),
        )
    else:
        raise ValueError(f"Unknown input preset: {preset}")
