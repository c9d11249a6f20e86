"""Generation constants and splicer input definitions."""

from dataclasses import dataclass, field
from typing import Tuple

MSF_VERSION = 0x14


@dataclass(frozen=True)
class FilamentInput:
    """One splicer input as listed in the header color table.

    Attributes:
        color: Six-digit RGB hex color, e.g. "FFFFFF"
        name: Color name written into the table, e.g. "White"
        material: Material name, e.g. "PLA"
        filament_type: Splicer filament type code
    """

    color: str
    name: str
    material: str = "PLA"
    filament_type: int = 1

    def __post_init__(self) -> None:
        """Validate the color code."""
        if len(self.color) != 6:
            raise ValueError(f"color must be 6 hex digits, got {self.color!r}")
        int(self.color, 16)

    def encode(self) -> str:
        """Header token: type, color and ``Name_Material``."""
        return f"D{self.filament_type}{self.color.upper()}{self.name}_{self.material}"


DEFAULT_INPUTS: Tuple[FilamentInput, ...] = (
    FilamentInput(color="FFFFFF", name="White"),
    FilamentInput(color="0F80FF", name="DodgerBlue"),
    FilamentInput(color="E8D89A", name="Khaki"),
    FilamentInput(color="000000", name="Black"),
)


@dataclass(frozen=True)
class GenerationSettings:
    """Fixed parameters of the bleed test program.

    Attributes:
        line_volume: Nominal filament volume per fill line (mm³)
        priming_length: Filament consumed by the start G-code purge (mm)
        margin: Clear border around the bed edge (mm)
        padding: Gap between grid cells (mm)
        marker_volume: Purge volume for identity marker squares (mm³)
        square_volume: Purge volume for transition squares (mm³)
        sentinel_tool: Tool id of the final toolchange that flushes the last splice
        travel_feed: Travel feed rate (mm/min)
        print_feed: Extrusion feed rate (mm/min)
        z_feed: Z move feed rate (mm/min)
        z_lift: Lift above layer height after a square (mm)
        annotation_stroke: Length of an annotation marker stroke (mm)
        job_name: Job identifier written into the header
        inputs: Splicer inputs for the header color table
        msf_version: Header format version
    """

    line_volume: float = 5.0
    priming_length: float = 21.5
    margin: float = 10.0
    padding: float = 5.0
    marker_volume: float = 200.0
    square_volume: float = 500.0
    sentinel_tool: int = 5
    travel_feed: float = 9000.0
    print_feed: float = 4000.0
    z_feed: float = 600.0
    z_lift: float = 0.5
    annotation_stroke: float = 5.0
    job_name: str = "bleedsquares"
    inputs: Tuple[FilamentInput, ...] = field(default=DEFAULT_INPUTS)
    msf_version: int = MSF_VERSION

    def __post_init__(self) -> None:
        """Validate volumes and spacing."""
        if self.line_volume <= 0:
            raise ValueError(f"line_volume must be positive, got {self.line_volume}")
        if self.marker_volume <= 0 or self.square_volume <= 0:
            raise ValueError("purge volumes must be positive")
        if self.margin < 0 or self.padding < 0:
            raise ValueError("margin and padding must be non-negative")
        if self.priming_length < 0:
            raise ValueError(f"priming_length must be non-negative, got {self.priming_length}")
        if not self.inputs:
            raise ValueError("at least one filament input is required")
