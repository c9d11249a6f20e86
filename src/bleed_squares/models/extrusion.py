"""Extrusion geometry and splicer thresholds for one generation run."""

from dataclasses import dataclass

from bleed_squares.exceptions import GeometryError


@dataclass(frozen=True)
class ExtrusionProfile:
    """Numbers the emitters need from the slicer configuration.

    Only the first element of per-tool arrays is used; all tools are
    assumed to share tool 0's filament and retraction settings.

    Attributes:
        extrusion_width: Line width in millimeters
        layer_height: Layer height in millimeters
        filament_diameter: Filament diameter in millimeters
        retract_length: Retraction length in millimeters
        retract_speed: Retraction speed in millimeters per second
        splice_offset: Filament length after a splice still inside the transition
        linear_ping: Extrusion distance between pings in millimeters
        extra_end_filament: Tail filament added to the final splice in millimeters
    """

    extrusion_width: float
    layer_height: float
    filament_diameter: float
    retract_length: float
    retract_speed: float
    splice_offset: float = 0.0
    linear_ping: float = 350.0
    extra_end_filament: float = 0.0

    def __post_init__(self) -> None:
        """Validate that line and filament dimensions are positive."""
        if self.extrusion_width <= 0:
            raise GeometryError(
                f"extrusion_width must be positive, got {self.extrusion_width}"
            )
        if self.layer_height <= 0:
            raise GeometryError(f"layer_height must be positive, got {self.layer_height}")
        if self.filament_diameter <= 0:
            raise GeometryError(
                f"filament_diameter must be positive, got {self.filament_diameter}"
            )

    @property
    def retract_feed(self) -> float:
        """Retraction feed rate in millimeters per minute."""
        return self.retract_speed * 60

    @classmethod
    def from_config(cls, config) -> "ExtrusionProfile":
        """Build a profile from a :class:`~bleed_squares.config.SlicerConfig`."""
        return cls(
            extrusion_width=config.extrusion_width(),
            layer_height=config.layer_height(),
            filament_diameter=config.filament_diameter()[0],
            retract_length=config.retract_length()[0],
            retract_speed=config.retract_speed()[0],
            splice_offset=config.splice_offset(),
            linear_ping=config.linear_ping(),
            extra_end_filament=config.extra_end_filament(),
        )
