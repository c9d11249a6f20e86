"""Purge square emission: outline plus zigzag fill of a target volume."""

import logging
from typing import TextIO, Tuple

from bleed_squares.exceptions import GeometryError
from bleed_squares.filament import length_for_volume, volume_for_length
from bleed_squares.gcode import GCodeEmitter, write_retract
from bleed_squares.models import ExtrusionProfile, GenerationSettings
from bleed_squares.tracker import ExtrusionTracker

logger = logging.getLogger(__name__)


class PurgeSquareEmitter(GCodeEmitter):
    """
    Emit one calibration square consuming roughly a target volume of filament.

    The square is drawn downward and to the right of its anchor (top-left
    corner). A fill line holds ``line_volume`` mm³: an X move plus one
    ``extrusion_width`` step in Y. While the current splice is still inside
    the splice offset, each Y step is added to the transition distance, which
    locates the color boundary for the annotation drawn later.
    """

    def __init__(self, profile: ExtrusionProfile, settings: GenerationSettings) -> None:
        super().__init__(profile, settings)
        self.ystep = profile.extrusion_width
        self.line_width = length_for_volume(settings.line_volume, self.line_xsection) - self.ystep
        if self.line_width <= 0:
            raise GeometryError(
                f"fill line width {self.line_width:.3f} mm is not positive; "
                f"line volume {settings.line_volume} mm³ is too small for the extrusion width"
            )

        ystep_volume = self.ystep * self.line_xsection
        self.x_length = length_for_volume(settings.line_volume - ystep_volume, self.filament_xsection)
        self.y_length = length_for_volume(ystep_volume, self.filament_xsection)

    def footprint(self, volume: float) -> Tuple[float, float]:
        """Width and height (mm) of the outline drawn for ``volume`` mm³."""
        height = ((volume / self.settings.line_volume) + 1) * self.profile.extrusion_width
        width = self.line_width + self.profile.extrusion_width
        return width, height

    def emit(
        self,
        out: TextIO,
        tracker: ExtrusionTracker,
        anchor: Tuple[float, float],
        volume: float,
    ) -> float:
        """Write the square and return the transition Y distance.

        Args:
            out: Text sink receiving G-code
            tracker: Accounting state for the run
            anchor: Top-left corner (x, y) of the square
            volume: Target purge volume in mm³

        Returns:
            Vertical distance (mm) filled while the current splice was still
            shorter than the splice offset
        """
        p = self.profile
        s = self.settings
        at_x, at_y = anchor
        box_width, box_height = self.footprint(volume)

        out.write(
            f"\n; --- purge block at {at_x:.2f}, {at_y:.2f} "
            f"layer height {p.layer_height:.2f} ---\n\n"
        )
        out.write(f"G0 X{at_x + box_width:.3f} Y{at_y:.3f} {self._feed(s.travel_feed)}\n")
        out.write(f"G1 Z{p.layer_height:.3f} {self._feed(s.z_feed)}\n")

        # starts retracted
        out.write("M82\nG92 E0\nG4 S0\n")
        write_retract(out, p, prime=True)
        out.write("M82\nG92 E0\n")

        edge_height = length_for_volume(box_height * self.line_xsection, self.filament_xsection)
        edge_width = length_for_volume(box_width * self.line_xsection, self.filament_xsection)
        e = 0.0
        e += self._extrude(out, tracker, edge_height)
        out.write(f"G1 Y{at_y - box_height:.3f} E{e:.4f} {self._feed(s.print_feed)}\n")
        e += self._extrude(out, tracker, edge_width)
        out.write(f"G1 X{at_x:.3f} E{e:.4f}\n")
        e += self._extrude(out, tracker, edge_height)
        out.write(f"G1 Y{at_y:.3f} E{e:.4f} {self._feed(s.print_feed)}\n")

        remaining = volume - volume_for_length(e, self.filament_xsection)

        right = at_x + self.line_width + p.extrusion_width / 2
        left = at_x + p.extrusion_width / 2
        y = at_y
        transition_ystep = 0.0
        budget = 0.0
        while budget < remaining:
            for x, feed in ((right, f" {self._feed(s.print_feed)}"), (left, "")):
                e += self._extrude(out, tracker, self.x_length)
                out.write(f"G1 X{x:.3f} E{e:.4f}{feed}\n")
                e += self._extrude(out, tracker, self.y_length)
                y -= self.ystep
                out.write(f"G1 Y{y:.3f} E{e:.4f}\n")
                if tracker.current_splice < p.splice_offset:
                    transition_ystep += self.ystep
            budget += s.line_volume * 2

        out.write("M82\nG92 E0\n")
        write_retract(out, p)
        out.write(f"G1 Z{p.layer_height + s.z_lift:.3f} {self._feed(s.z_feed)}\n")
        out.write("\n; --- end purge block ---\n\n")

        logger.debug(
            "purge square at (%.2f, %.2f): %.3f mm filament, transition %.3f mm",
            at_x,
            at_y,
            e,
            transition_ystep,
        )
        return transition_ystep
