"""Marker strokes that show where a color transition landed in a square."""

from typing import TextIO, Tuple

from bleed_squares.filament import length_for_volume
from bleed_squares.gcode import GCodeEmitter, write_retract
from bleed_squares.tracker import ExtrusionTracker


class AnnotationEmitter(GCodeEmitter):
    """Draw two short strokes on top of a finished square.

    Both strokes sit ``ystep`` below the square's top edge, one starting at the
    left edge and one at the right edge, slightly above the square's layer.
    """

    def emit(
        self,
        out: TextIO,
        tracker: ExtrusionTracker,
        anchor: Tuple[float, float],
        ystep: float,
    ) -> None:
        p = self.profile
        s = self.settings
        at_x, at_y = anchor
        y = at_y - ystep
        box_width = length_for_volume(s.line_volume, self.line_xsection) - p.extrusion_width
        stroke = length_for_volume(
            self.line_xsection * s.annotation_stroke, self.filament_xsection
        )
        hover = f"G1 Z{p.layer_height * 2.5:.3f} {self._feed(s.z_feed)}\n"
        draw = f"G1 Z{p.layer_height * 2:.3f} {self._feed(s.z_feed)}\n"

        out.write("; ---- annotating ----\n")
        out.write(hover)
        out.write(f"G1 X{at_x:.3f} Y{y:.3f} {self._feed(s.travel_feed)}\n")
        out.write("M83\nG92 E0\n")

        strokes = (
            (at_x, at_x + s.annotation_stroke),
            (at_x + box_width, at_x + box_width - s.annotation_stroke),
        )
        for i, (start, end) in enumerate(strokes):
            if i:
                out.write(f"G1 X{start:.3f} Y{y:.3f} {self._feed(s.travel_feed)}\n")
            write_retract(out, p, prime=True)
            out.write(draw)
            length = self._extrude(out, tracker, stroke)
            out.write(f"G1 X{end:.3f} E{length:.3f} {self._feed(s.print_feed)}\n")
            write_retract(out, p)
            out.write(hover)

        out.write("; ---- annotating end ----\n")
