"""End-to-end bleed test program generation.

Example:
    >>> from bleed_squares.config import SlicerConfig
    >>> from bleed_squares.generator import BleedTestGenerator
    >>>
    >>> config = SlicerConfig.load("head.gcode")
    >>> generator = BleedTestGenerator(config)
    >>> generator.write("bleed_test.gcode")
"""

import io
import logging
from pathlib import Path
from typing import Optional, Sequence, TextIO, Union

from bleed_squares.annotate import AnnotationEmitter
from bleed_squares.config import VENDOR_PREFIX, SlicerConfig
from bleed_squares.gcode import write_retract
from bleed_squares.header import HeaderEncoder
from bleed_squares.layout import GRID_SIZE, plan_grid
from bleed_squares.models import ExtrusionProfile, GenerationSettings
from bleed_squares.purge import PurgeSquareEmitter
from bleed_squares.tracker import ExtrusionTracker
from bleed_squares.traversal import DEFAULT_TRAVERSAL, transitions, validate_traversal

logger = logging.getLogger(__name__)

VENDOR_LINE_PREFIX = ";" + VENDOR_PREFIX
START_PLACEHOLDERS = ("first_layer_bed_temperature", "first_layer_temperature")


class BleedTestGenerator:
    """Generate the splicer bleed test program from a slicer configuration.

    The run is a single sequential pass: start G-code, the grid traversal with
    a toolchange before every square after the first, end G-code, and finally
    the header built from the ledgers, placed ahead of the body.

    Args:
        config: Slicer configuration
        settings: Generation constants (default: :class:`GenerationSettings`)
        traversal: Tool sequence visiting every grid cell once

    Raises:
        ConfigurationError: If a required configuration value is missing or malformed
        GeometryError: If the bed or line geometry leaves no room to print
        ValueError: If the traversal does not cover the grid
    """

    def __init__(
        self,
        config: SlicerConfig,
        settings: Optional[GenerationSettings] = None,
        traversal: Sequence[int] = DEFAULT_TRAVERSAL,
    ) -> None:
        self.config = config
        self.settings = settings or GenerationSettings()
        self.profile = ExtrusionProfile.from_config(config)
        self.layout = plan_grid(
            config.bed_dimensions(), self.settings.margin, self.settings.padding, GRID_SIZE
        )
        validate_traversal(traversal, GRID_SIZE)
        self.traversal = tuple(traversal)
        self.tracker: Optional[ExtrusionTracker] = None

    def generate(self) -> str:
        """Run the generation and return the complete program text.

        The tracker of the finished run is kept in :attr:`tracker`.

        Raises:
            EncodingOverflowError: If a header count does not fit its field
        """
        s = self.settings
        tracker = ExtrusionTracker(
            splice_offset=self.profile.splice_offset, initial_tool=self.traversal[0]
        )
        purge = PurgeSquareEmitter(self.profile, s)
        annotate = AnnotationEmitter(self.profile, s)
        self._check_footprints(purge)

        body = io.StringIO()
        self._write_start(body)
        # start G-code extrusion is approximated, not parsed
        tracker.extrude(s.priming_length)

        pending = None
        for step, (from_tool, to_tool) in enumerate(transitions(self.traversal)):
            if step:
                tracker.toolchange(to_tool)
            square = self.layout.find(from_tool, to_tool)
            volume = s.marker_volume if square.is_marker else s.square_volume
            ystep = purge.emit(body, tracker, square.anchor, volume)
            if pending is not None:
                annotate.emit(body, tracker, *pending)
            pending = None if square.is_marker else (square.anchor, ystep)
        if pending is not None:
            annotate.emit(body, tracker, *pending)

        tracker.extrude(self.profile.extra_end_filament)
        tracker.toolchange(s.sentinel_tool)
        self._write_end(body)

        header = io.StringIO()
        HeaderEncoder(self.config.printer_profile_id(), s).encode(
            header, tracker.splices, tracker.pings, tracker.total_extruded
        )
        self.tracker = tracker
        logger.info(
            "generated %d splices, %d pings, %.2f mm of filament",
            len(tracker.splices),
            len(tracker.pings),
            tracker.total_extruded,
        )
        return header.getvalue() + body.getvalue()

    def write(self, path: Union[str, Path]) -> str:
        """Generate the program and write it to ``path``.

        Nothing is written if generation fails.
        """
        program = self.generate()
        with open(path, "w", encoding="utf-8") as f:
            f.write(program)
        logger.info("wrote %d lines to %s", program.count("\n"), path)
        return program

    def _check_footprints(self, purge: PurgeSquareEmitter) -> None:
        s = self.settings
        for volume in (s.marker_volume, s.square_volume):
            width, height = purge.footprint(volume)
            if width > self.layout.cell_width or height > self.layout.cell_height:
                logger.warning(
                    "%.0f mm³ purge square (%.2f x %.2f mm) overflows its %.2f x %.2f mm grid cell",
                    volume,
                    width,
                    height,
                    self.layout.cell_width,
                    self.layout.cell_height,
                )

    def _write_start(self, out: TextIO) -> None:
        substitutions = {
            "first_layer_bed_temperature": self.config.first_layer_bed_temperature()[0],
            "first_layer_temperature": self.config.first_layer_temperature()[0],
        }
        out.write("\n; --- BEGIN start_gcode ---\n\n")
        for line in _template_lines(self.config.start_gcode()):
            if "[" in line or "]" in line:
                for name in START_PLACEHOLDERS:
                    line = line.replace(f"[{name}]", substitutions[name], 1)
            out.write(line + "\n")
        out.write("M82\nG92 E0\n")
        write_retract(out, self.profile)
        out.write("\n; --- END start_gcode ---\n\n")

    def _write_end(self, out: TextIO) -> None:
        out.write("\n; --- BEGIN end_gcode ---\n\n")
        for line in _template_lines(self.config.end_gcode()):
            out.write(line + "\n")
        out.write("\n; --- END end_gcode ---\n\n")


def _template_lines(template: str):
    """Lines of a slicer G-code template, minus splicer directives.

    Templates store line breaks as a literal backslash-n.
    """
    for line in template.split("\\n"):
        if line.startswith(VENDOR_LINE_PREFIX):
            continue
        yield line
