"""Slicer configuration read from the comment block of a sliced G-code file.

PrusaSlicer writes its settings as ``; key = value`` comments after the
``; estimated printing time`` line. Splicer options are written earlier as
``; P2PP KEY = VALUE`` and stored as ``P2PP_KEY``.
"""

import logging
import math
import re
from pathlib import Path
from typing import Dict, Iterable, List, Union

from bleed_squares.exceptions import ConfigurationError
from bleed_squares.models import Rect

logger = logging.getLogger(__name__)

SETTINGS_MARKER = "; estimated printing time"
VENDOR_PREFIX = "P2PP"

_VENDOR_RE = re.compile(r";\s*P2PP\s+(\S+)\s*=\s*(\S+)")


class SlicerConfig:
    """Read-only mapping of raw configuration strings with typed accessors.

    Accessors raise :class:`ConfigurationError` naming the key when it is
    missing or cannot be parsed.
    """

    def __init__(self, values: Dict[str, str]) -> None:
        self._values = dict(values)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "SlicerConfig":
        """Parse configuration comments from G-code lines."""
        values: Dict[str, str] = {}
        in_settings = False
        for line in lines:
            line = line.rstrip("\r\n")
            if not in_settings:
                match = _VENDOR_RE.match(line)
                if match:
                    values[f"{VENDOR_PREFIX}_{match.group(1)}"] = match.group(2)
                if line.startswith(SETTINGS_MARKER):
                    in_settings = True
                continue
            if not line.startswith("; "):
                continue
            key, sep, value = line[2:].partition(" = ")
            if not sep:
                continue
            values[key] = value
        logger.debug("parsed %d configuration values", len(values))
        return cls(values)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "SlicerConfig":
        """Read configuration from a sliced G-code file."""
        with open(path, encoding="utf-8") as f:
            return cls.from_lines(f)

    # ── raw accessors ──────────────────────────────────────────────────────────

    def get(self, key: str) -> str:
        try:
            return self._values[key]
        except KeyError:
            raise ConfigurationError(key, "missing") from None

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def as_dict(self) -> Dict[str, str]:
        """Copy of the raw values."""
        return dict(self._values)

    def as_float(self, key: str) -> float:
        return _parse_float(key, self.get(key))

    def as_float_array(self, key: str) -> List[float]:
        return [_parse_float(key, tok) for tok in self.get(key).split(",")]

    def as_string_array(self, key: str) -> List[str]:
        return self.get(key).split(",")

    # ── named settings ─────────────────────────────────────────────────────────

    def start_gcode(self) -> str:
        return self.get("start_gcode")

    def end_gcode(self) -> str:
        return self.get("end_gcode")

    def extrusion_width(self) -> float:
        return self.as_float("extrusion_width")

    def layer_height(self) -> float:
        return self.as_float("layer_height")

    def filament_diameter(self) -> List[float]:
        return self.as_float_array("filament_diameter")

    def first_layer_bed_temperature(self) -> List[str]:
        return self.as_string_array("first_layer_bed_temperature")

    def first_layer_temperature(self) -> List[str]:
        return self.as_string_array("first_layer_temperature")

    def retract_length(self) -> List[float]:
        return self.as_float_array("retract_length")

    def retract_speed(self) -> List[float]:
        return self.as_float_array("retract_speed")

    def splice_offset(self) -> float:
        return self.as_float("P2PP_SPLICEOFFSET")

    def extra_end_filament(self) -> float:
        return self.as_float("P2PP_EXTRAENDFILAMENT")

    def linear_ping(self) -> float:
        return self.as_float("P2PP_LINEARPING")

    def printer_profile_id(self) -> str:
        return self.get("P2PP_PRINTERPROFILE")

    def bed_dimensions(self) -> Rect:
        """Bounding rectangle of ``bed_shape`` (e.g. ``0x0,250x0,250x210,0x210``).

        Only rectangular beds are supported; the corners' bounding box is used.
        """
        key = "bed_shape"
        xs: List[float] = []
        ys: List[float] = []
        for corner in self.get(key).split(","):
            parts = corner.strip().split("x")
            if len(parts) != 2:
                raise ConfigurationError(key, f"malformed corner {corner!r}")
            xs.append(_parse_float(key, parts[0]))
            ys.append(_parse_float(key, parts[1]))
        return Rect(min(xs), min(ys), max(xs), max(ys))

    def __repr__(self) -> str:
        return f"SlicerConfig({len(self._values)} values)"


def _parse_float(key: str, text: str) -> float:
    try:
        value = float(text.strip())
    except ValueError:
        raise ConfigurationError(key, f"cannot parse {text!r} as a number") from None
    if math.isnan(value):
        raise ConfigurationError(key, f"cannot parse {text!r} as a number")
    return value
