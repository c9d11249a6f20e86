"""Shared fixtures: a sliced G-code header with slicer and P2PP settings."""

import pytest

from bleed_squares.config import SlicerConfig
from bleed_squares.models import ExtrusionProfile, GenerationSettings

SAMPLE_HEAD = r"""; generated by PrusaSlicer 2.1.0
;
; P2PP PRINTERPROFILE = 0123456789abcdef
; P2PP SPLICEOFFSET = 30
; P2PP EXTRAENDFILAMENT = 150
; P2PP LINEARPING = 350
G1 X10 Y10
; width = 4
; estimated printing time (normal mode) = 1h 2m 3s
; bed_shape = 0x0,300x0,300x300,0x300
; extrusion_width = 0.4
; layer_height = 0.2
; filament_diameter = 1.75,1.75,1.75,1.75
; first_layer_bed_temperature = 60,60,60,60
; first_layer_temperature = 215,210,205,200
; retract_length = 0.8,0.8,0.8,0.8
; retract_speed = 35,35,35,35
; start_gcode = G28 ; home\nM190 S[first_layer_bed_temperature]\nM109 S[first_layer_temperature]\n;P2PP MATERIAL_DEFAULT_PLA\nG1 Y-3 E21.5 F1000
; end_gcode = M104 S0\n;P2PP END_MARKER\nM84
"""


def make_config(**overrides) -> SlicerConfig:
    """Sample configuration with raw values replaced by ``overrides``."""
    config = SlicerConfig.from_lines(SAMPLE_HEAD.splitlines())
    values = config.as_dict()
    values.update(overrides)
    return SlicerConfig(values)


@pytest.fixture
def config():
    """Sample slicer configuration for a 300x300 bed."""
    return make_config()


@pytest.fixture
def config_file(tmp_path):
    """Sample configuration written to disk."""
    path = tmp_path / "head.gcode"
    path.write_text(SAMPLE_HEAD, encoding="utf-8")
    return path


@pytest.fixture
def profile():
    """0.4 mm lines at 0.2 mm layers with 1.75 mm filament."""
    return ExtrusionProfile(
        extrusion_width=0.4,
        layer_height=0.2,
        filament_diameter=1.75,
        retract_length=0.8,
        retract_speed=35.0,
        splice_offset=30.0,
        linear_ping=350.0,
        extra_end_filament=150.0,
    )


@pytest.fixture
def settings():
    """Default generation settings."""
    return GenerationSettings()
