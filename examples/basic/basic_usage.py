"""Basic usage example.

This example demonstrates:
- Building a slicer configuration from sliced G-code comments
- Generating the bleed test program for a 4-input splicer
- Inspecting the splice and ping ledgers
- Plotting the grid layout and splice timeline

Run it from the repository root with the package installed.
"""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

from bleed_squares import BleedTestGenerator, GenerationSettings, SlicerConfig
from bleed_squares.visualize import plot_layout, plot_splice_timeline

# Trimmed comment block of a PrusaSlicer file sliced with a P2PP profile
HEAD = r"""; P2PP PRINTERPROFILE = 0123456789abcdef
; P2PP SPLICEOFFSET = 30
; P2PP EXTRAENDFILAMENT = 150
; P2PP LINEARPING = 350
; estimated printing time (normal mode) = 12m 40s
; bed_shape = 0x0,250x0,250x210,0x210
; extrusion_width = 0.45
; layer_height = 0.2
; filament_diameter = 1.75,1.75,1.75,1.75
; first_layer_bed_temperature = 60,60,60,60
; first_layer_temperature = 215,215,215,215
; retract_length = 0.8,0.8,0.8,0.8
; retract_speed = 35,35,35,35
; start_gcode = G28 ; home all axes\nM190 S[first_layer_bed_temperature]\nM109 S[first_layer_temperature]\nG1 Y-3 F1000\nG1 X60 E9 F1000\nG1 X100 E12.5 F1000
; end_gcode = M104 S0\nM140 S0\nG1 X0 Y200 F3000\nM84
"""


def main():
    """Generate a bleed test for a Prusa MK3 sized bed."""

    print("=" * 80)
    print("BLEED SQUARES BASIC USAGE")
    print("=" * 80)

    config = SlicerConfig.from_lines(HEAD.splitlines())
    bed = config.bed_dimensions()
    print(f"\nBed: {bed.width:.0f} x {bed.height:.0f} mm")
    print(f"Line: {config.extrusion_width()} mm wide, {config.layer_height()} mm high")
    print(f"Splice offset: {config.splice_offset()} mm, ping every {config.linear_ping()} mm")

    # Shorter purge blocks for the 210 mm deep bed
    settings = GenerationSettings(square_volume=350.0, marker_volume=150.0)
    generator = BleedTestGenerator(config, settings)
    program = generator.write("bleed_test.gcode")
    tracker = generator.tracker

    print(f"\nWrote bleed_test.gcode ({program.count(chr(10))} lines)\n")
    print(f"  {'#':<4} {'Tool':<6} {'Position':<12} {'Length':<12} {'Ends'}")
    print(f"  {'':4} {'':6} {'(mm)':<12} {'(mm)':<12} {'(mm)'}")
    print("  " + "-" * 50)
    for i, splice in enumerate(tracker.splices):
        print(
            f"  {i:<4} T{splice.tool:<5} {splice.position:<12.2f} "
            f"{splice.length:<12.2f} {splice.end:.2f}"
        )

    print(f"\nPings: {', '.join(f'{p:.1f}' for p in tracker.pings.positions())}")
    print(f"Total filament: {tracker.total_extruded:.1f} mm")

    fig = plot_layout(generator.layout, show=False, save_path="bleed_layout.png")
    plt.close(fig)
    fig = plot_splice_timeline(
        list(tracker.splices), list(tracker.pings), show=False, save_path="bleed_splices.png"
    )
    plt.close(fig)
    print("\nSaved bleed_layout.png and bleed_splices.png")


if __name__ == "__main__":
    main()
