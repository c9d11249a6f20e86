"""Command line entry point: slicer config in, bleed test program out."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from bleed_squares.config import SlicerConfig
from bleed_squares.exceptions import BleedSquaresError
from bleed_squares.generator import BleedTestGenerator
from bleed_squares.models import GenerationSettings
from bleed_squares.profiles import InputPreset, create_inputs

logger = logging.getLogger("bleed_squares")

DEFAULT_OUTPUT = "bleed_test.gcode"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bleed-squares",
        description="Generate a 4x4 purge-square test program for filament splicers.",
    )
    p.add_argument("config", metavar="CONFIG",
                   help="Sliced G-code file whose comments hold the slicer and P2PP settings")
    p.add_argument("-o", "--output", metavar="FILE", default=DEFAULT_OUTPUT,
                   help=f"Write G-code to FILE (default: {DEFAULT_OUTPUT})")
    p.add_argument("--inputs", choices=[i.value for i in InputPreset],
                   default=InputPreset.DEFAULT.value,
                   help="Splicer input color table written into the header")

    g = p.add_argument_group("Layout")
    g.add_argument("--margin", type=float, default=10.0, metavar="mm",
                   help="Clear border around the bed edge")
    g.add_argument("--padding", type=float, default=5.0, metavar="mm",
                   help="Gap between grid cells")

    g = p.add_argument_group("Purge volumes")
    g.add_argument("--square-volume", type=float, default=500.0, metavar="mm³",
                   help="Purge volume of a transition square")
    g.add_argument("--marker-volume", type=float, default=200.0, metavar="mm³",
                   help="Purge volume of a single-tool marker square")
    g.add_argument("--priming-length", type=float, default=21.5, metavar="mm",
                   help="Filament consumed by the start G-code purge line")

    p.add_argument("--plot", metavar="PREFIX",
                   help="Save layout and splice timeline plots as PREFIX_layout.png "
                        "and PREFIX_splices.png")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def _save_plots(generator: BleedTestGenerator, prefix: str) -> None:
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    from bleed_squares.visualize import plot_layout, plot_splice_timeline

    layout_fig = plot_layout(generator.layout, show=False, save_path=f"{prefix}_layout.png")
    timeline_fig = plot_splice_timeline(
        list(generator.tracker.splices),
        list(generator.tracker.pings),
        show=False,
        save_path=f"{prefix}_splices.png",
    )
    plt.close(layout_fig)
    plt.close(timeline_fig)
    logger.info("saved plots to %s_layout.png and %s_splices.png", prefix, prefix)


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = GenerationSettings(
            margin=args.margin,
            padding=args.padding,
            square_volume=args.square_volume,
            marker_volume=args.marker_volume,
            priming_length=args.priming_length,
            inputs=create_inputs(InputPreset(args.inputs)),
        )
        config = SlicerConfig.load(args.config)
        generator = BleedTestGenerator(config, settings)
        generator.write(Path(args.output))
    except OSError as e:
        logger.error("%s", e)
        return 1
    except BleedSquaresError as e:
        logger.error("generation failed: %s", e)
        return 1
    except ValueError as e:
        logger.error("invalid settings: %s", e)
        return 1

    if args.plot:
        _save_plots(generator, args.plot)
    return 0


if __name__ == "__main__":
    sys.exit(main())
