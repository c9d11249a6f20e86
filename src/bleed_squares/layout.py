"""Grid layout of calibration squares on a rectangular bed."""

import logging
from dataclasses import dataclass
from typing import List, Optional

from bleed_squares.exceptions import GeometryError
from bleed_squares.models import Rect, Square

logger = logging.getLogger(__name__)

GRID_SIZE = 4


@dataclass(frozen=True)
class GridLayout:
    """Result of planning the grid.

    Attributes:
        printable: Bed area left after removing the margin
        cell_width: Width of one grid cell in millimeters
        cell_height: Height of one grid cell in millimeters
        padding: Gap between cells in millimeters
        squares: Full transition squares, row-major from the bottom row
        markers: Half-size identity squares, one per tool
    """

    printable: Rect
    cell_width: float
    cell_height: float
    padding: float
    squares: List[Square]
    markers: List[Square]

    @property
    def all_squares(self) -> List[Square]:
        return self.squares + self.markers

    def cell(self, x: int, y: int) -> Rect:
        """Bounds of grid cell (x, y), with y counted from the bottom row."""
        min_x = self.printable.min_x + x * (self.cell_width + self.padding)
        min_y = self.printable.min_y + y * (self.cell_height + self.padding)
        return Rect(min_x, min_y, min_x + self.cell_width, min_y + self.cell_height)

    def find(self, from_extruder: int, to_extruder: int) -> Optional[Square]:
        """Square for a tool transition, or None if the grid has no such cell."""
        for square in self.all_squares:
            if square.from_extruder == from_extruder and square.to_extruder == to_extruder:
                return square
        return None


def plan_grid(
    bed: Rect, margin: float, padding: float, grid_size: int = GRID_SIZE
) -> GridLayout:
    """Divide the printable bed area into a grid of calibration squares.

    Cells on the diagonal hold a half-size marker square for a single tool.
    Every other cell holds a full square for the transition
    ``grid_size-1-y -> grid_size-1-x``; rows are inverted because the bed
    origin is bottom-left while tools are listed top-down.

    Args:
        bed: Bed rectangle
        margin: Border removed from every side of the bed
        padding: Gap left between neighbouring cells
        grid_size: Number of cells per side (one per tool)

    Returns:
        GridLayout with ``grid_size**2 - grid_size`` squares and ``grid_size`` markers

    Raises:
        GeometryError: If the computed cell size is not positive
    """
    printable = bed.inset(margin)
    cell_width = (printable.width - (grid_size - 1) * padding) / grid_size
    cell_height = (printable.height - (grid_size - 1) * padding) / grid_size
    if cell_width <= 0 or cell_height <= 0:
        raise GeometryError(
            f"grid cell size {cell_width:.2f} x {cell_height:.2f} mm is not positive "
            f"(bed {bed.width:.1f} x {bed.height:.1f}, margin {margin}, padding {padding})"
        )

    layout = GridLayout(
        printable=printable,
        cell_width=cell_width,
        cell_height=cell_height,
        padding=padding,
        squares=[],
        markers=[],
    )
    last = grid_size - 1
    for y in range(grid_size):
        for x in range(grid_size):
            cell = layout.cell(x, y)
            if x == y:
                min_x = cell.min_x + cell_width / 4
                min_y = cell.min_y + cell_height / 4
                bounds = Rect(min_x, min_y, min_x + cell_width / 2, min_y + cell_height / 2)
                layout.markers.append(Square(bounds, x, x, cell))
                continue
            layout.squares.append(Square(cell, last - y, last - x, cell))

    logger.debug(
        "planned %dx%d grid, cell %.2f x %.2f mm", grid_size, grid_size, cell_width, cell_height
    )
    return layout
