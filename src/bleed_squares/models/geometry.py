"""Axis-aligned rectangle and grid square models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in bed coordinates (origin bottom-left).

    Attributes:
        min_x: Left edge in millimeters
        min_y: Bottom edge in millimeters
        max_x: Right edge in millimeters
        max_y: Top edge in millimeters
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def inset(self, amount: float) -> "Rect":
        """Shrink the rectangle by ``amount`` on every side."""
        return Rect(
            self.min_x + amount,
            self.min_y + amount,
            self.max_x - amount,
            self.max_y - amount,
        )

    def contains(self, other: "Rect") -> bool:
        """True if ``other`` lies entirely within this rectangle."""
        return (
            self.min_x <= other.min_x
            and self.min_y <= other.min_y
            and other.max_x <= self.max_x
            and other.max_y <= self.max_y
        )

    def overlaps(self, other: "Rect") -> bool:
        """True if the interiors of the two rectangles intersect."""
        return (
            self.min_x < other.max_x
            and other.min_x < self.max_x
            and self.min_y < other.max_y
            and other.min_y < self.max_y
        )


@dataclass(frozen=True)
class Square:
    """One calibration square of the grid.

    Attributes:
        bounds: Printed area of the square
        from_extruder: Tool printed before the transition
        to_extruder: Tool the transition switches to
        cell: Grid cell containing the square
    """

    bounds: Rect
    from_extruder: int
    to_extruder: int
    cell: Rect

    @property
    def is_marker(self) -> bool:
        """Identity squares (same source and target tool) are half-size color markers."""
        return self.from_extruder == self.to_extruder

    @property
    def anchor(self) -> tuple:
        """Top-left corner of the containing cell, where the purge starts."""
        return self.cell.min_x, self.cell.max_y
