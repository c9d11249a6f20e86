"""Splice and ping records embedded in the splicer header."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Splice:
    """A segment of filament fed by a single tool.

    Attributes:
        tool: Tool index that supplied the segment
        position: Cumulative extrusion (mm) where the segment starts,
            shifted by the splice offset
        length: Filament consumed (mm) by the tool since the previous splice
    """

    tool: int
    position: float
    length: float

    def __post_init__(self) -> None:
        """Validate tool index and segment length."""
        if self.tool < 0:
            raise ValueError(f"tool must be non-negative, got {self.tool}")
        if self.length < 0:
            raise ValueError(f"length must be non-negative, got {self.length}")

    @property
    def end(self) -> float:
        """Cumulative extrusion at which the segment ends."""
        return self.position + self.length


@dataclass(frozen=True)
class Ping:
    """Position checkpoint the splicer uses to re-sync with the printer.

    Attributes:
        position: Cumulative extrusion (mm) when the ping was emitted
    """

    position: float
