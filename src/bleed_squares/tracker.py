"""Running filament accounting shared by the emitters of one generation run.

Example:
    >>> tracker = ExtrusionTracker(splice_offset=30.0)
    >>> tracker.extrude(12.5)
    12.5
    >>> splice = tracker.toolchange(1)
    >>> (splice.tool, splice.position, splice.length)
    (0, 30.0, 12.5)
"""

import logging

from bleed_squares.ledger import PingLedger, SpliceLedger
from bleed_squares.models import Ping, Splice

logger = logging.getLogger(__name__)


class ExtrusionTracker:
    """Cumulative extrusion, current splice segment and ping countdown.

    The tracker is the single source of truth for filament accounting. Every
    emitted line that consumes filament passes its length through
    :meth:`extrude` exactly once, in the order the lines are written, so the
    positions recorded by :meth:`toolchange` and :meth:`ping` match the
    program at that point.

    Attributes:
        total_extruded: Filament consumed since the start of the program (mm)
        current_tool: Tool currently feeding the printer
        current_splice: Filament consumed by the current tool since its splice began (mm)
        splice_start: Value of total_extruded when the current splice began (mm)
        since_last_ping: Filament consumed since the previous ping (mm)
        splices: Ledger of completed splices
        pings: Ledger of emitted pings
    """

    def __init__(self, splice_offset: float = 0.0, initial_tool: int = 0) -> None:
        """
        Initialize an empty tracker.

        Args:
            splice_offset: Shift applied to every recorded splice position
            initial_tool: Tool loaded at the start of the program
        """
        self.splice_offset = splice_offset
        self.total_extruded = 0.0
        self.current_tool = initial_tool
        self.current_splice = 0.0
        self.splice_start = 0.0
        self.since_last_ping = 0.0
        self.splices = SpliceLedger()
        self.pings = PingLedger()

    def extrude(self, delta: float) -> float:
        """Account for ``delta`` mm of filament and return it unchanged.

        Raises:
            ValueError: If delta is negative
        """
        if delta < 0:
            raise ValueError(f"extrusion delta must be non-negative, got {delta}")
        self.total_extruded += delta
        self.current_splice += delta
        self.since_last_ping += delta
        return delta

    def toolchange(self, new_tool: int) -> Splice:
        """Close the current splice and start a new one for ``new_tool``.

        Returns:
            The splice that was closed
        """
        splice = Splice(
            tool=self.current_tool,
            position=self.splice_start + self.splice_offset,
            length=self.current_splice,
        )
        self.splices.append(splice)
        logger.debug(
            "toolchange T%d -> T%d at %.3f mm (segment %.3f mm)",
            self.current_tool,
            new_tool,
            self.total_extruded,
            self.current_splice,
        )
        self.current_tool = new_tool
        self.current_splice = 0.0
        self.splice_start = self.total_extruded
        return splice

    def ping_due(self, threshold: float) -> bool:
        """True once more than ``threshold`` mm were extruded since the last ping."""
        return self.since_last_ping > threshold

    def ping(self) -> Ping:
        """Record a ping at the current position and restart the countdown."""
        ping = Ping(position=self.total_extruded)
        self.pings.append(ping)
        self.since_last_ping = 0.0
        logger.debug("ping #%d at %.3f mm", len(self.pings), ping.position)
        return ping

    def __repr__(self) -> str:
        return (
            f"ExtrusionTracker(total_extruded={self.total_extruded:.3f}, "
            f"current_tool={self.current_tool}, splices={len(self.splices)}, "
            f"pings={len(self.pings)})"
        )
