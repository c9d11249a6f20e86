"""Append-only ledgers of splices and pings."""

from typing import Iterator, List

from bleed_squares.models import Ping, Splice


class SpliceLedger:
    """Chronological record of splices.

    Entries are never modified once appended; positions must not decrease.
    """

    def __init__(self) -> None:
        self._splices: List[Splice] = []

    def append(self, splice: Splice) -> None:
        """Record a splice.

        Raises:
            ValueError: If the splice starts before the previous one
        """
        if self._splices and splice.position < self._splices[-1].position:
            raise ValueError(
                f"splice position {splice.position} precedes previous "
                f"{self._splices[-1].position}"
            )
        self._splices.append(splice)

    def total_length(self) -> float:
        """Sum of all recorded splice lengths."""
        return sum(s.length for s in self._splices)

    def __len__(self) -> int:
        return len(self._splices)

    def __iter__(self) -> Iterator[Splice]:
        return iter(self._splices)

    def __getitem__(self, index: int) -> Splice:
        return self._splices[index]


class PingLedger:
    """Chronological record of pings."""

    def __init__(self) -> None:
        self._pings: List[Ping] = []

    def append(self, ping: Ping) -> None:
        self._pings.append(ping)

    def positions(self) -> List[float]:
        return [p.position for p in self._pings]

    def __len__(self) -> int:
        return len(self._pings)

    def __iter__(self) -> Iterator[Ping]:
        return iter(self._pings)

    def __getitem__(self, index: int) -> Ping:
        return self._pings[index]
