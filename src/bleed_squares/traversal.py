"""Fixed order in which the grid cells are printed.

Each step names the tool loaded for that step's square; the square printed is
the one for the transition from the previous step's tool. Identity cells are
visited with a change to the same tool, so each marker square is its own
splice segment::

    step  0:  T0          marker 0
    step  1:  T0 -> T1    step  2:  T1 -> T1 (marker 1)
    step  3:  T1 -> T2    step  4:  T2 -> T2 (marker 2)
    step  5:  T2 -> T3    step  6:  T3 -> T3 (marker 3)
    step  7:  T3 -> T0    step  8:  T0 -> T2    step  9:  T2 -> T1
    step 10:  T1 -> T3    step 11:  T3 -> T2    step 12:  T2 -> T0
    step 13:  T0 -> T3    step 14:  T3 -> T1    step 15:  T1 -> T0
"""

from itertools import permutations
from typing import List, Sequence, Tuple

DEFAULT_TRAVERSAL: Tuple[int, ...] = (0, 1, 1, 2, 2, 3, 3, 0, 2, 1, 3, 2, 0, 3, 1, 0)


def transitions(tools: Sequence[int]) -> List[Tuple[int, int]]:
    """(from, to) tool pair printed at each step; step 0 is its own identity cell."""
    if not tools:
        return []
    pairs = [(tools[0], tools[0])]
    pairs.extend(zip(tools, tools[1:]))
    return pairs


def validate_traversal(tools: Sequence[int], n_tools: int) -> None:
    """Check that a traversal prints every grid cell exactly once.

    Every one of the ``n_tools**2`` (from, to) cells must appear once, which
    covers each ordered pair of distinct tools and each tool's marker.

    Raises:
        ValueError: If a cell is repeated, missing, or names an unknown tool
    """
    pairs = transitions(tools)
    if len(pairs) != n_tools * n_tools:
        raise ValueError(
            f"traversal must have {n_tools * n_tools} steps, got {len(pairs)}"
        )
    seen = set()
    for pair in pairs:
        if not all(0 <= t < n_tools for t in pair):
            raise ValueError(f"traversal step {pair} names a tool outside 0..{n_tools - 1}")
        if pair in seen:
            raise ValueError(f"traversal visits cell {pair} more than once")
        seen.add(pair)
    missing = set(permutations(range(n_tools), 2)) - seen
    if missing:
        raise ValueError(f"traversal never exercises transitions {sorted(missing)}")
