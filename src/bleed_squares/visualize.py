"""Visualization utilities for bleed test inspection.

This module plots the planned grid and the splice/ping telemetry of a run.
"""

from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle

from bleed_squares.layout import GridLayout
from bleed_squares.models import Ping, Splice


def plot_layout(
    layout: GridLayout,
    title: str = "Bleed Test Layout",
    show: bool = True,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Plot grid cells, transition squares and marker squares.

    Args:
        layout: Planned grid
        title: Plot title
        show: Whether to display the plot
        save_path: Optional path to save the figure

    Returns:
        matplotlib Figure object
    """
    fig, ax = plt.subplots(figsize=(8, 8))
    p = layout.printable
    ax.add_patch(
        Rectangle((p.min_x, p.min_y), p.width, p.height, fill=False, linestyle="--", color="gray")
    )

    for square in layout.all_squares:
        b = square.bounds
        color = "tab:orange" if square.is_marker else "tab:blue"
        ax.add_patch(
            Rectangle((b.min_x, b.min_y), b.width, b.height, alpha=0.4, color=color)
        )
        label = (
            f"T{square.from_extruder}"
            if square.is_marker
            else f"T{square.from_extruder}→T{square.to_extruder}"
        )
        ax.text(
            b.min_x + b.width / 2, b.min_y + b.height / 2, label, ha="center", va="center"
        )

    ax.set_xlim(p.min_x - layout.padding, p.max_x + layout.padding)
    ax.set_ylim(p.min_y - layout.padding, p.max_y + layout.padding)
    ax.set_aspect("equal")
    ax.set_xlabel("X (mm)")
    ax.set_ylabel("Y (mm)")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")

    if show:
        plt.show()

    return fig


def plot_splice_timeline(
    splices: Sequence[Splice],
    pings: Sequence[Ping] = (),
    title: str = "Splice Timeline",
    show: bool = True,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Plot splice segments along cumulative extrusion with ping positions.

    Args:
        splices: Splices in chronological order
        pings: Pings in chronological order
        title: Plot title
        show: Whether to display the plot
        save_path: Optional path to save the figure

    Returns:
        matplotlib Figure object
    """
    if not splices:
        raise ValueError("Cannot plot empty splice list")

    starts = np.array([s.position for s in splices])
    lengths = np.array([s.length for s in splices])
    tools = np.array([s.tool for s in splices])

    fig, ax = plt.subplots(figsize=(12, 3))
    cmap = plt.get_cmap("tab10")
    ax.barh(
        np.zeros_like(starts),
        lengths,
        left=starts,
        height=0.6,
        color=[cmap(int(t) % 10) for t in tools],
        edgecolor="black",
    )
    for start, length, tool in zip(starts, lengths, tools):
        ax.text(start + length / 2, 0, f"T{tool}", ha="center", va="center")

    if len(pings):
        positions = np.array([p.position for p in pings])
        ax.vlines(positions, -0.5, 0.5, colors="red", linestyles="--", label="Ping")
        ax.legend()

    ax.set_yticks([])
    ax.set_xlabel("Cumulative extrusion (mm)")
    ax.set_title(title)
    ax.grid(True, axis="x", alpha=0.3)

    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")

    if show:
        plt.show()

    return fig
