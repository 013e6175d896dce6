"""
Visualization utilities for woven path chains.

This module draws chains produced by a PathWeaver together with the knots they
were woven from (positions, headings and tangent handles), and optionally the
trajectory produced by a follower simulation.
"""

from pathlib import Path
from typing import Dict, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from .chain import PathChain
from .knot import Knot
from .plot_styles import (
    CHAIN_CMAP,
    COLOR_BLUE,
    COLOR_CREAM,
    COLOR_ORANGE,
    COLOR_TAUPE,
    COLOR_YELLOW_ORANGE,
    add_branded_legend,
    create_figure,
    save_figure,
    style_axis,
)

HEADING_ARROW_STRIDE = 10
"""Draw a heading arrow every N samples along each chain."""


def plot_chains(
    chains: Sequence[PathChain],
    knots: Optional[Sequence[Knot]] = None,
    trajectory: Optional[Dict[str, np.ndarray]] = None,
    title: str = "Woven Path Chains",
    save_path: Optional[Path] = None,
    show_headings: bool = True,
    dark_mode: bool = True,
) -> Figure:
    """Plot woven chains in the field frame.

    Args:
        chains: Chains to draw, typically PathWeaver.history.
        knots: Optional knots to mark, with their tangent handles.
        trajectory: Optional follower simulation output with 'x' and 'y' arrays.
        title: Plot title.
        save_path: Optional path to save the figure.
        show_headings: If True, draw heading goal arrows along each chain.
        dark_mode: Whether to use dark mode styling.

    Returns:
        Matplotlib figure object.
    """
    fig, ax = create_figure(dark_mode=dark_mode)
    style_axis(ax, title=title, xlabel="X (in)", ylabel="Y (in)", dark_mode=dark_mode)

    n_chains = len(chains)
    for i, chain in enumerate(chains):
        if len(chain) == 0:
            continue
        samples = chain.sample()
        color = CHAIN_CMAP(i / max(1, n_chains - 1))
        ax.plot(
            samples["x"],
            samples["y"],
            "-",
            color=color,
            linewidth=2.0,
            alpha=0.9,
            label=f"Chain {i} ({len(chain)} seg)",
            zorder=2,
        )

        if show_headings:
            idx = np.arange(0, len(samples["x"]), HEADING_ARROW_STRIDE)
            ax.quiver(
                samples["x"][idx],
                samples["y"][idx],
                np.cos(samples["heading"][idx]),
                np.sin(samples["heading"][idx]),
                color=COLOR_YELLOW_ORANGE,
                angles="xy",
                scale_units="xy",
                scale=0.25,
                width=0.003,
                alpha=0.7,
                zorder=3,
            )

    if knots:
        for j, knot in enumerate(knots):
            reflected = knot.reflected_tangent_point()
            forward = knot.tangent_point()
            ax.plot(
                [reflected.x, forward.x],
                [reflected.y, forward.y],
                ":",
                color=COLOR_TAUPE,
                linewidth=1.0,
                zorder=1,
                label="Tangent handles" if j == 0 else None,
            )
        positions = np.array([knot.pos_point().as_array() for knot in knots])
        ax.plot(
            positions[:, 0],
            positions[:, 1],
            "o",
            color=COLOR_BLUE,
            markersize=7,
            markeredgecolor="black",
            markeredgewidth=1.0,
            label="Knots",
            zorder=5,
        )

    if trajectory is not None and len(trajectory["x"]) > 0:
        ax.plot(
            trajectory["x"],
            trajectory["y"],
            "--",
            color=COLOR_CREAM if dark_mode else COLOR_ORANGE,
            linewidth=1.5,
            alpha=0.8,
            label="Simulated trajectory",
            zorder=4,
        )

    ax.set_aspect("equal", adjustable="datalim")
    if ax.get_legend_handles_labels()[0]:
        add_branded_legend(ax, dark_mode=dark_mode)

    plt.tight_layout()

    if save_path:
        save_figure(fig, save_path)

    return fig
