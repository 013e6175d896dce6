"""Shared plotting utilities and styles for path weaving visualizations.

This module provides:
- Color scheme and colormap
- Common plot styling functions
- Figure creation and saving helpers

All visualization modules should import from this module to ensure consistency.
"""

import logging
from pathlib import Path
from typing import Tuple

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.colors import LinearSegmentedColormap
from matplotlib.figure import Figure

from .config import (
    COLOR_BLUE,
    COLOR_CREAM,
    COLOR_DARK_BLUE,
    COLOR_ORANGE,
    COLOR_TAUPE,
    COLOR_YELLOW_ORANGE,
)

__all__ = [
    "COLOR_ORANGE",
    "COLOR_BLUE",
    "COLOR_CREAM",
    "COLOR_TAUPE",
    "COLOR_YELLOW_ORANGE",
    "COLOR_DARK_BLUE",
    "CHAIN_CMAP",
    "style_axis",
    "add_branded_legend",
    "create_figure",
    "save_figure",
]

# Orange -> blue, used to tell consecutive chains apart
CHAIN_CMAP = LinearSegmentedColormap.from_list("chains", [COLOR_ORANGE, COLOR_BLUE])


def style_axis(
    ax: Axes,
    title: str = "",
    xlabel: str = "",
    ylabel: str = "",
    grid: bool = True,
    dark_mode: bool = False,
) -> None:
    """Apply consistent styling to a matplotlib axis.

    Args:
        ax: Matplotlib axis to style.
        title: Plot title (optional).
        xlabel: X-axis label (optional).
        ylabel: Y-axis label (optional).
        grid: Whether to show grid lines (default: True).
        dark_mode: Whether to use dark mode styling (default: False).
    """
    text_kwargs = {"color": COLOR_CREAM} if dark_mode else {}

    if title:
        ax.set_title(title, fontweight="bold", **text_kwargs)
    if xlabel:
        ax.set_xlabel(xlabel, **text_kwargs)
    if ylabel:
        ax.set_ylabel(ylabel, **text_kwargs)

    if grid:
        ax.grid(True, alpha=0.3, linestyle="--", linewidth=0.5)

    if dark_mode:
        ax.set_facecolor(COLOR_DARK_BLUE)
        ax.tick_params(colors=COLOR_CREAM, which="both")
        for spine in ax.spines.values():
            spine.set_edgecolor(COLOR_TAUPE)


def add_branded_legend(ax: Axes, loc: str = "best", dark_mode: bool = False, **kwargs) -> None:
    """Add a legend with the shared styling.

    Args:
        ax: Matplotlib axis to add legend to.
        loc: Legend location (default: "best").
        dark_mode: Whether to use dark mode styling (default: False).
        **kwargs: Additional keyword arguments passed to ax.legend().
    """
    legend_kwargs = {
        "loc": loc,
        "framealpha": 0.9,
        "edgecolor": COLOR_TAUPE,
    }

    if dark_mode:
        legend_kwargs["facecolor"] = COLOR_DARK_BLUE
        legend_kwargs["labelcolor"] = COLOR_CREAM

    # User kwargs take precedence
    legend_kwargs.update(kwargs)

    ax.legend(**legend_kwargs)


def create_figure(
    figsize: Tuple[float, float] = (10, 8), dark_mode: bool = False, title: str = ""
) -> Tuple[Figure, Axes]:
    """Create a matplotlib figure with the shared styling.

    Args:
        figsize: Figure size in inches (width, height).
        dark_mode: Whether to use dark mode styling (default: False).
        title: Optional main figure title.

    Returns:
        Tuple of (figure, axes).
    """
    if dark_mode:
        fig, ax = plt.subplots(figsize=figsize, facecolor=COLOR_DARK_BLUE)
        if title:
            fig.suptitle(title, fontsize=14, fontweight="bold", color=COLOR_CREAM)
    else:
        fig, ax = plt.subplots(figsize=figsize)
        if title:
            fig.suptitle(title, fontsize=14, fontweight="bold")

    return fig, ax


def save_figure(fig: Figure, filepath: Path, dpi: int = 150, bbox_inches: str = "tight") -> None:
    """Save figure with consistent settings."""
    filepath.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(filepath, dpi=dpi, bbox_inches=bbox_inches)
    logging.info(f"Saved figure to {filepath}")
