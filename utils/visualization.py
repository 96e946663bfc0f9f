"""
Visualization - Plotting packed layouts.

Provides tools for debugging and understanding packing results.
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle
from matplotlib.collections import PatchCollection
from typing import List, Optional, Tuple

from core.boxes import PackedBoxes
from core.bounding_box import packing_efficiency
from core.collision import box_intersections


def plot_layout(
    packed: PackedBoxes,
    ax=None,
    title: str = None,
    show_bounds: bool = True,
    show_efficiency: bool = True,
    highlight_overlaps: bool = True,
    box_colors: Optional[List[str]] = None,
    label_boxes: bool = False,
    figsize: Tuple[int, int] = (10, 10)
):
    """
    Plot a packed layout.

    Args:
        packed: Result of a pack call
        ax: Matplotlib axes
        title: Plot title
        show_bounds: Draw the container outline
        show_efficiency: Display efficiency in title
        highlight_overlaps: Color overlapping boxes red
        box_colors: Custom colors for each box
        label_boxes: Write each box's payload in its center
        figsize: Figure size if creating new figure

    Returns:
        ax: Matplotlib axes
    """
    n = len(packed.boxes)

    overlapping = set()
    if highlight_overlaps:
        for i, j in box_intersections(packed.boxes):
            overlapping.add(i)
            overlapping.add(j)

    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=figsize)

    patches = []
    colors = []
    for i, b in enumerate(packed.boxes):
        patches.append(Rectangle((b.x, b.y), b.width, b.height))

        if box_colors is not None:
            colors.append(box_colors[i])
        elif i in overlapping:
            colors.append('red')
        else:
            # Gradient blue based on placement order
            blue = 0.4 + 0.5 * (i / max(n - 1, 1))
            colors.append((0.1, 0.3, blue))

        if label_boxes and b.data is not None:
            ax.text(
                b.x + b.width / 2, b.y + b.height / 2, str(b.data),
                ha='center', va='center', fontsize=7
            )

    collection = PatchCollection(
        patches,
        facecolors=colors,
        edgecolors='black',
        linewidths=0.5,
        alpha=0.7
    )
    ax.add_collection(collection)

    if show_bounds:
        ax.add_patch(Rectangle(
            (0, 0), packed.width, packed.height,
            fill=False,
            edgecolor='darkred',
            linestyle='--',
            linewidth=2
        ))

    padding = 0.05 * max(packed.width, packed.height, 1)
    ax.set_xlim(-padding, packed.width + padding)
    ax.set_ylim(-padding, packed.height + padding)
    ax.set_aspect('equal')
    ax.grid(True, alpha=0.3)

    if title is None:
        title = f"{n} boxes in {packed.width}x{packed.height}"

    if show_efficiency:
        title += f" | Efficiency: {packing_efficiency(packed):.3f}"

        if overlapping:
            title += f" | {len(overlapping)} overlapping"

    ax.set_title(title)
    ax.set_xlabel('x')
    ax.set_ylabel('y')

    return ax


def plot_packing(
    packed: PackedBoxes,
    save_path: Optional[str] = None,
    show: bool = True,
    **kwargs
):
    """
    Plot a layout and optionally save it to file.

    Args:
        packed: Result of a pack call
        save_path: Path to save figure (None = don't save)
        show: Call plt.show() when done
        **kwargs: Passed to plot_layout
    """
    fig, ax = plt.subplots(1, 1, figsize=kwargs.pop('figsize', (10, 10)))
    plot_layout(packed, ax=ax, **kwargs)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved figure to {save_path}")

    if show:
        plt.show()
    else:
        plt.close(fig)

    return fig


def plot_efficiency_history(
    efficiencies: List[float],
    title: str = "Packing Efficiency",
    save_path: Optional[str] = None,
    show: bool = True
):
    """
    Plot efficiency over a series of packing runs.

    Args:
        efficiencies: Efficiency of each run
        title: Plot title
        save_path: Path to save figure
        show: Call plt.show() when done
    """
    fig, ax = plt.subplots(figsize=(12, 6))

    ax.plot(efficiencies, 'b-', linewidth=1, alpha=0.7)
    ax.fill_between(range(len(efficiencies)), efficiencies, alpha=0.2)
    ax.axhline(np.mean(efficiencies), color='red', linestyle='--',
               label=f'Mean: {np.mean(efficiencies):.4f}')

    ax.set_xlabel('Run')
    ax.set_ylabel('Used area / container area')
    ax.set_title(title)
    ax.set_ylim(0, 1.05)
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150)

    if show:
        plt.show()
    else:
        plt.close(fig)

    return fig
