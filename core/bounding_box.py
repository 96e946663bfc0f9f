"""
Bounding Box Computation - Extents and packing efficiency.

Efficiency is the share of the container covered by boxes:

    efficiency = sum(box areas) / (container width * container height)

Since a valid layout has no overlaps, this is at most 1.0.
"""

import numpy as np
from numba import njit
from typing import Tuple
import math

from core.boxes import PackedBoxes, bounds_array


@njit(cache=True)
def compute_bounding_box(bounds: np.ndarray) -> Tuple[float, float, float, float]:
    """
    Compute axis-aligned bounding box of all boxes.

    Args:
        bounds: (n, 4) array of [x, y, w, h]; negative sizes are allowed

    Returns:
        (min_x, min_y, max_x, max_y)
    """
    min_x = math.inf
    max_x = -math.inf
    min_y = math.inf
    max_y = -math.inf

    for i in range(bounds.shape[0]):
        x0 = bounds[i, 0]
        x1 = bounds[i, 0] + bounds[i, 2]
        y0 = bounds[i, 1]
        y1 = bounds[i, 1] + bounds[i, 3]

        if min(x0, x1) < min_x:
            min_x = min(x0, x1)
        if max(x0, x1) > max_x:
            max_x = max(x0, x1)
        if min(y0, y1) < min_y:
            min_y = min(y0, y1)
        if max(y0, y1) > max_y:
            max_y = max(y0, y1)

    return min_x, min_y, max_x, max_y


@njit(cache=True, fastmath=True)
def compute_used_area(bounds: np.ndarray) -> float:
    """Sum of absolute box areas."""
    total = 0.0
    for i in range(bounds.shape[0]):
        total += abs(bounds[i, 2] * bounds[i, 3])
    return total


def get_bounding_box(packed: PackedBoxes) -> Tuple[float, float, float, float]:
    """
    Get bounding box of the placed boxes (not the container).

    Returns:
        (min_x, min_y, max_x, max_y), all zero for an empty layout
    """
    if not packed.boxes:
        return 0.0, 0.0, 0.0, 0.0
    return compute_bounding_box(bounds_array(packed.boxes))


def used_area(packed: PackedBoxes) -> float:
    """Total area covered by placed boxes."""
    if not packed.boxes:
        return 0.0
    return float(compute_used_area(bounds_array(packed.boxes)))


def packing_efficiency(packed: PackedBoxes) -> float:
    """
    Compute used area / container area.

    Returns 0.0 for an empty (zero-area) container.
    """
    container = packed.width * packed.height
    if container <= 0:
        return 0.0
    return used_area(packed) / float(container)


# =============================================================================
# WARMUP
# =============================================================================

def warmup():
    """Warm up JIT compilation."""
    bounds = np.array([
        [0.0, 0.0, 4.0, 2.0],
        [4.0, 0.0, 2.0, 2.0],
    ], dtype=np.float64)

    _ = compute_bounding_box(bounds)
    _ = compute_used_area(bounds)

    print("JIT warmup complete for bounding_box module")
