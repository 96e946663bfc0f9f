"""
Collision Detection - Overlap checks for axis-aligned boxes.

This module provides three ways to find overlapping boxes:
1. Sweep line - per-axis interval sweep, the main detector
2. Brute force - Numba-compiled O(n²) pair check, an independent cross-check
3. Shapely - exact overlap areas for layout validation

Overlap means positive-length overlap on BOTH axes. Boxes that only touch
along an edge, and zero-width/zero-height boxes, never overlap anything.
"""

import numpy as np
from numba import njit
from shapely.geometry import box as shapely_box
from shapely.ops import unary_union
from typing import Any, Iterable, List, Optional, Set, Tuple

from core.boxes import PackedBoxes, bounds_array


# =============================================================================
# SWEEP LINE
# =============================================================================

def interval_overlaps(intervals: Iterable[Tuple[int, float, float]]) -> Set[Tuple[int, int]]:
    """
    Find all pairs of half-open intervals that overlap.

    Args:
        intervals: (id, start, end) triples. start/end may come in either
                   order; zero-length intervals are ignored.

    Returns:
        Set of (i, j) id pairs with i < j
    """
    events = []
    for ident, start, end in intervals:
        if start == end:
            continue
        events.append((min(start, end), True, ident))
        events.append((max(start, end), False, ident))

    # At equal coordinates, close intervals before opening new ones so that
    # touching intervals do not count as overlapping
    events.sort(key=lambda event: (event[0], event[1]))

    open_ids = set()
    pairs = set()
    for _, is_start, ident in events:
        if is_start:
            for other in open_ids:
                pairs.add((min(ident, other), max(ident, other)))
            open_ids.add(ident)
        else:
            open_ids.discard(ident)

    return pairs


def box_intersections_array(bounds: np.ndarray) -> Set[Tuple[int, int]]:
    """
    Sweep-line overlap detection on an (n, 4) array of [x, y, w, h].

    Returns:
        Set of (i, j) row-index pairs with i < j
    """
    bounds = np.asarray(bounds, dtype=np.float64).reshape(-1, 4)

    x_overlap = interval_overlaps(
        (i, bounds[i, 0], bounds[i, 0] + bounds[i, 2]) for i in range(len(bounds))
    )
    y_overlap = interval_overlaps(
        (i, bounds[i, 1], bounds[i, 1] + bounds[i, 3]) for i in range(len(bounds))
    )

    return x_overlap & y_overlap


def box_intersections(rects: Iterable[Any]) -> Set[Tuple[int, int]]:
    """
    Find every pair of overlapping rectangles.

    Args:
        rects: Objects with x, y, width, height (e.g. PlacedBox) or
               (x, y, w, h) sequences

    Returns:
        Set of (i, j) index pairs with i < j
    """
    return box_intersections_array(bounds_array(rects))


# =============================================================================
# BRUTE FORCE (Numba)
# =============================================================================

@njit(cache=True, fastmath=True)
def bounds_overlap(
    b1_min_x: float, b1_min_y: float, b1_max_x: float, b1_max_y: float,
    b2_min_x: float, b2_min_y: float, b2_max_x: float, b2_max_y: float
) -> bool:
    """
    Check if two normalized boxes overlap with positive length on both axes.

    Degenerate boxes (zero width or height) never overlap.
    """
    if b1_max_x <= b1_min_x or b2_max_x <= b2_min_x:
        return False
    if b1_max_y <= b1_min_y or b2_max_y <= b2_min_y:
        return False
    return (
        b1_min_x < b2_max_x and b2_min_x < b1_max_x and
        b1_min_y < b2_max_y and b2_min_y < b1_max_y
    )


@njit(cache=True)
def _normalize_bounds(bounds: np.ndarray) -> np.ndarray:
    """[x, y, w, h] rows -> [min_x, min_y, max_x, max_y] rows."""
    n = bounds.shape[0]
    out = np.empty((n, 4), dtype=np.float64)
    for i in range(n):
        x0 = bounds[i, 0]
        x1 = bounds[i, 0] + bounds[i, 2]
        y0 = bounds[i, 1]
        y1 = bounds[i, 1] + bounds[i, 3]
        out[i, 0] = min(x0, x1)
        out[i, 1] = min(y0, y1)
        out[i, 2] = max(x0, x1)
        out[i, 3] = max(y0, y1)
    return out


@njit(cache=True)
def _collision_matrix(bounds: np.ndarray) -> np.ndarray:
    """Upper-triangular boolean matrix of overlapping pairs."""
    norm = _normalize_bounds(bounds)
    n = norm.shape[0]
    out = np.zeros((n, n), dtype=np.bool_)
    for i in range(n):
        for j in range(i + 1, n):
            if bounds_overlap(
                norm[i, 0], norm[i, 1], norm[i, 2], norm[i, 3],
                norm[j, 0], norm[j, 1], norm[j, 2], norm[j, 3]
            ):
                out[i, j] = True
    return out


def check_all_collisions(bounds: np.ndarray) -> List[Tuple[int, int]]:
    """
    Find ALL colliding pairs by checking every pair.

    Args:
        bounds: (n, 4) array of [x, y, w, h]

    Returns:
        Sorted list of (i, j) tuples for colliding pairs
    """
    bounds = np.asarray(bounds, dtype=np.float64).reshape(-1, 4)
    if len(bounds) < 2:
        return []
    rows, cols = np.nonzero(_collision_matrix(bounds))
    return [(int(i), int(j)) for i, j in zip(rows, cols)]


def check_any_collision(bounds: np.ndarray) -> bool:
    """Check if ANY pair of boxes collides."""
    bounds = np.asarray(bounds, dtype=np.float64).reshape(-1, 4)
    if len(bounds) < 2:
        return False
    return bool(_collision_matrix(bounds).any())


# =============================================================================
# SHAPELY-BASED OVERLAP AREA
# =============================================================================

def _to_polygon(x: float, y: float, w: float, h: float):
    """Shapely rectangle, or None for degenerate boxes."""
    if w == 0 or h == 0:
        return None
    return shapely_box(min(x, x + w), min(y, y + h), max(x, x + w), max(y, y + h))


def overlap_area(a: Any, b: Any) -> float:
    """Area shared by two rectangles (0.0 if they only touch)."""
    (ax, ay, aw, ah), (bx, by, bw, bh) = bounds_array([a, b])
    pa = _to_polygon(ax, ay, aw, ah)
    pb = _to_polygon(bx, by, bw, bh)
    if pa is None or pb is None:
        return 0.0
    return float(pa.intersection(pb).area)


def total_overlap_area(rects: Iterable[Any]) -> float:
    """
    Sum of individual areas minus the area of their union.

    Zero exactly when no two rectangles overlap.
    """
    polygons = [
        p for p in (_to_polygon(*row) for row in bounds_array(rects)) if p is not None
    ]
    if not polygons:
        return 0.0
    summed = sum(p.area for p in polygons)
    return float(max(summed - unary_union(polygons).area, 0.0))


# =============================================================================
# VALIDATION FUNCTIONS
# =============================================================================

def validate_layout(
    packed: PackedBoxes,
    expected_count: Optional[int] = None,
    max_reported: int = 5
) -> Tuple[bool, List[str]]:
    """
    Validate a packed layout.

    Checks box count, non-negative positions and sizes, containment in
    the container and pairwise overlaps.

    Args:
        packed: Result of a pack call
        expected_count: Number of input boxes (None = skip count check)
        max_reported: Maximum number of overlapping pairs listed

    Returns:
        (is_valid, list_of_issues)
    """
    issues = []

    if expected_count is not None and len(packed.boxes) != expected_count:
        issues.append(f"Expected {expected_count} boxes, got {len(packed.boxes)}")

    for i, b in enumerate(packed.boxes):
        if b.x < 0 or b.y < 0:
            issues.append(f"Box {i}: negative position ({b.x}, {b.y})")
        if b.width < 0 or b.height < 0:
            issues.append(f"Box {i}: negative size {b.width}x{b.height}")
        if b.x + b.width > packed.width or b.y + b.height > packed.height:
            issues.append(
                f"Box {i}: extends past container {packed.width}x{packed.height}"
            )

    collisions = sorted(box_intersections(packed.boxes))
    for i, j in collisions[:max_reported]:
        area = overlap_area(packed.boxes[i], packed.boxes[j])
        issues.append(f"Overlap between boxes {i} and {j} (area {area:g})")
    if len(collisions) > max_reported:
        issues.append(f"... and {len(collisions) - max_reported} more overlaps")

    return len(issues) == 0, issues


# =============================================================================
# WARMUP
# =============================================================================

def warmup():
    """Warm up JIT compilation."""
    bounds = np.array([
        [0.0, 0.0, 1.0, 1.0],
        [0.5, 0.5, 1.0, 1.0],
    ], dtype=np.float64)

    _ = bounds_overlap(0, 0, 1, 1, 0.5, 0.5, 1.5, 1.5)
    _ = _collision_matrix(bounds)

    print("JIT warmup complete for collision module")


if __name__ == "__main__":
    warmup()

    overlapping = [(0, 0, 5, 5), (2, 2, 5, 5)]
    touching = [(0, 0, 5, 5), (5, 2, 5, 5)]

    print(f"\nBoxes {overlapping}: pairs={box_intersections(overlapping)}")
    print(f"Boxes {touching}: pairs={box_intersections(touching)}")
