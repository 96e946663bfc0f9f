"""
Core module - Geometry, box model, collision detection and extents.
"""

from .geometry import (
    Length,
    UNBOUNDED,
    next_power_of_two,
    clamp_non_negative,
)

from .boxes import (
    Box,
    PlacedBox,
    PackedBoxes,
    bounds_array,
)

from .collision import (
    interval_overlaps,
    box_intersections,
    box_intersections_array,
    check_all_collisions,
    check_any_collision,
    overlap_area,
    total_overlap_area,
    validate_layout,
)

from .bounding_box import (
    compute_bounding_box,
    get_bounding_box,
    used_area,
    packing_efficiency,
)

__all__ = [
    'Length',
    'UNBOUNDED',
    'next_power_of_two',
    'clamp_non_negative',
    'Box',
    'PlacedBox',
    'PackedBoxes',
    'bounds_array',
    'interval_overlaps',
    'box_intersections',
    'box_intersections_array',
    'check_all_collisions',
    'check_any_collision',
    'overlap_area',
    'total_overlap_area',
    'validate_layout',
    'compute_bounding_box',
    'get_bounding_box',
    'used_area',
    'packing_efficiency',
]
