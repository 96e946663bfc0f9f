"""
Packing module - Free-region tracking and the guillotine packer.
"""

from .regions import Region, FreeRegionTracker, region_score, split_region
from .guillotine import (
    GuillotinePacker,
    UnplaceableBoxError,
    compare_boxes,
    sort_boxes,
    pack,
)

__all__ = [
    'Region',
    'FreeRegionTracker',
    'region_score',
    'split_region',
    'GuillotinePacker',
    'UnplaceableBoxError',
    'compare_boxes',
    'sort_boxes',
    'pack',
]
