"""
Free Regions - Guillotine bookkeeping of the space still available.

The tracker starts with a single region at the origin that is unbounded
in both directions. Every placement consumes one region and cuts it into
at most two children (guillotine split) through the placed box grown by
`spacing` on its right and top sides:

        +-----------+----------------------
        |   top     |
        +-----+.....+
        | box |  :  |      right
        +-----+.....+----------------------
      (x, y)

Whether the cut between the two children runs vertically (the right child
keeps the full region height) or horizontally (the top child keeps the full
region width) alternates per placement.

Region selection is best fit. Scores are compared as tuples:

    (0, min(leftover_w, leftover_h), x + y)   both leftovers finite
    (1, finite leftover,             x + y)   one leftover unbounded
    (2, 0,                           x + y)   both leftovers unbounded

so any finite fit beats a half-unbounded one, which beats the fully
unbounded region. Ties go to the region nearest the origin, then to the
earliest region in the list.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from core.boxes import Box, PlacedBox
from core.geometry import Length, Scalar, UNBOUNDED


@dataclass(frozen=True)
class Region:
    """Free rectangle; width/height may be unbounded."""
    x: Scalar
    y: Scalar
    width: Length
    height: Length


def region_score(region: Region, need_width: Scalar, need_height: Scalar) -> Optional[Tuple]:
    """
    Best-fit score of placing a (need_width x need_height) footprint.

    Returns:
        Comparable score tuple (lower is better), or None if it doesn't fit
    """
    if not (region.width.fits(need_width) and region.height.fits(need_height)):
        return None

    leftover_w = region.width - need_width
    leftover_h = region.height - need_height
    origin = region.x + region.y

    if leftover_w.is_finite and leftover_h.is_finite:
        return (0, min(leftover_w.value, leftover_h.value), origin)
    if leftover_w.is_unbounded and leftover_h.is_unbounded:
        return (2, 0, origin)

    finite = leftover_h if leftover_w.is_unbounded else leftover_w
    return (1, finite.value, origin)


def split_region(
    spacing: Scalar,
    box: Box,
    region: Region,
    split_vertically: bool
) -> Tuple[PlacedBox, List[Region]]:
    """
    Place `box` at the region's origin and cut the rest into children.

    Args:
        spacing: Gap reserved on the +x and +y sides of the box
        box: Box to place (absolute size is used)
        region: Region being consumed
        split_vertically: Cut direction between the two children

    Returns:
        (placed_box, surviving_children) - children with a finite
        dimension <= 0 are dropped
    """
    width = box.abs_width
    height = box.abs_height
    placed = PlacedBox(region.x, region.y, width, height, box.data)

    right = Region(
        x=region.x + width + spacing,
        y=region.y,
        width=region.width - (width + spacing),
        height=region.height if split_vertically else Length.finite(height + spacing),
    )
    top = Region(
        x=region.x,
        y=region.y + height + spacing,
        width=Length.finite(width + spacing) if split_vertically else region.width,
        height=region.height - (height + spacing),
    )

    children = [
        child for child in (right, top)
        if child.width.is_positive() and child.height.is_positive()
    ]
    return placed, children


class FreeRegionTracker:
    """
    Owns the list of free regions for one packing run.

    Regions are kept in a flat list; best-fit lookup is a linear scan.
    """

    def __init__(self):
        self.regions: List[Region] = [Region(0, 0, UNBOUNDED, UNBOUNDED)]

    def __len__(self) -> int:
        return len(self.regions)

    def find_best_region(self, spacing: Scalar, box: Box) -> Optional[Tuple[Region, List[Region]]]:
        """
        Find the best-fitting region for `box`.

        Returns:
            (region, remaining_regions) or None if nothing fits
        """
        need_width = box.abs_width + spacing
        need_height = box.abs_height + spacing

        best_index = None
        best_score = None
        for index, region in enumerate(self.regions):
            score = region_score(region, need_width, need_height)
            if score is None:
                continue
            if best_score is None or score < best_score:
                best_index = index
                best_score = score

        if best_index is None:
            return None

        remaining = self.regions[:best_index] + self.regions[best_index + 1:]
        return self.regions[best_index], remaining

    def place(self, spacing: Scalar, box: Box, split_vertically: bool) -> Optional[PlacedBox]:
        """
        Place `box` in its best region and absorb the split children.

        Returns:
            The placed box, or None if no region can hold it (tracker
            left unchanged)
        """
        found = self.find_best_region(spacing, box)
        if found is None:
            return None

        region, remaining = found
        placed, children = split_region(spacing, box, region, split_vertically)
        self.regions = remaining + children
        return placed
