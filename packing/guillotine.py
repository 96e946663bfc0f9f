"""
Guillotine Packer - Greedy best-fit packing of boxes into one container.

Pipeline:
1. Clamp spacing / minimum width to >= 0
2. Sort boxes largest first
3. Place each box in its best free region, splitting the rest
4. Track the running container size
5. Drop the trailing spacing, apply optional power-of-two rounding

The result is not optimal (rectangle packing is NP-hard) but it is
deterministic and never overlaps. Every input box is placed; a box that
cannot be placed is an internal error and raises UnplaceableBoxError.
"""

from functools import cmp_to_key
from typing import Iterable, List, Optional
import time

from config import PackConfig
from core.boxes import Box, PackedBoxes, PlacedBox
from core.geometry import clamp_non_negative, next_power_of_two
from packing.regions import FreeRegionTracker


class UnplaceableBoxError(RuntimeError):
    """No free region could hold a box."""

    def __init__(self, box: Box):
        super().__init__(
            f"No free region fits box {abs(box.width)}x{abs(box.height)}"
        )
        self.box = box


# =============================================================================
# ORDERING
# =============================================================================

def compare_boxes(a: Box, b: Box) -> int:
    """
    Largest-first ordering.

    If one box is at least as large in both dimensions it goes first;
    otherwise the larger area goes first. Equal areas fall back to the
    wider, then the taller box. Returns <0 if `a` comes first.
    """
    aw, ah = a.abs_width, a.abs_height
    bw, bh = b.abs_width, b.abs_height

    if aw == bw and ah == bh:
        return 0
    if aw >= bw and ah >= bh:
        return -1
    if aw <= bw and ah <= bh:
        return 1

    area_a = aw * ah
    area_b = bw * bh
    if area_a > area_b:
        return -1
    if area_a < area_b:
        return 1
    if aw != bw:
        return -1 if aw > bw else 1
    return -1 if ah > bh else 1


def sort_boxes(boxes: Iterable[Box]) -> List[Box]:
    """Stable largest-first sort (see compare_boxes)."""
    return sorted(boxes, key=cmp_to_key(compare_boxes))


# =============================================================================
# PACKER
# =============================================================================

class GuillotinePacker:
    """
    Packs boxes into the smallest container the heuristic finds.

    Example:
        packer = GuillotinePacker(PackConfig(spacing=2))
        packed = packer.pack([Box(32, 16, 'a'), Box(8, 8, 'b')])
        print(packed.width, packed.height)

    The packer holds no state between calls, so one instance can be
    shared between threads.
    """

    def __init__(self, config: PackConfig = None):
        self.config = config or PackConfig()

    def pack(self, boxes: Iterable[Box]) -> PackedBoxes:
        """
        Pack all boxes.

        Args:
            boxes: Boxes to place; negative sizes use their absolute value

        Returns:
            PackedBoxes with one PlacedBox per input box, in placement order

        Raises:
            UnplaceableBoxError: if a box finds no free region. Only an
                internal invariant violation raises; the unbounded seed
                region makes it unreachable for valid trackers
        """
        start_time = time.time()
        spacing = clamp_non_negative(self.config.spacing)
        minimum_width = clamp_non_negative(self.config.minimum_width)

        tracker = FreeRegionTracker()
        placed: List[PlacedBox] = []

        # Running size includes trailing spacing; removed at the end
        width = minimum_width + spacing
        height = 0

        for box in sort_boxes(boxes):
            split_vertically = len(placed) % 2 == 0
            placed_box = tracker.place(spacing, box, split_vertically)
            if placed_box is None:
                raise UnplaceableBoxError(box)

            placed.append(placed_box)
            width = max(width, placed_box.x + placed_box.width + spacing)
            height = max(height, placed_box.y + placed_box.height + spacing)

        width = max(width - spacing, 0)
        height = max(height - spacing, 0)

        if self.config.power_of_two_size:
            width = next_power_of_two(width)
            height = next_power_of_two(height)

        packed = PackedBoxes(width=width, height=height, boxes=tuple(placed))

        if self.config.verbose:
            self._report(packed, time.time() - start_time, len(tracker))

        return packed

    def _report(self, packed: PackedBoxes, elapsed: float, n_regions: int):
        from core.bounding_box import packing_efficiency

        print(f"Packed {len(packed.boxes)} boxes into {packed.width}x{packed.height}")
        print(f"   Efficiency: {packing_efficiency(packed):.3f}")
        print(f"   Free regions left: {n_regions}")
        print(f"   Time: {elapsed * 1000:.2f}ms")


def pack(config: Optional[PackConfig], boxes: Iterable[Box]) -> PackedBoxes:
    """Pack `boxes` with `config` (None = defaults)."""
    return GuillotinePacker(config).pack(boxes)
