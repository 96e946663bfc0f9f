"""
Box Model - Input boxes, placed boxes and packed layouts.

A Box is what the caller asks to place; its width/height may be negative
(the absolute value is the real footprint). The packer answers with a
PackedBoxes: the container size plus one PlacedBox per input box, always
with non-negative position and size. Payload data is carried through
untouched and never inspected.
"""

import numpy as np
from dataclasses import dataclass
from typing import Any, Iterable, List, Tuple

from core.geometry import Scalar


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class Box:
    """Rectangle request with opaque payload."""
    width: Scalar
    height: Scalar
    data: Any = None

    @property
    def abs_width(self) -> Scalar:
        return abs(self.width)

    @property
    def abs_height(self) -> Scalar:
        return abs(self.height)

    @property
    def area(self) -> Scalar:
        return self.abs_width * self.abs_height


@dataclass(frozen=True)
class PlacedBox:
    """A box after placement."""
    x: Scalar
    y: Scalar
    width: Scalar
    height: Scalar
    data: Any = None

    @property
    def area(self) -> Scalar:
        return self.width * self.height

    def to_record(self) -> Tuple[Scalar, Scalar, Scalar, Scalar, Any]:
        """Flat five-field record (x, y, width, height, data)."""
        return (self.x, self.y, self.width, self.height, self.data)


@dataclass(frozen=True)
class PackedBoxes:
    """Container size and final placements (in placement order)."""
    width: Scalar
    height: Scalar
    boxes: Tuple[PlacedBox, ...] = ()

    def __len__(self) -> int:
        return len(self.boxes)

    def __iter__(self):
        return iter(self.boxes)

    @property
    def area(self) -> Scalar:
        return self.width * self.height

    def to_records(self) -> Tuple[Scalar, Scalar, List[Tuple]]:
        """Flat representation: two size scalars and an ordered record list."""
        return self.width, self.height, [b.to_record() for b in self.boxes]


# =============================================================================
# ARRAY HELPERS
# =============================================================================

def bounds_array(rects: Iterable[Any]) -> np.ndarray:
    """
    Stack rectangles into an (n, 4) float64 array of [x, y, width, height].

    Accepts anything with x/y/width/height attributes (PlacedBox and
    friends) or plain 4-sequences.
    """
    rows = []
    for rect in rects:
        if hasattr(rect, 'x'):
            rows.append((rect.x, rect.y, rect.width, rect.height))
        else:
            x, y, w, h = rect
            rows.append((x, y, w, h))
    return np.array(rows, dtype=np.float64).reshape(-1, 4)
