"""
Geometry Primitives - Scalars and possibly-unbounded lengths.

Box coordinates and sizes are plain numbers (int, float or numpy scalars),
always in the caller's unit (usually pixels). Free regions additionally
need a length that can be "unbounded", which is modelled explicitly as
a tagged value instead of a huge sentinel number:

    Length.finite(12)   -> finite extent of 12
    Length.unbounded()  -> extent without limit (UNBOUNDED)

Subtracting from an unbounded length stays unbounded, and an unbounded
length fits any requirement.
"""

from dataclasses import dataclass
from typing import Optional, Union
import numbers

Scalar = Union[int, float, numbers.Real]


# =============================================================================
# LENGTH (FINITE OR UNBOUNDED)
# =============================================================================

@dataclass(frozen=True)
class Length:
    """Extent of a free region; `value is None` means unbounded."""
    value: Optional[Scalar] = None

    @classmethod
    def finite(cls, value: Scalar) -> 'Length':
        return cls(value)

    @classmethod
    def unbounded(cls) -> 'Length':
        return cls(None)

    @property
    def is_unbounded(self) -> bool:
        return self.value is None

    @property
    def is_finite(self) -> bool:
        return self.value is not None

    def __sub__(self, amount: Scalar) -> 'Length':
        if self.is_unbounded:
            return self
        return Length(self.value - amount)

    def fits(self, required: Scalar) -> bool:
        """True if an extent of `required` fits inside this length."""
        return self.is_unbounded or self.value >= required

    def is_positive(self) -> bool:
        return self.is_unbounded or self.value > 0

    def __repr__(self) -> str:
        return "Length(unbounded)" if self.is_unbounded else f"Length({self.value})"


UNBOUNDED = Length.unbounded()


# =============================================================================
# SCALAR HELPERS
# =============================================================================

def next_power_of_two(value: Scalar) -> Scalar:
    """
    Smallest power of two >= value.

    Zero (and anything negative) maps to 0, so an empty dimension
    stays empty after rounding.
    """
    if value <= 0:
        return 0
    power = 1
    while power < value:
        power *= 2
    return power


def clamp_non_negative(value: Optional[Scalar]) -> Scalar:
    """Clamp an optional setting to >= 0 (None counts as 0)."""
    if value is None or value < 0:
        return 0
    return value
