"""
Box Packing - Global Configuration
All packing, demo and atlas settings in one place.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class PackConfig:
    """Guillotine packer configuration."""
    # Gap reserved between neighbouring boxes (negative values clamp to 0)
    spacing: float = 0

    # Round final container width/height up to the next power of two
    power_of_two_size: bool = False

    # Floor on container width, applied before rounding (None = no floor)
    minimum_width: Optional[float] = None

    # === Verbosity ===
    verbose: bool = False


@dataclass
class DemoConfig:
    """Random box generation for the CLI demo."""
    n_boxes: int = 64
    min_size: int = 8
    max_size: int = 64
    seed: int = 42


@dataclass
class AtlasConfig:
    """Bitmap composition settings."""
    channels: int = 4
    dtype: str = 'uint8'


@dataclass
class Config:
    """Master configuration combining all sub-configs."""
    pack: PackConfig = field(default_factory=PackConfig)
    demo: DemoConfig = field(default_factory=DemoConfig)
    atlas: AtlasConfig = field(default_factory=AtlasConfig)


# Global configuration instance
CONFIG = Config()
