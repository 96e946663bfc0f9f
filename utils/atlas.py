"""
Atlas Composition - Blit packed pixel buffers into one bitmap.

Boxes built with `image_boxes` carry `(pixels, payload)` as their data,
where `pixels` is an (h, w) or (h, w, c) numpy array. After packing,
`compose_atlas` allocates a (height, width, channels) array and copies
each buffer to its (x, y) position. Rows are y, columns are x.
"""

import numpy as np
from typing import Any, Dict, List, Optional

from config import AtlasConfig
from core.boxes import Box, PackedBoxes


def image_boxes(images: Dict[Any, np.ndarray]) -> List[Box]:
    """
    Build boxes from named pixel buffers.

    Args:
        images: Mapping payload -> pixel array

    Returns:
        One Box per image with data = (pixels, payload)
    """
    boxes = []
    for payload, pixels in images.items():
        pixels = np.asarray(pixels)
        boxes.append(Box(pixels.shape[1], pixels.shape[0], (pixels, payload)))
    return boxes


def _as_channels(pixels: np.ndarray, channels: int) -> np.ndarray:
    """Broadcast grayscale buffers to `channels`; reject mismatched ones."""
    if pixels.ndim == 2:
        return np.repeat(pixels[:, :, None], channels, axis=2)
    if pixels.ndim == 3 and pixels.shape[2] == channels:
        return pixels
    raise ValueError(
        f"Pixel buffer of shape {pixels.shape} does not have {channels} channels"
    )


def compose_atlas(packed: PackedBoxes, config: Optional[AtlasConfig] = None) -> np.ndarray:
    """
    Compose the atlas bitmap for a packed layout.

    Args:
        packed: Layout whose box data are (pixels, payload) pairs
        config: Channel count and dtype of the output

    Returns:
        (packed.height, packed.width, channels) array

    Raises:
        ValueError: if a box's data is not a (pixels, payload) pair or the
                    buffer shape does not match the placed size
    """
    config = config or AtlasConfig()
    atlas = np.zeros(
        (int(packed.height), int(packed.width), config.channels),
        dtype=np.dtype(config.dtype),
    )

    for i, placed in enumerate(packed.boxes):
        try:
            pixels, _ = placed.data
        except (TypeError, ValueError):
            raise ValueError(f"Box {i}: data is not a (pixels, payload) pair")

        pixels = _as_channels(np.asarray(pixels), config.channels)
        w, h = int(placed.width), int(placed.height)
        if pixels.shape[0] != h or pixels.shape[1] != w:
            raise ValueError(
                f"Box {i}: buffer is {pixels.shape[1]}x{pixels.shape[0]}, placed as {w}x{h}"
            )

        x, y = int(placed.x), int(placed.y)
        atlas[y:y + h, x:x + w] = pixels

    return atlas


def atlas_uv_rects(packed: PackedBoxes) -> Dict[Any, tuple]:
    """
    Normalized (u0, v0, u1, v1) rectangle per payload.

    Useful for remapping texture coordinates after composition.
    """
    rects = {}
    if packed.width <= 0 or packed.height <= 0:
        return rects
    for i, placed in enumerate(packed.boxes):
        try:
            _, payload = placed.data
        except (TypeError, ValueError):
            raise ValueError(f"Box {i}: data is not a (pixels, payload) pair")
        rects[payload] = (
            placed.x / packed.width,
            placed.y / packed.height,
            (placed.x + placed.width) / packed.width,
            (placed.y + placed.height) / packed.height,
        )
    return rects
