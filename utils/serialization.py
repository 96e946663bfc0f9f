"""
Layout Serialization - Save and load packed layouts.

A layout is stored as two size scalars and an ordered list of five-field
records. Payloads are opaque here: callers pass `encode_payload` /
`decode_payload` to turn them into something JSON can hold.

Format:
    {
        "width": 64, "height": 32,
        "boxes": [{"x": 0, "y": 0, "width": 32, "height": 32, "data": ...}, ...]
    }
"""

import json
import os
from typing import Any, Callable, Dict, Optional

import numpy as np

from core.boxes import PackedBoxes, PlacedBox


def _identity(value: Any) -> Any:
    return value


def _plain(value: Any) -> Any:
    """numpy scalars -> Python numbers."""
    if isinstance(value, np.generic):
        return value.item()
    return value


def packed_to_dict(
    packed: PackedBoxes,
    encode_payload: Optional[Callable[[Any], Any]] = None
) -> Dict:
    encode = encode_payload or _identity
    return {
        'width': _plain(packed.width),
        'height': _plain(packed.height),
        'boxes': [
            {
                'x': _plain(b.x),
                'y': _plain(b.y),
                'width': _plain(b.width),
                'height': _plain(b.height),
                'data': encode(b.data),
            }
            for b in packed.boxes
        ],
    }


def packed_from_dict(
    d: Dict,
    decode_payload: Optional[Callable[[Any], Any]] = None
) -> PackedBoxes:
    decode = decode_payload or _identity
    boxes = tuple(
        PlacedBox(
            x=b['x'],
            y=b['y'],
            width=b['width'],
            height=b['height'],
            data=decode(b.get('data')),
        )
        for b in d.get('boxes', [])
    )
    return PackedBoxes(width=d['width'], height=d['height'], boxes=boxes)


def save_layout(
    packed: PackedBoxes,
    path: str,
    encode_payload: Optional[Callable[[Any], Any]] = None,
    verbose: bool = False
) -> str:
    """
    Write a layout as JSON.

    Returns:
        The path written
    """
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(path, 'w') as f:
        json.dump(packed_to_dict(packed, encode_payload), f, indent=2)

    if verbose:
        print(f"Saved layout ({len(packed.boxes)} boxes) to {path}")
    return path


def load_layout(
    path: str,
    decode_payload: Optional[Callable[[Any], Any]] = None
) -> PackedBoxes:
    """Read a layout written by save_layout."""
    with open(path, 'r') as f:
        return packed_from_dict(json.load(f), decode_payload)
