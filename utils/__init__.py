"""
Utilities module - Atlas composition, serialization and visualization.
"""

from .atlas import image_boxes, compose_atlas, atlas_uv_rects
from .serialization import packed_to_dict, packed_from_dict, save_layout, load_layout
from .visualization import plot_layout, plot_packing, plot_efficiency_history

__all__ = [
    'image_boxes',
    'compose_atlas',
    'atlas_uv_rects',
    'packed_to_dict',
    'packed_from_dict',
    'save_layout',
    'load_layout',
    'plot_layout',
    'plot_packing',
    'plot_efficiency_history',
]
