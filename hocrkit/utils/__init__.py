"""Utilities package - Helper functions for text, bbox, and image processing."""

from .text_utils import (
    to_ascii,
    chars_fuzzy_equal,
    is_negligible,
    is_smaller,
    fuzzy_equal,
    fuzzy_prefix,
    fuzzy_contains,
)

from .bbox_utils import (
    extract_bbox,
    draw_bounding_boxes,
)

__all__ = [
    # Text utils
    'to_ascii',
    'chars_fuzzy_equal',
    'is_negligible',
    'is_smaller',
    'fuzzy_equal',
    'fuzzy_prefix',
    'fuzzy_contains',

    # BBox utils
    'extract_bbox',
    'draw_bounding_boxes',
]
