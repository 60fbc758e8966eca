"""
Bounding box utilities for hOCR documents.

bbox extraction lives with the geometry in ``hocrkit.core.bounds`` and is
re-exported here next to the drawing helper.
"""
from typing import Iterable

from PIL import Image, ImageDraw

from hocrkit.core.bounds import extract_bbox  # noqa: F401


def draw_bounding_boxes(
    image: Image.Image,
    rectangles: Iterable,
    color='orange',
    width: int = 3,
    scale: float = 1.0
) -> Image.Image:
    """
    Draw rectangle outlines on an image in place.

    Args:
        image: PIL Image to draw on
        rectangles: Bounds to draw; None entries are skipped
        color: Outline color accepted by PIL
        width: Outline width in pixels
        scale: Factor applied to each rectangle before drawing

    Returns:
        The same image, for chaining
    """
    draw = ImageDraw.Draw(image)

    for rect in rectangles:
        if rect is None:
            continue
        b = rect.scale(scale)
        # PIL rejects boxes whose corners are out of order
        if b.right < b.left or b.bottom < b.top:
            continue
        draw.rectangle([b.left, b.top, b.right, b.bottom], outline=color, width=width)

    return image
