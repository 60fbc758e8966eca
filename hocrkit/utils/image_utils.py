"""
Image utilities for hOCR pages.

Renders recognized words and highlight rectangles with Pillow, for
visually checking parse results against the scanned image.
"""
import logging
from typing import List, Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont, ImageOps

from hocrkit.config.settings import settings
from hocrkit.utils.bbox_utils import draw_bounding_boxes

logger = logging.getLogger(__name__)


def load_font(path: str, size: int):
    """
    Load a TrueType font, falling back to Pillow's built-in font.

    Args:
        path: Path to a .ttf file
        size: Font size in points

    Returns:
        A Pillow font object
    """
    try:
        return ImageFont.truetype(path, size)
    except OSError:
        logger.warning(f"Font {path} not available, using Pillow's default font")
        return ImageFont.load_default()


class PageRenderer:
    """
    Draws a page's words and a set of rectangles onto an image.

    Words are drawn at the bottom-left corner of their scaled bounds, in a
    font chosen by style. Plain rectangles use ``rectangle_color``;
    ``colored_rectangles`` carry their own color.
    """

    def __init__(
        self,
        scale: float = 1.0,
        stroke_width: int = 3,
        font_path: str = "DejaVuSans.ttf",
        font_size: int = 15,
        background_color='white',
        font_color='red',
        rectangle_color='orange',
        bold_font_path: Optional[str] = None,
        italic_font_path: Optional[str] = None,
        bold_italic_font_path: Optional[str] = None,
    ):
        self.scale = scale
        self.stroke_width = stroke_width
        self.background_color = background_color
        self.font_color = font_color
        self.rectangle_color = rectangle_color
        self.rectangles: List = []
        self.colored_rectangles: List[Tuple[object, object]] = []
        self.set_font_family(font_path, font_size, bold_font_path, italic_font_path, bold_italic_font_path)

    @classmethod
    def from_settings(cls, config: Optional[dict] = None) -> 'PageRenderer':
        """Create a renderer from ``Settings.get_renderer_config()`` (or a dict of the same shape)."""
        if config is None:
            config = settings.get_renderer_config()
        return cls(**config)

    def set_font_family(
        self,
        path: str,
        size: int,
        bold_path: Optional[str] = None,
        italic_path: Optional[str] = None,
        bold_italic_path: Optional[str] = None,
    ):
        """
        Load one font per word style.

        Styles without their own file use ``path``; bold italic falls back
        to the bold file, then to the italic one.
        """
        self.plain_font = load_font(path, size)
        self.bold_font = load_font(bold_path or path, size)
        self.italic_font = load_font(italic_path or path, size)
        self.bold_italic_font = load_font(bold_italic_path or bold_path or italic_path or path, size)

    def font_for(self, word):
        if word.bold:
            return self.bold_italic_font if word.italic else self.bold_font
        return self.italic_font if word.italic else self.plain_font

    def render_on_top(self, page, image: Image.Image) -> Image.Image:
        """
        Draw onto an existing image in place.

        Args:
            page: Page whose words are drawn
            image: Image to draw on, usually the scan the page came from

        Returns:
            The same image
        """
        draw = ImageDraw.Draw(image)
        for word in page.all_words():
            if word.bounds is None:
                continue
            b = word.bounds.scale(self.scale)
            font = self.font_for(word)
            text_height = draw.textbbox((0, 0), word.text, font=font)[3]
            draw.text((b.left, b.bottom - text_height), word.text, font=font, fill=self.font_color)

        draw_bounding_boxes(image, self.rectangles, self.rectangle_color, self.stroke_width, self.scale)
        for color, rect in self.colored_rectangles:
            draw_bounding_boxes(image, [rect], color, self.stroke_width, self.scale)
        return image

    def render_on_blank(self, page) -> Image.Image:
        """
        Render onto a blank canvas reaching the page's scaled right and bottom edges.

        Raises:
            ValueError: If the page has no bounds
        """
        if page.bounds is None:
            raise ValueError("Cannot size a canvas for a page without bounds")
        b = page.bounds.scale(self.scale)
        image = Image.new('RGB', (max(1, b.right), max(1, b.bottom)), self.background_color)
        return self.render_on_top(page, image)

    def render_to_file(self, page, output_path: str, background: Union[str, Image.Image, None] = None) -> None:
        """
        Render and save as PNG.

        Args:
            page: Page to render
            output_path: Destination file
            background: Scan to draw on (path or image); blank canvas if None
        """
        if background is None:
            image = self.render_on_blank(page)
        else:
            if isinstance(background, str):
                background = ImageOps.exif_transpose(Image.open(background)).convert('RGB')
            image = self.render_on_top(page, background)
        image.save(output_path, format='PNG')
        logger.debug(f"Rendered page {page.page_number} to {output_path}")

