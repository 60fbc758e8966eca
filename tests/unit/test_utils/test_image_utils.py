"""
Unit tests for utils.image_utils module.
"""
import pytest
from PIL import Image

from hocrkit.core.bounds import Bounds
from hocrkit.core.models import Page, Word
from hocrkit.utils import image_utils
from hocrkit.utils.image_utils import PageRenderer, load_font


@pytest.fixture
def renderer():
    return PageRenderer(font_path="/nonexistent/font.ttf", font_size=12, stroke_width=1)


class TestLoadFont:
    """Tests for load_font function."""

    def test_missing_font_falls_back(self):
        """Test a missing font file yields Pillow's default font."""
        assert load_font("/nonexistent/font.ttf", 12) is not None


class TestPageRenderer:
    """Tests for PageRenderer class."""

    def test_render_on_blank_size(self, renderer, sample_page):
        """Test the canvas reaches the page's right and bottom edges."""
        image = renderer.render_on_blank(sample_page)

        assert image.size == (600, 400)
        assert image.mode == 'RGB'

    def test_render_on_blank_scaled(self, sample_page):
        """Test scaling applies to the canvas size."""
        renderer = PageRenderer(scale=0.5, font_path="/nonexistent/font.ttf")

        assert renderer.render_on_blank(sample_page).size == (300, 200)

    def test_render_on_blank_requires_bounds(self, renderer):
        """Test a page without bounds cannot be rendered on a blank canvas."""
        with pytest.raises(ValueError):
            renderer.render_on_blank(Page())

    def test_words_are_drawn(self, renderer, sample_page):
        """Test word text changes pixels inside the page."""
        image = renderer.render_on_blank(sample_page)

        assert len(image.getcolors(maxcolors=100000)) > 1

    def test_rectangles(self, renderer):
        """Test plain and colored rectangles are drawn with their colors."""
        renderer.rectangles.append(Bounds(0, 0, 10, 10))
        renderer.colored_rectangles.append(((0, 0, 255), Bounds(20, 20, 30, 30)))
        image = Image.new('RGB', (40, 40), 'white')

        renderer.render_on_top(Page(), image)

        assert image.getpixel((0, 5)) == (255, 165, 0)
        assert image.getpixel((20, 25)) == (0, 0, 255)

    def test_render_to_file(self, renderer, sample_page, tmp_path):
        """Test rendering saves a PNG."""
        output = tmp_path / "page.png"

        renderer.render_to_file(sample_page, str(output))

        with Image.open(output) as saved:
            assert saved.format == 'PNG'
            assert saved.size == (600, 400)

    def test_from_settings(self):
        """Test construction from a settings dictionary."""
        renderer = PageRenderer.from_settings({
            'scale': 2.0,
            'stroke_width': 1,
            'font_path': "/nonexistent/font.ttf",
            'font_size': 10,
            'background_color': 'black',
            'font_color': 'white',
            'rectangle_color': 'green',
        })

        assert renderer.scale == 2.0
        assert renderer.rectangle_color == 'green'



class TestFontFamily:
    """Tests for per-style font selection."""

    @pytest.fixture(autouse=True)
    def fake_fonts(self, monkeypatch):
        monkeypatch.setattr(image_utils, "load_font", lambda path, size: (path, size))

    def test_style_fonts(self):
        """Test each style loads its own font file."""
        renderer = PageRenderer(
            font_path="plain.ttf",
            font_size=11,
            bold_font_path="bold.ttf",
            italic_font_path="italic.ttf",
            bold_italic_font_path="bold-italic.ttf",
        )

        assert renderer.bold_font != renderer.plain_font
        assert renderer.font_for(Word("a", None)) == ("plain.ttf", 11)
        assert renderer.font_for(Word("a", None, bold=True)) == ("bold.ttf", 11)
        assert renderer.font_for(Word("a", None, italic=True)) == ("italic.ttf", 11)
        assert renderer.font_for(Word("a", None, bold=True, italic=True)) == ("bold-italic.ttf", 11)

    def test_missing_styles_fall_back(self):
        """Test styles without a file reuse the plain or bold font."""
        renderer = PageRenderer(font_path="plain.ttf", font_size=11, bold_font_path="bold.ttf")

        assert renderer.italic_font == ("plain.ttf", 11)
        assert renderer.bold_italic_font == ("bold.ttf", 11)

    def test_from_settings(self):
        """Test style fonts are taken from the settings dictionary."""
        renderer = PageRenderer.from_settings({
            'font_path': "plain.ttf",
            'font_size': 9,
            'bold_font_path': "bold.ttf",
            'italic_font_path': None,
            'bold_italic_font_path': None,
        })

        assert renderer.bold_font == ("bold.ttf", 9)
        assert renderer.italic_font == ("plain.ttf", 9)
