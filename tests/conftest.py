"""
Pytest configuration and global fixtures.
"""
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hocrkit.core.bounds import Bounds
from hocrkit.core.models import Line, Word
from hocrkit.core.tree_builder import parse_hocr


SAMPLE_HOCR = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Transitional//EN"
    "http://www.w3.org/TR/xhtml1/DTD/xhtml1-transitional.dtd">
<html xmlns="http://www.w3.org/1999/xhtml" xml:lang="en" lang="en">
 <head>
  <title></title>
  <meta http-equiv="Content-Type" content="text/html;charset=utf-8" />
  <meta name='ocr-system' content='tesseract' />
 </head>
 <body>
  <div class='ocr_page' id='page_1' title='image "scan.png"; bbox 0 0 600 400; ppageno 0'>
   <div class='ocr_carea' id='block_1_1' title="bbox 10 10 300 80">
    <p class='ocr_par' id='par_1_1' title="bbox 10 10 300 80">
     <span class='ocr_line' id='line_1_1' title="bbox 10 10 300 30; baseline 0 -5">
      <span class='ocrx_word' id='word_1_1' title='bbox 10 10 60 30; x_wconf 91'><strong>Invoice</strong></span>
      <span class='ocrx_word' id='word_1_2' title='bbox 70 10 120 30; x_wconf 90'>No.</span>
      <span class='ocrx_word' id='word_1_3' title='bbox 130 10 200 30; x_wconf 88'><em>12/2014</em></span>
     </span>
     <span class='ocr_line' id='line_1_2' title="bbox 10 50 300 80">
      <span class='ocrx_word' id='word_1_4' title='bbox 10 50 80 80; x_wconf 93'>Tom &amp; Jerry</span>
      <span class='ocrx_word' id='word_1_5' title='bbox 90 50 150 80; x_wconf 93'><strong><em>Ltd</em></strong></span>
     </span>
    </p>
   </div>
   <div class='ocr_carea' id='block_1_2' title="bbox 320 10 590 80">
    <p class='ocr_par' id='par_1_2'>
     <span class='ocr_line' id='line_1_3' title="bbox 320 10 590 30">
      <span class='ocrx_word' id='word_1_6' title='bbox 320 10 400 30'>Total</span>
      <span class='ocrx_word' id='word_1_7' title='bbox 410 10 480 30'>100</span>
     </span>
    </p>
   </div>
  </div>
 </body>
</html>
"""

MULTI_PAGE_HOCR = """<html><body>
<div class='ocr_page' title='bbox 0 0 100 100'>
 <div class='ocr_carea'><p class='ocr_par'><span class='ocr_line'>
  <span class='ocrx_word' title='bbox 0 0 10 10'>one</span>
 </span></p></div>
</div>
<div class='ocr_page' title='bbox 0 0 100 100'>
 <div class='ocr_carea'><p class='ocr_par'><span class='ocr_line'>
  <span class='ocrx_word' title='bbox 0 0 10 10'>two</span>
 </span></p></div>
</div>
</body></html>
"""

MALFORMED_HOCR = """<html><body>
<div class='ocr_page' title='bbox 0 0 100 100'>
 <div class='ocr_carea'><p class='ocr_par'><span class='ocr_line'>
  <span class='ocrx_word' title='bbox 0 0 30 10'>a<b</span>
 </span></p></div>
</div>
</body></html>
"""


@pytest.fixture
def sample_hocr():
    """Provide a small well-formed hOCR document in Tesseract's style."""
    return SAMPLE_HOCR


@pytest.fixture
def multi_page_hocr():
    """Provide an hOCR document with two pages."""
    return MULTI_PAGE_HOCR


@pytest.fixture
def malformed_hocr():
    """Provide an hOCR document containing a stray '<'."""
    return MALFORMED_HOCR


@pytest.fixture
def sample_page(sample_hocr):
    """Provide the parsed sample page."""
    return parse_hocr(sample_hocr)[0]


def make_word(text, left, top=0, right=None, bottom=5):
    """Build a word whose bounds default to a 5x5 box at ``left``."""
    if right is None:
        right = left + 4
    return Word(text, Bounds(left, top, right, bottom))


def make_line(*texts):
    """Build a line with the i-th word at x = 5*i .. 5*i+4, y = 0 .. 5."""
    return Line.from_words(make_word(text, 5 * i) for i, text in enumerate(texts))


@pytest.fixture
def word_factory():
    """Provide the word factory."""
    return make_word


@pytest.fixture
def line_factory():
    """Provide the line factory."""
    return make_line
