"""Core package - Geometry, document models and hOCR interpretation."""

from .bounds import Bounds, extract_bbox, of_all
from .exceptions import HocrError, MalformedTagError, StructureMismatchError
from .models import Word, Line, Paragraph, Area, Page, renumber_pages
from .tree_builder import parse_hocr, build_pages, pages_from_documents

__all__ = [
    'Bounds',
    'of_all',
    'extract_bbox',
    'HocrError',
    'MalformedTagError',
    'StructureMismatchError',
    'Word',
    'Line',
    'Paragraph',
    'Area',
    'Page',
    'renumber_pages',
    'parse_hocr',
    'build_pages',
    'pages_from_documents',
]
