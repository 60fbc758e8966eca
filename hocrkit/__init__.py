"""hocrkit - Parse hOCR output into an immutable, queryable page model."""

from hocrkit.core import (
    Bounds,
    HocrError,
    MalformedTagError,
    StructureMismatchError,
    Word,
    Line,
    Paragraph,
    Area,
    Page,
    renumber_pages,
    parse_hocr,
    pages_from_documents,
)
from hocrkit.spatial import match_words, estimate_column_bounds, expand_to_whole_words

__version__ = "0.1.0"

__all__ = [
    'Bounds',
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
    'pages_from_documents',
    'match_words',
    'estimate_column_bounds',
    'expand_to_whole_words',
]
