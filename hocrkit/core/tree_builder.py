"""
Document Tree Builder

Interprets the generic element tree produced by ``hocrkit.dom.parser`` as
hOCR: body -> page (div) -> area (div) -> paragraph (p) -> line
(span.ocr_line) -> word (span.ocrx_word, emphasis tags or bare text).

Blank subtrees are skipped at every rank. Anything else that does not
follow the convention for its rank raises StructureMismatchError.
"""
import logging
from typing import Iterable, List, Optional

from hocrkit.core import bounds as geometry
from hocrkit.core.bounds import Bounds
from hocrkit.core.constants import (
    AREA_TAG,
    BODY_TAG,
    BOLD_TAGS,
    ITALIC_TAGS,
    LINE_CLASSES,
    LINE_TAG,
    PAGE_TAG,
    PARAGRAPH_TAG,
    WORD_CLASSES,
    WORD_TAG,
)
from hocrkit.core.exceptions import StructureMismatchError
from hocrkit.core.models import Area, Line, Page, Paragraph, Word
from hocrkit.dom.nodes import HocrNode, HocrTag
from hocrkit.dom.parser import create_ast

logger = logging.getLogger(__name__)


def _non_blank(children: Iterable[HocrNode]) -> List[HocrNode]:
    return [child for child in children if not child.is_blank()]


def _expect_tag(node: HocrNode, name: str, classes=None, rank: str = '') -> HocrTag:
    """Check that ``node`` is a ``name`` tag (with one of ``classes``, if given)."""
    if (
        not isinstance(node, HocrTag)
        or node.name != name
        or (classes is not None and node.css_class not in classes)
    ):
        expected = f"{rank} <{name}>" if classes is None else f"{rank} <{name} class={'|'.join(classes)}>"
        raise StructureMismatchError(expected.strip(), node.mk_string())
    return node


def _bounds_of(tag: HocrTag, children) -> Optional[Bounds]:
    """Bounds from the ``bbox`` title property, else the union of the children."""
    explicit = Bounds.from_hocr_title(tag.title)
    if explicit is not None:
        return explicit
    return geometry.of_all(children)


def build_word(node: HocrNode) -> Word:
    """
    Build a word, unwrapping word spans and emphasis tags.

    The descent follows the first non-blank child of each tag until it
    reaches text. The word's text is the raw text of the whole node.

    Raises:
        StructureMismatchError: If a tag other than a word span, bold or
            italic tag is met on the way down
    """
    bounds = None
    bold = False
    italic = False

    current = node
    while isinstance(current, HocrTag):
        if current.name == WORD_TAG and current.css_class in WORD_CLASSES:
            bounds = Bounds.from_hocr_title(current.title)
        elif current.name in BOLD_TAGS:
            bold = True
        elif current.name in ITALIC_TAGS:
            italic = True
        else:
            raise StructureMismatchError("a word, bold or italic tag", current.mk_string())

        children = _non_blank(current.children)
        if not children:
            break
        current = children[0]

    return Word(node.raw_text, bounds, bold=bold, italic=italic)


def build_line(node: HocrNode) -> Line:
    tag = _expect_tag(node, LINE_TAG, LINE_CLASSES, rank='line')
    words = tuple(build_word(child) for child in _non_blank(tag.children))
    return Line(words, _bounds_of(tag, words))


def build_paragraph(node: HocrNode) -> Paragraph:
    tag = _expect_tag(node, PARAGRAPH_TAG, rank='paragraph')
    lines = tuple(build_line(child) for child in _non_blank(tag.children))
    return Paragraph(lines, _bounds_of(tag, lines))


def build_area(node: HocrNode) -> Area:
    tag = _expect_tag(node, AREA_TAG, rank='area')
    paragraphs = tuple(build_paragraph(child) for child in _non_blank(tag.children))
    return Area(paragraphs, _bounds_of(tag, paragraphs))


def build_page(node: HocrNode, page_number: int = 1) -> Page:
    tag = _expect_tag(node, PAGE_TAG, rank='page')
    areas = tuple(build_area(child) for child in _non_blank(tag.children))
    return Page(areas, _bounds_of(tag, areas), page_number)


def build_pages(nodes: Iterable[HocrNode], starting_page_number: int = 1) -> List[Page]:
    """
    Interpret a parsed document as a list of pages.

    Args:
        nodes: Top-level nodes from ``create_ast``
        starting_page_number: Number given to the first page

    Returns:
        One page per non-blank child of the ``body`` tag

    Raises:
        StructureMismatchError: If there is no ``body`` tag or a node does
            not follow the hOCR convention for its rank
    """
    root = HocrTag(name='', children=tuple(nodes))
    body = root.find_tag(BODY_TAG)
    if body is None:
        raise StructureMismatchError(f"a <{BODY_TAG}> tag", "document without one")

    pages = [
        build_page(child, number)
        for number, child in enumerate(_non_blank(body.children), starting_page_number)
    ]
    logger.debug(f"Built {len(pages)} pages starting at page {starting_page_number}")
    return pages


def parse_hocr(text: str, starting_page_number: int = 1) -> List[Page]:
    """
    Parse an hOCR document into pages.

    Args:
        text: hOCR markup
        starting_page_number: Number given to the first page

    Returns:
        Pages in document order

    Raises:
        MalformedTagError: If a tag's attributes cannot be scanned
        StructureMismatchError: If the markup does not follow hOCR conventions
    """
    return build_pages(create_ast(text), starting_page_number)


def pages_from_documents(documents: Iterable[str]) -> List[Page]:
    """Parse several hOCR documents, numbering their pages consecutively from 1."""
    pages = []
    for document in documents:
        pages.extend(parse_hocr(document, len(pages) + 1))
    return pages
