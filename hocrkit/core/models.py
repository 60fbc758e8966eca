"""
Core domain models for recognized pages.

Page -> Area -> Paragraph -> Line -> Word. All models are immutable:
every transformation returns a new tree and reuses untouched children.

A container's bounds are either supplied (parsed from a ``bbox`` title or
passed to the constructor) or computed as the union of its children by
the ``from_*`` constructors and by structural transforms.
"""
import math
from dataclasses import dataclass, replace
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from hocrkit.core import bounds as geometry
from hocrkit.core.bounds import Bounds
from hocrkit.core.constants import (
    OCR_ARTIFACT_MAX_LENGTH,
    PROXIMITY_BELOW_FACTOR,
    PROXIMITY_PAGE_HEIGHT_FRACTION,
    PROXIMITY_SCORE_OFFSET,
    TINY_PRINT_HEIGHT_DIVISOR,
    TINY_PRINT_MIN_WORDS,
)
from hocrkit.spatial.line_queries import is_arbitrary
from hocrkit.spatial.reading_order import sort_elements
from hocrkit.utils.text_utils import fuzzy_contains, is_smaller

BoundsFunction = Callable[[Bounds], Bounds]


@dataclass(frozen=True)
class Word:
    """A recognized word."""
    text: str
    bounds: Optional[Bounds] = None
    bold: bool = False
    italic: bool = False

    def is_blank(self) -> bool:
        return not self.text.strip()

    def may_be_ocr_artifact(self) -> bool:
        """Single characters are often specks or stray punctuation."""
        return len(self.text) <= OCR_ARTIFACT_MAX_LENGTH

    def map_bounds(self, f: BoundsFunction) -> 'Word':
        """Apply ``f`` to the bounds; words without bounds are returned as-is."""
        if self.bounds is None:
            return self
        return replace(self, bounds=f(self.bounds))

    def translate(self, dx: int, dy: int) -> 'Word':
        return self.map_bounds(lambda b: b.translate(dx, dy))

    def mk_string(self) -> str:
        return self.text

    def __str__(self) -> str:
        return self.text


def words_to_string(words: Iterable[Word]) -> str:
    return ' '.join(w.text for w in words)


def spaceless_string(words: Sequence[Word], offset: int = 0, length: Optional[int] = None) -> str:
    """
    Concatenate the text of ``words[offset:offset + length]``, skipping blank words.

    Args:
        words: Words to join
        offset: Index of the first word (negative values are clamped to 0)
        length: Number of words (default: up to the end)

    Returns:
        Concatenated text without separators
    """
    start = max(0, offset)
    end = len(words) if length is None else min(len(words), offset + length)
    return ''.join(words[i].text for i in range(start, end) if not words[i].is_blank())


def find_bounds_of_word(words: Sequence[Word], text: str) -> Optional[Bounds]:
    """
    Locate ``text`` as an exact run of consecutive words, ignoring spaces.

    The last occurrence wins.

    Returns:
        Union of the matched words' bounds, or None if not found
    """
    text = text.replace(' ', '')
    for i in range(len(words) - 1, -1, -1):
        if not spaceless_string(words, i).startswith(text):
            continue
        for length in range(1, len(words) - i + 1):
            if spaceless_string(words, i, length) == text:
                return geometry.of_all(words[i:i + length])
    return None


class _Container:
    """Read-only sequence protocol shared by Line, Paragraph, Area and Page."""
    _children_field = ''

    @property
    def _children(self) -> tuple:
        return getattr(self, self._children_field)

    def __post_init__(self):
        object.__setattr__(self, self._children_field, tuple(self._children))

    def __iter__(self):
        return iter(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._with_children(self._children[index])
        return self._children[index]

    def _with_children(self, children, fallback_bounds: Optional[Bounds] = None):
        """Copy with new children; bounds are recomputed unless there are no children."""
        children = tuple(children)
        bounds = geometry.of_all(children) if children else fallback_bounds
        return replace(self, **{self._children_field: children, 'bounds': bounds})

    def is_blank(self) -> bool:
        return all(child.is_blank() for child in self._children)

    def map(self, f: Callable):
        """
        Apply ``f`` to every child.

        The result's bounds are recomputed from the new children; if there
        are none, the current bounds are kept.
        """
        return self._with_children((f(child) for child in self._children), self.bounds)

    def map_bounds(self, f: BoundsFunction):
        """Apply ``f`` to every bounds in the subtree."""
        fallback = f(self.bounds) if self.bounds is not None else None
        return self._with_children((child.map_bounds(f) for child in self._children), fallback)

    def translate(self, dx: int, dy: int):
        children = tuple(child.translate(dx, dy) for child in self._children)
        bounds = self.bounds.translate(dx, dy) if self.bounds is not None else None
        return replace(self, **{self._children_field: children, 'bounds': bounds})


@dataclass(frozen=True)
class Line(_Container):
    """A line of words, in recognition order."""
    words: Tuple[Word, ...] = ()
    bounds: Optional[Bounds] = None
    _children_field = 'words'

    @classmethod
    def from_words(cls, words: Iterable[Word]) -> 'Line':
        words = tuple(words)
        if not words:
            raise ValueError("A line needs at least one word")
        return cls(words, geometry.of_all(words))

    def crop(self, rect: Optional[Bounds]) -> 'Line':
        """
        Keep only the words lying entirely within ``rect``.

        The resulting bounds are the intersection of the current bounds
        with ``rect``. A missing ``rect`` leaves the line unchanged.
        """
        if rect is None:
            return self
        kept = tuple(w for w in self.words if w.bounds is not None and w.bounds.within(rect))
        return Line(kept, geometry.intersection(self.bounds, rect))

    def find_bounds_of_word(self, text: str, ignore_case: bool = False) -> Optional[Bounds]:
        """
        Locate ``text`` among the words using fuzzy matching.

        Runs of consecutive words are tried starting from the last word and
        growing rightwards; the first run whose spaceless text fuzzily
        contains ``text`` (spaces removed) wins.

        Args:
            text: Text to locate
            ignore_case: Compare case-insensitively

        Returns:
            Union of the matched words' bounds, or the line bounds if nothing matched
        """
        text = text.replace(' ', '')
        for i in range(len(self.words) - 1, -1, -1):
            for length in range(1, len(self.words) - i + 1):
                if fuzzy_contains(self.spaceless_string(i, length), text, ignore_case):
                    return geometry.of_all(self.words[i:i + length])
        return self.bounds

    def focus_on(self, text: str, ignore_case: bool = False) -> 'Line':
        """Crop the line to the words containing ``text``."""
        return self.crop(self.find_bounds_of_word(text, ignore_case))

    def distance_to(self, other) -> Optional[int]:
        if self.bounds is None or other.bounds is None:
            return None
        return self.bounds.distance(other.bounds)

    def closest_from(self, lines: Iterable['Line']) -> Optional['Line']:
        """Nearest line by taxicab distance; lines without bounds are ignored."""
        return self._closest(lines, prefer_below=False)

    def closest_preferring_below(self, lines: Iterable['Line']) -> Optional['Line']:
        """Like ``closest_from``, but lines above this one count as twice as far."""
        return self._closest(lines, prefer_below=True)

    def _closest(self, lines, prefer_below: bool) -> Optional['Line']:
        closest = None
        min_distance = None
        for line in lines:
            distance = self.distance_to(line)
            if distance is None:
                continue
            if prefer_below and line.bounds.is_above(self.bounds):
                distance *= 2
            if min_distance is None or distance < min_distance:
                closest = line
                min_distance = distance
        return closest

    def median_space_width(self) -> Optional[int]:
        """
        Median horizontal gap between consecutive words.

        Returns:
            Gap in pixels (mean of the two middle gaps for an even count),
            or None if the line has fewer than two bounded words
        """
        gaps = []
        previous = None
        for word in self.words:
            if word.bounds is None:
                continue
            if previous is not None:
                gaps.append(word.bounds.left - previous.right)
            previous = word.bounds
        if not gaps:
            return None
        return int(np.median(gaps))

    def spaceless_string(self, offset: int = 0, length: Optional[int] = None) -> str:
        return spaceless_string(self.words, offset, length)

    def lowercase_spaceless_string(self) -> str:
        return ''.join(w.text.lower() for w in self.words)

    def mk_string(self) -> str:
        return words_to_string(self.words)

    def mk_rough_string(self) -> str:
        """Space-joined text without words that are likely OCR artifacts."""
        return words_to_string(w for w in self.words if not w.may_be_ocr_artifact()).strip()

    def verbose_string(self) -> str:
        return '[' + ', '.join(f"{w.text}@{w.bounds}" for w in self.words) + ']'

    @property
    def word_count(self) -> int:
        return len(self.words)

    def __str__(self) -> str:
        return self.mk_string()


def _find_line_in(children, comparator: Callable, predicate: Callable) -> Optional[Line]:
    """Best line under ``comparator`` among the children's matches; the first one wins ties."""
    result = None
    for child in children:
        line = child.find_line(comparator, predicate)
        if line is not None and (result is None or comparator(line, result) > 0):
            result = line
    return result


@dataclass(frozen=True)
class Paragraph(_Container):
    """A paragraph of lines."""
    lines: Tuple[Line, ...] = ()
    bounds: Optional[Bounds] = None
    _children_field = 'lines'

    @classmethod
    def from_lines(cls, lines: Iterable[Line]) -> 'Paragraph':
        lines = tuple(lines)
        if not lines:
            raise ValueError("A paragraph needs at least one line")
        return cls(lines, geometry.of_all(lines))

    def crop(self, rect: Optional[Bounds]) -> 'Paragraph':
        if rect is None:
            return self
        cropped = (line.crop(rect) for line in self.lines)
        return Paragraph(
            tuple(line for line in cropped if not line.is_blank()),
            geometry.intersection(self.bounds, rect),
        )

    def touching(self, rect: Bounds) -> 'Paragraph':
        """Keep the lines touching ``rect``; bounds are left unchanged."""
        return Paragraph(
            tuple(line for line in self.lines if line.bounds is not None and line.bounds.touches(rect)),
            self.bounds,
        )

    def find_line(self, comparator: Callable, predicate: Callable = is_arbitrary) -> Optional[Line]:
        result = None
        for line in self.lines:
            if predicate(line) and (result is None or comparator(line, result) > 0):
                result = line
        return result

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def word_count(self) -> int:
        return sum(len(line) for line in self.lines)


@dataclass(frozen=True)
class Area(_Container):
    """A block of paragraphs, e.g. a column or a caption."""
    paragraphs: Tuple[Paragraph, ...] = ()
    bounds: Optional[Bounds] = None
    _children_field = 'paragraphs'

    @classmethod
    def from_paragraphs(cls, paragraphs: Iterable[Paragraph]) -> 'Area':
        paragraphs = tuple(paragraphs)
        if not paragraphs:
            raise ValueError("An area needs at least one paragraph")
        return cls(paragraphs, geometry.of_all(paragraphs))

    def crop(self, rect: Optional[Bounds]) -> 'Area':
        if rect is None:
            return self
        cropped = (p.crop(rect) for p in self.paragraphs)
        return Area(
            tuple(p for p in cropped if not p.is_blank()),
            geometry.intersection(self.bounds, rect),
        )

    def touching(self, rect: Bounds) -> 'Area':
        """Keep the lines touching ``rect``; bounds shrink to what is left."""
        touched = (p.touching(rect) for p in self.paragraphs)
        kept = tuple(p for p in touched if not p.is_blank())
        return Area(kept, geometry.of_all(kept))

    def find_line(self, comparator: Callable, predicate: Callable = is_arbitrary) -> Optional[Line]:
        return _find_line_in(self.paragraphs, comparator, predicate)

    @property
    def paragraph_count(self) -> int:
        return len(self.paragraphs)

    @property
    def line_count(self) -> int:
        return sum(p.line_count for p in self.paragraphs)

    @property
    def word_count(self) -> int:
        return sum(p.word_count for p in self.paragraphs)


@dataclass(frozen=True)
class Page(_Container):
    """
    A recognized page.

    Attributes:
        areas: Areas in document order
        bounds: Page bounds, usually the scanned image size
        page_number: 1-based page number
    """
    areas: Tuple[Area, ...] = ()
    bounds: Optional[Bounds] = None
    page_number: int = 1
    _children_field = 'areas'

    @classmethod
    def from_areas(cls, areas: Iterable[Area], page_number: int = 1) -> 'Page':
        areas = tuple(areas)
        if not areas:
            raise ValueError("A page needs at least one area")
        return cls(areas, geometry.of_all(areas), page_number)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _lines_in_document_order(self):
        for area in self.areas:
            for paragraph in area:
                yield from paragraph

    def all_words(self) -> List[Word]:
        return [word for line in self._lines_in_document_order() for word in line]

    def all_lines(self) -> List[Line]:
        """All lines in reading order."""
        return sort_elements(self._lines_in_document_order())

    def all_lines_as_strings(self) -> List[str]:
        return [line.mk_string() for line in self.all_lines()]

    def all_lines_as_words(self) -> List[List[Word]]:
        return [list(line.words) for line in self.all_lines()]

    def find_all_lines(self, predicate: Callable = is_arbitrary) -> List[Line]:
        """Lines matching ``predicate``, in document order."""
        return [line for line in self._lines_in_document_order() if predicate(line)]

    def find_line(self, comparator: Callable, predicate: Callable = is_arbitrary) -> Optional[Line]:
        """
        Best matching line.

        Args:
            comparator: Two-argument comparison, positive when the first line is better
            predicate: Filter applied before comparing

        Returns:
            The best line, or None if no line matches
        """
        return _find_line_in(self.areas, comparator, predicate)

    def find_line_maximizing(self, score: Callable, close_to=None, prefer_below: bool = False) -> Optional[Line]:
        """
        Line with the highest score.

        Lines scoring None or a negative number are ignored. With a
        reference element ``close_to``, the score is divided by the fourth
        root of the taxicab distance to the reference (plus a tenth of the
        page height), so nearby lines are favoured. With ``prefer_below``,
        lines lying above the reference are penalized further.

        Args:
            score: Function from line to a number or None
            close_to: Bounds or any element with bounds
            prefer_below: Penalize lines above ``close_to``

        Returns:
            The best line, or None if nothing scored
        """
        return self._find_line_scored(score, close_to, prefer_below, maximize=True)

    def find_line_minimizing(self, score: Callable, close_to=None, prefer_below: bool = False) -> Optional[Line]:
        """Line with the lowest score; distance to ``close_to`` multiplies the score."""
        return self._find_line_scored(score, close_to, prefer_below, maximize=False)

    def _find_line_scored(self, score, close_to, prefer_below, maximize) -> Optional[Line]:
        reference = close_to.bounds if close_to is not None else None
        page_height = self.bounds.height if self.bounds is not None else 0

        best = None
        best_score = None
        for line in self._lines_in_document_order():
            value = score(line)
            if value is None or value < 0:
                continue
            if reference is not None:
                if line.bounds is None:
                    continue
                value += PROXIMITY_SCORE_OFFSET
                multiplier = (
                    reference.distance(line.bounds) + page_height / PROXIMITY_PAGE_HEIGHT_FRACTION
                ) ** 0.25
                if prefer_below and reference.is_below(line.bounds):
                    multiplier *= PROXIMITY_BELOW_FACTOR
                if maximize:
                    value = value / multiplier if multiplier else math.inf
                else:
                    value *= multiplier
            if best is None or (value > best_score if maximize else value < best_score):
                best = line
                best_score = value
        return best

    # ------------------------------------------------------------------
    # Measurements
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self.bounds.width if self.bounds is not None else -1

    @property
    def height(self) -> int:
        return self.bounds.height if self.bounds is not None else -1

    @property
    def area_count(self) -> int:
        return len(self.areas)

    @property
    def paragraph_count(self) -> int:
        return sum(a.paragraph_count for a in self.areas)

    @property
    def line_count(self) -> int:
        return sum(a.line_count for a in self.areas)

    @property
    def word_count(self) -> int:
        return sum(a.word_count for a in self.areas)

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def crop(self, rect: Optional[Bounds]) -> 'Page':
        if rect is None:
            return self
        cropped = (a.crop(rect) for a in self.areas)
        return replace(
            self,
            areas=tuple(a for a in cropped if not a.is_blank()),
            bounds=geometry.intersection(self.bounds, rect),
        )

    def touching(self, rect: Bounds) -> 'Page':
        touched = (a.touching(rect) for a in self.areas)
        kept = tuple(a for a in touched if not a.is_blank())
        return replace(self, areas=kept, bounds=geometry.of_all(kept))

    def map_lines(self, f: Callable[[Line], Line]) -> 'Page':
        return self.map(lambda area: area.map(lambda paragraph: paragraph.map(f)))

    def with_page_number(self, page_number: int) -> 'Page':
        return replace(self, page_number=page_number)

    def clean_tiny_print(self) -> 'Page':
        """
        Drop words much smaller than the typical word on the page.

        Words lower than a sixth of the median word height are removed
        (punctuation-only words are allowed half that height). Pages with
        fewer than ten bounded words, or with more unbounded than bounded
        words, are returned unchanged. Lines keep their original bounds.
        """
        heights = []
        unbounded = 0
        for word in self.all_words():
            if word.bounds is not None:
                heights.append(word.bounds.height)
            else:
                unbounded += 1

        if len(heights) < TINY_PRINT_MIN_WORDS or unbounded > len(heights):
            return self

        heights.sort()
        cutoff = heights[len(heights) // 2] // TINY_PRINT_HEIGHT_DIVISOR

        def is_large_enough(word: Word) -> bool:
            if word.bounds is None:
                return True
            if is_smaller(word.text):
                return word.bounds.height * 2 > cutoff
            return word.bounds.height > cutoff

        return self.map_lines(
            lambda line: Line(tuple(w for w in line.words if is_large_enough(w)), line.bounds)
        )


def renumber_pages(pages: Iterable[Page], start_from: int = 1) -> List[Page]:
    """Consecutively renumber pages starting at ``start_from``."""
    return [page.with_page_number(number) for number, page in enumerate(pages, start_from)]
