"""
Bounds algebra for OCR geometry.

Rectangles use integer pixel coordinates with Y growing downward.
A missing rectangle is represented by None, never by a zero rectangle,
and every binary operation defines what happens when an operand is None.
"""
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

from hocrkit.core.constants import (
    BBOX_PATTERN,
    LEFTISH_DENOMINATOR,
    LEFTISH_NUMERATOR,
    PLANE_MAX,
    PLANE_MIN,
)

_BBOX_RE = re.compile(BBOX_PATTERN)


def extract_bbox(title: Optional[str]) -> Optional[Tuple[int, int, int, int]]:
    """
    Extract bounding box coordinates from a title attribute.

    Only the ``bbox`` property is read; other ``;``-separated properties
    (``x_wconf``, ``baseline``, ...) are ignored.

    Args:
        title: Title attribute value (e.g., "bbox 10 20 50 40; x_wconf 93")

    Returns:
        Tuple of (left, top, right, bottom) or None if no bbox found
    """
    if not title:
        return None
    for prop in title.split(';'):
        match = _BBOX_RE.fullmatch(prop.strip())
        if match:
            left, top, right, bottom = (int(g) for g in match.groups())
            return (left, top, right, bottom)
    return None


def _div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _round_half_away(x: float) -> int:
    if x >= 0:
        return int(x + 0.5)
    return -int(-x + 0.5)


Edge = Union[int, 'Bounds', None]


@dataclass(frozen=True, order=True)
class Bounds:
    """
    An axis-aligned rectangle surrounding an element of the page.

    Ordering compares left, top, right and bottom in that sequence.
    """
    left: int
    top: int
    right: int
    bottom: int

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_hocr_title(cls, title: Optional[str]) -> Optional['Bounds']:
        """
        Create bounds from the value of an hOCR ``title`` attribute.

        Args:
            title: Attribute value, e.g. ``"bbox 10 20 50 40; x_wconf 93"``

        Returns:
            Bounds, or None if the value holds no bbox property
        """
        coords = extract_bbox(title)
        if coords is None:
            return None
        return cls(*coords)

    @classmethod
    def entire_plane(cls) -> 'Bounds':
        return cls(PLANE_MIN, PLANE_MIN, PLANE_MAX, PLANE_MAX)

    @classmethod
    def bottom_semiplane(cls, y: int) -> 'Bounds':
        """Everything below the horizontal line at ``y``."""
        return cls(PLANE_MIN, y, PLANE_MAX, PLANE_MAX)

    @classmethod
    def top_semiplane(cls, y: int) -> 'Bounds':
        """Everything above the horizontal line at ``y``."""
        return cls(PLANE_MIN, PLANE_MIN, PLANE_MAX, y)

    @classmethod
    def left_semiplane(cls, x: int) -> 'Bounds':
        return cls(PLANE_MIN, PLANE_MIN, x, PLANE_MAX)

    @classmethod
    def right_semiplane(cls, x: int) -> 'Bounds':
        return cls(x, PLANE_MIN, PLANE_MAX, PLANE_MAX)

    # ------------------------------------------------------------------
    # Measurements
    # ------------------------------------------------------------------

    @property
    def bounds(self) -> 'Bounds':
        """Bounds are their own bounds, so they can be ordered like page elements."""
        return self

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> int:
        """Horizontal midpoint."""
        return _div(self.left + self.right, 2)

    @property
    def middle(self) -> int:
        """Vertical midpoint."""
        return _div(self.top + self.bottom, 2)

    @property
    def leftish(self) -> int:
        """
        The point 20% of the way from the left edge to the right edge.

        Columns are ordered by this point because it follows the visually
        dominant left edge even when individual left edges are jittered.
        """
        return _div(
            LEFTISH_NUMERATOR * self.right + (LEFTISH_DENOMINATOR - LEFTISH_NUMERATOR) * self.left,
            LEFTISH_DENOMINATOR,
        )

    def is_empty(self) -> bool:
        return self.left >= self.right or self.top >= self.bottom

    def distance(self, other: 'Bounds') -> int:
        """Taxicab distance between the (leftish, middle) points."""
        return abs(self.middle - other.middle) + abs(self.leftish - other.leftish)

    # ------------------------------------------------------------------
    # Relations
    # ------------------------------------------------------------------

    def contains(self, other: Optional['Bounds']) -> bool:
        """Non-strict containment; absent bounds are contained in everything."""
        return other is None or other.within(self)

    def within(self, other: Optional['Bounds']) -> bool:
        """Non-strict containment in ``other``; nothing is within absent bounds."""
        return (
            other is not None
            and self.left >= other.left
            and self.right <= other.right
            and self.top >= other.top
            and self.bottom <= other.bottom
        )

    def intersects(self, other: Optional['Bounds']) -> bool:
        """True iff the intersection has positive area."""
        inter = self.intersection(other)
        return inter is not None and not inter.is_empty()

    def cuts(self, other: Optional['Bounds']) -> bool:
        """True iff the rectangles overlap and neither contains the other."""
        return self.intersects(other) and not self.within(other) and not self.contains(other)

    def touches(self, other: Optional['Bounds']) -> bool:
        """True iff the rectangles overlap or share an edge."""
        return (
            other is not None
            and self.top <= other.bottom
            and other.top <= self.bottom
            and self.left <= other.right
            and other.left <= self.right
        )

    def in_the_same_column_as(self, other: Optional['Bounds']) -> bool:
        return other is not None and self.left <= other.right and self.right >= other.left

    def is_below(self, other: 'Bounds') -> bool:
        return self.top >= other.bottom

    def is_above(self, other: 'Bounds') -> bool:
        return other.is_below(self)

    def is_to_the_left(self, other: 'Bounds') -> bool:
        return self.right <= other.left

    def is_to_the_right(self, other: 'Bounds') -> bool:
        return other.is_to_the_left(self)

    # ------------------------------------------------------------------
    # Set operations
    # ------------------------------------------------------------------

    def union(self, other: Optional['Bounds']) -> 'Bounds':
        if other is None or other == self:
            return self
        return Bounds(
            min(self.left, other.left),
            min(self.top, other.top),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
        )

    def intersection(self, other: Optional['Bounds']) -> Optional['Bounds']:
        """
        Largest rectangle contained in both.

        Returns None when ``other`` is absent or the rectangles do not
        overlap with positive area. A rectangle intersected with itself
        is returned unchanged.
        """
        if other is None:
            return None
        if other == self:
            return self
        result = Bounds(
            max(self.left, other.left),
            max(self.top, other.top),
            min(self.right, other.right),
            min(self.bottom, other.bottom),
        )
        if result.is_empty():
            return None
        return result

    # ------------------------------------------------------------------
    # Edges and trimming
    # ------------------------------------------------------------------

    @property
    def left_edge(self) -> 'Bounds':
        return Bounds(self.left, self.top, self.left, self.bottom)

    @property
    def right_edge(self) -> 'Bounds':
        return Bounds(self.right, self.top, self.right, self.bottom)

    @property
    def top_edge(self) -> 'Bounds':
        return Bounds(self.left, self.top, self.right, self.top)

    @property
    def bottom_edge(self) -> 'Bounds':
        return Bounds(self.left, self.bottom, self.right, self.bottom)

    def trim_from_left(self, edge: Edge) -> Optional['Bounds']:
        """
        Move the left edge rightwards to ``edge``.

        Args:
            edge: New x coordinate, or bounds whose left edge is used

        Returns:
            Trimmed bounds, unchanged bounds if ``edge`` is already outside,
            or None if the trim passes the right edge or ``edge`` is None
        """
        if edge is None:
            return None
        if isinstance(edge, Bounds):
            edge = edge.left
        if edge > self.right:
            return None
        if edge <= self.left:
            return self
        return Bounds(edge, self.top, self.right, self.bottom)

    def trim_from_right(self, edge: Edge) -> Optional['Bounds']:
        if edge is None:
            return None
        if isinstance(edge, Bounds):
            edge = edge.right
        if edge < self.left:
            return None
        if edge >= self.right:
            return self
        return Bounds(self.left, self.top, edge, self.bottom)

    def trim_from_top(self, edge: Edge) -> Optional['Bounds']:
        if edge is None:
            return None
        if isinstance(edge, Bounds):
            edge = edge.top
        if edge > self.bottom:
            return None
        if edge <= self.top:
            return self
        return Bounds(self.left, edge, self.right, self.bottom)

    def trim_from_bottom(self, edge: Edge) -> Optional['Bounds']:
        if edge is None:
            return None
        if isinstance(edge, Bounds):
            edge = edge.bottom
        if edge < self.top:
            return None
        if edge >= self.bottom:
            return self
        return Bounds(self.left, self.top, self.right, edge)

    def trim_width(self, source) -> Optional['Bounds']:
        """Clip the horizontal extent to that of ``source`` (anything with bounds)."""
        if source is None or source.bounds is None:
            return None
        other = source.bounds
        if other is self:
            return self
        return Bounds(max(other.left, self.left), self.top, min(other.right, self.right), self.bottom)

    def trim_height(self, source) -> Optional['Bounds']:
        if source is None or source.bounds is None:
            return None
        other = source.bounds
        if other is self:
            return self
        return Bounds(self.left, max(other.top, self.top), self.right, min(other.bottom, self.bottom))

    def extend_width(self, source) -> 'Bounds':
        """Widen to cover the horizontal extent of ``source``."""
        if source is None or source.bounds is None:
            return self
        other = source.bounds
        return Bounds(min(other.left, self.left), self.top, max(other.right, self.right), self.bottom)

    def extend_height(self, source) -> 'Bounds':
        if source is None or source.bounds is None:
            return self
        other = source.bounds
        return Bounds(self.left, min(other.top, self.top), self.right, max(other.bottom, self.bottom))

    # ------------------------------------------------------------------
    # Derived rectangles
    # ------------------------------------------------------------------

    def section(self, start: int, end: Optional[int] = None, total: int = 1) -> 'Bounds':
        """
        Split into ``total`` equal-width vertical bands and return bands [start, end).

        Args:
            start: Index of the first band
            end: Index after the last band (default: ``start + 1``)
            total: Number of bands

        Returns:
            Union of the selected bands
        """
        if end is None:
            end = start + 1
        if total < 1:
            raise ValueError("total must be at least 1")
        if not 0 <= start <= total or not 0 <= end <= total:
            raise IndexError(f"section [{start}, {end}) out of range for {total} sections")
        if end < start:
            raise ValueError("start must not be greater than end")
        if total == 1 and start == 0 and end == 1:
            return self
        width = self.right - self.left
        return Bounds(
            self.left + _div(start * width, total),
            self.top,
            self.left - ((-end * width) // total),
            self.bottom,
        )

    def scale(self, factor: float) -> 'Bounds':
        """Scale every coordinate, rounding each one half away from zero."""
        return Bounds(
            _round_half_away(self.left * factor),
            _round_half_away(self.top * factor),
            _round_half_away(self.right * factor),
            _round_half_away(self.bottom * factor),
        )

    def grow(self, pixels: int) -> 'Bounds':
        return Bounds(self.left - pixels, self.top - pixels, self.right + pixels, self.bottom + pixels)

    def translate(self, dx: int, dy: int) -> 'Bounds':
        if dx == 0 and dy == 0:
            return self
        return Bounds(self.left + dx, self.top + dy, self.right + dx, self.bottom + dy)

    def move_down(self, amount: int) -> 'Bounds':
        return self.translate(0, amount)

    def move_up(self, amount: int) -> 'Bounds':
        return self.translate(0, -amount)

    def move_to_the_right(self, amount: int) -> 'Bounds':
        return self.translate(amount, 0)

    def move_to_the_left(self, amount: int) -> 'Bounds':
        return self.translate(-amount, 0)

    def with_left(self, left: int) -> 'Bounds':
        return Bounds(left, self.top, self.right, self.bottom)

    def with_top(self, top: int) -> 'Bounds':
        return Bounds(self.left, top, self.right, self.bottom)

    def with_right(self, right: int) -> 'Bounds':
        return Bounds(self.left, self.top, right, self.bottom)

    def with_bottom(self, bottom: int) -> 'Bounds':
        return Bounds(self.left, self.top, self.right, bottom)

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def to_hocr_spec(self) -> str:
        return f"bbox {self.left} {self.top} {self.right} {self.bottom}"

    def to_tuple(self):
        return (self.left, self.top, self.right, self.bottom)

    def __str__(self) -> str:
        left_sign = '+' if self.left >= 0 else ''
        top_sign = '+' if self.top >= 0 else ''
        return f"{self.width}x{self.height}{left_sign}{self.left}{top_sign}{self.top}"


# ----------------------------------------------------------------------
# Null-safe helpers
# ----------------------------------------------------------------------

def is_empty(bounds: Optional[Bounds]) -> bool:
    """Absent bounds count as empty."""
    return bounds is None or bounds.is_empty()


def union(a: Optional[Bounds], b: Optional[Bounds]) -> Optional[Bounds]:
    """Union treating absent bounds as the empty set."""
    if a is None:
        return b
    return a.union(b)


def intersection(a: Optional[Bounds], b: Optional[Bounds]) -> Optional[Bounds]:
    if a is None or b is None:
        return None
    return a.intersection(b)


def contains(a: Optional[Bounds], b: Optional[Bounds]) -> bool:
    """``a`` contains ``b``; absent ``b`` is contained in everything, absent ``a`` contains nothing else."""
    if b is None:
        return True
    return a is not None and a.contains(b)


def within(a: Optional[Bounds], b: Optional[Bounds]) -> bool:
    return contains(b, a)


def of_all(items: Iterable) -> Optional[Bounds]:
    """
    Union of the bounds of all items.

    Args:
        items: Bounds, or anything exposing a ``bounds`` attribute

    Returns:
        The union, or None if no item has bounds
    """
    acc = None
    for item in items:
        acc = union(acc, item.bounds if item is not None else None)
    return acc
