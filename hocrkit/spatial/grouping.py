"""
Grouping Module

Region heuristics over a page's words:
- Word-preserving expansion: grow a rectangle until it cuts no word
- Column estimation: extend a rectangle rightwards to the edge of its column
"""
import logging
from typing import Optional

import numpy as np

from hocrkit.core.bounds import Bounds
from hocrkit.core.constants import COLUMN_MIN_CUT_TOLERANCE
from hocrkit.spatial.line_queries import has_words_intersecting

logger = logging.getLogger(__name__)


def expand_to_whole_words(page, rect: Optional[Bounds]) -> Optional[Bounds]:
    """
    Grow ``rect`` until no word on the page is partially inside it.

    Each cut word is absorbed by union, which may make the rectangle cut
    further words, so the scan repeats until nothing changes. The result
    is a fixed point: expanding it again returns it unchanged.

    Args:
        page: Page whose words are considered
        rect: Starting rectangle

    Returns:
        The expanded rectangle, or None if ``rect`` is None
    """
    if rect is None:
        return None

    word_bounds = [w.bounds for w in page.all_words() if w.bounds is not None]
    passes = 0
    modified = True
    while modified:
        modified = False
        passes += 1
        for bounds in word_bounds:
            if rect.cuts(bounds):
                rect = rect.union(bounds)
                modified = True

    logger.debug(f"Word-preserving expansion settled after {passes} passes: {rect}")
    return rect


def _cuts_line(edge: Bounds, line) -> bool:
    """A vertical edge cuts a line when it passes strictly through one of its words."""
    for word in line.words:
        b = word.bounds
        if b is None:
            continue
        if b.left < edge.left < b.right and b.top < edge.bottom and edge.top < b.bottom:
            return True
    return False


def count_cut_lines(page, edge: Bounds) -> int:
    """Number of lines on the page that a vertical ``edge`` passes through."""
    return len(page.find_all_lines(lambda line: _cuts_line(edge, line)))


def median_word_gap(page, rect: Bounds) -> float:
    """
    Median gap between neighbouring words lying entirely inside ``rect``.

    Returns:
        Gap in pixels, or 0.0 if no such pair exists
    """
    gaps = []
    for line in page.find_all_lines(has_words_intersecting(rect)):
        for left, right in zip(line.words, line.words[1:]):
            if left.bounds is None or right.bounds is None:
                continue
            if left.bounds.within(rect) and right.bounds.within(rect):
                gaps.append(right.bounds.left - left.bounds.right)

    if not gaps:
        return 0.0
    return float(np.median(gaps))


def estimate_column_bounds(page, rect: Optional[Bounds]) -> Optional[Bounds]:
    """
    Estimate the bounds of the text column containing ``rect``.

    The rectangle is first expanded to whole words. Its right edge is then
    moved rightwards in steps of half the median word gap. The probe stops
    once it cuts more lines than the original right edge did (and at least
    two), or once it has travelled the rectangle's width or left the page.
    The column ends at the last probe position that cut no line.

    Args:
        page: Page to analyze
        rect: A rectangle inside the column, e.g. the bounds of a header

    Returns:
        Estimated column bounds, or None if ``rect`` is None
    """
    if rect is None:
        return None

    rect = expand_to_whole_words(page, rect)
    space_width = median_word_gap(page, rect)

    moving_edge = rect.right_edge
    near_right_edge = moving_edge.move_to_the_left(int(space_width / 4))
    tolerance = max(COLUMN_MIN_CUT_TOLERANCE, count_cut_lines(page, near_right_edge))
    step = max(1, int(space_width / 2))

    last_good = moving_edge
    while moving_edge.within(page.bounds) and moving_edge.left - rect.right < rect.width:
        moving_edge = moving_edge.move_to_the_right(step)
        cut = count_cut_lines(page, moving_edge)
        if cut > tolerance:
            break
        if cut == 0:
            last_good = moving_edge

    logger.debug(f"Column estimate for {rect}: right edge at {last_good.left} (tolerance {tolerance})")
    return rect.union(last_good)
