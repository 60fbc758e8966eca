"""
Line Queries Module

Predicates and comparators for selecting lines on a page.

Predicates take a line and return a bool. Comparators take two lines and
return a positive number when the first one is the better candidate; they
are used by ``find_line`` to pick the maximum.
"""
import re
from typing import Callable, Union

from hocrkit.spatial.reading_order import flow_order

LinePredicate = Callable[[object], bool]


def _compare(x, y) -> int:
    return (x > y) - (x < y)


# ----------------------------------------------------------------------
# Predicates
# ----------------------------------------------------------------------

def contains(text: str) -> LinePredicate:
    """Lines whose space-joined text contains ``text`` verbatim."""
    def predicate(line) -> bool:
        return line is not None and text in line.mk_string()
    return predicate


def has_words_intersecting(rect) -> LinePredicate:
    """Lines with at least one word overlapping ``rect`` with positive area."""
    def predicate(line) -> bool:
        if line is None:
            return False
        return any(w.bounds is not None and w.bounds.intersects(rect) for w in line.words)
    return predicate


def is_arbitrary(line) -> bool:
    return True


def is_not_blank(line) -> bool:
    return line is not None and not line.is_blank()


def matches_regex(pattern: Union[str, re.Pattern], ignore_case: bool = False) -> LinePredicate:
    """
    Lines whose whole text matches a regular expression.

    Args:
        pattern: Regex source or compiled pattern
        ignore_case: Compile ``pattern`` case-insensitively (string patterns only)

    Returns:
        Predicate over lines
    """
    if isinstance(pattern, str):
        pattern = re.compile(pattern, re.IGNORECASE if ignore_case else 0)

    def predicate(line) -> bool:
        return line is not None and pattern.fullmatch(line.mk_string()) is not None
    return predicate


# ----------------------------------------------------------------------
# Comparators for maximizing
# ----------------------------------------------------------------------

def has_most_words(a, b) -> int:
    return _compare(len(a.words), len(b.words))


def has_least_words(a, b) -> int:
    return _compare(len(b.words), len(a.words))


def _by_bounds(a, b, key) -> int:
    # lines without bounds never win
    if a.bounds is None or b.bounds is None:
        return _compare(a.bounds is not None, b.bounds is not None)
    return _compare(key(a.bounds), key(b.bounds))


def is_at_the_top(a, b) -> int:
    return _by_bounds(a, b, lambda r: -r.middle)


def is_at_the_bottom(a, b) -> int:
    return _by_bounds(a, b, lambda r: r.middle)


def is_at_the_left(a, b) -> int:
    return _by_bounds(a, b, lambda r: -r.center)


def is_at_the_right(a, b) -> int:
    return _by_bounds(a, b, lambda r: r.center)


def is_at_the_end(a, b) -> int:
    """Prefers the line that comes last in reading order."""
    return flow_order(a, b)


def is_at_the_beginning(a, b) -> int:
    return flow_order(b, a)
