"""
Reading Order Module

Orderings over page elements (anything exposing a ``bounds`` attribute).
Flow order approximates natural reading order: top to bottom, then left
to right. The other orders sort by a single coordinate and fall back to
flow order on ties.

All orderings are plain comparison functions returning a negative number,
zero or a positive number, so they can be passed to ``functools.cmp_to_key``
or used as maximizing comparators in line queries.
"""
from enum import Enum
from functools import cmp_to_key
from typing import Callable, Iterable, List


def _compare(x, y) -> int:
    return (x > y) - (x < y)


def flow_order(a, b) -> int:
    """
    Compare two elements in reading order.

    Elements whose boxes do not overlap vertically are ordered top to
    bottom; otherwise left to right; then by vertical and horizontal
    midpoint. Remaining ties, and elements without bounds, are ordered by
    object identity so that the order stays total.
    """
    if a is b:
        return 0
    ba = a.bounds
    bb = b.bounds
    if ba is not None and bb is not None:
        if ba.is_below(bb):
            return 1
        if bb.is_below(ba):
            return -1
        if ba.is_to_the_right(bb):
            return 1
        if bb.is_to_the_right(ba):
            return -1
        result = _compare(ba.middle, bb.middle) or _compare(ba.center, bb.center)
        if result:
            return result
    return _compare(id(a), id(b))


def reverse_flow_order(a, b) -> int:
    return flow_order(b, a)


def _by_coordinate(coordinate: Callable, descending: bool = False):
    def compare(a, b) -> int:
        if a.bounds is None or b.bounds is None:
            return flow_order(b, a) if descending else flow_order(a, b)
        result = _compare(coordinate(a.bounds), coordinate(b.bounds))
        if descending:
            return -result or flow_order(b, a)
        return result or flow_order(a, b)
    return compare


center_leftwards = _by_coordinate(lambda b: b.center, descending=True)
center_rightwards = _by_coordinate(lambda b: b.center)
leftish_rightwards = _by_coordinate(lambda b: b.leftish)
middle_downwards = _by_coordinate(lambda b: b.middle)
middle_upwards = _by_coordinate(lambda b: b.middle, descending=True)


class Order(Enum):
    """Named orderings, usable with ``sort_elements``."""
    FLOW = "flow"
    REVERSE_FLOW = "reverse_flow"
    CENTER_LEFTWARDS = "center_leftwards"
    CENTER_RIGHTWARDS = "center_rightwards"
    LEFTISH_RIGHTWARDS = "leftish_rightwards"
    MIDDLE_DOWNWARDS = "middle_downwards"
    MIDDLE_UPWARDS = "middle_upwards"

    @property
    def comparator(self) -> Callable:
        return _COMPARATORS[self]


_COMPARATORS = {
    Order.FLOW: flow_order,
    Order.REVERSE_FLOW: reverse_flow_order,
    Order.CENTER_LEFTWARDS: center_leftwards,
    Order.CENTER_RIGHTWARDS: center_rightwards,
    Order.LEFTISH_RIGHTWARDS: leftish_rightwards,
    Order.MIDDLE_DOWNWARDS: middle_downwards,
    Order.MIDDLE_UPWARDS: middle_upwards,
}


def sort_elements(elements: Iterable, order: Order = Order.FLOW) -> List:
    """
    Sort page elements.

    Args:
        elements: Words, lines, paragraphs, areas or bare Bounds
        order: Ordering to apply

    Returns:
        New list in the requested order
    """
    return sorted(elements, key=cmp_to_key(order.comparator))
