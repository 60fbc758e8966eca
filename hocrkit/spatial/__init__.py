"""Spatial analysis package - Reading order, line queries, column grouping and word matching."""

from .reading_order import (
    Order,
    flow_order,
    reverse_flow_order,
    center_leftwards,
    center_rightwards,
    leftish_rightwards,
    middle_downwards,
    middle_upwards,
    sort_elements,
)

from . import line_queries

from .grouping import (
    expand_to_whole_words,
    estimate_column_bounds,
    median_word_gap,
    count_cut_lines,
)

from .matching import match_words

__all__ = [
    # Reading order
    'Order',
    'flow_order',
    'reverse_flow_order',
    'center_leftwards',
    'center_rightwards',
    'leftish_rightwards',
    'middle_downwards',
    'middle_upwards',
    'sort_elements',

    # Line queries
    'line_queries',

    # Grouping
    'expand_to_whole_words',
    'estimate_column_bounds',
    'median_word_gap',
    'count_cut_lines',

    # Matching
    'match_words',
]
