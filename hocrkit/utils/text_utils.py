"""
Text utilities for OCR output.

Fuzzy comparison that tolerates the usual OCR confusions: accented
letters, look-alike characters and stray separators.
"""
import re
from typing import Optional

from hocrkit.core.constants import (
    ASCII_FOLD_START,
    ASCII_FOLD_TABLE,
    CONFUSABLE_CLASSES,
    NEGLIGIBLE_CHARACTERS,
    SMALLER_PATTERN,
)

_SMALLER_RE = re.compile(SMALLER_PATTERN)


def to_ascii(char: str) -> str:
    """
    Fold an accented Latin letter to its unaccented ASCII equivalent.

    Characters outside U+00C0..U+017F are returned unchanged.
    """
    code = ord(char)
    if ASCII_FOLD_START <= code < ASCII_FOLD_START + len(ASCII_FOLD_TABLE):
        return ASCII_FOLD_TABLE[code - ASCII_FOLD_START]
    return char


def chars_fuzzy_equal(c1: str, c2: str) -> bool:
    """Two characters are equal after folding or belong to one confusable class."""
    c1 = to_ascii(c1)
    c2 = to_ascii(c2)
    if c1 == c2:
        return True
    return any(c1 in group and c2 in group for group in CONFUSABLE_CLASSES)


def is_negligible(char: str) -> bool:
    return char in NEGLIGIBLE_CHARACTERS


def is_smaller(text: str) -> bool:
    """True for strings made only of low (``,._``) or only of high (``"'^``) punctuation."""
    return _SMALLER_RE.match(text) is not None


def _fuzzy_consume(s1: str, s2: str) -> int:
    """
    Walk both strings in lockstep.

    Matched pairs advance both sides. Otherwise each side may drop one
    negligible character, and may not drop another until the next matched
    pair. The walk stops when neither side can move.

    Returns:
        Number of characters of ``s1`` left over once ``s2`` is fully
        consumed, or -1 if ``s2`` could not be consumed
    """
    i1 = 0
    i2 = 0
    can_skip1 = True
    can_skip2 = True

    while i1 < len(s1) and i2 < len(s2):
        c1 = s1[i1]
        c2 = s2[i2]
        if chars_fuzzy_equal(c1, c2):
            i1 += 1
            i2 += 1
            can_skip1 = True
            can_skip2 = True
            continue

        moved = False
        if can_skip1 and is_negligible(c1):
            can_skip1 = False
            i1 += 1
            moved = True
        if can_skip2 and is_negligible(c2):
            can_skip2 = False
            i2 += 1
            moved = True
        if not moved:
            break

    # A single trailing separator may still be dropped
    if i1 < len(s1) and can_skip1 and is_negligible(s1[i1]):
        i1 += 1
    if i2 < len(s2) and can_skip2 and is_negligible(s2[i2]):
        i2 += 1

    if i2 == len(s2):
        return len(s1) - i1
    return -1


def fuzzy_equal(s1: Optional[str], s2: Optional[str]) -> bool:
    """
    Compare two strings tolerating OCR noise.

    Args:
        s1: First string (None equals only None)
        s2: Second string

    Returns:
        True if both strings are fully consumed by the fuzzy walk
    """
    if s1 is None:
        return s2 is None
    return s2 is not None and _fuzzy_consume(s1, s2) == 0


def fuzzy_prefix(text: str, prefix: str) -> bool:
    """True if ``prefix`` is fully consumed while walking ``text``."""
    return _fuzzy_consume(text, prefix) >= 0


def fuzzy_contains(haystack: str, needle: str, ignore_case: bool = False) -> bool:
    """
    Fuzzy substring search.

    Args:
        haystack: Text to search in
        needle: Text to look for
        ignore_case: Compare lowercased strings

    Returns:
        True if ``needle`` is a fuzzy prefix of some suffix of ``haystack``
    """
    if ignore_case:
        haystack = haystack.lower()
        needle = needle.lower()
    return any(fuzzy_prefix(haystack[i:], needle) for i in range(len(haystack)))
