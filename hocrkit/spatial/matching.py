"""
Word Matching Module

Aligns a list of expected strings with the recognized words of a line.

Every word is either part of exactly one segment or skipped as noise
(only words of at most one character may be skipped). The words of a
segment, concatenated without separators, must fuzzily equal the
corresponding expected string, and segments follow the order of the
strings. An alignment is accepted only if it is the single possible one.

The search runs over states ``(word offset, string offset, pending text)``,
where the pending text is what the open segment has accumulated so far.
Paths reaching the same state are merged, so the number of states stays
bounded by words x strings x distinct prefixes of each string.

A forward pass discovers the reachable states. A backward pass computes
the completions of each state: the word indices still to be added to the
open segment, followed by the remaining closed segments. A completion does
not depend on how the state was reached, and at most two distinct
completions are kept per state since that is enough to tell a unique
alignment apart from an ambiguous one.
"""
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from hocrkit.core import bounds as geometry
from hocrkit.core.bounds import Bounds
from hocrkit.core.constants import OCR_ARTIFACT_MAX_LENGTH
from hocrkit.utils.text_utils import fuzzy_equal, fuzzy_prefix

logger = logging.getLogger(__name__)

State = Tuple[int, int, str]
Segment = Tuple[int, ...]
# One segment per remaining string; the first one continues the open segment
Completion = Tuple[Segment, ...]

# Transition kinds
_SKIP = 'skip'
_EXTEND = 'extend'
_CLOSE = 'close'

_MAX_COMPLETIONS = 2


def _successors(words, strings, state: State) -> List[Tuple[str, State]]:
    """Transitions out of ``state`` as (kind, next state) pairs."""
    word_offset, string_offset, pending = state
    word = words[word_offset]
    edges = []

    if len(word.text) <= OCR_ARTIFACT_MAX_LENGTH:
        edges.append((_SKIP, (word_offset + 1, string_offset, pending)))

    if string_offset < len(strings):
        target = strings[string_offset]
        text = pending + word.text
        if fuzzy_equal(target, text):
            edges.append((_CLOSE, (word_offset + 1, string_offset + 1, '')))
        if fuzzy_prefix(target, text):
            edges.append((_EXTEND, (word_offset + 1, string_offset, text)))

    return edges


def _extend_completion(kind: str, word_offset: int, tail: Completion) -> Completion:
    if kind == _SKIP:
        return tail
    if kind == _EXTEND:
        return ((word_offset,) + tail[0],) + tail[1:]
    return ((word_offset,),) + tail


def _find_parses(words: Sequence, strings: Sequence[str]) -> List[Completion]:
    """Up to two distinct complete parses, each a tuple of word-index segments."""
    start: State = (0, 0, '')

    def is_dead(state: State) -> bool:
        word_offset, string_offset, _ = state
        return len(words) - word_offset < len(strings) - string_offset

    # Forward pass: reachable states and their transitions
    graph: Dict[State, List[Tuple[str, State]]] = {}
    stack = [start]
    while stack:
        state = stack.pop()
        if state in graph:
            continue
        if is_dead(state) or state[0] == len(words):
            graph[state] = []
            continue
        edges = _successors(words, strings, state)
        graph[state] = edges
        stack.extend(next_state for _, next_state in edges if next_state not in graph)

    # Backward pass: every transition consumes one word, so higher offsets come first
    completions: Dict[State, List[Completion]] = {}
    for state in sorted(graph, key=lambda s: s[0], reverse=True):
        word_offset, string_offset, pending = state
        if is_dead(state):
            completions[state] = []
        elif word_offset == len(words):
            done = not pending and string_offset == len(strings)
            completions[state] = [()] if done else []
        else:
            found: List[Completion] = []
            for kind, next_state in graph[state]:
                for tail in completions[next_state]:
                    candidate = _extend_completion(kind, word_offset, tail)
                    if candidate not in found:
                        found.append(candidate)
                    if len(found) >= _MAX_COMPLETIONS:
                        break
                if len(found) >= _MAX_COMPLETIONS:
                    break
            completions[state] = found

    logger.debug(f"Word matching explored {len(graph)} states")
    return completions[start]


def match_words(words: Sequence, strings: Sequence[str]) -> Optional[List[Optional[Bounds]]]:
    """
    Find where each expected string lies among the words.

    Args:
        words: Words in reading order (e.g. a line's words)
        strings: Expected strings, in the same order as they appear

    Returns:
        Per string, the union of the bounds of its matched words; None if
        no alignment or more than one alignment exists
    """
    found = _find_parses(words, strings)
    if len(found) != 1:
        logger.debug(f"Word matching found {'no' if not found else 'ambiguous'} alignment for {list(strings)}")
        return None
    return [geometry.of_all(words[i] for i in segment) for segment in found[0]]
