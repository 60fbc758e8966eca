"""
Tolerant lexer and tree builder for the HTML-like markup emitted by OCR engines.

The input is frequently malformed (stray ``<``, unclosed tags, missing
closing tags), so tokenization never fails; the only fatal error is a tag
whose attributes cannot be scanned.
"""
import logging
from collections import deque
from typing import Deque, List

from hocrkit.dom.nodes import HocrNode, HocrTag, HocrText

logger = logging.getLogger(__name__)


def _token_length(text: str, offset: int) -> int:
    """
    Length of the token starting at ``offset``.

    A tag token runs up to and including the next ``>``, unless another
    ``<`` shows up first, in which case it stops right before that ``<``.
    A tag with no closing ``>`` runs to the end of the input.
    """
    if text[offset] != '<':
        next_open = text.find('<', offset)
        return (next_open if next_open >= 0 else len(text)) - offset

    next_close = text.find('>', offset)
    if next_close < 0:
        return len(text) - offset

    next_open = text.find('<', offset + 1)
    if 0 <= next_open < next_close:
        logger.warning(f"Truncating malformed tag at offset {offset}")
        return next_open - offset

    return next_close + 1 - offset


def lex(text: str) -> List[str]:
    """
    Split markup into alternating text and tag tokens.

    Args:
        text: Raw markup

    Returns:
        Tokens whose concatenation equals the input
    """
    tokens = []
    offset = 0
    while offset < len(text):
        length = _token_length(text, offset)
        tokens.append(text[offset:offset + length])
        offset += length
    return tokens


def _is_tag(token: str) -> bool:
    return token.startswith('<') and token.endswith('>')


def _build_level(tokens: Deque[str]) -> List[HocrNode]:
    nodes = []
    while tokens:
        token = tokens.popleft()
        if not _is_tag(token):
            nodes.append(HocrText.from_token(token))
        elif token.startswith('<!'):
            continue
        elif token.startswith('</'):
            break
        elif token.endswith('/>'):
            nodes.append(HocrTag.from_token(token))
        else:
            nodes.append(HocrTag.from_token(token, _build_level(tokens)))
    return nodes


def create_ast(text: str) -> List[HocrNode]:
    """
    Parse markup into a forest of generic nodes.

    Closing tags are not checked against the opening tag: any ``</...>``
    ends the innermost open element. Comments and doctypes are dropped.

    Args:
        text: Raw markup

    Returns:
        Top-level nodes in document order

    Raises:
        MalformedTagError: If a tag's attributes cannot be scanned
    """
    tokens = lex(text)
    logger.debug(f"Lexed {len(tokens)} tokens")

    queue = deque(tokens)
    nodes = []
    # A stray closing tag at the top level must not drop the rest of the input
    while queue:
        nodes.extend(_build_level(queue))
    return nodes
