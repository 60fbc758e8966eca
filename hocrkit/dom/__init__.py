"""DOM package - Tolerant lexer and generic element tree."""

from .nodes import HocrNode, HocrTag, HocrText
from .parser import lex, create_ast

__all__ = [
    'HocrNode',
    'HocrTag',
    'HocrText',
    'lex',
    'create_ast',
]
