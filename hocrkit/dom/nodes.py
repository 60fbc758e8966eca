"""
Generic element tree produced by the markup parser.

A node is either a HocrTag (name, attributes, children) or a HocrText
(decoded string). Nodes are immutable and never point back to their parent.
"""
import html
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from hocrkit.core.exceptions import MalformedTagError


@dataclass(frozen=True)
class HocrText:
    """A run of decoded text between tags."""
    text: str

    @classmethod
    def from_token(cls, token: str) -> 'HocrText':
        return cls(html.unescape(token))

    @property
    def raw_text(self) -> str:
        return self.text

    def is_blank(self) -> bool:
        return not self.text.strip()

    def find_tag(self, name: str) -> Optional['HocrTag']:
        return None

    def mk_string(self) -> str:
        return "" if self.is_blank() else self.text


@dataclass(frozen=True)
class HocrTag:
    """An element with a lowercased name, decoded attributes and ordered children."""
    name: str
    attributes: Mapping[str, str] = field(default_factory=dict, hash=False)
    children: Tuple['HocrNode', ...] = ()

    @classmethod
    def from_token(cls, token: str, children=()) -> 'HocrTag':
        """
        Build a tag from its opening token, e.g. ``<span class='ocr_line'>``.

        Raises:
            MalformedTagError: If the attribute region cannot be scanned
        """
        name, attributes = _TagScanner(token).scan()
        return cls(name=name, attributes=MappingProxyType(attributes), children=tuple(children))

    @property
    def id(self) -> Optional[str]:
        return self.attributes.get('id')

    @property
    def css_class(self) -> Optional[str]:
        return self.attributes.get('class')

    @property
    def title(self) -> Optional[str]:
        return self.attributes.get('title')

    @property
    def raw_text(self) -> str:
        """Concatenated text of all descendants."""
        return ''.join(child.raw_text for child in self.children)

    def is_blank(self) -> bool:
        """A subtree is blank when its text is entirely whitespace."""
        return not self.raw_text.strip()

    def find_tag(self, name: str) -> Optional['HocrTag']:
        """Depth-first search for the first tag called ``name``, starting with self."""
        if self.name == name:
            return self
        for child in self.children:
            found = child.find_tag(name)
            if found is not None:
                return found
        return None

    def mk_string(self) -> str:
        """Compact rendering used in error messages."""
        inner = ''.join(child.mk_string() for child in self.children)
        return f"<{self.name} {self.id} {self.css_class}>{inner}</{self.name}>"


HocrNode = Union[HocrTag, HocrText]


class _TagScanner:
    """Scans the inside of an opening tag into a name and an attribute dict."""

    def __init__(self, token: str):
        self.token = token
        self.pos = 1

    def _peek(self) -> str:
        if self.pos >= len(self.token):
            raise MalformedTagError(self.token)
        return self.token[self.pos]

    def _skip_spaces(self):
        while self._peek().isspace():
            self.pos += 1

    def _read_until(self, stops: str) -> str:
        start = self.pos
        while True:
            c = self._peek()
            if c in stops or c.isspace():
                break
            self.pos += 1
        return self.token[start:self.pos]

    def _read_quoted(self, quote: str) -> str:
        self.pos += 1
        start = self.pos
        while self._peek() != quote:
            self.pos += 1
        value = self.token[start:self.pos]
        self.pos += 1
        return value

    def scan(self) -> Tuple[str, dict]:
        self._skip_spaces()
        name = self._read_until('>/').lower()
        self._skip_spaces()

        attributes = {}
        while self._peek() not in '/>':
            attr_name = self._read_until('=/>')
            self._skip_spaces()
            attr_value = attr_name
            if self._peek() == '=':
                self.pos += 1
                self._skip_spaces()
                quote = self._peek()
                if quote in '\'"':
                    attr_value = self._read_quoted(quote)
                else:
                    attr_value = self._read_until('/>')
            self._skip_spaces()
            attributes[html.unescape(attr_name)] = html.unescape(attr_value)

        return name, attributes
