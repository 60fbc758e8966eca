"""
Exceptions raised while reading hOCR documents.
"""


class HocrError(Exception):
    """Base class for errors raised by hocrkit."""

    pass


class MalformedTagError(HocrError):
    """Raised when the inside of a tag cannot be scanned (e.g. unterminated quote)."""

    def __init__(self, tag: str, reason: str = "unterminated attribute"):
        self.tag = tag
        self.reason = reason
        super().__init__(f"Malformed tag ({reason}): {tag!r}")


class StructureMismatchError(HocrError):
    """Raised when a node does not follow the hOCR convention expected at its rank."""

    def __init__(self, expected: str, found: str):
        self.expected = expected
        self.found = found
        super().__init__(f"Expected {expected}, found: {found}")
