"""
Directive vocabulary for tagged sources.

Directives live in comments and follow the shape
``OPERATOR PROPERTY TAGNAME [DATA...]``. Each operator owns a closed set of
properties so that handlers can be looked up from a table instead of a
string switch.
"""

from enum import Enum
from typing import List, NamedTuple, Optional


# Tag that every other tag implicitly requires when it is defined.
REQUIRED_TAG_NAME = "REQUIRED"


class Operator(Enum):
    """Directive operators recognized in comments."""

    DEFINE = "UTAGDEF"
    SET = "UTAGSET"


class DefinitionProperty(Enum):
    """Properties of ``UTAGDEF`` directives."""

    DESC = "DESC"
    REQU = "REQU"
    LINK = "LINK"
    SIZE = "SIZE"  # deprecated, sizes are measured

    @classmethod
    def from_text(cls, text: str) -> Optional["DefinitionProperty"]:
        try:
            return cls(text)
        except ValueError:
            return None


class MarkerProperty(Enum):
    """Properties of ``UTAGSET`` directives."""

    LINE = "LINE"
    START = "START"
    END = "END"

    @classmethod
    def from_text(cls, text: str) -> Optional["MarkerProperty"]:
        try:
            return cls(text)
        except ValueError:
            return None


class Directive(NamedTuple):
    """A directive split out of a line comment."""

    operator: str
    property: str
    tag_name: str
    data: List[str]

    @property
    def text(self) -> str:
        """Data words joined back into a single trimmed string."""
        return " ".join(self.data).strip()


def split_directive(comment: str) -> Optional[Directive]:
    """Split a comment into its directive parts.

    Returns None when the comment is empty. Missing parts come back as
    empty strings so callers can report them.
    """
    words = comment.split()
    if not words:
        return None
    padded = words + [""] * max(0, 3 - len(words))
    return Directive(
        operator=padded[0],
        property=padded[1],
        tag_name=padded[2],
        data=padded[3:],
    )
