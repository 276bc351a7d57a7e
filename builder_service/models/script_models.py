"""
Core data models for tagged scripts.

Tags are compared by identity so that dependency filtering can exclude
exactly the node a caller asked about.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from ..tag_registry import TagRegistry


class Mode(Enum):
    """Inclusion mode of a tag association."""

    AND = "AND"
    OR = "OR"

    @classmethod
    def from_text(cls, text: Optional[str]) -> Optional["Mode"]:
        """Look up a mode by its directive text, None when unrecognized."""
        if not text:
            return None
        try:
            return cls(text)
        except ValueError:
            return None


@dataclass(eq=False)
class Tag:
    """A named, independently selectable feature of a script."""
    name: str
    description: str = ""
    required_tag_names: List[str] = field(default_factory=list)
    link: str = ""
    size: int = 0

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class LineAssociation:
    """A tag governing a line, with the mode it was attached in."""
    tag: Tag
    mode: Optional[Mode] = None

    @property
    def is_and(self) -> bool:
        return self.mode is Mode.AND


@dataclass
class Line:
    """One physical line of source split into code and comment words."""
    code: str = ""
    comment: str = ""
    associations: List[LineAssociation] = field(default_factory=list)

    @property
    def is_tagged(self) -> bool:
        return bool(self.associations)


@dataclass
class Script:
    """Ordered lines of a source plus the registry of its tags."""
    lines: List[Line]
    registry: "TagRegistry"

    @property
    def tags(self) -> List[Tag]:
        """Tags in the order they were first referenced."""
        return list(self.registry)

    def get_tag(self, name: str) -> Optional[Tag]:
        return self.registry.get(name)
