"""
tag_registry.py - Name-keyed storage for the tags of a script
"""

import logging
from typing import Dict, Iterator, Optional

from .models import Tag

_LOG = logging.getLogger(__name__)


class TagRegistry:
    """Owns every Tag of a script, keyed by name in creation order.

    Tags never point back at the registry; everything that needs to resolve
    a name goes through ``get``.
    """

    def __init__(self):
        self._tags: Dict[str, Tag] = {}

    def get(self, name: str) -> Optional[Tag]:
        return self._tags.get(name)

    def get_or_create(self, name: str) -> Tag:
        """Return the tag named *name*, creating it on first reference."""
        tag = self._tags.get(name)
        if tag is None:
            tag = Tag(name=name)
            self._tags[name] = tag
            _LOG.debug("Registered tag %s", name)
        return tag

    def names(self):
        return list(self._tags)

    def __contains__(self, name: object) -> bool:
        return name in self._tags

    def __iter__(self) -> Iterator[Tag]:
        return iter(list(self._tags.values()))

    def __len__(self) -> int:
        return len(self._tags)
