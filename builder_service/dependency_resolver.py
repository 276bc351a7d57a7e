"""
dependency_resolver.py - Transitive closure of tag requirements
"""

import logging
from collections import deque
from typing import Iterable, List, Set

from .models import REQUIRED_TAG_NAME, Script, Tag
from .tag_registry import TagRegistry

_LOG = logging.getLogger(__name__)


def dependencies(
    tag: Tag,
    registry: TagRegistry,
    include_self: bool = True,
    required_tag_name: str = REQUIRED_TAG_NAME,
) -> List[Tag]:
    """Return *tag* and every tag it requires, directly or indirectly.

    The closure is breadth-first and visited-gated, so cycles terminate. The
    tag named *required_tag_name* is part of every closure when it exists.
    Requirement names that do not resolve are logged and skipped.

    Args:
        tag: Root of the closure
        registry: Registry used to resolve requirement names
        include_self: When False, the root object itself is left out
        required_tag_name: Name of the tag every tag implicitly requires

    Returns:
        Ordered, duplicate-free list of tags
    """
    pending = deque([tag])
    sentinel = registry.get(required_tag_name)
    if sentinel is not None:
        pending.append(sentinel)

    output: List[Tag] = []
    visited: Set[int] = set()

    while pending:
        current = pending.popleft()
        if id(current) in visited:
            continue
        visited.add(id(current))
        output.append(current)

        for name in current.required_tag_names:
            required = registry.get(name)
            if required is None:
                _LOG.warning(
                    'Error getting required tag "%s" for tag "%s".', name, current
                )
                continue
            pending.append(required)

    if not include_self:
        output = [found for found in output if found is not tag]

    return output


def dependency_names(tag: Tag, registry: TagRegistry, include_self: bool = True) -> List[str]:
    return [found.name for found in dependencies(tag, registry, include_self)]


def resolve_selection(script: Script, selected_names: Iterable[str]) -> List[str]:
    """Expand user-selected tag names into the names of their full closures.

    Closures are merged in selection order; unknown names are logged and
    skipped.
    """
    names: List[str] = []
    seen: Set[str] = set()

    for selected in selected_names:
        tag = script.registry.get(selected)
        if tag is None:
            _LOG.warning('Skipping unknown selected tag "%s".', selected)
            continue
        for found in dependencies(tag, script.registry):
            if found.name not in seen:
                seen.add(found.name)
                names.append(found.name)

    return names
