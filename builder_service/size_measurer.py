"""
size_measurer.py - Per-tag byte cost of compiled output
"""

import logging

from .compiler import compile_script
from .dependency_resolver import dependency_names
from .models import Script, Tag

_LOG = logging.getLogger(__name__)


def byte_length(text: str) -> int:
    return len(text.encode("utf-8"))


def measure_tag(script: Script, tag: Tag) -> int:
    """Bytes added to the output by *tag* on top of its own dependencies.

    Both compilations skip minify and format so sizes stay deterministic.
    """
    inclusive = dependency_names(tag, script.registry, include_self=True)
    exclusive = dependency_names(tag, script.registry, include_self=False)
    inclusive_length = byte_length(compile_script(script, inclusive))
    exclusive_length = byte_length(compile_script(script, exclusive))
    return inclusive_length - exclusive_length


def measure_tags(script: Script) -> Script:
    """Store the measured size of every tag on the tag. Safe to repeat."""
    for tag in script.tags:
        tag.size = measure_tag(script, tag)
        _LOG.debug("Tag %s measures %d bytes", tag, tag.size)
    return script
