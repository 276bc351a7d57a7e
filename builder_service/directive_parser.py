"""
directive_parser.py - Tokenize tagged sources and scan tag definitions

This module splits a source into code/comment word streams and applies the
``UTAGDEF`` directives it finds to a TagRegistry.
"""

import logging
import re
from typing import Callable, Dict, List

from .models import (
    DefinitionProperty,
    Directive,
    Line,
    Operator,
    Script,
    Tag,
    split_directive,
)
from .tag_registry import TagRegistry

_LOG = logging.getLogger(__name__)

LINE_COMMENT = "//"
BLOCK_COMMENT_OPEN = "/*"
BLOCK_COMMENT_CLOSE = "*/"

_LINE_BREAKS = re.compile(r"[\r\n]+")


def tokenize(text: str) -> List[Line]:
    """Split *text* into Lines of code words and comment words.

    Block comment state carries across lines; line comment state ends with
    its line. Comment markers are only recognized at the start of a word.

    Args:
        text: Raw source text

    Returns:
        One Line per physical line of input
    """
    lines: List[Line] = []
    in_block_comment = False

    for raw_line in _LINE_BREAKS.split(text):
        code_words: List[str] = []
        comment_words: List[str] = []
        in_line_comment = False

        for word in raw_line.split():
            if word.startswith(LINE_COMMENT):
                in_line_comment = True
                word = word[len(LINE_COMMENT):]
            elif word.startswith(BLOCK_COMMENT_OPEN):
                in_block_comment = True
                word = word[len(BLOCK_COMMENT_OPEN):]
            elif word.startswith(BLOCK_COMMENT_CLOSE):
                in_block_comment = False
                word = word[len(BLOCK_COMMENT_CLOSE):]

            if not word:
                continue

            if in_line_comment or in_block_comment:
                comment_words.append(word)
            else:
                code_words.append(word)

        lines.append(
            Line(
                code="".join(f"{word} " for word in code_words),
                comment="".join(f"{word} " for word in comment_words),
            )
        )

    return lines


def _set_description(tag: Tag, directive: Directive, registry: TagRegistry) -> None:
    tag.description = directive.text


def _add_requirement(tag: Tag, directive: Directive, registry: TagRegistry) -> None:
    required = registry.get(directive.text)
    if required is None:
        _LOG.warning('%s is unable to require tag "%s".', tag, directive.text)
        return
    tag.required_tag_names.append(required.name)


def _set_link(tag: Tag, directive: Directive, registry: TagRegistry) -> None:
    tag.link = directive.text


def _skip_size(tag: Tag, directive: Directive, registry: TagRegistry) -> None:
    _LOG.info('Skipping deprecated property "%s" on tag %s.', directive.property, tag)


DEFINITION_HANDLERS: Dict[
    DefinitionProperty, Callable[[Tag, Directive, TagRegistry], None]
] = {
    DefinitionProperty.DESC: _set_description,
    DefinitionProperty.REQU: _add_requirement,
    DefinitionProperty.LINK: _set_link,
    DefinitionProperty.SIZE: _skip_size,
}


def scan_tags(lines: List[Line], registry: TagRegistry) -> TagRegistry:
    """Apply every ``UTAGDEF`` directive in *lines* to *registry*.

    Requirements resolve against the tags registered so far, so a tag must be
    referenced before another tag can require it.
    """
    for line in lines:
        directive = split_directive(line.comment)
        if directive is None or directive.operator != Operator.DEFINE.value:
            continue

        if not directive.tag_name:
            _LOG.warning("Skipping %s directive without a tag name.", directive.operator)
            continue

        tag = registry.get_or_create(directive.tag_name)

        prop = DefinitionProperty.from_text(directive.property)
        if prop is None:
            _LOG.warning('Skipping unknown property "%s".', directive.property)
            continue

        DEFINITION_HANDLERS[prop](tag, directive, registry)

    return registry


def parse(text: str) -> Script:
    """Parse *text* into a Script with its tag definitions applied."""
    lines = tokenize(text)
    registry = scan_tags(lines, TagRegistry())
    _LOG.debug("Parsed %d lines defining %d tags", len(lines), len(registry))
    return Script(lines=lines, registry=registry)
