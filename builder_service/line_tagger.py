"""
line_tagger.py - Attach tags to lines from ``UTAGSET`` directives

Blocks opened with START stay on a stack until an END for the same tag name
closes them. Every line receives its own LINE/END associations first and
then every block still open, which makes blocks inclusive of the lines
holding their START and END markers.
"""

import logging
from typing import Callable, Dict, List

from .models import (
    Line,
    LineAssociation,
    MarkerProperty,
    Mode,
    Operator,
    Script,
    split_directive,
)

_LOG = logging.getLogger(__name__)


def _open_block(association: LineAssociation, open_blocks: List[LineAssociation], line_tags: List[LineAssociation]) -> None:
    open_blocks.append(association)


def _close_block(association: LineAssociation, open_blocks: List[LineAssociation], line_tags: List[LineAssociation]) -> None:
    # Matched by name only: every open block of the tag closes, whatever its mode.
    open_blocks[:] = [
        block for block in open_blocks if block.tag.name != association.tag.name
    ]
    line_tags.append(association)


def _mark_line(association: LineAssociation, open_blocks: List[LineAssociation], line_tags: List[LineAssociation]) -> None:
    line_tags.append(association)


MARKER_HANDLERS: Dict[
    MarkerProperty,
    Callable[[LineAssociation, List[LineAssociation], List[LineAssociation]], None],
] = {
    MarkerProperty.START: _open_block,
    MarkerProperty.END: _close_block,
    MarkerProperty.LINE: _mark_line,
}


def _line_directive_tags(line: Line, script: Script, open_blocks: List[LineAssociation]) -> List[LineAssociation]:
    """Apply the line's own directive, returning associations for this line only."""
    line_tags: List[LineAssociation] = []

    directive = split_directive(line.comment)
    if directive is None or directive.operator != Operator.SET.value:
        return line_tags

    tag = script.registry.get(directive.tag_name)
    if tag is None:
        # Only the directive is dropped; the caller still attaches open blocks,
        # otherwise the line would count as untagged and always compile in.
        _LOG.error('Failed to set line tag "%s".', directive.tag_name)
        return line_tags

    prop = MarkerProperty.from_text(directive.property)
    if prop is None:
        _LOG.warning('Skipping unknown property "%s".', directive.property)
        return line_tags

    mode_text = directive.data[0] if directive.data else None
    association = LineAssociation(tag=tag, mode=Mode.from_text(mode_text))
    MARKER_HANDLERS[prop](association, open_blocks, line_tags)
    return line_tags


def tag_lines(script: Script) -> Script:
    """Populate every line's associations from the script's directives.

    Existing associations are discarded first, so tagging twice yields the
    same result as tagging once.

    Args:
        script: Parsed script whose registry already holds its tags

    Returns:
        The same script, with associations populated
    """
    open_blocks: List[LineAssociation] = []

    for line in script.lines:
        line.associations = _line_directive_tags(line, script, open_blocks)
        line.associations.extend(open_blocks)

    if open_blocks:
        _LOG.warning(
            "Unclosed tag blocks at end of script: %s",
            ", ".join(block.tag.name for block in open_blocks),
        )

    return script
