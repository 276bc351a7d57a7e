"""
compiler.py - Render the lines of a script selected by included tags
"""

import logging
from typing import Iterable, List, Set

from .models import Line, Script
from .transforms import Transform, format_js, minify_js

_LOG = logging.getLogger(__name__)


def is_included(line: Line, included_tag_names: Set[str]) -> bool:
    """Decide whether *line* survives compilation.

    Untagged lines are always kept. Otherwise associations are evaluated in
    attachment order: an OR hit includes the line and an OR miss changes
    nothing, while an AND miss excludes the line outright.
    """
    if not line.associations:
        return True

    include_line = False
    for association in line.associations:
        if association.is_and:
            include_line = association.tag.name in included_tag_names
            if not include_line:
                break
        elif association.tag.name in included_tag_names:
            # Missing or unknown modes behave like OR.
            include_line = True
    return include_line


def render_line(line: Line, keep_comments: bool) -> str:
    """Render one included line.

    A tagged line always yields at least a newline, so blank lines inside a
    block count toward its tag's size. An untagged line with nothing to emit
    renders "".
    """
    text = line.code
    if keep_comments and line.comment:
        text += f"{' ' if line.code else ''}// {line.comment}"
    return f"{text}\n" if text or line.is_tagged else ""


def filter_lines(script: Script, included_tag_names: Iterable[str], keep_comments: bool = True) -> str:
    included = set(included_tag_names)
    rendered: List[str] = [
        render_line(line, keep_comments)
        for line in script.lines
        if is_included(line, included)
    ]
    return "".join(rendered)


def compile_script(
    script: Script,
    included_tag_names: Iterable[str],
    apply_minify: bool = False,
    apply_format: bool = False,
    minifier: Transform = minify_js,
    formatter: Transform = format_js,
) -> str:
    """
    Compile *script* for a set of included tag names.

    Comments are kept only when not minifying. Transform errors propagate to
    the caller; the unprocessed text is never returned in their place.

    Args:
        script: Tagged script
        included_tag_names: Names of tags to include (already closed over dependencies)
        apply_minify: Run the minifier over the filtered text
        apply_format: Run the formatter over the (possibly minified) text
        minifier: Minify transform
        formatter: Format transform

    Returns:
        Compiled source text
    """
    output = filter_lines(script, included_tag_names, keep_comments=not apply_minify)

    if apply_minify:
        output = minifier(output)
    if apply_format:
        output = formatter(output)

    return output
