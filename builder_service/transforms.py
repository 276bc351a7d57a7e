"""
transforms.py - Post-processing transforms for compiled output

Default minifier and formatter used by the compiler. Both wrap library
failures in the builder's transform errors so callers see one taxonomy.
"""

import logging
from typing import Callable

import jsbeautifier
import rjsmin

from .exceptions import FormatError, MinifyError

_LOG = logging.getLogger(__name__)

Transform = Callable[[str], str]

INDENT_SIZE = 2


def minify_js(text: str) -> str:
    """Minify JavaScript source.

    Raises:
        MinifyError: If the minifier fails
    """
    try:
        return rjsmin.jsmin(text)
    except Exception as exc:
        raise MinifyError(f"Minification failed: {exc}") from exc


def format_js(text: str, indent_size: int = INDENT_SIZE) -> str:
    """Pretty-print JavaScript source.

    Raises:
        FormatError: If the formatter fails
    """
    options = jsbeautifier.default_options()
    options.indent_size = indent_size
    try:
        return jsbeautifier.beautify(text, options)
    except Exception as exc:
        raise FormatError(f"Formatting failed: {exc}") from exc
