"""
Models package for tagged script data.

This package contains the dataclass definitions for tags, lines and
scripts, the directive vocabulary, and the version manifest schema.
"""

from .script_models import (
    Mode,
    Tag,
    LineAssociation,
    Line,
    Script,
)

from .directives import (
    REQUIRED_TAG_NAME,
    Operator,
    DefinitionProperty,
    MarkerProperty,
    Directive,
    split_directive,
)

from .manifest import (
    VersionEntry,
    VersionManifest,
)

__all__ = [
    # Script models
    "Mode",
    "Tag",
    "LineAssociation",
    "Line",
    "Script",

    # Directives
    "REQUIRED_TAG_NAME",
    "Operator",
    "DefinitionProperty",
    "MarkerProperty",
    "Directive",
    "split_directive",

    # Manifest
    "VersionEntry",
    "VersionManifest",
]
