# Builder service package for tagged script compilation

from .models import (
    REQUIRED_TAG_NAME,
    Mode,
    Tag,
    LineAssociation,
    Line,
    Script,
    VersionEntry,
    VersionManifest,
)
from .tag_registry import TagRegistry
from .directive_parser import parse, tokenize, scan_tags
from .dependency_resolver import dependencies, dependency_names, resolve_selection
from .line_tagger import tag_lines
from .external_loader import LinkFetchResult, fetch_links, load_external
from .compiler import compile_script, is_included
from .size_measurer import measure_tag, measure_tags
from .fetcher import build_session, fetch_text, make_fetcher
from .transforms import minify_js, format_js
from .manifest import parse_manifest, fetch_manifest
from .service import BuilderService, build_script, tag_table
from .exceptions import (
    BuilderError,
    FetchError,
    ManifestError,
    TransformError,
    MinifyError,
    FormatError,
)
from .logging_config import (
    setup_logging,
    stop_logging,
    get_logger,
    ThreadSafeLoggingConfig,
)

__all__ = [
    "REQUIRED_TAG_NAME",
    "Mode",
    "Tag",
    "LineAssociation",
    "Line",
    "Script",
    "VersionEntry",
    "VersionManifest",
    "TagRegistry",
    "parse",
    "tokenize",
    "scan_tags",
    "dependencies",
    "dependency_names",
    "resolve_selection",
    "tag_lines",
    "LinkFetchResult",
    "fetch_links",
    "load_external",
    "compile_script",
    "is_included",
    "measure_tag",
    "measure_tags",
    "build_session",
    "fetch_text",
    "make_fetcher",
    "minify_js",
    "format_js",
    "parse_manifest",
    "fetch_manifest",
    "BuilderService",
    "build_script",
    "tag_table",
    "BuilderError",
    "FetchError",
    "ManifestError",
    "TransformError",
    "MinifyError",
    "FormatError",
    "setup_logging",
    "stop_logging",
    "get_logger",
    "ThreadSafeLoggingConfig",
]
