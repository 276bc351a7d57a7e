"""
service.py - Unified builder service interface
"""

import logging
import threading
from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Optional

from .compiler import compile_script
from .dependency_resolver import resolve_selection
from .directive_parser import parse
from .external_loader import DEFAULT_MAX_WORKERS, load_external
from .fetcher import Fetch, make_fetcher
from .line_tagger import tag_lines
from .models import Script
from .size_measurer import measure_tags
from .transforms import Transform, format_js, minify_js

_LOG = logging.getLogger("builder_service")

DEFAULT_MAX_CACHED_SCRIPTS = 32


def build_script(
    text: str,
    fetch: Optional[Fetch] = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
    show_progress: bool = False,
) -> Script:
    """Run the full pipeline on source text: parse, splice links, tag, measure."""
    script = parse(text)
    load_external(
        script,
        fetch=fetch or make_fetcher(),
        max_workers=max_workers,
        show_progress=show_progress,
    )
    tag_lines(script)
    measure_tags(script)
    return script


def tag_table(script: Script) -> List[Dict[str, Any]]:
    """Plain rows describing every tag, in registry order."""
    return [
        {
            "name": tag.name,
            "description": tag.description,
            "size": tag.size,
            "required": list(tag.required_tag_names),
            "link": tag.link,
        }
        for tag in script.tags
    ]


class BuilderService:
    """Loads tagged sources once and compiles them on demand.

    Prepared scripts are kept in a least-recently-used cache of at most
    *max_cached_scripts* entries.
    """

    def __init__(
        self,
        fetch: Optional[Fetch] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        minifier: Transform = minify_js,
        formatter: Transform = format_js,
        show_progress: bool = False,
        max_cached_scripts: int = DEFAULT_MAX_CACHED_SCRIPTS,
    ):
        self.fetch = fetch or make_fetcher()
        self.max_workers = max_workers
        self.minifier = minifier
        self.formatter = formatter
        self.show_progress = show_progress
        self.max_cached_scripts = max(1, max_cached_scripts)
        self._scripts: "OrderedDict[str, Script]" = OrderedDict()
        self._lock = threading.Lock()

    def load_script(self, source: str, use_cache: bool = True) -> Script:
        """Fetch and fully prepare the script at *source*.

        Raises:
            FetchError: If the source itself cannot be retrieved
        """
        with self._lock:
            if use_cache and source in self._scripts:
                _LOG.debug("Script cache hit for %s", source)
                self._scripts.move_to_end(source)
                return self._scripts[source]

        _LOG.info("Building script from %s", source)
        script = build_script(
            self.fetch(source),
            fetch=self.fetch,
            max_workers=self.max_workers,
            show_progress=self.show_progress,
        )

        with self._lock:
            self._scripts[source] = script
            self._scripts.move_to_end(source)
            while len(self._scripts) > self.max_cached_scripts:
                evicted, _ = self._scripts.popitem(last=False)
                _LOG.debug("Evicted cached script %s", evicted)
        return script

    def tag_table(self, source: str) -> List[Dict[str, Any]]:
        return tag_table(self.load_script(source))

    def build(
        self,
        source: str,
        selected_tags: Iterable[str],
        minify: bool = False,
        format: bool = False,
    ) -> str:
        """Compile *source* for the selected tags and their dependencies."""
        script = self.load_script(source)
        included = resolve_selection(script, selected_tags)
        _LOG.info("Compiling %s with tags: %s", source, ", ".join(included) or "(none)")
        return compile_script(
            script,
            included,
            apply_minify=minify,
            apply_format=format,
            minifier=self.minifier,
            formatter=self.formatter,
        )

    def clear_cache(self) -> None:
        with self._lock:
            self._scripts.clear()
