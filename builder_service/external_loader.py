"""
external_loader.py - Splice linked sources into a script

Tags carrying a LINK have their linked source fetched and appended to the
host script inside a synthetic START/END block for that tag. Fetches run
concurrently; splicing waits until every fetch has settled.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import List, Optional

from tqdm import tqdm

from .directive_parser import tokenize
from .fetcher import Fetch, fetch_text
from .models import Line, MarkerProperty, Operator, Script, Tag

_LOG = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


@dataclass
class LinkFetchResult:
    """Outcome of fetching one tag's linked source."""
    tag: Tag
    lines: List[Line] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


def _marker_line(prop: MarkerProperty, tag: Tag) -> Line:
    return Line(code="", comment=f"{Operator.SET.value} {prop.value} {tag.name}")


def wrap_in_block(tag: Tag, lines: List[Line]) -> List[Line]:
    """Surround *lines* with START/END markers for *tag* (no mode, so OR)."""
    return [_marker_line(MarkerProperty.START, tag), *lines, _marker_line(MarkerProperty.END, tag)]


def _fetch_link(tag: Tag, fetch: Fetch) -> LinkFetchResult:
    try:
        text = fetch(tag.link)
    except Exception as exc:  # pylint: disable=broad-except
        _LOG.error(
            'Error getting script linked by tag "%s" from URL %s: %s', tag, tag.link, exc
        )
        return LinkFetchResult(tag=tag, error=str(exc))
    # Only the raw lines matter; tag definitions in linked sources are ignored.
    return LinkFetchResult(tag=tag, lines=tokenize(text))


def fetch_links(
    script: Script,
    fetch: Fetch = fetch_text,
    max_workers: int = DEFAULT_MAX_WORKERS,
    show_progress: bool = False,
) -> List[LinkFetchResult]:
    """Fetch every linked source of *script* and collect all outcomes.

    Results come back in registry order regardless of completion order.
    """
    linked = [tag for tag in script.tags if tag.link]
    if not linked:
        return []

    results: List[Optional[LinkFetchResult]] = [None] * len(linked)
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(linked)))) as executor:
        futures = {
            executor.submit(_fetch_link, tag, fetch): i for i, tag in enumerate(linked)
        }
        for future in tqdm(
            as_completed(futures),
            total=len(futures),
            desc="Loading linked sources",
            disable=not show_progress,
        ):
            results[futures[future]] = future.result()

    return [result for result in results if result is not None]


def load_external(
    script: Script,
    fetch: Fetch = fetch_text,
    max_workers: int = DEFAULT_MAX_WORKERS,
    show_progress: bool = False,
) -> Script:
    """
    Append the linked sources of every tag to *script*.

    Failed fetches are logged and contribute no lines; they never stop the
    other links from loading.

    Args:
        script: Parsed script, not yet tagged
        fetch: Callable returning the text at a URL, raising on failure
        max_workers: Upper bound on concurrent fetches
        show_progress: Display a progress bar while fetching

    Returns:
        The same script with linked lines appended
    """
    results = fetch_links(script, fetch, max_workers, show_progress)

    loaded = 0
    for result in results:
        if not result.success:
            continue
        script.lines.extend(wrap_in_block(result.tag, result.lines))
        loaded += 1

    if results:
        _LOG.info("Loaded %d of %d linked sources", loaded, len(results))
    return script
