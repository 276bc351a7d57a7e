"""
fetcher.py - Source retrieval utilities

This module provides the fetch capability injected into the loader and the
manifest client: HTTP(S) through a requests session, local paths and
``file://`` URLs straight from disk.
"""

import logging
from pathlib import Path
from typing import Callable, Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

import requests

from .exceptions import FetchError

_LOG = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

Fetch = Callable[[str], str]


def build_session(proxy_url: Optional[str] = None) -> requests.Session:
    """Build a requests session with optional proxy configuration."""
    session = requests.Session()
    if proxy_url:
        _LOG.info("Using proxy: %s", proxy_url)
        session.proxies.update({"http": proxy_url, "https": proxy_url})
    return session


def is_remote(location: str) -> bool:
    return urlparse(location).scheme in ("http", "https")


def _read_local(location: str) -> str:
    parsed = urlparse(location)
    path = Path(url2pathname(parsed.path)) if parsed.scheme == "file" else Path(location)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FetchError(location, str(exc)) from exc


def fetch_text(
    location: str,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
    allow_local: bool = True,
) -> str:
    """
    Retrieve the text at *location*.

    Args:
        location: HTTP(S) URL, ``file://`` URL or local path
        session: Session to reuse for HTTP requests
        timeout: Request timeout in seconds
        allow_local: Read local paths and ``file://`` URLs from disk

    Returns:
        Body of the response or contents of the file

    Raises:
        FetchError: On network, HTTP status or file errors, or a local
            location when *allow_local* is False
    """
    if not is_remote(location):
        if not allow_local:
            raise FetchError(location, "local sources are disabled")
        return _read_local(location)

    _LOG.debug("Fetching %s", location)
    getter = session.get if session is not None else requests.get
    try:
        resp = getter(location, timeout=timeout)
        resp.raise_for_status()
    except requests.exceptions.RequestException as exc:
        raise FetchError(location, str(exc)) from exc
    return resp.text


def make_fetcher(
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
    allow_local: bool = True,
) -> Fetch:
    """Bind a session, timeout and local-read policy into a ``fetch(url) -> text`` callable."""

    def fetch(location: str) -> str:
        return fetch_text(location, session=session, timeout=timeout, allow_local=allow_local)

    return fetch
