"""
manifest.py - Version manifest loading

The manifest (``api.json``) lists every buildable version and where its
tagged source lives.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from requests.compat import urljoin

from .exceptions import ManifestError
from .fetcher import Fetch, fetch_text, is_remote
from .models import VersionEntry, VersionManifest

_LOG = logging.getLogger(__name__)


def resolve_source(source: str, base: Optional[str]) -> str:
    """Resolve a relative *source* against the manifest location *base*."""
    if not base or is_remote(source) or source.startswith("file:"):
        return source
    if is_remote(base):
        return urljoin(base, source)
    if Path(source).is_absolute():
        return source
    return str(Path(base).parent / source)


def parse_manifest(text: str, base: Optional[str] = None) -> VersionManifest:
    """
    Parse manifest JSON.

    Args:
        text: Manifest content
        base: Location the manifest was read from, for relative sources

    Returns:
        Parsed manifest with sources resolved

    Raises:
        ManifestError: On invalid JSON or schema mismatch
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Manifest is not valid JSON: {exc}") from exc

    try:
        manifest = VersionManifest(**data) if isinstance(data, dict) else VersionManifest(versions=data)
    except (ValidationError, TypeError) as exc:
        raise ManifestError(f"Manifest does not match schema: {exc}") from exc

    manifest.versions = [
        VersionEntry(version=entry.version, source=resolve_source(entry.source, base))
        for entry in manifest.versions
    ]
    _LOG.debug("Manifest lists %d versions", len(manifest.versions))
    return manifest


def fetch_manifest(url: str, fetch: Fetch = fetch_text) -> VersionManifest:
    """Convenience wrapper: fetch + parse."""
    return parse_manifest(fetch(url), base=url)
