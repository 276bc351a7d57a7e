"""
Builder subsystem services: version lookup and compilation for the web API.
"""
import logging
from typing import Any, Dict, List, Optional

from builder_service import BuilderService, VersionManifest, fetch_manifest

_LOG = logging.getLogger(__name__)


class BuilderWebService:
    """Resolves versions to sources and delegates builds to BuilderService."""

    def __init__(self, builder: BuilderService, manifest_url: str, output_name: str = "umbra.js"):
        self.builder = builder
        self.manifest_url = manifest_url
        self.output_name = output_name
        self._manifest: Optional[VersionManifest] = None

    def get_manifest(self, refresh: bool = False) -> VersionManifest:
        """Load the version manifest, cached after the first success."""
        if self._manifest is None or refresh:
            self._manifest = fetch_manifest(self.manifest_url, fetch=self.builder.fetch)
        return self._manifest

    def list_versions(self) -> List[Dict[str, str]]:
        return [entry.model_dump() for entry in self.get_manifest().versions]

    def resolve_source(self, source: Optional[str] = None, version: Optional[str] = None) -> str:
        """Return the source to build, looking *version* up in the manifest.

        Only sources listed in the manifest are buildable over HTTP.

        Raises:
            LookupError: If the version or source is not listed
        """
        manifest = self.get_manifest()
        if source:
            if not manifest.lists_source(source):
                raise LookupError(f"source is not listed in the manifest: {source}")
            return source
        entry = manifest.find(version or "")
        if entry is None:
            raise LookupError(f"unknown version: {version}")
        return entry.source

    def get_tags(self, source: str) -> List[Dict[str, Any]]:
        return self.builder.tag_table(source)

    def compile(self, source: str, tags: List[str], minify: bool, format: bool) -> str:
        return self.builder.build(source, tags, minify=minify, format=format)
