"""
Version manifest models.

This module contains Pydantic models for the ``api.json`` manifest that
lists the buildable versions of a script.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class VersionEntry(BaseModel):
    """A single buildable version of the script."""
    version: str = Field(description="Version label shown to users (e.g., '1.2.0')")
    source: str = Field(description="URL or path of the tagged source for this version")


class VersionManifest(BaseModel):
    """Manifest of all buildable versions."""
    versions: List[VersionEntry] = Field(default_factory=list, description="Available versions, newest last")

    def find(self, version: str) -> Optional[VersionEntry]:
        """Return the entry for *version*, or None if it is not listed."""
        for entry in self.versions:
            if entry.version == version:
                return entry
        return None

    def lists_source(self, source: str) -> bool:
        """Whether any listed version builds from *source*."""
        return any(entry.source == source for entry in self.versions)

    @property
    def latest(self) -> Optional[VersionEntry]:
        """Last listed version, or None for an empty manifest."""
        return self.versions[-1] if self.versions else None
