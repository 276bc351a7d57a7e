"""
Builder subsystem models for compile requests.
"""
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field


@dataclass
class CompileRequest:
    """A request to compile a source for a set of selected tags."""
    source: Optional[str] = None
    version: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    minify: bool = False
    format: bool = False

    @classmethod
    def from_json(cls, data: Optional[Dict[str, Any]], minify: bool = False, format: bool = False) -> "CompileRequest":
        """Build a request from a JSON body, falling back to the given post-processing defaults.

        Raises:
            ValueError: If the body is malformed
        """
        if not isinstance(data, dict):
            raise ValueError("request body must be a JSON object")

        tags = data.get("tags", [])
        if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
            raise ValueError("tags must be a list of tag names")

        request = cls(
            source=data.get("source") or None,
            version=data.get("version") or None,
            tags=tags,
            minify=bool(data.get("minify", minify)),
            format=bool(data.get("format", format)),
        )
        if not request.source and not request.version:
            raise ValueError("either source or version is required")
        return request
