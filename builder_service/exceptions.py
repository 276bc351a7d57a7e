"""
Error taxonomy for the builder service.

Malformed directives are never raised; they are logged where they are found.
"""


class BuilderError(Exception):
    """Base class for builder failures surfaced to callers."""


class FetchError(BuilderError):
    """A remote or local source could not be retrieved."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class ManifestError(BuilderError):
    """The version manifest is not valid JSON or does not match its schema."""


class TransformError(BuilderError):
    """A post-processing transform failed on compiled output."""


class MinifyError(TransformError):
    """Minification of compiled output failed."""


class FormatError(TransformError):
    """Pretty-printing of compiled output failed."""
