"""
Exceptions raised by the extraction core.
"""

from __future__ import annotations


class ExtractionError(Exception):
    """Base class for extraction failures."""

    pass


class ExtractorNotFoundError(ExtractionError, LookupError):
    """Raised when no variant accepts a URL and no fallback was supplied."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"No extractor variant accepts {url!r} and no fallback was given")


class DuplicateExtractorError(ExtractionError, ValueError):
    """Raised when a variant name is registered twice."""

    pass


class InvalidRuleError(ExtractionError, ValueError):
    """Raised for an unknown field, a non-callable transform or a path that does not select nodes."""

    pass


class MetadataLookupError(ExtractionError):
    """Raised when a remote metadata (oEmbed) lookup fails."""

    pass
