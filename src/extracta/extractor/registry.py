"""
Ordered registry of extractor variants.

Variants are registered explicitly during startup and looked up by URL
afterwards; the first registered variant whose matcher accepts a URL wins.
Registration is not safe to interleave with concurrent lookups.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Union

import structlog

from .detector import CONTENT_BLOCK_THRESHOLD
from .exceptions import DuplicateExtractorError, ExtractorNotFoundError
from .html_document import LxmlDocument
from .models import ExtractedContent
from .protocols import Document, Url
from .urls import SourceUrl
from .variant import ExtractorVariant

logger = structlog.get_logger(__name__)


class ExtractorRegistry:
    """Keeps variants in registration order."""

    def __init__(self) -> None:
        self._variants: List[ExtractorVariant] = []
        self.logger = logger.bind(component="ExtractorRegistry")

    def register(self, variant: ExtractorVariant) -> ExtractorVariant:
        """Append ``variant``; earlier registrations take priority on lookup.

        Raises:
            DuplicateExtractorError: If a variant with the same name is already registered.
        """
        if variant.name in self:
            raise DuplicateExtractorError(f"Extractor variant {variant.name!r} is already registered")

        self._variants.append(variant)
        self.logger.info(
            "Registered extractor variant",
            variant=variant.name,
            matcher=str(variant.matcher) if variant.matcher else None,
            media_type=variant.media_type,
            position=len(self._variants),
        )
        return variant

    def select(self, url: Url) -> Optional[ExtractorVariant]:
        """Return the first registered variant accepting ``url``, or None."""
        for variant in self._variants:
            if variant.can_extract(url):
                self.logger.debug("Selected extractor variant", variant=variant.name, url=url.url)
                return variant

        self.logger.debug("No extractor variant accepts URL", url=url.url)
        return None

    def names(self) -> List[str]:
        return [variant.name for variant in self._variants]

    def clear(self) -> None:
        self._variants.clear()

    def __iter__(self) -> Iterator[ExtractorVariant]:
        return iter(list(self._variants))

    def __len__(self) -> int:
        return len(self._variants)

    def __contains__(self, name: object) -> bool:
        return any(variant.name == name for variant in self._variants)


#: Process-wide registry populated during startup.
default_registry = ExtractorRegistry()


def register(variant: ExtractorVariant) -> ExtractorVariant:
    return default_registry.register(variant)


def select(url: Url) -> Optional[ExtractorVariant]:
    return default_registry.select(url)


def extract(
    url: Union[str, Url],
    page: Union[str, bytes, Document],
    *,
    fallback: Optional[ExtractorVariant] = None,
    registry: Optional[ExtractorRegistry] = None,
    threshold: Optional[int] = None,
) -> ExtractedContent:
    """Extract a content record from ``page`` fetched from ``url``.

    Strings are parsed with :class:`SourceUrl` and :class:`LxmlDocument`. The
    variant is chosen by ``registry`` (the process-wide one by default); when
    none applies, ``fallback`` is used.

    Raises:
        ExtractorNotFoundError: If no variant applies and no fallback is given.
    """
    source = SourceUrl.parse(url) if isinstance(url, str) else url
    document = LxmlDocument.from_markup(page) if isinstance(page, (str, bytes)) else page
    lookup = registry if registry is not None else default_registry

    variant = lookup.select(source) or fallback
    if variant is None:
        raise ExtractorNotFoundError(source.url)

    return variant.extract(source, document, threshold=CONTENT_BLOCK_THRESHOLD if threshold is None else threshold)
