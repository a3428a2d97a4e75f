"""
Extractor variants: named bundles of field rules plus a domain predicate.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import cached_property
from typing import List, Optional, Union

import structlog

from .detector import CONTENT_BLOCK_THRESHOLD, ContentBlockDetector
from .models import ExtractedContent
from .protocols import Document, Url
from .rules import RuleTable, embed_markup, resolve, resolve_all, rule_table

logger = structlog.get_logger(__name__)

DEFAULT_MEDIA_TYPE = "text"

TITLE_PATH = "//title"


@dataclass(slots=True, frozen=True)
class ExactDomain:
    """Accepts URLs whose registrable domain label equals ``domain``."""

    domain: str

    def matches(self, url: Url) -> bool:
        return url.domain == self.domain

    def __str__(self) -> str:
        return f"domain={self.domain}"


@dataclass(slots=True, frozen=True)
class Pattern:
    """Accepts URLs whose ``host + path`` contains a match for ``regex``."""

    regex: re.Pattern[str]

    def __init__(self, regex: Union[str, re.Pattern[str]]) -> None:
        object.__setattr__(self, "regex", re.compile(regex) if isinstance(regex, str) else regex)

    def matches(self, url: Url) -> bool:
        return self.regex.search(url.host + url.path) is not None

    def __str__(self) -> str:
        return f"pattern={self.regex.pattern}"


DomainMatcher = Union[ExactDomain, Pattern]


@dataclass(frozen=True, eq=False)
class ExtractorVariant:
    """A site-specific rule set.

    Variants are built once, registered at startup and shared read-only by
    every extraction. A variant without a matcher never matches a URL on its
    own but can still be used as an explicit fallback.
    """

    name: str
    matcher: Optional[DomainMatcher] = None
    media_type: str = DEFAULT_MEDIA_TYPE
    rules: RuleTable = field(default_factory=rule_table)

    def can_extract(self, url: Url) -> bool:
        return self.matcher is not None and self.matcher.matches(url)

    def bind(self, url: Url, document: Document, threshold: int = CONTENT_BLOCK_THRESHOLD) -> Extraction:
        """Bind this variant to one page; the returned extraction memoizes its fields."""
        return Extraction(self, url, document, threshold=threshold)

    def extract(self, url: Url, document: Document, threshold: int = CONTENT_BLOCK_THRESHOLD) -> ExtractedContent:
        return self.bind(url, document, threshold=threshold).to_content()


class Extraction:
    """One variant applied to one (url, document) pair.

    Each field is resolved lazily, at most once, so repeated reads return the
    same value.
    """

    def __init__(
        self,
        variant: ExtractorVariant,
        url: Url,
        document: Document,
        threshold: int = CONTENT_BLOCK_THRESHOLD,
    ) -> None:
        self.variant = variant
        self.url = url
        self.document = document
        self.detector = ContentBlockDetector(document, threshold=threshold)

    @property
    def media_type(self) -> str:
        return self.variant.media_type

    @cached_property
    def title(self) -> Optional[str]:
        value = resolve(self.variant.rules["title"], self.document)
        if value is not None:
            return value

        node = self.document.query_first(TITLE_PATH)
        return self.document.text(node).strip() if node is not None else None

    @cached_property
    def content(self) -> str:
        value = resolve(self.variant.rules["content"], self.document)
        if value is not None:
            return value
        return self.detector.markup()

    @cached_property
    def summary(self) -> Optional[str]:
        return resolve(self.variant.rules["summary"], self.document)

    @cached_property
    def image_urls(self) -> Optional[List[str]]:
        return resolve_all(self.variant.rules["image_urls"], self.document, self.url)

    @cached_property
    def video_embed(self) -> Optional[str]:
        return embed_markup(self.variant.rules["video_embed"], self.document)

    def to_content(self) -> ExtractedContent:
        content = ExtractedContent(
            url=self.url.url,
            media_type=self.media_type,
            title=self.title,
            content=self.content,
            summary=self.summary,
            image_urls=list(self.image_urls) if self.image_urls is not None else None,
            video_embed=self.video_embed,
        )
        logger.debug(
            "Extracted content",
            variant=self.variant.name,
            url=self.url.url,
            has_title=content.title is not None,
            content_length=len(content.content),
            images=len(content.image_urls) if content.image_urls is not None else None,
        )
        return content
