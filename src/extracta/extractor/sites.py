"""
Built-in site variants and their startup registration.
"""

from __future__ import annotations

from typing import List, Optional

from .oembed import MetadataProvider, OEmbedVariant
from .registry import ExtractorRegistry
from .rules import FieldRule, rule_table
from .variant import DEFAULT_MEDIA_TYPE, ExactDomain, ExtractorVariant


def youtube_variant(provider: Optional[MetadataProvider] = None) -> OEmbedVariant:
    """YouTube watch pages; title and player embed come from oEmbed."""
    return OEmbedVariant(
        name="youtube",
        matcher=ExactDomain("youtube"),
        media_type="video",
        rules=rule_table(
            title=FieldRule("//meta[@property='og:title']", "content"),
            content=FieldRule("//meta[@name='description']", "content"),
            image_urls=FieldRule("//link[@rel='image_src']", "href"),
        ),
        provider=provider,
    )


def dinosaur_comics_variant() -> ExtractorVariant:
    """Dinosaur Comics strips; the alt-text joke lives in the image title."""
    return ExtractorVariant(
        name="dinosaur_comics",
        matcher=ExactDomain("qwantz"),
        media_type="image",
        rules=rule_table(
            content=FieldRule("//img[@class='comic']", "title"),
            image_urls=FieldRule("//img[@class='comic']"),
        ),
    )


def generic_variant(media_type: str = DEFAULT_MEDIA_TYPE) -> ExtractorVariant:
    """Rule-less variant that relies entirely on the generic fallbacks.

    It has no matcher, so it is never selected by a registry; callers pass it
    as an explicit fallback.
    """
    return ExtractorVariant(name="generic", media_type=media_type)


def register_site_variants(
    registry: ExtractorRegistry,
    provider: Optional[MetadataProvider] = None,
) -> List[ExtractorVariant]:
    """Register the built-in variants in priority order and return them."""
    variants: List[ExtractorVariant] = [
        youtube_variant(provider),
        dinosaur_comics_variant(),
    ]
    for variant in variants:
        registry.register(variant)
    return variants
