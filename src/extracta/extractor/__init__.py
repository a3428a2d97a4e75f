"""
Extracta Content Extraction Module - Rule-Driven Site Variants

Turns an HTML page plus its source URL into a normalized content record:
1. A registry picks the first site variant whose domain predicate accepts the URL
2. The variant's field rules pull title, content, summary, images and video embed
3. Title falls back to the page's <title>; content falls back to generic
   content block detection over div/p/br candidates

Site-specific metadata (oEmbed) is supplied by an injected provider.
"""

from .detector import CONTENT_BLOCK_THRESHOLD, ContentBlockDetector
from .exceptions import (
    DuplicateExtractorError,
    ExtractionError,
    ExtractorNotFoundError,
    InvalidRuleError,
    MetadataLookupError,
)
from .html_document import LxmlDocument
from .models import Candidate, ExtractedContent
from .oembed import HttpOEmbedProvider, MetadataProvider, OEmbedExtraction, OEmbedResponse, OEmbedVariant
from .protocols import Document, Url
from .registry import ExtractorRegistry, default_registry, extract, register, select
from .rules import FIELDS, TEXT, FieldRule, NamedAttribute, embed_markup, resolve, resolve_all, rule_table
from .sites import dinosaur_comics_variant, generic_variant, register_site_variants, youtube_variant
from .urls import SourceUrl
from .variant import ExactDomain, Extraction, ExtractorVariant, Pattern

__all__ = [
    "CONTENT_BLOCK_THRESHOLD",
    "ContentBlockDetector",
    "ExtractionError",
    "ExtractorNotFoundError",
    "DuplicateExtractorError",
    "InvalidRuleError",
    "MetadataLookupError",
    "LxmlDocument",
    "Candidate",
    "ExtractedContent",
    "HttpOEmbedProvider",
    "MetadataProvider",
    "OEmbedExtraction",
    "OEmbedResponse",
    "OEmbedVariant",
    "Document",
    "Url",
    "ExtractorRegistry",
    "default_registry",
    "extract",
    "register",
    "select",
    "FIELDS",
    "TEXT",
    "FieldRule",
    "NamedAttribute",
    "embed_markup",
    "resolve",
    "resolve_all",
    "rule_table",
    "dinosaur_comics_variant",
    "generic_variant",
    "register_site_variants",
    "youtube_variant",
    "SourceUrl",
    "ExactDomain",
    "Extraction",
    "ExtractorVariant",
    "Pattern",
]
