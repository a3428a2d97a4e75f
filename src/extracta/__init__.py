"""
Extracta - rule-driven content extraction from HTML pages.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .extractor import (
    ExtractedContent,
    ExtractorRegistry,
    ExtractorVariant,
    FieldRule,
    LxmlDocument,
    SourceUrl,
    extract,
    rule_table,
)

__all__ = [
    "__version__",
    "ExtractedContent",
    "ExtractorRegistry",
    "ExtractorVariant",
    "FieldRule",
    "LxmlDocument",
    "SourceUrl",
    "extract",
    "rule_table",
]
