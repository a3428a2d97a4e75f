"""
Data models for extraction results.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional


@dataclass(slots=True, frozen=True)
class ExtractedContent:
    """Normalized content record assembled from the five resolved fields."""

    url: str
    media_type: str
    title: Optional[str]
    content: str
    summary: Optional[str] = None
    image_urls: Optional[List[str]] = None
    video_embed: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the record."""
        if not self.media_type:
            raise ValueError("media_type must not be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable mapping of the record."""
        return asdict(self)


@dataclass(slots=True, frozen=True)
class Candidate:
    """A (text_size, parent) pair produced while scanning for the content block."""

    text_size: int
    parent: Any
