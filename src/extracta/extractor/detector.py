"""
Generic content block detection.

Finds, without any site-specific rule, the node most likely to hold a page's
article body. Every ``div``, ``p`` and ``br`` is turned into a candidate
``(text_size, parent)`` pair in document order, and the first candidate whose
text size exceeds the threshold wins. Later, larger candidates never override
an earlier qualifying one.
"""

from __future__ import annotations

from functools import cached_property
from typing import List, Optional

import structlog

from .models import Candidate
from .protocols import Document, Node

logger = structlog.get_logger(__name__)

CONTENT_BLOCK_THRESHOLD = 140

CANDIDATE_PATH = "//div|//p|//br"


class ContentBlockDetector:
    """Scans one document for its content block; results are memoized."""

    def __init__(self, document: Document, threshold: int = CONTENT_BLOCK_THRESHOLD) -> None:
        self.document = document
        self.threshold = threshold

    @cached_property
    def candidates(self) -> List[Candidate]:
        """Distinct candidates in scan order, each kept at its first occurrence."""
        return list(dict.fromkeys(self._scan()))

    @cached_property
    def content_block(self) -> Optional[Node]:
        for candidate in self.candidates:
            if candidate.text_size > self.threshold:
                logger.debug(
                    "Content block selected",
                    text_size=candidate.text_size,
                    tag=self.document.tag_name(candidate.parent),
                    candidates=len(self.candidates),
                )
                return candidate.parent

        logger.debug("No content block above threshold", threshold=self.threshold, candidates=len(self.candidates))
        return None

    def markup(self) -> str:
        """Inner markup of the content block, trimmed; empty when there is none."""
        block = self.content_block
        if block is None:
            return ""
        return self.document.inner_markup(block).strip()

    def _scan(self) -> List[Candidate]:
        found = []
        for node in self.document.query(CANDIDATE_PATH):
            tag = self.document.tag_name(node)
            parent = self.document.parent(node)

            if tag in ("div", "p"):
                text_size = self._same_tag_text_size(parent, tag)
            elif tag == "br" and self._separates_text(node):
                text_size = self._own_text_size(parent)
            else:
                continue

            if text_size > 0:
                found.append(Candidate(text_size=text_size, parent=parent))
        return found

    def _separates_text(self, node: Node) -> bool:
        """True when a line break sits between two text nodes."""
        previous = self.document.previous_sibling(node)
        following = self.document.next_sibling(node)
        if previous is None or following is None:
            return False
        return self.document.tag_name(previous) == "text" and self.document.tag_name(following) == "text"

    def _same_tag_text_size(self, parent: Node, tag: str) -> int:
        return sum(
            self._own_text_size(child)
            for child in self.document.children(parent)
            if self.document.tag_name(child) == tag
        )

    def _own_text_size(self, node: Node) -> int:
        return sum(
            len(self.document.text(child).strip())
            for child in self.document.children(node)
            if self.document.tag_name(child) == "text"
        )
