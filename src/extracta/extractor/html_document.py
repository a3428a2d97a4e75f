"""
lxml-backed implementation of the :class:`~extracta.extractor.protocols.Document` protocol.

Paths are XPath expressions evaluated from the document root. Text nodes are
the "smart strings" lxml returns for ``text()``/``node()`` results, so they can
be navigated back to their owning element.
"""

from __future__ import annotations

from html import escape
from typing import List, Optional, Union

import structlog
from lxml import etree
from lxml import html as lxml_html

from .exceptions import InvalidRuleError
from .protocols import Node

logger = structlog.get_logger(__name__)

_UTF8_PARSER = lxml_html.HTMLParser(encoding="utf-8")

_SPECIAL_TAGS = {
    etree.Comment: "comment",
    etree.ProcessingInstruction: "pi",
    etree.Entity: "entity",
}


class LxmlDocument:
    """A parsed HTML page answering XPath queries."""

    def __init__(self, root: lxml_html.HtmlElement) -> None:
        self.root = root

    @classmethod
    def from_markup(cls, markup: Union[str, bytes]) -> LxmlDocument:
        """Parse ``markup`` into a document.

        Input that yields no elements, such as blank text or a page holding
        only a comment, becomes an empty ``<html>`` tree.
        """
        if not markup.strip():
            return cls.empty()

        try:
            if isinstance(markup, str):
                # lxml rejects str input carrying an XML encoding declaration
                return cls(lxml_html.document_fromstring(markup.encode("utf-8"), parser=_UTF8_PARSER))
            return cls(lxml_html.document_fromstring(markup))
        except etree.ParserError:
            logger.debug("Markup has no elements, using an empty document", length=len(markup))
            return cls.empty()

    @classmethod
    def empty(cls) -> LxmlDocument:
        return cls(lxml_html.document_fromstring("<html></html>"))

    def query(self, path: str) -> List[Node]:
        """Evaluate ``path`` and return the matched nodes.

        Raises:
            InvalidRuleError: If the path is not valid XPath or selects a
                number or boolean instead of nodes.
        """
        try:
            result = self.root.xpath(path)
        except etree.XPathError as e:
            raise InvalidRuleError(f"Invalid path {path!r}: {e}") from e

        if isinstance(result, list):
            return result
        if isinstance(result, (bool, float)):
            raise InvalidRuleError(f"Path {path!r} selects a {type(result).__name__}, not nodes")
        return [result]

    def query_first(self, path: str) -> Optional[Node]:
        nodes = self.query(path)
        return nodes[0] if nodes else None

    def text(self, node: Node) -> str:
        if isinstance(node, str):
            return str(node)
        return node.text_content()

    def attribute(self, node: Node, name: str) -> Optional[str]:
        if isinstance(node, str):
            return None
        return node.get(name)

    def parent(self, node: Node) -> Optional[Node]:
        if isinstance(node, str):
            owner = node.getparent()
            # A tail string belongs to the element it follows, not the element containing it
            if owner is not None and node.is_tail:
                return owner.getparent()
            return owner
        return node.getparent()

    def children(self, node: Node) -> List[Node]:
        if isinstance(node, str):
            return []
        return node.xpath("node()")

    def previous_sibling(self, node: Node) -> Optional[Node]:
        if isinstance(node, str):
            return node.getparent() if node.is_tail else None
        return self._first(node.xpath("preceding-sibling::node()[1]"))

    def next_sibling(self, node: Node) -> Optional[Node]:
        if isinstance(node, str):
            owner = node.getparent()
            if owner is None:
                return None
            if node.is_tail:
                return owner.getnext()
            return owner[0] if len(owner) else None
        return self._first(node.xpath("following-sibling::node()[1]"))

    def tag_name(self, node: Node) -> str:
        if isinstance(node, str):
            return "text"
        if isinstance(node.tag, str):
            return node.tag.lower()
        return _SPECIAL_TAGS.get(node.tag, "node")

    def serialize_subtree(self, node: Node) -> str:
        if isinstance(node, str):
            return escape(str(node), quote=False)
        return lxml_html.tostring(node, encoding="unicode", with_tail=False)

    def inner_markup(self, node: Node) -> str:
        if isinstance(node, str):
            return escape(str(node), quote=False)

        parts = [escape(node.text, quote=False)] if node.text else []
        parts.extend(lxml_html.tostring(child, encoding="unicode", with_tail=True) for child in node)
        return "".join(parts)

    @staticmethod
    def _first(nodes: List[Node]) -> Optional[Node]:
        return nodes[0] if nodes else None
