"""
Protocols for the collaborators the extraction core reads from.
"""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, runtime_checkable

#: Opaque node handle owned by a :class:`Document` implementation.
Node = Any


@runtime_checkable
class Document(Protocol):
    """Read-only DOM provider queried with path expressions."""

    def query(self, path: str) -> List[Node]:
        """Return every node matching ``path`` in document order."""
        ...

    def query_first(self, path: str) -> Optional[Node]:
        """Return the first node matching ``path``, if any."""
        ...

    def text(self, node: Node) -> str:
        """Return the full text content of ``node``."""
        ...

    def attribute(self, node: Node, name: str) -> Optional[str]:
        ...

    def parent(self, node: Node) -> Optional[Node]:
        ...

    def children(self, node: Node) -> List[Node]:
        """Return the direct child nodes of ``node``, text nodes included."""
        ...

    def previous_sibling(self, node: Node) -> Optional[Node]:
        ...

    def next_sibling(self, node: Node) -> Optional[Node]:
        ...

    def tag_name(self, node: Node) -> str:
        """Return the lower-case tag name; text nodes report ``"text"``."""
        ...

    def serialize_subtree(self, node: Node) -> str:
        """Serialize ``node`` and its descendants to markup."""
        ...

    def inner_markup(self, node: Node) -> str:
        """Serialize the contents of ``node`` without its own tags."""
        ...


@runtime_checkable
class Url(Protocol):
    """Parsed source URL."""

    @property
    def url(self) -> str: ...

    @property
    def scheme(self) -> str: ...

    @property
    def host(self) -> str: ...

    @property
    def path(self) -> str: ...

    @property
    def domain(self) -> str: ...
