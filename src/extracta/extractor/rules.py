"""
Declarative field rules and the resolvers that evaluate them.

A :class:`FieldRule` says where one output field lives in a page: a query
path, which part of the matched node to read, and an optional transform.
Rule tables are built once per variant and passed explicitly to the
resolver functions below, which never mutate the document.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional, Union

import structlog

from .exceptions import InvalidRuleError
from .protocols import Document, Node, Url

logger = structlog.get_logger(__name__)

FIELDS = ("title", "content", "summary", "image_urls", "video_embed")

IMAGE_SOURCE_ATTRIBUTE = "src"


class Text:
    """Selects the trimmed text content of a matched node."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "TEXT"


TEXT = Text()


@dataclass(slots=True, frozen=True)
class NamedAttribute:
    """Selects the trimmed value of a named attribute of a matched node."""

    name: str


Attribute = Union[Text, NamedAttribute]
Transform = Callable[[str], str]


@dataclass(slots=True, frozen=True)
class FieldRule:
    """How to pull one field's value out of a document.

    A rule without a ``path`` is inactive and lets the field's generic
    fallback apply. ``attribute`` may be given as a plain attribute name.
    """

    path: Optional[str] = None
    attribute: Attribute = TEXT
    transform: Optional[Transform] = None

    def __post_init__(self) -> None:
        if isinstance(self.attribute, str):
            object.__setattr__(self, "attribute", NamedAttribute(self.attribute))
        elif not isinstance(self.attribute, (Text, NamedAttribute)):
            raise InvalidRuleError(f"Unsupported attribute kind: {self.attribute!r}")
        if self.transform is not None and not callable(self.transform):
            raise InvalidRuleError(f"Transform for {self.path!r} is not callable")

    @property
    def is_active(self) -> bool:
        return self.path is not None


INACTIVE = FieldRule()

RuleTable = Mapping[str, FieldRule]


def rule_table(
    rules: Optional[Mapping[str, Union[FieldRule, str]]] = None,
    **kwargs: Union[FieldRule, str],
) -> RuleTable:
    """Build an immutable rule table covering all five fields.

    Values may be :class:`FieldRule` instances or bare query paths. Fields that
    are not mentioned get an inactive rule.

    Raises:
        InvalidRuleError: If a field name is not one of :data:`FIELDS`.
    """
    merged = {**(rules or {}), **kwargs}
    unknown = sorted(set(merged) - set(FIELDS))
    if unknown:
        raise InvalidRuleError(f"Unknown fields in rule table: {', '.join(unknown)}")

    table = {}
    for field_name in FIELDS:
        rule = merged.get(field_name, INACTIVE)
        table[field_name] = FieldRule(rule) if isinstance(rule, str) else rule
    return MappingProxyType(table)


def resolve(rule: FieldRule, document: Document) -> Optional[str]:
    """Evaluate ``rule`` against the first matching node of ``document``.

    Returns None when the rule is inactive, nothing matches, or the named
    attribute is missing on the matched node.
    """
    if rule.path is None:
        return None

    node = document.query_first(rule.path)
    if node is None:
        return None

    value = _read(rule.attribute, node, document)
    if value is None:
        return None
    return rule.transform(value) if rule.transform else value


def resolve_all(rule: FieldRule, document: Document, url: Url) -> Optional[List[str]]:
    """Collect image sources for every node matching ``rule`` in document order.

    Root-relative sources are rewritten against the scheme and host of
    ``url``. An inactive rule yields None rather than an empty list.
    """
    if rule.path is None:
        return None

    name = rule.attribute.name if isinstance(rule.attribute, NamedAttribute) else IMAGE_SOURCE_ATTRIBUTE
    sources = []
    for node in document.query(rule.path):
        value = document.attribute(node, name)
        if value is None:
            logger.debug("Skipping image node without source", path=rule.path, attribute=name)
            continue
        sources.append(_absolutize(value.strip(), url))
    return sources


def embed_markup(rule: FieldRule, document: Document) -> Optional[str]:
    """Serialize the first node matching ``rule``, subtree included."""
    if rule.path is None:
        return None

    node = document.query_first(rule.path)
    if node is None:
        return None
    return document.serialize_subtree(node)


def _read(attribute: Attribute, node: Node, document: Document) -> Optional[str]:
    if isinstance(attribute, NamedAttribute):
        value = document.attribute(node, attribute.name)
        return value.strip() if value is not None else None
    return document.text(node).strip()


def _absolutize(value: str, url: Url) -> str:
    if value.startswith("/"):
        return f"{url.scheme}://{url.host}{value}"
    return value
