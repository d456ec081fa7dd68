"""
Document model — nodes, documents and extended-parse results.

A W++ document is an ordered ``list[Node]``. Order is significant: it is
kept by parse/serialize and by merge (left operand first).

JSON shape of a node:
    {"type": "Person", "name": "Alice", "properties": {"age": ["30"]}}
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Iterable

from wpp.errors import NotWPPError


@dataclass
class Node:
    """A typed, optionally named entity with multi-valued properties."""

    type: str | None = None
    name: str | None = None
    properties: dict[str, list[str]] = field(default_factory=dict)

    @property
    def identity(self) -> tuple[str | None, str | None]:
        return (self.type, self.name)

    def add_values(self, key: str, values: Iterable[str]) -> None:
        """Append values to a property, creating it on first use."""
        if key in self.properties:
            self.properties[key].extend(values)
        else:
            self.properties[key] = list(values)

    def copy(self) -> Node:
        """Return a deep copy that shares no lists with this node."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name,
            "properties": {k: list(v) for k, v in self.properties.items()},
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Node:
        """Build a node from its JSON form.

        ``null`` entries in a value list are dropped. Raises NotWPPError when
        type or name is not a string, or a property is not a list of strings.
        """
        if not isinstance(d, dict):
            raise NotWPPError(d)
        for field_name in ("type", "name"):
            if not isinstance(d.get(field_name), (str, type(None))):
                raise NotWPPError(d[field_name])
        properties = d.get("properties") or {}
        if not isinstance(properties, dict):
            raise NotWPPError(properties)
        node = cls(type=d.get("type"), name=d.get("name"))
        for key, values in properties.items():
            if not isinstance(values, list):
                raise NotWPPError(values)
            kept = [v for v in values if v is not None]
            if not all(isinstance(v, str) for v in kept):
                raise NotWPPError(values)
            node.properties[str(key)] = kept
        return node


@dataclass
class ParsedBlock:
    """Result of extended parsing: entity blocks plus the surrounding text."""

    document: list[Node] = field(default_factory=list)
    appendix: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "document": document_to_dicts(self.document),
            "appendix": self.appendix,
        }


def is_document(obj: Any) -> bool:
    """True if obj is a document: a list or tuple whose items are all nodes."""
    return isinstance(obj, (list, tuple)) and all(isinstance(n, Node) for n in obj)


def copy_document(document: Iterable[Node]) -> list[Node]:
    """Deep-copy a document into a fresh list."""
    return [node.copy() for node in document]


def document_to_dicts(document: Iterable[Node]) -> list[dict[str, Any]]:
    return [node.to_dict() for node in document]


def document_from_dicts(data: Any) -> list[Node]:
    """Build a document from its JSON form. Raises NotWPPError on bad shape."""
    if not isinstance(data, list):
        raise NotWPPError(type(data).__name__)
    return [Node.from_dict(d) for d in data]
