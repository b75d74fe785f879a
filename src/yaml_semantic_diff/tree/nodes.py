"""Document model: typed, immutable YAML nodes.

A parsed YAML document is a tree of four node variants:

- ``ScalarNode``   : a leaf with its raw text, resolved kind and Python value
- ``SequenceNode`` : an ordered tuple of child nodes
- ``MappingNode``  : an ``OrderedMapping`` of string keys to child nodes
- ``NullNode``     : an explicit or implicit YAML null

Nodes are frozen dataclasses.  Equality is semantic: two scalars compare
equal when their kind and resolved value match, regardless of how the
value was spelled in the source (``0x1F`` and ``31`` are equal ints).
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any

from yaml_semantic_diff.tree.ordered_mapping import OrderedMapping

__all__ = [
    "Document",
    "MappingNode",
    "Node",
    "NodeType",
    "NullNode",
    "ScalarKind",
    "ScalarNode",
    "SequenceNode",
    "from_python",
    "to_python",
]


class NodeType(StrEnum):
    """Structural variant of a node."""

    SCALAR = auto()
    SEQUENCE = auto()
    MAPPING = auto()
    NULL = auto()


class ScalarKind(StrEnum):
    """Resolved kind of a scalar value."""

    STRING = auto()
    INT = auto()
    FLOAT = auto()
    BOOL = auto()
    NULL = auto()
    TIMESTAMP = auto()


@dataclass(frozen=True, slots=True)
class ScalarNode:
    """A leaf value.

    Attributes:
        value: Resolved Python value (str, int, float, bool, date or datetime).
        kind:  Resolved scalar kind.
        raw:   Source text of the scalar, used for display.
        tag:   YAML tag the value was resolved with.
    """

    value: Any
    kind: ScalarKind = ScalarKind.STRING
    raw: str = field(default="", compare=False)
    tag: str = field(default="", compare=False)

    @property
    def node_type(self) -> NodeType:
        return NodeType.SCALAR

    def __str__(self) -> str:
        return self.raw or str(self.value)


@dataclass(frozen=True, slots=True)
class SequenceNode:
    """An ordered list of nodes."""

    items: tuple[Node, ...] = ()

    @property
    def node_type(self) -> NodeType:
        return NodeType.SEQUENCE

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True)
class MappingNode:
    """A mapping of string keys to nodes, in source order."""

    entries: OrderedMapping[str, Node] = field(default_factory=OrderedMapping)

    @property
    def node_type(self) -> NodeType:
        return NodeType.MAPPING

    def get(self, key: str) -> Node | None:
        return self.entries.get(key)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True, slots=True)
class NullNode:
    """An explicit (``null``, ``~``) or implicit (empty value) null."""

    raw: str = field(default="null", compare=False)

    @property
    def node_type(self) -> NodeType:
        return NodeType.NULL

    @property
    def kind(self) -> ScalarKind:
        return ScalarKind.NULL

    def __str__(self) -> str:
        return "null"


Node = ScalarNode | SequenceNode | MappingNode | NullNode


@dataclass(frozen=True, slots=True)
class Document:
    """One ``---`` delimited YAML document.

    Attributes:
        root:   Root node of the document.
        source: Where the document came from (file path, URL), if known.
        index:  Zero-based position of the document within its stream.
    """

    root: Node
    source: str | None = None
    index: int = 0


# ---------------------------------------------------------------------------
# Conversion helpers
# ---------------------------------------------------------------------------


def _kind_of(value: Any) -> ScalarKind:
    if isinstance(value, bool):
        return ScalarKind.BOOL
    if isinstance(value, int):
        return ScalarKind.INT
    if isinstance(value, float):
        return ScalarKind.FLOAT
    if isinstance(value, datetime.date):
        return ScalarKind.TIMESTAMP
    return ScalarKind.STRING


def from_python(value: Any) -> Node:
    """Build a node tree from plain Python data (dicts, lists, scalars)."""
    if value is None:
        return NullNode()
    if isinstance(value, Mapping):
        return MappingNode(
            OrderedMapping((str(k), from_python(v)) for k, v in value.items())
        )
    if isinstance(value, list | tuple):
        return SequenceNode(tuple(from_python(v) for v in value))
    kind = _kind_of(value)
    if kind is ScalarKind.STRING and not isinstance(value, str):
        value = str(value)
    if kind is ScalarKind.BOOL:
        raw = "true" if value else "false"
    elif kind is ScalarKind.TIMESTAMP:
        raw = value.isoformat()
    else:
        raw = str(value)
    return ScalarNode(value=value, kind=kind, raw=raw)


def to_python(node: Node) -> Any:
    """Convert a node tree back to plain Python data."""
    if isinstance(node, MappingNode):
        return {key: to_python(child) for key, child in node.entries.items()}
    if isinstance(node, SequenceNode):
        return [to_python(child) for child in node.items]
    if isinstance(node, ScalarNode):
        return node.value
    return None

