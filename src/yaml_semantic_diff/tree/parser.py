"""Parser adaptation: PyYAML node graph -> document model.

PyYAML's composer (``yaml.compose_all`` with ``SafeLoader``) already does
the hard work of tokenising, resolving implicit tags and expanding aliases,
while still exposing mappings as ordered ``(key, value)`` node pairs.  This
module rebuilds that node graph into :mod:`yaml_semantic_diff.tree.nodes`
so that key order is preserved explicitly by ``OrderedMapping``.

Scalar values are constructed with PyYAML's ``SafeConstructor`` so YAML 1.1
resolution rules apply (``0x1F`` is an int, ``yes`` is a bool, quoted
scalars are always strings).  Tags without a safe constructor (``!Ref``,
``!!python/...``) keep their text as a string value.
"""

from __future__ import annotations

import datetime
from typing import Any

import yaml
from yaml.constructor import ConstructorError, SafeConstructor

from yaml_semantic_diff.errors import ParseError
from yaml_semantic_diff.observability import get_logger
from yaml_semantic_diff.tree.nodes import (
    Document,
    MappingNode,
    Node,
    NullNode,
    ScalarKind,
    ScalarNode,
    SequenceNode,
    to_python,
)
from yaml_semantic_diff.tree.ordered_mapping import OrderedMapping

__all__ = ["MAX_ALIAS_EXPANSION", "parse_documents"]

log = get_logger("parser")

# Nodes reachable through aliases in one document before parsing is refused.
MAX_ALIAS_EXPANSION = 100_000

_NULL_TAG = "tag:yaml.org,2002:null"
_MERGE_TAG = "tag:yaml.org,2002:merge"

_KIND_BY_TAG: dict[str, ScalarKind] = {
    "tag:yaml.org,2002:str": ScalarKind.STRING,
    "tag:yaml.org,2002:int": ScalarKind.INT,
    "tag:yaml.org,2002:float": ScalarKind.FLOAT,
    "tag:yaml.org,2002:bool": ScalarKind.BOOL,
    "tag:yaml.org,2002:timestamp": ScalarKind.TIMESTAMP,
}


def parse_documents(content: bytes | str, source: str | None = None) -> list[Document]:
    """Parse a YAML stream into a list of documents.

    Args:
        content: Raw YAML bytes or text.  May hold several ``---`` documents.
        source:  Label attached to each document and to parse errors.

    Returns:
        One ``Document`` per YAML document, in stream order.  Empty input
        yields a single document whose root is a ``NullNode``.

    Raises:
        ParseError: When the input is not well-formed YAML.
    """
    try:
        composed = list(yaml.compose_all(content, Loader=yaml.SafeLoader))
    except yaml.YAMLError as exc:
        raise _parse_error(exc, source) from exc

    if not composed:
        return [Document(root=NullNode(raw=""), source=source, index=0)]

    documents = []
    for index, raw_root in enumerate(composed):
        builder = _NodeBuilder(source)
        documents.append(Document(root=builder.build(raw_root), source=source, index=index))
    log.debug("parsed", source=source, documents=len(documents))
    return documents


def _parse_error(exc: yaml.YAMLError, source: str | None) -> ParseError:
    mark = getattr(exc, "problem_mark", None)
    problem = getattr(exc, "problem", None)
    message = problem if isinstance(problem, str) and problem else str(exc)
    if mark is None:
        return ParseError(source, message)
    return ParseError(source, message, line=mark.line + 1, column=mark.column + 1)


class _NodeBuilder:
    """Rebuilds one composed PyYAML document into document-model nodes.

    Every alias of an anchored collection resolves to the same built subtree,
    so building is linear in the size of the composed graph.  The number of
    nodes reached through aliases is still counted against
    ``MAX_ALIAS_EXPANSION``, since anything walking the result sees the
    expanded tree.
    """

    def __init__(self, source: str | None = None) -> None:
        self._source = source
        self._constructor = SafeConstructor()
        # ids of collection nodes currently being built, for cycle detection
        self._in_progress: set[int] = set()
        # id -> (built node, expanded node count)
        self._built: dict[int, tuple[Node, int]] = {}
        self._visited = 0
        self._expanded = 0

    def build(self, node: yaml.Node) -> Node:
        if isinstance(node, yaml.ScalarNode):
            self._visited += 1
            return self._scalar(node)
        key = id(node)
        if key in self._built:
            built, size = self._built[key]
            self._visited += size
            self._expanded += size
            if self._expanded > MAX_ALIAS_EXPANSION:
                raise ParseError(
                    self._source,
                    f"excessive aliasing: more than {MAX_ALIAS_EXPANSION} nodes expanded",
                    line=node.start_mark.line + 1,
                    column=node.start_mark.column + 1,
                )
            return built
        if key in self._in_progress:
            log.debug("recursive_alias", line=node.start_mark.line + 1)
            self._visited += 1
            return NullNode(raw="")
        visited = self._visited
        self._visited += 1
        self._in_progress.add(key)
        try:
            result: Node
            if isinstance(node, yaml.SequenceNode):
                result = SequenceNode(tuple(self.build(child) for child in node.value))
            else:
                result = MappingNode(self._mapping_entries(node))
        finally:
            self._in_progress.discard(key)
        self._built[key] = (result, self._visited - visited)
        return result

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def _scalar(self, node: yaml.ScalarNode) -> Node:
        if node.tag == _NULL_TAG:
            return NullNode(raw=node.value)
        kind = _KIND_BY_TAG.get(node.tag)
        if kind is None:
            return ScalarNode(value=node.value, kind=ScalarKind.STRING, raw=node.value, tag=node.tag)
        try:
            value: Any = self._constructor.construct_object(node, deep=True)
        except (ConstructorError, ValueError):
            return ScalarNode(value=node.value, kind=ScalarKind.STRING, raw=node.value, tag=node.tag)
        if kind is ScalarKind.TIMESTAMP and not isinstance(value, datetime.date):
            kind = ScalarKind.STRING
            value = node.value
        return ScalarNode(value=value, kind=kind, raw=node.value, tag=node.tag)

    # ------------------------------------------------------------------
    # Mappings
    # ------------------------------------------------------------------

    def _mapping_entries(self, node: yaml.MappingNode) -> OrderedMapping[str, Node]:
        entries: OrderedMapping[str, Node] = OrderedMapping()
        for key_node, value_node in node.value:
            if isinstance(key_node, yaml.ScalarNode) and key_node.tag == _MERGE_TAG:
                self._merge_into(entries, value_node)
                continue
            entries[self._key(key_node)] = self.build(value_node)
        return entries

    def _merge_into(self, entries: OrderedMapping[str, Node], value_node: yaml.Node) -> None:
        """Apply a ``<<`` merge; keys already present are never overwritten."""
        sources = value_node.value if isinstance(value_node, yaml.SequenceNode) else [value_node]
        for source in sources:
            merged = self.build(source)
            if not isinstance(merged, MappingNode):
                continue
            for key, child in merged.entries.items():
                if key not in entries:
                    entries[key] = child

    def _key(self, key_node: yaml.Node) -> str:
        if isinstance(key_node, yaml.ScalarNode):
            return str(key_node.value)
        return str(to_python(self.build(key_node)))
