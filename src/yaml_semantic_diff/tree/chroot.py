"""Chroot: restrict a comparison to a sub-tree of every document."""

from __future__ import annotations

from yaml_semantic_diff.errors import PathNotFoundError
from yaml_semantic_diff.tree.nodes import (
    Document,
    MappingNode,
    Node,
    NullNode,
    ScalarNode,
    SequenceNode,
)
from yaml_semantic_diff.tree.path import FieldSegment, IndexSegment, Path

__all__ = ["apply_chroot", "navigate"]


def navigate(node: Node, path: Path, source: str | None = None) -> Node:
    """Follow ``path`` from ``node`` and return the node it addresses.

    Raises:
        PathNotFoundError: On a missing key, an out-of-range index, no
            element matching a ``[field=value]`` selector, or a segment
            applied to the wrong node type.
    """
    current = node
    walked = Path.root()
    for segment in path.segments:
        if isinstance(segment, FieldSegment):
            walked = walked.child(segment.name)
            if not isinstance(current, MappingNode):
                raise PathNotFoundError(str(walked), "parent is not a mapping", source)
            child = current.entries.get(segment.name)
            if child is None:
                raise PathNotFoundError(str(walked), "key does not exist", source)
            current = child
        elif isinstance(segment, IndexSegment):
            walked = walked.index(segment.index)
            if not isinstance(current, SequenceNode):
                raise PathNotFoundError(str(walked), "parent is not a list", source)
            if segment.index >= len(current.items):
                raise PathNotFoundError(
                    str(walked),
                    f"index out of range (list has {len(current.items)} items)",
                    source,
                )
            current = current.items[segment.index]
        else:
            walked = walked.keyed(segment.field, segment.value)
            if not isinstance(current, SequenceNode):
                raise PathNotFoundError(str(walked), "parent is not a list", source)
            for item in current.items:
                if isinstance(item, MappingNode):
                    ident = item.entries.get(segment.field)
                    if isinstance(ident, ScalarNode) and str(ident) == segment.value:
                        current = item
                        break
            else:
                raise PathNotFoundError(str(walked), "no element matches", source)
    return current


def apply_chroot(
    documents: list[Document],
    expression: str,
    list_to_documents: bool = False,
    source: str | None = None,
) -> list[Document]:
    """Replace every document root with the node at ``expression``.

    Empty documents (null roots) are dropped.  With ``list_to_documents``,
    a sequence target expands into one document per element.  The returned
    documents are renumbered from zero.
    """
    if not expression:
        return documents
    path = Path.parse(expression)
    roots: list[tuple[Node, str | None]] = []
    for document in documents:
        if isinstance(document.root, NullNode):
            continue
        target = navigate(document.root, path, source or document.source)
        if list_to_documents and isinstance(target, SequenceNode):
            roots.extend((item, document.source) for item in target.items)
        else:
            roots.append((target, document.source))
    if documents and all(isinstance(d.root, NullNode) for d in documents):
        raise PathNotFoundError(expression, "document is empty", source or documents[0].source)
    return [Document(root=root, source=src, index=i) for i, (root, src) in enumerate(roots)]
