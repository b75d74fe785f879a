"""Tree subpackage: the YAML document model and its addressing.

Re-exports the public API for the tree module:
- OrderedMapping: insertion-ordered mapping with order-insensitive equality
- ScalarNode, SequenceNode, MappingNode, NullNode: document-model nodes
- Document: one parsed YAML document
- Path: hashable address of a node, with dotted and go-patch renderings
- parse_documents: YAML bytes -> documents
- apply_chroot, navigate: sub-tree selection
"""

from __future__ import annotations

from yaml_semantic_diff.tree.chroot import apply_chroot, navigate
from yaml_semantic_diff.tree.nodes import (
    Document,
    MappingNode,
    Node,
    NodeType,
    NullNode,
    ScalarKind,
    ScalarNode,
    SequenceNode,
    from_python,
    to_python,
)
from yaml_semantic_diff.tree.ordered_mapping import OrderedMapping
from yaml_semantic_diff.tree.parser import parse_documents
from yaml_semantic_diff.tree.path import FieldSegment, IndexSegment, KeySegment, Path

__all__ = [
    "Document",
    "FieldSegment",
    "IndexSegment",
    "KeySegment",
    "MappingNode",
    "Node",
    "NodeType",
    "NullNode",
    "OrderedMapping",
    "Path",
    "ScalarKind",
    "ScalarNode",
    "SequenceNode",
    "apply_chroot",
    "from_python",
    "navigate",
    "parse_documents",
    "to_python",
]
