"""Content similarity between two Kubernetes documents.

Both documents are flattened to their leaf paths (scalars, nulls and empty
containers).  The score is the number of leaf paths holding equal values
on both sides divided by the larger leaf count, so it is symmetric and in
[0, 1].  ``metadata.name`` and ``metadata.generateName`` are excluded:
they are exactly what changes in a rename.
"""

from __future__ import annotations

from yaml_semantic_diff.tree.nodes import MappingNode, Node, SequenceNode
from yaml_semantic_diff.tree.path import Path

__all__ = ["IDENTITY_PATHS", "flatten_leaves", "similarity"]

IDENTITY_PATHS: frozenset[Path] = frozenset(
    {
        Path.root().child("metadata").child("name"),
        Path.root().child("metadata").child("generateName"),
    }
)


def flatten_leaves(node: Node, path: Path | None = None) -> dict[Path, Node]:
    """Return every leaf of ``node`` keyed by its path."""
    leaves: dict[Path, Node] = {}
    stack: list[tuple[Path, Node]] = [(path or Path.root(), node)]
    while stack:
        current_path, current = stack.pop()
        if isinstance(current, MappingNode) and len(current):
            stack.extend(
                (current_path.child(key), child) for key, child in current.entries.items()
            )
        elif isinstance(current, SequenceNode) and len(current):
            stack.extend(
                (current_path.index(i), child) for i, child in enumerate(current.items)
            )
        elif current_path not in IDENTITY_PATHS:
            leaves[current_path] = current
    return leaves


def similarity(a: Node, b: Node) -> float:
    """Return the fraction of shared, equal leaves between ``a`` and ``b``."""
    leaves_a = flatten_leaves(a)
    leaves_b = flatten_leaves(b)
    total = max(len(leaves_a), len(leaves_b))
    if total == 0:
        return 1.0
    matching = sum(
        1 for leaf_path, leaf in leaves_a.items() if leaves_b.get(leaf_path) == leaf
    )
    return matching / total
