"""DiffEngine: recursive structural diff of YAML document trees.

The engine walks two node trees in lock-step and records a ``ChangeEntry``
for every difference, in traversal order (parents before children, from
order before additions).  It never mutates its inputs and never raises on
well-formed documents.

Sequence strategy, first applicable wins:

1. identifier-keyed, when ``additional_identifiers`` is configured and every
   element on both sides is a mapping and at least one of them carries an
   identifier; elements without one are matched as a multiset
2. multiset matching, when ``ignore_order_changes`` is set
3. positional alignment

Multi-document streams are compared by Kubernetes identity when any
document is a Kubernetes resource (see
:class:`~yaml_semantic_diff.kubernetes.matcher.ResourceMatcher`), and by
document index otherwise.

Example::

    from yaml_semantic_diff.algorithm import DiffConfig
    from yaml_semantic_diff.algorithm.engine import DiffEngine
    from yaml_semantic_diff.tree import from_python

    engine = DiffEngine(DiffConfig(ignore_order_changes=True))
    engine.diff(from_python({"a": [1, 2]}), from_python({"a": [2, 1]}))
    # []
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from yaml_semantic_diff.algorithm.config import DiffConfig
from yaml_semantic_diff.algorithm.scalars import is_minor_change, leaves_equal
from yaml_semantic_diff.certificates import CertificateInspector
from yaml_semantic_diff.kubernetes.matcher import ResourceMatcher
from yaml_semantic_diff.kubernetes.resource import is_kubernetes_resource
from yaml_semantic_diff.kubernetes.similarity import IDENTITY_PATHS
from yaml_semantic_diff.observability import get_logger
from yaml_semantic_diff.result import ChangeEntry, ChangeKind
from yaml_semantic_diff.tree.nodes import (
    MappingNode,
    Node,
    NullNode,
    ScalarKind,
    ScalarNode,
    SequenceNode,
)
from yaml_semantic_diff.tree.path import Path

if TYPE_CHECKING:
    from yaml_semantic_diff.kubernetes.matcher import MatchPlan
    from yaml_semantic_diff.kubernetes.resource import ResourceKey
    from yaml_semantic_diff.tree.nodes import Document

__all__ = ["DiffEngine"]

log = get_logger("engine")

_API_VERSION_PATH = Path.root().child("apiVersion")


class DiffEngine:
    """Structural diff of node trees and document streams.

    Args:
        config: Comparison options.  Defaults to ``DiffConfig()``.
        inspector: Certificate decoder.  A private one is created when
            omitted, so caches are never shared between engines.
    """

    def __init__(
        self,
        config: DiffConfig | None = None,
        inspector: CertificateInspector | None = None,
    ) -> None:
        self._config = config or DiffConfig()
        self._inspector = inspector or CertificateInspector()

    @property
    def config(self) -> DiffConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def diff(
        self,
        from_node: Node | None,
        to_node: Node | None,
        path: Path | None = None,
    ) -> list[ChangeEntry]:
        """Return the changes turning ``from_node`` into ``to_node``.

        ``None`` means the value is absent on that side.
        """
        out: list[ChangeEntry] = []
        self._compare(from_node, to_node, path or Path.root(), out)
        return out

    def equivalent(self, a: Node, b: Node) -> bool:
        """Return True when comparing ``a`` and ``b`` reports no change."""
        return not self.diff(a, b)

    def diff_documents(
        self,
        from_docs: list[Document],
        to_docs: list[Document],
    ) -> list[ChangeEntry]:
        """Compare two document streams."""
        if self._config.detect_kubernetes and any(
            is_kubernetes_resource(doc.root) for doc in (*from_docs, *to_docs)
        ):
            log.debug("kubernetes_mode", from_docs=len(from_docs), to_docs=len(to_docs))
            return self._diff_kubernetes(from_docs, to_docs)
        return self._diff_by_index(from_docs, to_docs)

    # ------------------------------------------------------------------
    # Document streams
    # ------------------------------------------------------------------

    def _diff_by_index(self, from_docs: list[Document], to_docs: list[Document]) -> list[ChangeEntry]:
        out: list[ChangeEntry] = []
        for i in range(max(len(from_docs), len(to_docs))):
            from_root = from_docs[i].root if i < len(from_docs) else None
            to_root = to_docs[i].root if i < len(to_docs) else None
            if from_root is None and isinstance(to_root, NullNode):
                continue
            if to_root is None and isinstance(from_root, NullNode):
                continue
            out.extend(_tag(entry, i) for entry in self.diff(from_root, to_root))
        return out

    def _diff_kubernetes(self, from_docs: list[Document], to_docs: list[Document]) -> list[ChangeEntry]:
        plan: MatchPlan = ResourceMatcher(self._config).match(from_docs, to_docs)
        out: list[ChangeEntry] = []
        for i, document in enumerate(from_docs):
            resource = plan.from_keys.get(i)
            if i in plan.matched:
                entries = self.diff(document.root, to_docs[plan.matched[i]].root)
                if self._config.ignore_api_version:
                    entries = [e for e in entries if e.path != _API_VERSION_PATH]
                out.extend(_tag(entry, i, resource) for entry in entries)
            elif i in plan.renamed:
                out.append(self._renamed_entry(document, to_docs, plan, i))
            elif i in plan.paired:
                entries = self.diff(document.root, to_docs[plan.paired[i]].root)
                out.extend(_tag(entry, i) for entry in entries)
            elif i in plan.removed:
                entry = ChangeEntry(Path.root(), ChangeKind.REMOVED, from_value=document.root)
                out.append(_tag(entry, i, resource))
        for j in plan.added:
            entry = ChangeEntry(Path.root(), ChangeKind.ADDED, to_value=to_docs[j].root)
            out.append(_tag(entry, j, plan.to_keys.get(j)))
        return out

    def _renamed_entry(
        self,
        document: Document,
        to_docs: list[Document],
        plan: MatchPlan,
        i: int,
    ) -> ChangeEntry:
        j = plan.renamed[i].to_index
        to_root = to_docs[j].root
        resource = plan.from_keys[i]
        details = [
            _tag(entry, i, resource)
            for entry in self.diff(document.root, to_root)
            if entry.path not in IDENTITY_PATHS
            and not (self._config.ignore_api_version and entry.path == _API_VERSION_PATH)
        ]
        return ChangeEntry(
            path=Path.root(),
            kind=ChangeKind.RENAMED_RESOURCE,
            from_value=document.root,
            to_value=to_root,
            document_index=i,
            resource=resource,
            renamed_to=plan.to_keys[j],
            details=tuple(details),
        )

    # ------------------------------------------------------------------
    # Node comparison
    # ------------------------------------------------------------------

    def _compare(self, a: Node | None, b: Node | None, path: Path, out: list[ChangeEntry]) -> None:
        if a is None and b is None:
            return
        if a is None:
            out.append(ChangeEntry(path, ChangeKind.ADDED, to_value=b))
            return
        if b is None:
            out.append(ChangeEntry(path, ChangeKind.REMOVED, from_value=a))
            return
        if isinstance(a, MappingNode) and isinstance(b, MappingNode):
            self._compare_mappings(a, b, path, out)
        elif isinstance(a, SequenceNode) and isinstance(b, SequenceNode):
            self._compare_sequences(a, b, path, out)
        elif isinstance(a, ScalarNode | NullNode) and isinstance(b, ScalarNode | NullNode):
            self._compare_leaves(a, b, path, out)
        else:
            out.append(ChangeEntry(path, ChangeKind.MODIFIED, from_value=a, to_value=b))

    def _compare_leaves(
        self,
        a: ScalarNode | NullNode,
        b: ScalarNode | NullNode,
        path: Path,
        out: list[ChangeEntry],
    ) -> None:
        config = self._config
        if leaves_equal(a, b, config.ignore_whitespace_changes):
            return
        if (
            not config.no_cert_inspection
            and isinstance(a, ScalarNode)
            and isinstance(b, ScalarNode)
            and a.kind is ScalarKind.STRING
            and b.kind is ScalarKind.STRING
        ):
            from_fields = self._inspector.fields(str(a.value))
            to_fields = self._inspector.fields(str(b.value)) if from_fields is not None else None
            if from_fields is not None and to_fields is not None:
                self._compare(from_fields, to_fields, path.child("certificate"), out)
                return
        if config.ignore_value_changes:
            return
        out.append(
            ChangeEntry(
                path,
                ChangeKind.MODIFIED,
                from_value=a,
                to_value=b,
                minor=is_minor_change(a, b, config.minor_change_threshold),
            )
        )

    def _compare_mappings(
        self,
        a: MappingNode,
        b: MappingNode,
        path: Path,
        out: list[ChangeEntry],
    ) -> None:
        for key, from_child in a.entries.items():
            if key in b.entries:
                self._compare(from_child, b.entries[key], path.child(key), out)
            else:
                out.append(ChangeEntry(path.child(key), ChangeKind.REMOVED, from_value=from_child))
        for key, to_child in b.entries.items():
            if key not in a.entries:
                out.append(ChangeEntry(path.child(key), ChangeKind.ADDED, to_value=to_child))

    # ------------------------------------------------------------------
    # Sequences
    # ------------------------------------------------------------------

    def _compare_sequences(
        self,
        a: SequenceNode,
        b: SequenceNode,
        path: Path,
        out: list[ChangeEntry],
    ) -> None:
        if self._config.additional_identifiers and self._can_key(a, b):
            self._compare_keyed(a, b, path, out)
        elif self._config.ignore_order_changes:
            self._compare_unordered(list(enumerate(a.items)), list(enumerate(b.items)), path, out)
        else:
            for i in range(max(len(a.items), len(b.items))):
                from_item = a.items[i] if i < len(a.items) else None
                to_item = b.items[i] if i < len(b.items) else None
                self._compare(from_item, to_item, path.index(i), out)

    def _identifier(self, item: Node) -> tuple[str, str] | None:
        if not isinstance(item, MappingNode):
            return None
        for field_name in self._config.additional_identifiers:
            value = item.entries.get(field_name)
            if isinstance(value, ScalarNode):
                return field_name, str(value)
        return None

    def _can_key(self, a: SequenceNode, b: SequenceNode) -> bool:
        items = (*a.items, *b.items)
        if not items or not all(isinstance(item, MappingNode) for item in items):
            return False
        return any(self._identifier(item) is not None for item in items)

    def _split_keyed(
        self, items: tuple[Node, ...]
    ) -> tuple[dict[tuple[str, str], int], list[tuple[int, Node]]]:
        keyed: dict[tuple[str, str], int] = {}
        rest: list[tuple[int, Node]] = []
        for i, item in enumerate(items):
            ident = self._identifier(item)
            if ident is None or ident in keyed:
                rest.append((i, item))
            else:
                keyed[ident] = i
        return keyed, rest

    def _compare_keyed(
        self,
        a: SequenceNode,
        b: SequenceNode,
        path: Path,
        out: list[ChangeEntry],
    ) -> None:
        from_keyed, from_rest = self._split_keyed(a.items)
        to_keyed, to_rest = self._split_keyed(b.items)

        if not self._config.ignore_order_changes:
            from_order = [ident for ident in from_keyed if ident in to_keyed]
            to_order = [ident for ident in to_keyed if ident in from_keyed]
            if from_order != to_order:
                out.append(ChangeEntry(path, ChangeKind.MOVED, from_value=a, to_value=b))

        for (field_name, value), i in from_keyed.items():
            j = to_keyed.get((field_name, value))
            if j is None:
                out.append(
                    ChangeEntry(
                        path.keyed(field_name, value, i),
                        ChangeKind.REMOVED,
                        from_value=a.items[i],
                    )
                )
            else:
                self._compare(a.items[i], b.items[j], path.keyed(field_name, value, i), out)
        for (field_name, value), j in to_keyed.items():
            if (field_name, value) not in from_keyed:
                out.append(
                    ChangeEntry(
                        path.keyed(field_name, value, j),
                        ChangeKind.ADDED,
                        to_value=b.items[j],
                    )
                )
        if from_rest or to_rest:
            self._compare_unordered(from_rest, to_rest, path, out)

    def _compare_unordered(
        self,
        from_items: list[tuple[int, Node]],
        to_items: list[tuple[int, Node]],
        path: Path,
        out: list[ChangeEntry],
    ) -> None:
        """Multiset match: each to item claims the earliest equivalent from item."""
        claimed: set[int] = set()
        unmatched_to: list[tuple[int, Node]] = []
        for j, to_item in to_items:
            for i, from_item in from_items:
                if i not in claimed and self.equivalent(from_item, to_item):
                    claimed.add(i)
                    break
            else:
                unmatched_to.append((j, to_item))
        for i, from_item in from_items:
            if i not in claimed:
                out.append(ChangeEntry(path.index(i), ChangeKind.REMOVED, from_value=from_item))
        for j, to_item in unmatched_to:
            out.append(ChangeEntry(path.index(j), ChangeKind.ADDED, to_value=to_item))


def _tag(
    entry: ChangeEntry,
    document_index: int,
    resource: ResourceKey | None = None,
) -> ChangeEntry:
    if resource is None:
        return dataclasses.replace(entry, document_index=document_index)
    return dataclasses.replace(entry, document_index=document_index, resource=resource)
